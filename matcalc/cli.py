"""
Command-line interface for matcalc.

Usage:
    matcalc [OPTIONS]

Without a matrix source the interactive console is started.

Options:
    --file PATH         Load a matrix document (JSON)
    --literal TEXT      Matrix rows separated by ';', entries by spaces
    --formula EXPR      Per-cell formula in i, j and n (requires --size)
    --example NAME      Use one of the bundled example matrices
    --det / --gauss / --transpose / --symmetry
                        Print only the selected results
    --export PATH       Write an Excel report
    --save PATH         Write the matrix document as JSON
"""

import argparse
import logging
import math
import sys
from typing import List, Optional, Sequence

from .config import MatrixConfiguration
from .console import Console, report
from .examples import EXAMPLES, get_example
from .formula import FormulaError
from .matrix import Matrix, MatrixError

logger = logging.getLogger(__name__)


def parse_literal(text: str) -> List[List[float]]:
    """Parse ``"1 2; 3 4"`` into ``[[1.0, 2.0], [3.0, 4.0]]``."""

    rows: List[List[float]] = []
    for chunk in text.split(";"):
        tokens = chunk.replace(",", " ").split()
        if not tokens:
            continue
        try:
            row = [float(token) for token in tokens]
        except ValueError as exc:
            raise ValueError(f"Invalid literal matrix '{text}': {exc}") from None
        if not all(math.isfinite(value) for value in row):
            raise ValueError(f"Invalid literal matrix '{text}': entries must be finite numbers")
        rows.append(row)
    if not rows:
        raise ValueError("Literal matrix must contain at least one number")
    return rows


def configuration_from_args(args: argparse.Namespace) -> Optional[MatrixConfiguration]:
    """Return the configuration selected on the command line, or ``None`` for the console."""

    sources = [name for name in ("file", "literal", "formula", "example") if getattr(args, name)]
    if len(sources) > 1:
        raise ValueError(f"Choose only one matrix source (got {', '.join('--' + s for s in sources)})")
    if args.file:
        return MatrixConfiguration.from_json(args.file)
    if args.literal:
        return MatrixConfiguration(entries=parse_literal(args.literal), label="Literal")
    if args.formula:
        if args.size is None:
            raise ValueError("--formula requires --size")
        return MatrixConfiguration(formula=args.formula, size=args.size, label="Formula")
    if args.example:
        return get_example(args.example)
    return None


def render_results(matrix: Matrix, args: argparse.Namespace) -> str:
    """Return the text for the results requested by ``args`` (the full report by default)."""

    selected = args.det or args.gauss or args.transpose or args.symmetry
    if not selected:
        return report(matrix, args.method)

    parts: List[str] = []
    if args.det:
        parts.append(f"Determinant: {matrix.determinant(method=args.method)}")
    if args.gauss:
        parts.append("Gauss form:\n" + matrix.gauss().description.rstrip("\n"))
    if args.transpose:
        parts.append("Transpose:\n" + matrix.transposed().description.rstrip("\n"))
    if args.symmetry:
        parts.append(f"Symmetrical: {'yes' if matrix.is_symmetrical() else 'no'}")
    return "\n".join(parts)


def list_examples() -> None:
    print("\nAvailable examples:")
    print("-" * 60)
    for name in sorted(EXAMPLES):
        config = EXAMPLES[name]()
        print(f"  {name:<12} {config.label}")
        if config.description:
            print(f"               {config.description}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matcalc",
        description="Matrix calculator: determinant, Gauss form, transpose and symmetry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  matcalc                                  # Interactive console
  matcalc --literal "1 2; 3 4" --det       # Determinant of a literal matrix
  matcalc --formula "1/(i+j-1)" --size 4   # Full report for a Hilbert matrix
  matcalc --example singular --gauss       # Gauss form of a bundled example
  matcalc --file matrix.json --export reports/matrix.xlsx
        """
    )

    parser.add_argument("--file", "-f", help="Matrix document (JSON) to load")
    parser.add_argument("--literal", "-l", help="Matrix rows separated by ';', entries by spaces")
    parser.add_argument("--formula", help="Per-cell formula in i, j (1-based) and n")
    parser.add_argument("--size", "-n", type=int, help="Size of a formula matrix")
    parser.add_argument("--example", "-e", help="Bundled example matrix (see --list-examples)")
    parser.add_argument("--det", action="store_true", help="Print the determinant")
    parser.add_argument("--gauss", action="store_true", help="Print the Gauss form")
    parser.add_argument("--transpose", action="store_true", help="Print the transpose")
    parser.add_argument("--symmetry", action="store_true", help="Print whether the matrix is symmetrical")
    parser.add_argument(
        "--method",
        choices=["laplace", "elimination"],
        default="laplace",
        help="Determinant algorithm (default: laplace)"
    )
    parser.add_argument("--export", metavar="PATH", help="Write an Excel report to PATH")
    parser.add_argument("--save", metavar="PATH", help="Write the matrix document as JSON to PATH")
    parser.add_argument("--list-examples", action="store_true", help="List the bundled examples")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_examples:
        list_examples()
        return 0

    try:
        configuration = configuration_from_args(args)
        if configuration is None:
            Console(method=args.method).run()
            return 0

        matrix = configuration.build_matrix()
        print(render_results(matrix, args))

        if args.save:
            configuration.save(args.save)
            print(f"\nMatrix saved to: {args.save}")
        if args.export:
            from .export import MatrixExcelExporter

            MatrixExcelExporter([configuration], method=args.method).save(args.export)
            print(f"\nReport saved to: {args.export}")
    except (MatrixError, FormulaError, KeyError, ValueError, OSError) as exc:
        logger.debug("matcalc failed", exc_info=True)
        message = exc.args[0] if isinstance(exc, KeyError) and exc.args else exc
        print(f"[ERROR] {message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
