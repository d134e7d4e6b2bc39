from .components import render_export_tab, render_results, render_save_section, render_sidebar
from .state import initialize_session_state

__all__ = [
    "render_sidebar",
    "render_results",
    "render_save_section",
    "render_export_tab",
    "initialize_session_state",
]
