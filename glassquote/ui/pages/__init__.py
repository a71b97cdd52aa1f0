"""Page components for the glass quoting frontend."""
from glassquote.ui.pages.login import render_login_page
from glassquote.ui.pages.dashboard import render_dashboard_page

__all__ = [
    "render_login_page",
    "render_dashboard_page",
]
