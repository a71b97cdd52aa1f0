"""Dashboard page: header, calculator, glass types and saved quotes.

Every component gets read-only data from the shell's ``AppState`` plus
callbacks bound to its update operations.
"""

import logging
from typing import Callable

from glassquote.utils import AppState
from glassquote.ui.components import (
    ensure_glass_types_loaded,
    render_calculator,
    render_glass_types_manager,
    render_header_bar,
    render_quotes_list,
)

logger = logging.getLogger(__name__)


def render_dashboard_page(state: AppState, on_logout: Callable[[], None]) -> None:
    """Render the authenticated view."""
    username = state.user.username if state.user else ""
    render_header_bar(on_logout=on_logout, username=username)

    # Seed the catalog before the calculator picks its default glass type
    ensure_glass_types_loaded(on_change=state.replace_glass_types)

    render_calculator(glass_types=state.glass_types, on_new_quote=state.add_quote)
    render_glass_types_manager(on_change=state.replace_glass_types)
    render_quotes_list(
        quotes=state.quotes,
        on_delete=state.remove_quote,
        load_error=state.quotes_error,
    )
