"""Reusable UI components for the glass quoting frontend."""
from glassquote.ui.components.clipboard import (
    copy_to_clipboard,
    build_clipboard_html,
)
from glassquote.ui.components.header_bar import (
    render_header_bar,
    HeaderMenu,
)
from glassquote.ui.components.login_form import (
    render_login_form,
    submit_login,
)
from glassquote.ui.components.calculator import (
    render_calculator,
    CalculatorInputs,
    CalculatorState,
)
from glassquote.ui.components.glass_types_manager import (
    render_glass_types_manager,
    ensure_glass_types_loaded,
    GlassTypeForm,
    GlassTypesManagerState,
)
from glassquote.ui.components.quotes_list import (
    render_quotes_list,
    QuotesListState,
)

__all__ = [
    # Clipboard
    "copy_to_clipboard",
    "build_clipboard_html",
    # Header
    "render_header_bar",
    "HeaderMenu",
    # Login
    "render_login_form",
    "submit_login",
    # Calculator
    "render_calculator",
    "CalculatorInputs",
    "CalculatorState",
    # Glass types
    "render_glass_types_manager",
    "ensure_glass_types_loaded",
    "GlassTypeForm",
    "GlassTypesManagerState",
    # Quotes
    "render_quotes_list",
    "QuotesListState",
]
