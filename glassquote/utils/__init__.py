"""Utilities for the glass quoting frontend."""
from glassquote.utils.exceptions import (
    GlassQuoteError,
    APIError,
    AuthenticationError,
    BackendUnavailableError,
)
from glassquote.utils.session_state import (
    SessionState,
    AppState,
    select_view,
    STATUS_RESOLVING,
    STATUS_ANONYMOUS,
    STATUS_AUTHENTICATED,
    VIEW_CHECKING_SESSION,
    VIEW_LOGIN,
    VIEW_DASHBOARD,
)
from glassquote.utils.validators import (
    ValidationResult,
    GlassTypeValidator,
    LoginValidator,
    parse_decimal,
)
from glassquote.utils.pricing import (
    QuotePreview,
    compute_quote,
    derive_preview,
    format_number,
    format_money,
)

__all__ = [
    # Exceptions
    "GlassQuoteError",
    "APIError",
    "AuthenticationError",
    "BackendUnavailableError",
    # Session state
    "SessionState",
    "AppState",
    "select_view",
    "STATUS_RESOLVING",
    "STATUS_ANONYMOUS",
    "STATUS_AUTHENTICATED",
    "VIEW_CHECKING_SESSION",
    "VIEW_LOGIN",
    "VIEW_DASHBOARD",
    # Validators
    "ValidationResult",
    "GlassTypeValidator",
    "LoginValidator",
    "parse_decimal",
    # Pricing
    "QuotePreview",
    "compute_quote",
    "derive_preview",
    "format_number",
    "format_money",
]
