"""Services for the glass quoting frontend."""
from glassquote.services.models import (
    User,
    GlassType,
    Quote,
)
from glassquote.services.backend_client import (
    GlassQuoteAPIClient,
    get_api_client,
)

__all__ = [
    # Domain records
    "User",
    "GlassType",
    "Quote",
    # Backend client
    "GlassQuoteAPIClient",
    "get_api_client",
]
