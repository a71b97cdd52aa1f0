"""Custom exceptions for the glass quoting frontend.

This module defines a hierarchy of exceptions for better error handling
and more informative error messages.

Exception Hierarchy:
    GlassQuoteError (base)
    ├── APIError
    │   └── AuthenticationError
    └── BackendUnavailableError
"""


class GlassQuoteError(Exception):
    """Base exception for the application.

    All custom exceptions in this application should inherit from this class.
    This allows catching all application-specific errors with a single except clause.

    Example:
        >>> try:
        ...     client.list_quotes()
        ... except GlassQuoteError as e:
        ...     st.error(e.message)
    """

    def __init__(self, message: str = "Ocurrió un error inesperado"):
        self.message = message
        super().__init__(self.message)


class APIError(GlassQuoteError):
    """Raised when the backend answers with a failure status (>= 400).

    The message is the text the backend provided, so it can be shown
    to the user as-is.

    Attributes:
        status_code: HTTP status code
        endpoint: Request path that failed (e.g., '/api/vidrios')

    Example:
        >>> raise APIError("Tipo de vidrio no encontrado", status_code=404, endpoint="/api/vidrios/g1")
    """

    def __init__(
        self,
        message: str = "Error en la petición",
        status_code: int = None,
        endpoint: str = None
    ):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"APIError(message={self.message!r}, status_code={self.status_code!r}, "
            f"endpoint={self.endpoint!r})"
        )


class AuthenticationError(APIError):
    """Raised on 401/403 responses (missing or rejected session cookie)."""


class BackendUnavailableError(GlassQuoteError):
    """Raised when the backend cannot be reached (connection error, timeout).

    Example:
        >>> raise BackendUnavailableError("No se pudo conectar con el servidor")
    """

    def __init__(self, message: str = "No se pudo conectar con el servidor"):
        super().__init__(message)

