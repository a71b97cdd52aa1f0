"""
Backend API Client for the glass quoting frontend.

Provides typed access to the backend API. Every call goes through
``GlassQuoteAPIClient.request``, which applies the one rule the whole app
relies on: status >= 400 raises ``APIError`` carrying the backend's
``message``; anything else returns the parsed body (JSON or text).

The session cookie set by ``/api/auth/login`` lives in the client's
``requests.Session`` cookie jar, so there must be one client per browser
session.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from glassquote.config.settings import config
from glassquote.services.models import GlassType, Quote, User
from glassquote.utils.exceptions import (
    APIError,
    AuthenticationError,
    BackendUnavailableError,
)

logger = logging.getLogger(__name__)


class GlassQuoteAPIClient:
    """Client for the glass quoting backend API."""

    def __init__(
        self,
        base_url: str = None,
        timeout: float = None,
        max_retries: int = None,
        session: requests.Session = None
    ):
        """Initialize API client.

        Args:
            base_url: Backend API URL (default from config)
            timeout: Request timeout in seconds
            max_retries: Transport retries for idempotent requests (default 0)
            session: Pre-built requests session (tests inject one)
        """
        self.base_url = (base_url or config.API_ROOT).rstrip('/')
        self.timeout = timeout or config.API_TIMEOUT_SECONDS
        self.max_retries = config.MAX_RETRY_ATTEMPTS if max_retries is None else max_retries

        if session is None:
            session = requests.Session()
            retry_strategy = Retry(
                total=self.max_retries,
                backoff_factor=0.5,
                status_forcelist=[502, 503, 504],
                allowed_methods=["GET"],
                raise_on_status=False,
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        session.headers.update({"Content-Type": "application/json"})
        self.session = session

    def _request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> requests.Response:
        """Make HTTP request, translating transport failures."""
        url = f"{self.base_url}{endpoint}"
        kwargs.setdefault('timeout', self.timeout)

        logger.debug(f"{method} {url}")
        try:
            return self.session.request(method, url, **kwargs)
        except requests.exceptions.Timeout as e:
            logger.error(f"Request timed out: {method} {url} - {e}")
            raise BackendUnavailableError("El servidor no respondió a tiempo") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {method} {url} - {e}")
            raise BackendUnavailableError() from e

    @staticmethod
    def _parse_body(response: requests.Response) -> Any:
        """Return the body as JSON when the content type says so, else as text."""
        content_type = response.headers.get('content-type', '')
        if 'application/json' in content_type:
            try:
                return response.json()
            except (json.JSONDecodeError, ValueError):
                logger.warning(f"Invalid JSON body from {response.url}")
                return response.text
        return response.text

    def request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Perform a request and return the parsed body.

        Args:
            method: HTTP method
            endpoint: Path under the base URL, e.g. '/api/vidrios'
            payload: JSON body (optional)

        Returns:
            Parsed JSON or raw text

        Raises:
            APIError: status >= 400 (AuthenticationError for 401/403)
            BackendUnavailableError: the backend could not be reached
        """
        kwargs = {}
        if payload is not None:
            kwargs['json'] = payload

        response = self._request(method, endpoint, **kwargs)
        data = self._parse_body(response)

        if response.status_code >= 400:
            message = None
            if isinstance(data, dict):
                message = data.get('message')
            message = message or config.GENERIC_ERROR_MESSAGE
            logger.warning(f"{method} {endpoint} -> HTTP {response.status_code}: {message}")
            error_cls = AuthenticationError if response.status_code in (401, 403) else APIError
            raise error_cls(message, status_code=response.status_code, endpoint=endpoint)

        return data

    # Authentication
    def who_am_i(self) -> User:
        """Return the user bound to the current session cookie."""
        data = self.request('GET', '/api/auth/me')
        if not isinstance(data, dict) or not data.get('user'):
            raise AuthenticationError("Sesión no válida", endpoint='/api/auth/me')
        return User.from_api(data['user'])

    def login(self, username: str, password: str) -> User:
        """Log in; the backend answers with the user and sets the session cookie."""
        data = self.request(
            'POST',
            '/api/auth/login',
            {'username': username, 'password': password},
        )
        if not isinstance(data, dict) or not data.get('user'):
            raise APIError("Respuesta inválida del servidor", endpoint='/api/auth/login')
        logger.info(f"Logged in as {username}")
        return User.from_api(data['user'])

    def logout(self) -> None:
        """Close the session on the backend. Response body is ignored.

        The local cookie jar is emptied even when the call fails.
        """
        try:
            self.request('POST', '/api/auth/logout')
        finally:
            self.session.cookies.clear()

    # Glass types
    def list_glass_types(self) -> List[GlassType]:
        data = self.request('GET', '/api/vidrios')
        return [GlassType.from_api(item) for item in _as_list(data)]

    def create_glass_type(
        self,
        name: str,
        price_per_sqm: float,
        thickness: Optional[str] = None
    ) -> Any:
        """Create a glass type. Returns the backend record as sent."""
        payload = _glass_type_payload(name, price_per_sqm, thickness)
        return self.request('POST', '/api/vidrios', payload)

    def update_glass_type(
        self,
        glass_type_id: str,
        name: str,
        price_per_sqm: float,
        thickness: Optional[str] = None
    ) -> Any:
        """Update a glass type by id. Returns the backend record as sent."""
        payload = _glass_type_payload(name, price_per_sqm, thickness)
        return self.request('PUT', f'/api/vidrios/{glass_type_id}', payload)

    def delete_glass_type(self, glass_type_id: str) -> None:
        self.request('DELETE', f'/api/vidrios/{glass_type_id}')

    # Quotes
    def list_quotes(self) -> List[Quote]:
        """List persisted quotes, newest first as ordered by the backend."""
        data = self.request('GET', '/api/presupuestos')
        return [Quote.from_api(item) for item in _as_list(data)]

    def create_quote(
        self,
        height: float,
        width: float,
        glass_type_id: str,
        markup: float,
        note: str = ""
    ) -> Quote:
        """Persist a quote. The backend computes and returns the totals.

        Args:
            height: Height in meters
            width: Width in meters
            glass_type_id: Catalog id of the glass type
            markup: Markup percentage
            note: Optional free text

        Returns:
            The stored Quote (server-assigned id and timestamp)
        """
        payload = {
            'alto': height,
            'ancho': width,
            'tipoVidrio': glass_type_id,
            'porcentajeGanancia': markup,
            'nota': note or "",
        }
        data = self.request('POST', '/api/presupuestos', payload)
        if not isinstance(data, dict):
            raise APIError("Respuesta inválida del servidor", endpoint='/api/presupuestos')
        return Quote.from_api(data)

    def delete_quote(self, quote_id: str) -> None:
        self.request('DELETE', f'/api/presupuestos/{quote_id}')


def _glass_type_payload(name: str, price_per_sqm: float, thickness: Optional[str]) -> Dict[str, Any]:
    return {
        'nombre': name,
        'grosor': thickness or "",
        'precioM2': float(price_per_sqm),
    }


def _as_list(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    logger.warning(f"Expected a JSON array, got {type(data).__name__}")
    return []


def get_api_client() -> GlassQuoteAPIClient:
    """Get the API client of the current browser session.

    Each browser session gets its own client because the session cookie
    lives in the client's cookie jar.
    """
    from glassquote.utils.session_state import SessionState
    return SessionState.get_or_create('api_client', GlassQuoteAPIClient)
