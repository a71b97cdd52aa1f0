"""
Unit tests for the backend API client.

Tests the request rule every call relies on:
- status >= 400 raises APIError with the backend's message
- JSON bodies are parsed, anything else comes back as text
- transport failures become BackendUnavailableError
- payloads and paths of each endpoint
"""
import pytest
import requests
from unittest.mock import MagicMock

from glassquote.services.backend_client import GlassQuoteAPIClient
from glassquote.services.models import GlassType, Quote, User
from glassquote.utils.exceptions import (
    APIError,
    AuthenticationError,
    BackendUnavailableError,
)


def _response(status_code=200, json_body=None, text="", content_type="application/json"):
    response = MagicMock()
    response.status_code = status_code
    response.headers = {"content-type": content_type} if content_type else {}
    response.url = "http://api.test/mock"
    if json_body is not None:
        response.json.return_value = json_body
    else:
        response.json.side_effect = ValueError("No JSON")
    response.text = text
    return response


@pytest.fixture
def session():
    s = MagicMock()
    s.headers = {}
    return s


@pytest.fixture
def client(session):
    return GlassQuoteAPIClient(base_url="http://api.test/", timeout=5, session=session)


class TestClientSetup:
    """Tests for client construction."""

    def test_trailing_slash_stripped(self, client):
        """Test that the base URL is normalized."""
        assert client.base_url == "http://api.test"

    def test_json_content_type_header(self, session, client):
        """Test that every request declares a JSON body."""
        assert session.headers["Content-Type"] == "application/json"

    def test_retries_disabled_by_default(self, session):
        """Test that failed requests are not retried silently."""
        c = GlassQuoteAPIClient(base_url="http://api.test", session=session)
        assert c.max_retries == 0


class TestRequest:
    """Tests for GlassQuoteAPIClient.request."""

    def test_returns_parsed_json(self, session, client):
        """Test JSON bodies are decoded."""
        session.request.return_value = _response(json_body={"ok": True})

        assert client.request("GET", "/api/x") == {"ok": True}
        session.request.assert_called_once_with("GET", "http://api.test/api/x", timeout=5)

    def test_returns_text_for_non_json(self, session, client):
        """Test non-JSON bodies are returned as raw text."""
        session.request.return_value = _response(text="hola", content_type="text/plain")

        assert client.request("GET", "/api/x") == "hola"

    def test_invalid_json_falls_back_to_text(self, session, client):
        """Test a JSON content type with a broken body returns the text."""
        session.request.return_value = _response(text="{broken")

        assert client.request("GET", "/api/x") == "{broken"

    def test_payload_sent_as_json(self, session, client):
        """Test the payload goes in the json kwarg."""
        session.request.return_value = _response(json_body={})

        client.request("POST", "/api/x", {"a": 1})

        _, kwargs = session.request.call_args
        assert kwargs["json"] == {"a": 1}

    def test_error_uses_backend_message(self, session, client):
        """Test status >= 400 raises with the body's message."""
        session.request.return_value = _response(404, json_body={"message": "No existe"})

        with pytest.raises(APIError) as exc_info:
            client.request("GET", "/api/vidrios/g9")

        assert exc_info.value.message == "No existe"
        assert exc_info.value.status_code == 404
        assert exc_info.value.endpoint == "/api/vidrios/g9"

    def test_error_without_message_is_generic(self, session, client):
        """Test a failure with no message gets the generic text."""
        session.request.return_value = _response(500, text="Internal", content_type="text/html")

        with pytest.raises(APIError) as exc_info:
            client.request("GET", "/api/x")

        assert exc_info.value.message == "Error en la petición"

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_statuses_raise_authentication_error(self, session, client, status):
        """Test 401/403 raise the APIError subclass for auth."""
        session.request.return_value = _response(status, json_body={"message": "No autorizado"})

        with pytest.raises(AuthenticationError):
            client.request("GET", "/api/auth/me")

    def test_connection_error(self, session, client):
        """Test transport failures are reported as backend unavailable."""
        session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(BackendUnavailableError):
            client.request("GET", "/api/x")

    def test_timeout(self, session, client):
        """Test timeouts get their own message."""
        session.request.side_effect = requests.exceptions.Timeout()

        with pytest.raises(BackendUnavailableError) as exc_info:
            client.request("GET", "/api/x")

        assert "a tiempo" in exc_info.value.message


class TestAuthEndpoints:
    """Tests for login, logout and who-am-I."""

    def test_login(self, session, client):
        """Test credentials are posted and the user returned."""
        session.request.return_value = _response(
            json_body={"user": {"_id": "u1", "username": "admin100"}}
        )

        user = client.login("admin100", "secret")

        assert user == User(id="u1", username="admin100")
        args, kwargs = session.request.call_args
        assert args == ("POST", "http://api.test/api/auth/login")
        assert kwargs["json"] == {"username": "admin100", "password": "secret"}

    def test_login_rejected(self, session, client):
        """Test wrong credentials surface the backend message."""
        session.request.return_value = _response(
            401, json_body={"message": "Credenciales inválidas"}
        )

        with pytest.raises(APIError) as exc_info:
            client.login("admin100", "wrong")

        assert exc_info.value.message == "Credenciales inválidas"

    def test_who_am_i(self, session, client):
        """Test the session user is returned."""
        session.request.return_value = _response(json_body={"user": {"_id": "u1", "username": "admin100"}})

        assert client.who_am_i().username == "admin100"

    def test_who_am_i_without_user(self, session, client):
        """Test a body without user means no session."""
        session.request.return_value = _response(json_body={"user": None})

        with pytest.raises(AuthenticationError):
            client.who_am_i()

    def test_logout_clears_cookies(self, session, client):
        """Test the cookie jar is emptied after logout."""
        session.request.return_value = _response(json_body={"message": "ok"})

        client.logout()

        session.cookies.clear.assert_called_once()

    def test_logout_clears_cookies_on_failure(self, session, client):
        """Test the cookie jar is emptied even when the call fails."""
        session.request.side_effect = requests.exceptions.ConnectionError()

        with pytest.raises(BackendUnavailableError):
            client.logout()

        session.cookies.clear.assert_called_once()


class TestGlassTypeEndpoints:
    """Tests for the catalog endpoints."""

    def test_list(self, session, client):
        """Test wire records become GlassType objects."""
        session.request.return_value = _response(json_body=[
            {"_id": "g1", "nombre": "Float", "grosor": "4mm", "precioM2": 100},
            {"_id": "g2", "nombre": "Espejo", "precioM2": "180.5"},
        ])

        result = client.list_glass_types()

        assert result == [
            GlassType(id="g1", name="Float", price_per_sqm=100.0, thickness="4mm"),
            GlassType(id="g2", name="Espejo", price_per_sqm=180.5),
        ]

    def test_list_non_array_is_empty(self, session, client):
        """Test an unexpected body yields an empty catalog."""
        session.request.return_value = _response(json_body={"message": "?"})

        assert client.list_glass_types() == []

    def test_create_payload(self, session, client):
        """Test the create body uses the backend field names."""
        session.request.return_value = _response(201, json_body={"_id": "g3"})

        client.create_glass_type(name="Laminado", price_per_sqm=250, thickness="3+3")

        args, kwargs = session.request.call_args
        assert args == ("POST", "http://api.test/api/vidrios")
        assert kwargs["json"] == {"nombre": "Laminado", "grosor": "3+3", "precioM2": 250.0}

    def test_update_path(self, session, client):
        """Test updates go to the record's path."""
        session.request.return_value = _response(json_body={"_id": "g1"})

        client.update_glass_type("g1", name="Float", price_per_sqm=120, thickness=None)

        args, kwargs = session.request.call_args
        assert args == ("PUT", "http://api.test/api/vidrios/g1")
        assert kwargs["json"]["grosor"] == ""

    def test_delete_path(self, session, client):
        """Test delete targets the record's path."""
        session.request.return_value = _response(json_body={"message": "Eliminado"})

        client.delete_glass_type("g1")

        args, _ = session.request.call_args
        assert args == ("DELETE", "http://api.test/api/vidrios/g1")


class TestQuoteEndpoints:
    """Tests for the quote endpoints."""

    def test_create_quote(self, session, client):
        """Test inputs are posted and the stored record returned."""
        session.request.return_value = _response(201, json_body={
            "_id": "q1", "alto": 2, "ancho": 1.5, "m2": 3,
            "porcentajeGanancia": 30, "precioCosto": 300, "precioCliente": 390,
            "tipoVidrio": {"_id": "g1", "nombre": "Float", "grosor": "4mm", "precioM2": 100},
            "fecha": "2024-05-01T12:30:00.000Z",
        })

        quote = client.create_quote(height=2.0, width=1.5, glass_type_id="g1", markup=30.0)

        _, kwargs = session.request.call_args
        assert kwargs["json"] == {
            "alto": 2.0, "ancho": 1.5, "tipoVidrio": "g1",
            "porcentajeGanancia": 30.0, "nota": "",
        }
        assert isinstance(quote, Quote)
        assert quote.id == "q1"
        assert quote.client_price == 390

    def test_create_quote_rejects_non_object(self, session, client):
        """Test a non-object response is reported as an error."""
        session.request.return_value = _response(text="ok", content_type="text/plain")

        with pytest.raises(APIError):
            client.create_quote(height=1, width=1, glass_type_id="g1", markup=0)

    def test_list_quotes(self, session, client):
        """Test the list keeps backend order."""
        session.request.return_value = _response(json_body=[
            {"_id": "q2", "alto": 1, "ancho": 1},
            {"_id": "q1", "alto": 2, "ancho": 1.5},
        ])

        assert [q.id for q in client.list_quotes()] == ["q2", "q1"]

    def test_delete_quote(self, session, client):
        """Test delete targets the quote's path."""
        session.request.return_value = _response(json_body={})

        client.delete_quote("q1")

        args, _ = session.request.call_args
        assert args == ("DELETE", "http://api.test/api/presupuestos/q1")
