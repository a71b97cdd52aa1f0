"""Session state management for the glass quoting frontend.

This module provides:
- ``AppState``: the application shell's state (session, quotes, catalog).
  It is the single writer of that state; components receive read-only
  data plus callbacks bound to its named operations.
- ``select_view``: pure mapping from state to the view to render.
- ``SessionState``: thin wrapper over Streamlit session state holding one
  ``AppState``, one API client and per-component state per browser session.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from glassquote.services.models import GlassType, Quote, User

logger = logging.getLogger(__name__)


def _default_factory(value: Any) -> Callable[[], Any]:
    """Create a factory function that returns a deep copy of the value.

    This prevents mutable default values from being shared across sessions.
    """
    if isinstance(value, (list, dict, set)):
        return lambda: copy.deepcopy(value)
    return lambda: value


# Session status constants
STATUS_RESOLVING = "resolving"
STATUS_ANONYMOUS = "anonymous"
STATUS_AUTHENTICATED = "authenticated"

# View constants
VIEW_CHECKING_SESSION = "checking_session"
VIEW_LOGIN = "login"
VIEW_DASHBOARD = "dashboard"


@dataclass
class AppState:
    """State owned by the application shell.

    Collections are tuples so that the data handed to components cannot be
    mutated in place; every change goes through a method below.
    """
    status: str = STATUS_RESOLVING
    user: Optional[User] = None
    quotes: Tuple[Quote, ...] = ()
    glass_types: Tuple[GlassType, ...] = ()
    quotes_error: Optional[str] = None

    @property
    def is_resolving(self) -> bool:
        return self.status == STATUS_RESOLVING

    @property
    def is_authenticated(self) -> bool:
        return self.status == STATUS_AUTHENTICATED and self.user is not None

    def resolve_session(self, client) -> None:
        """Resolve the session once, then load quotes if logged in.

        Any failure of the who-am-I call means "not logged in"; it is
        never reported to the user.
        """
        if not self.is_resolving:
            return

        try:
            user = client.who_am_i()
        except Exception as e:
            logger.info(f"No active session: {e}")
            self.status = STATUS_ANONYMOUS
            self.user = None
            self.quotes = ()
            return

        self._set_user(user)
        self.load_quotes(client)

    def login_succeeded(self, user: User, client) -> None:
        self._set_user(user)
        self.load_quotes(client)

    def load_quotes(self, client) -> None:
        """Replace the quote list with the backend's. No-op when anonymous."""
        if not self.is_authenticated:
            return
        try:
            self.quotes = tuple(client.list_quotes())
            self.quotes_error = None
            logger.debug(f"Loaded {len(self.quotes)} quotes")
        except Exception as e:
            logger.error(f"Error loading quotes: {e}")
            self.quotes_error = getattr(e, 'message', str(e))

    def logout(self, client) -> None:
        """Best-effort backend logout; local state is cleared regardless."""
        try:
            client.logout()
        except Exception as e:
            logger.warning(f"Logout call failed, clearing session anyway: {e}")
        finally:
            self.status = STATUS_ANONYMOUS
            self.user = None
            self.quotes = ()
            self.glass_types = ()
            self.quotes_error = None

    def add_quote(self, quote: Quote) -> None:
        """Prepend a freshly created quote."""
        self.quotes = (quote,) + self.quotes

    def remove_quote(self, quote_id: str) -> None:
        self.quotes = tuple(q for q in self.quotes if q.id != quote_id)

    def replace_glass_types(self, glass_types: Sequence[GlassType]) -> None:
        self.glass_types = tuple(glass_types)

    def _set_user(self, user: User) -> None:
        self.status = STATUS_AUTHENTICATED
        self.user = user
        logger.info(f"Session active for {user.username or user.id}")


def select_view(state: AppState) -> str:
    """Pick the view to render from state alone."""
    if state.is_resolving:
        return VIEW_CHECKING_SESSION
    if state.is_authenticated:
        return VIEW_DASHBOARD
    return VIEW_LOGIN


class SessionState:
    """Centralized Streamlit session state access.

    Example:
        >>> from glassquote.utils import SessionState
        >>> SessionState.init_defaults()
        >>> state = SessionState.get_app_state()
    """

    # Default value factories for session state keys
    # Using factories prevents mutable defaults from being shared across sessions
    _DEFAULT_FACTORIES: Dict[str, Callable[[], Any]] = {
        'app_state': AppState,
        'login_submitting': _default_factory(False),
        'login_error': _default_factory(None),
    }

    # Per-component keys dropped when the user logs out
    MODE_KEYS: Dict[str, List[str]] = {
        'login': [
            'login_submitting',
            'login_error',
            'login_password',
        ],
        'dashboard': [
            'header_menu',
            'calculator_state',
            'glass_types_manager_state',
            'quotes_list_state',
            'calc_height',
            'calc_width',
            'calc_markup',
            'calc_note',
            'gt_name',
            'gt_thickness',
            'gt_price',
        ],
    }

    @classmethod
    def _get_session_state(cls):
        """Get Streamlit session state (lazy import for testing)."""
        try:
            import streamlit as st
            return st.session_state
        except ImportError:
            # Fallback for testing without Streamlit
            if not hasattr(cls, '_mock_state'):
                cls._mock_state = {}
            return cls._mock_state

    @classmethod
    def init_defaults(cls) -> None:
        """Initialize default session state values.

        Call this at the start of the app so all expected keys exist.
        """
        session_state = cls._get_session_state()

        for key, factory in cls._DEFAULT_FACTORIES.items():
            if key not in session_state:
                session_state[key] = factory()
                logger.debug(f"Initialized session state key: {key}")

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get a value from session state."""
        session_state = cls._get_session_state()
        return session_state.get(key, default)

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """Set a value in session state."""
        session_state = cls._get_session_state()
        session_state[key] = value
        logger.debug(f"Set session state: {key} = {type(value).__name__}")

    @classmethod
    def clear(cls, key: str) -> None:
        """Clear a session state key."""
        session_state = cls._get_session_state()
        if key in session_state:
            del session_state[key]
            logger.debug(f"Cleared session state key: {key}")

    @classmethod
    def clear_mode(cls, mode: str) -> None:
        """Clear all state associated with a specific mode."""
        for key in cls.MODE_KEYS.get(mode, []):
            cls.clear(key)
        logger.debug(f"Cleared session state for mode: {mode}")

    @classmethod
    def has(cls, key: str) -> bool:
        """Check if a key exists in session state."""
        return key in cls._get_session_state()

    @classmethod
    def get_or_create(cls, key: str, factory: Callable[[], Any]) -> Any:
        """Get value if it exists, otherwise build it with ``factory`` and store it."""
        if not cls.has(key):
            cls.set(key, factory())
        return cls.get(key)

    @classmethod
    def get_app_state(cls) -> AppState:
        return cls.get_or_create('app_state', AppState)

    @classmethod
    def get_current_view(cls) -> str:
        return select_view(cls.get_app_state())
