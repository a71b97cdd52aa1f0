"""
Shared test fixtures for the glass quoting frontend tests.
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from glassquote.services.backend_client import GlassQuoteAPIClient
from glassquote.services.models import GlassType, Quote, User


@pytest.fixture
def admin_user():
    """Authenticated administrator."""
    return User(id="u1", username="admin100")


@pytest.fixture
def glass_types():
    """Sample catalog."""
    return [
        GlassType(id="g1", name="Float", price_per_sqm=100.0, thickness="4mm"),
        GlassType(id="g2", name="Laminado", price_per_sqm=250.0, thickness="3+3"),
        GlassType(id="g3", name="Espejo", price_per_sqm=180.0),
    ]


def make_quote(quote_id="q1", height=2.0, width=1.5, unit_price=100.0, markup=30.0, **kwargs):
    """Build a Quote with consistent computed fields."""
    area = height * width
    cost = area * unit_price
    defaults = dict(
        id=quote_id,
        height=height,
        width=width,
        area=area,
        markup=markup,
        cost_price=cost,
        client_price=cost * (1 + markup / 100),
        glass_type_id="g1",
        glass_name="Float",
        glass_thickness="4mm",
        note="",
        created_at=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
    )
    defaults.update(kwargs)
    return Quote(**defaults)


@pytest.fixture
def quotes():
    """Two saved quotes, newest first."""
    return [
        make_quote("q2", height=1.0, width=1.0, note="colocación incluida"),
        make_quote("q1"),
    ]


@pytest.fixture
def fake_client(admin_user, glass_types, quotes):
    """API client double with the happy-path answers preloaded."""
    client = MagicMock(spec=GlassQuoteAPIClient)
    client.who_am_i.return_value = admin_user
    client.login.return_value = admin_user
    client.list_quotes.return_value = list(quotes)
    client.list_glass_types.return_value = list(glass_types)
    return client


@pytest.fixture
def quote_factory():
    """Factory for quotes with consistent computed fields."""
    return make_quote
