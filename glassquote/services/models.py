"""Domain records exchanged with the backend.

The backend speaks Spanish field names (``nombre``, ``precioM2``, ``alto``...)
and MongoDB-style ``_id`` identifiers. These dataclasses translate the wire
shape into the names used throughout the frontend.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def _record_id(data: Dict[str, Any]) -> Optional[str]:
    """Extract the identifier of a wire record (``_id`` or ``id``)."""
    value = data.get('_id', data.get('id'))
    return str(value) if value is not None else None


def _to_float(value: Any, default: Optional[float] = None) -> Optional[float]:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as sent by the backend.

    Returns None for missing or unparseable values.
    """
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Unparseable timestamp from backend: {value!r}")
        return None


@dataclass(frozen=True)
class User:
    """Authenticated administrator."""
    id: Optional[str]
    username: str
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, data: Any) -> "User":
        if isinstance(data, str):
            return cls(id=None, username=data, raw={'username': data})
        data = data or {}
        return cls(
            id=_record_id(data),
            username=str(data.get('username') or data.get('nombre') or ''),
            raw=dict(data),
        )


@dataclass(frozen=True)
class GlassType:
    """Catalog entry: a named glass product with its price per square meter."""
    id: str
    name: str
    price_per_sqm: float
    thickness: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "GlassType":
        return cls(
            id=_record_id(data),
            name=str(data.get('nombre') or ''),
            price_per_sqm=_to_float(data.get('precioM2'), 0.0),
            thickness=data.get('grosor') or None,
        )

    @property
    def label(self) -> str:
        """Name plus thickness, e.g. ``Float 4mm``."""
        return f"{self.name} {self.thickness}" if self.thickness else self.name


@dataclass(frozen=True)
class Quote:
    """A persisted price calculation.

    ``glass_name`` and ``glass_thickness`` are the snapshot the backend
    returns with the quote; they do not follow later catalog edits.
    """
    id: str
    height: float
    width: float
    area: float
    markup: float
    cost_price: float
    client_price: float
    glass_type_id: Optional[str] = None
    glass_name: str = ""
    glass_thickness: Optional[str] = None
    note: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Quote":
        glass = data.get('tipoVidrio')
        if isinstance(glass, dict):
            glass_id = _record_id(glass)
            glass_name = str(glass.get('nombre') or '')
            glass_thickness = glass.get('grosor') or None
            unit_price = _to_float(glass.get('precioM2'))
        else:
            glass_id = str(glass) if glass is not None else None
            glass_name = str(data.get('nombreVidrio') or '')
            glass_thickness = data.get('grosorVidrio') or None
            unit_price = _to_float(data.get('precioM2'))

        height = _to_float(data.get('alto'), 0.0)
        width = _to_float(data.get('ancho'), 0.0)
        markup = _to_float(data.get('porcentajeGanancia'), 0.0)

        # Backend values are authoritative; derive only what it omitted
        area = _to_float(data.get('m2'))
        if area is None:
            area = height * width
        cost_price = _to_float(data.get('precioCosto'))
        if cost_price is None:
            cost_price = area * unit_price if unit_price is not None else 0.0
        client_price = _to_float(data.get('precioCliente'))
        if client_price is None:
            client_price = cost_price * (1 + markup / 100)

        return cls(
            id=_record_id(data),
            height=height,
            width=width,
            area=area,
            markup=markup,
            cost_price=cost_price,
            client_price=client_price,
            glass_type_id=glass_id,
            glass_name=glass_name,
            glass_thickness=glass_thickness,
            note=str(data.get('nota') or ''),
            created_at=parse_timestamp(data.get('fecha') or data.get('createdAt')),
        )

    @property
    def glass_label(self) -> str:
        if self.glass_thickness:
            return f"{self.glass_name} {self.glass_thickness}"
        return self.glass_name
