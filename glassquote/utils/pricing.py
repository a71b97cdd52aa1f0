"""Live price derivation for the quote calculator.

area = height × width
cost = area × price per m²
client price = cost × (1 + markup / 100)

Values keep full precision; rounding happens only when formatting for display.
"""

from dataclasses import dataclass
from typing import Optional

from glassquote.config.settings import config
from glassquote.services.models import GlassType
from glassquote.utils.validators import parse_decimal


@dataclass(frozen=True)
class QuotePreview:
    """Result of a successful live derivation."""
    height: float
    width: float
    markup: float
    unit_price: float
    area: float
    cost_price: float
    client_price: float


def compute_quote(height: float, width: float, unit_price: float, markup: float) -> QuotePreview:
    area = height * width
    cost_price = area * unit_price
    client_price = cost_price * (1 + markup / 100)
    return QuotePreview(
        height=height,
        width=width,
        markup=markup,
        unit_price=unit_price,
        area=area,
        cost_price=cost_price,
        client_price=client_price,
    )


def derive_preview(
    height_text,
    width_text,
    markup_text,
    glass_type: Optional[GlassType]
) -> Optional[QuotePreview]:
    """Derive the preview shown under the calculator inputs.

    Returns None (nothing to show) when no glass type is selected, when any
    input is not a number, when a dimension is not positive or when the
    markup is negative.
    """
    if glass_type is None:
        return None

    height = parse_decimal(height_text)
    width = parse_decimal(width_text)
    markup = parse_decimal(markup_text)
    if height is None or width is None or markup is None:
        return None
    if height <= 0 or width <= 0 or markup < 0:
        return None

    return compute_quote(height, width, glass_type.price_per_sqm, markup)


def format_number(value: float) -> str:
    """Format to the display precision (2 decimals)."""
    return f"{value:.{config.DISPLAY_DECIMALS}f}"


def format_money(value: float) -> str:
    return f"{config.CURRENCY_SYMBOL}{format_number(value)}"
