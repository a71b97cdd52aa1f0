"""Export helpers: clipboard text, WhatsApp share links and CSV.

The same message templates are used for a live calculator preview and for a
saved quote, so a customer receives identical text either way.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional
from urllib.parse import quote

import pandas as pd

from glassquote.config.settings import config
from glassquote.services.models import GlassType, Quote
from glassquote.utils.pricing import QuotePreview, format_money, format_number

logger = logging.getLogger(__name__)

WHATSAPP_GREETING = "Hola! Te paso tu presupuesto:"
WHATSAPP_CLOSING = "Cualquier consulta estoy a disposición."

CSV_COLUMNS = [
    "Fecha", "Vidrio", "Alto (m)", "Ancho (m)", "m²",
    "% Ganancia", "Precio costo", "Precio cliente", "Nota",
]


def format_timestamp(value: Optional[datetime]) -> str:
    """Render a timestamp in local time, or an empty string."""
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime(config.DATE_FORMAT)


def clipboard_text(
    height: float,
    width: float,
    glass_label: str,
    area: float,
    client_price: float,
    created_at: Optional[datetime] = None
) -> str:
    lines = [f"Presupuesto {config.BUSINESS_NAME}:"]
    if created_at is not None:
        lines.append(f"Fecha: {format_timestamp(created_at)}")
    lines.extend([
        f"Medidas: {format_number(height)}m x {format_number(width)}m",
        f"Vidrio: {glass_label}",
        f"Metros cuadrados: {format_number(area)}",
        f"Precio cliente: {format_money(client_price)}",
    ])
    return "\n".join(lines)


def whatsapp_text(
    height: float,
    width: float,
    glass_label: str,
    area: float,
    client_price: float,
    created_at: Optional[datetime] = None
) -> str:
    lines = [WHATSAPP_GREETING, ""]
    if created_at is not None:
        lines.append(f"Fecha: {format_timestamp(created_at)}")
    lines.extend([
        f"Vidrio: {glass_label}",
        f"Medidas: {format_number(height)}m x {format_number(width)}m",
        f"m2: {format_number(area)}",
        f"Precio final: {format_money(client_price)}",
        "",
        WHATSAPP_CLOSING,
    ])
    return "\n".join(lines)


def whatsapp_url(text: str) -> str:
    """Build a wa.me link without a phone number; the user picks the contact."""
    return f"{config.WHATSAPP_BASE_URL}?text={quote(text, safe='')}"


def preview_clipboard_text(preview: QuotePreview, glass_type: GlassType) -> str:
    return clipboard_text(
        preview.height, preview.width, glass_type.label,
        preview.area, preview.client_price,
    )


def preview_whatsapp_url(preview: QuotePreview, glass_type: GlassType) -> str:
    return whatsapp_url(whatsapp_text(
        preview.height, preview.width, glass_type.label,
        preview.area, preview.client_price,
    ))


def quote_clipboard_text(q: Quote) -> str:
    return clipboard_text(
        q.height, q.width, q.glass_label, q.area, q.client_price, q.created_at,
    )


def quote_whatsapp_url(q: Quote) -> str:
    return whatsapp_url(whatsapp_text(
        q.height, q.width, q.glass_label, q.area, q.client_price, q.created_at,
    ))


def quotes_to_dataframe(quotes: Iterable[Quote]) -> pd.DataFrame:
    """Tabulate quotes for display and CSV download.

    Numbers keep full precision; the frontend rounds only when rendering.
    """
    rows = [
        {
            "Fecha": format_timestamp(q.created_at),
            "Vidrio": q.glass_label,
            "Alto (m)": q.height,
            "Ancho (m)": q.width,
            "m²": q.area,
            "% Ganancia": q.markup,
            "Precio costo": q.cost_price,
            "Precio cliente": q.client_price,
            "Nota": q.note,
        }
        for q in quotes
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def quotes_to_csv(quotes: Iterable[Quote]) -> str:
    df = quotes_to_dataframe(quotes)
    logger.debug(f"Exporting {len(df)} quotes to CSV")
    return df.to_csv(index=False)
