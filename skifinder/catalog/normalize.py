from __future__ import annotations

import logging
from typing import Any, Dict, List

import pandas as pd

from ..recommendations.models import CatalogItem

logger = logging.getLogger(__name__)

# Canonical field -> column names as they appear in the backend tables.
# The first alias present in the fetched records wins.
FIELD_ALIASES: Dict[str, List[str]] = {
    "description": ["Artikelomschrijving", "Description", "Name"],
    "manufacturer": ["Fabrikant", "Manufacturer", "Brand", "Merk"],
    "image_url": ["Url image", "Image URL", "Image"],
    "product_url": ["Url", "URL", "Product URL"],
    "sale_price": ["Verkoopprijs", "Sale price", "Price"],
    "gender": ["Gender", "Geslacht"],
    "ability": ["Ability", "Niveau"],
    "piste": ["Piste"],
    "speed": ["Snelheid", "Speed"],
    "turns": ["Bochten", "Turns"],
}

TAG_FIELDS = ("gender", "ability", "piste", "speed", "turns")

TEXT_FALLBACKS = {
    "description": "N/A",
    "manufacturer": "N/A",
    "product_url": "#",
}


def _is_missing(value: Any) -> bool:
    return value is None or (pd.api.types.is_scalar(value) and pd.isna(value))


def _flatten_option(value: Any) -> Any:
    """Reduce Baserow select options ({"id", "value", "color"}) to their value."""
    if isinstance(value, dict):
        return value.get("value")
    if isinstance(value, (list, tuple)):
        flat = [_flatten_option(v) for v in value]
        return [v for v in flat if not _is_missing(v)]
    return value


def _price_text(text: str) -> str:
    text = text.replace("€", "").replace(" ", "").strip()
    if "," in text and "." in text:
        # The separator that comes last is the decimal one: "1.299,00" or "1,299.00"
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    return text.replace(",", ".")


def _coerce_price(value: Any) -> float | None:
    value = _flatten_option(value)
    if isinstance(value, list):
        value = value[0] if value else None
    if _is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = _price_text(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _coerce_tag(value: Any) -> str | list[str] | None:
    value = _flatten_option(value)
    if _is_missing(value):
        return None
    if isinstance(value, list):
        return [str(v) for v in value]
    return str(value)


def _coerce_text(value: Any) -> str | None:
    value = _flatten_option(value)
    if isinstance(value, list):
        value = value[0] if value else None
    if _is_missing(value):
        return None
    text = str(value).strip()
    return text or None


def _frame(records: list[Any]) -> pd.DataFrame:
    usable = []
    for record in records:
        if isinstance(record, dict):
            usable.append(record)
        else:
            logger.warning("Skipping catalog record of type %s", type(record).__name__)

    raw = pd.DataFrame.from_records(usable) if usable else pd.DataFrame()

    def _first_present(columns: List[str]) -> str | None:
        for col in columns:
            if col in raw.columns:
                return col
        return None

    canonical = pd.DataFrame(index=raw.index)
    for field, aliases in FIELD_ALIASES.items():
        col = _first_present(aliases)
        canonical[field] = raw[col] if col else None

    canonical["sale_price"] = pd.to_numeric(
        canonical["sale_price"].apply(_coerce_price), errors="coerce"
    )
    for field in TAG_FIELDS:
        canonical[field] = canonical[field].apply(_coerce_tag)
    for field in ("description", "manufacturer", "image_url", "product_url"):
        canonical[field] = canonical[field].apply(_coerce_text)

    return canonical


def normalize_records(records: list[Any]) -> list[CatalogItem]:
    """
    Convert raw backend field mappings into canonical catalog items.

    Accepts the rows of either backend, since both are keyed by the column
    names of the same table. Missing display fields get placeholder values;
    a malformed record never aborts the batch.
    """
    if not records:
        return []

    canonical = _frame(records)

    items: list[CatalogItem] = []
    for row in canonical.to_dict(orient="records"):
        values = {k: (None if _is_missing(v) else v) for k, v in row.items()}
        for field, fallback in TEXT_FALLBACKS.items():
            if values[field] is None:
                values[field] = fallback
        items.append(CatalogItem(**values))
    return items
