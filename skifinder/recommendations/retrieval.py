from __future__ import annotations

import logging
import time

from ..catalog.client import fetch_catalog
from ..catalog.config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from ..catalog.normalize import normalize_records
from .matcher import rank, recommended_length, tag_matches
from .models import (
    CatalogItem,
    CatalogResponse,
    PreferenceSet,
    RecommendationResponse,
)

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No skis match your answers. Try a different price range or ability."

CATALOG_FILTERS = ("gender", "ability", "piste")


def list_catalog(
    filters: dict[str, str | None] | None = None,
    config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
) -> CatalogResponse:
    """Fetch the normalized catalog, optionally narrowed by exact tag filters."""
    items: list[CatalogItem] = normalize_records(fetch_catalog(config))

    for field, wanted in (filters or {}).items():
        if field not in CATALOG_FILTERS or not wanted or not wanted.strip():
            continue
        items = [item for item in items if tag_matches(getattr(item, field), wanted)]

    return CatalogResponse(skis=items, total=len(items))


def get_recommendations(
    prefs: PreferenceSet,
    config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
) -> RecommendationResponse:
    start_time = time.time()
    length = recommended_length(prefs.height)

    # Fetch errors propagate: a failed fetch ends this search.
    catalog = normalize_records(fetch_catalog(config))
    results = rank(catalog, prefs)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "search %s: %d candidates, %d results, best score %s, %.1f ms",
        prefs.search_id,
        len(catalog),
        len(results),
        results[0].relevance_score if results else "-",
        elapsed_ms,
    )

    return RecommendationResponse(
        search_id=prefs.search_id,
        status="ok" if results else "no_results",
        recommended_length=length,
        results=results,
        total_candidates=len(catalog),
        message=None if results else NO_RESULTS_MESSAGE,
    )
