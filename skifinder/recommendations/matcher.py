from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Sequence

from .config import HIGH_COLOR, LENGTH_OFFSET_CM, LOW_COLOR, MAX_RESULTS
from .models import CatalogItem, PreferenceSet, RankedResult

TAG_DIMENSIONS = ("ability", "piste", "speed", "turns")

Criterion = Callable[[CatalogItem, PreferenceSet], bool]


def _normalize(value: Any) -> str:
    return str(value if value is not None else "").strip().lower()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def tag_matches(tag: Any, preference: Any) -> bool:
    """True if the tag, or any element of a list-valued tag, equals the preference.

    Comparison ignores case and surrounding whitespace.
    """
    wanted = _normalize(preference)
    values = tag if isinstance(tag, (list, tuple)) else [tag]
    return any(_normalize(v) == wanted for v in values)


def _tag_criterion(dimension: str) -> Criterion:
    def criterion(item: CatalogItem, prefs: PreferenceSet) -> bool:
        wanted = getattr(prefs, dimension)
        return wanted is not None and tag_matches(getattr(item, dimension), wanted)

    return criterion


def _price_in_range(item: CatalogItem, prefs: PreferenceSet) -> bool:
    return (
        prefs.price is not None
        and item.sale_price is not None
        and prefs.price.contains(item.sale_price)
    )


SCORING_CRITERIA: tuple[tuple[str, Criterion], ...] = tuple(
    (dimension, _tag_criterion(dimension)) for dimension in TAG_DIMENSIONS
) + (("price", _price_in_range),)

MAX_SCORE = len(SCORING_CRITERIA)


def score_item(item: CatalogItem, prefs: PreferenceSet) -> int:
    """One point per satisfied criterion; unset preferences never score."""
    return sum(1 for _, criterion in SCORING_CRITERIA if criterion(item, prefs))


def passes_hard_filters(item: CatalogItem, prefs: PreferenceSet) -> bool:
    if prefs.gender is not None and not tag_matches(item.gender, prefs.gender):
        return False
    # Only the upper price bound excludes; cheaper skis stay eligible.
    if prefs.price is not None:
        if item.sale_price is None or item.sale_price > prefs.price.max:
            return False
    return True


def match_percentage(score: int) -> int:
    return _round_half_up(score / MAX_SCORE * 100)


def interpolate_color(
    low: Sequence[int],
    high: Sequence[int],
    factor: float,
) -> str:
    factor = min(1.0, max(0.0, factor))
    channels = [_round_half_up(lo + factor * (hi - lo)) for lo, hi in zip(low, high)]
    return "rgb(" + ",".join(str(c) for c in channels) + ")"


def gradient_color(percentage: int) -> str:
    return interpolate_color(LOW_COLOR, HIGH_COLOR, percentage / 100)


def recommended_length(height: int) -> int:
    return height - LENGTH_OFFSET_CM


def rank(
    catalog: Iterable[CatalogItem],
    prefs: PreferenceSet,
    limit: int = MAX_RESULTS,
) -> list[RankedResult]:
    """
    Score, filter and order a catalog against one preference set.

    Ordering is by score descending; list.sort is stable, so items with equal
    scores keep their catalog order. At most ``limit`` results are returned.
    """
    scored = [(score_item(item, prefs), item) for item in catalog]
    scored.sort(key=lambda pair: pair[0], reverse=True)

    results: list[RankedResult] = []
    for score, item in scored:
        if len(results) >= limit:
            break
        if not passes_hard_filters(item, prefs):
            continue
        pct = match_percentage(score)
        results.append(RankedResult(
            **item.model_dump(),
            relevance_score=score,
            match_percentage=pct,
            color=gradient_color(pct),
        ))
    return results
