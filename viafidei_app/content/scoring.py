"""
Relevance scoring for local search.

Score shape (all constants per domain, see ``ScoreWeights``):

    exact title match          +exact_title
    title contains query       +partial_title   (only when not exact)
    query is one of the tags   +tag
    query is a list extra      +list_bonus      (saint patronages)
    origin                     +database_origin | +fallback_origin
    recency                    +max(0, recency_max - age_days * recency_decay)

Matching is plain case-insensitive substring containment; tag membership
compares the whole query against each tag, ignoring case.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Sequence

from .records import ContentRecord, ORIGIN_DATABASE, as_utc

SECONDS_PER_DAY = 60 * 60 * 24


@dataclass(frozen=True)
class ScoreWeights:
    exact_title: float
    partial_title: float
    tag: float
    database_origin: float
    fallback_origin: float
    recency_max: float
    recency_decay: float
    # Extra bonus per list-valued field name, e.g. {'patronages': 40}
    list_bonus: Optional[Dict[str, float]] = None


def recency_bonus(updated_at: Optional[datetime], weights: ScoreWeights,
                  now: Optional[datetime] = None) -> float:
    """Linear decay from ``recency_max`` at age 0 down to 0."""
    now = now or datetime.now(timezone.utc)
    updated_at = as_utc(updated_at) or now
    age_days = max(0.0, (now - updated_at).total_seconds() / SECONDS_PER_DAY)
    return max(0.0, weights.recency_max - age_days * weights.recency_decay)


def score(record: ContentRecord, query: str, weights: ScoreWeights,
          now: Optional[datetime] = None) -> float:
    """Score a candidate against an already-trimmed query."""
    lowered = query.lower()
    title = (record.title or '').lower()
    total = 0.0

    if title == lowered:
        total += weights.exact_title
    elif lowered in title:
        total += weights.partial_title

    if record.has_tag(lowered):
        total += weights.tag

    for name, bonus in (weights.list_bonus or {}).items():
        if record.list_contains(name, lowered):
            total += bonus

    if record.origin == ORIGIN_DATABASE:
        total += weights.database_origin
    else:
        total += weights.fallback_origin

    total += recency_bonus(record.updated_at, weights, now)
    return total


def matches_query(record: ContentRecord, query: str,
                  text_fields: Sequence[str] = (),
                  list_fields: Iterable[str] = ()) -> bool:
    """
    The search predicate applied to fallback records.

    Title or body contains the query, or the query equals a tag. Domain
    extras widen it the same way the database query does: ``text_fields``
    by containment, ``list_fields`` by exact membership.
    """
    lowered = query.lower()
    if lowered in (record.title or '').lower():
        return True
    if lowered in (record.body or '').lower():
        return True
    if record.has_tag(lowered):
        return True
    for name in text_fields:
        value = record.extra.get(name)
        if isinstance(value, str) and lowered in value.lower():
            return True
    for name in list_fields:
        if record.list_contains(name, lowered):
            return True
    return False
