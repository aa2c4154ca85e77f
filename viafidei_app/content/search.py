"""
================================================================================
Via Fidei - Local Search Engine
================================================================================
Ranked, deduplicated search over one content domain.

Flow:
  1. Empty/blank query -> empty answer, nothing queried
  2. In parallel: database matches (capped 40 suggest / 120 full) and the
     Source-Cache sequence filtered with the same substring predicate
  3. Score every candidate (see scoring.py)
  4. Stable sort by descending score, database candidates first on ties
  5. Drop candidates whose language:slug key was already emitted
  6. Suggestions = top 3, results = everything in full mode

Saints and apparitions can be searched together; each side is ranked and
deduplicated on its own and the suggestions list puts saints first.
================================================================================
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .domains import APPARITIONS, SAINTS, get_domain
from .records import ContentRecord
from .repository import ContentRepository
from .scoring import matches_query, score
from .source_cache import SourceCache

logger = logging.getLogger(__name__)

MODE_SUGGEST = 'suggest'
MODE_FULL = 'full'
SEARCH_MODES = (MODE_SUGGEST, MODE_FULL)

TYPE_SAINT = 'saint'
TYPE_APPARITION = 'apparition'
TYPE_ALL = 'all'
SAINT_SEARCH_TYPES = (TYPE_SAINT, TYPE_APPARITION, TYPE_ALL)

SUGGESTION_LIMIT = 3
DATABASE_LIMITS = {MODE_SUGGEST: 40, MODE_FULL: 120}


def deduplicate(records: List[ContentRecord]) -> List[ContentRecord]:
    """Keep the first record for each language:slug (or id/title) key."""
    seen = set()
    unique = []
    for record in records:
        key = record.dedup_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique


class SearchEngine:
    """Local search across database and fallback records."""

    def __init__(self, repository: ContentRepository, cache: SourceCache):
        self.repository = repository
        self.cache = cache

    async def ranked(self, domain: str, language: str, query: str, mode: str = MODE_SUGGEST,
                     now: Optional[datetime] = None) -> List[ContentRecord]:
        """All matching records, scored, sorted and deduplicated."""
        spec = get_domain(domain)
        query = (query or '').strip()
        if not query:
            return []

        limit = DATABASE_LIMITS.get(mode, DATABASE_LIMITS[MODE_SUGGEST])
        loop = asyncio.get_running_loop()
        db_matches, fallback = await asyncio.gather(
            loop.run_in_executor(None, self.repository.search, spec, language, query, limit),
            self.cache.get_or_load(domain, language),
        )

        fallback_matches = [
            record for record in fallback
            if matches_query(record, query, spec.text_search_fields, spec.list_search_fields)
        ]

        now = now or datetime.now(timezone.utc)
        candidates = list(db_matches) + fallback_matches
        # sorted() is stable: equal scores keep database-then-fallback order
        ordered = sorted(candidates, key=lambda r: score(r, query, spec.weights, now), reverse=True)
        unique = deduplicate(ordered)

        logger.debug(
            f"Search {domain}/{language} '{query}': {len(db_matches)} db + "
            f"{len(fallback_matches)} fallback -> {len(unique)} unique"
        )
        return unique

    async def search(self, domain: str, language: str, query: str,
                     mode: str = MODE_SUGGEST) -> Dict[str, Any]:
        """
        Returns:
            {'suggestions': [dict, ...] (max 3), 'results': [ContentRecord, ...]}
        """
        spec = get_domain(domain)
        ranked = await self.ranked(domain, language, query, mode)
        return {
            'suggestions': [spec.suggestion(record) for record in ranked[:SUGGESTION_LIMIT]],
            'results': ranked if mode == MODE_FULL else [],
        }

    async def search_saints(self, language: str, query: str, mode: str = MODE_SUGGEST,
                            search_type: str = TYPE_ALL) -> Dict[str, Any]:
        """
        Saints and apparitions side by side.

        Returns:
            {'suggestions': [...], 'resultsSaints': [...], 'resultsApparitions': [...]}
        """
        if not (query or '').strip():
            return {'suggestions': [], 'resultsSaints': [], 'resultsApparitions': []}

        async def _nothing() -> List[ContentRecord]:
            return []

        saints, apparitions = await asyncio.gather(
            self.ranked(SAINTS, language, query, mode) if search_type != TYPE_APPARITION else _nothing(),
            self.ranked(APPARITIONS, language, query, mode) if search_type != TYPE_SAINT else _nothing(),
        )

        merged = [
            {'kind': get_domain(SAINTS).kind, 'id': r.id, 'title': r.title, 'slug': r.slug}
            for r in saints
        ] + [
            {'kind': get_domain(APPARITIONS).kind, 'id': r.id, 'title': r.title, 'slug': r.slug}
            for r in apparitions
        ]

        full = mode == MODE_FULL
        return {
            'suggestions': merged[:SUGGESTION_LIMIT],
            'resultsSaints': saints if full else [],
            'resultsApparitions': apparitions if full else [],
        }
