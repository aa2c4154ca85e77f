"""
Content listing: database first, fallback source second.

A listing never mixes the two. If the database has active rows for the
(domain, language) the requested page is returned with a cursor; if it has
none at all, the whole Source-Cache sequence is returned as a single page.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from .domains import DomainSpec, get_domain
from .records import ContentRecord
from .repository import ContentRepository
from .source_cache import SourceCache

logger = logging.getLogger(__name__)


def clamp_take(spec: DomainSpec, take: Any) -> int:
    """Requested page size, default on junk, capped at the domain max."""
    try:
        value = int(take)
    except (TypeError, ValueError):
        value = 0
    if value < 1:
        value = spec.default_take
    return min(value, spec.max_take)


class ContentAggregator:
    """Builds public listings for prayers, saints and apparitions."""

    def __init__(self, repository: ContentRepository, cache: SourceCache):
        self.repository = repository
        self.cache = cache

    async def list(self, domain: str, language: str, take: Any = None,
                   cursor: Optional[str] = None,
                   category: Optional[str] = None) -> Dict[str, Any]:
        """
        Returns:
            {'items': [ContentRecord, ...], 'nextCursor': str | None}
        """
        spec = get_domain(domain)
        take = clamp_take(spec, take)
        loop = asyncio.get_running_loop()

        (page, next_cursor), fallback = await asyncio.gather(
            loop.run_in_executor(None, self.repository.list_page, spec, language, take, cursor, category),
            self.cache.get_or_load(domain, language),
        )

        if page:
            return {'items': page, 'nextCursor': next_cursor}

        has_rows = await loop.run_in_executor(None, self.repository.has_active_rows, spec, language)
        if has_rows:
            # Filter or cursor excluded everything; the database still owns this language
            return {'items': [], 'nextCursor': None}

        items: List[ContentRecord] = list(fallback)
        if category:
            items = [record for record in items if record.extra.get('category') == category]
        logger.debug(f"{domain}/{language}: no database rows, serving {len(items)} fallback records")
        return {'items': items, 'nextCursor': None}

    async def find(self, domain: str, language: str, id_or_slug: str) -> Optional[ContentRecord]:
        """Database lookup by id or slug, then the fallback sequence."""
        spec = get_domain(domain)
        loop = asyncio.get_running_loop()
        record = await loop.run_in_executor(None, self.repository.find, spec, language, id_or_slug)
        if record is not None:
            return record

        for candidate in await self.cache.get_or_load(domain, language):
            if id_or_slug in (candidate.id, candidate.slug):
                return candidate
        return None
