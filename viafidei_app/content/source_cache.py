"""
Fallback source cache.

Per (domain, language) memo of the "external or built-in" record set.

Design:
  - Populated lazily on first access, never refreshed or expired
  - External feed wins when it yields at least one record, otherwise the
    built-in library is used; the two are never merged
  - No lock: population is idempotent, so two requests racing on a cold key
    both fetch and the last write wins
"""

import logging
from typing import Dict, List, Tuple

from .feeds import ExternalFeedFetcher
from .library import CanonicalLibrary
from .records import ContentRecord

logger = logging.getLogger(__name__)


class SourceCache:
    """Process-wide fallback records, one entry per (domain, language)."""

    def __init__(self, fetcher: ExternalFeedFetcher, library: CanonicalLibrary):
        self.fetcher = fetcher
        self.library = library
        self._entries: Dict[Tuple[str, str], List[ContentRecord]] = {}
        self._loads = 0

    async def get_or_load(self, domain: str, language: str) -> List[ContentRecord]:
        """Return the cached sequence, loading it on first access."""
        key = (domain, language)
        cached = self._entries.get(key)
        if cached is not None:
            return cached

        records = await self.fetcher.fetch(domain, language)
        origin = 'external feed'
        if not records:
            records = self.library.records(domain, language)
            origin = 'built-in library'

        self._loads += 1
        self._entries[key] = records
        logger.info(f"Source cache filled {domain}/{language} from {origin} ({len(records)} records)")
        return records

    def stats(self) -> Dict[str, object]:
        return {
            'entries': {f"{d}:{l}": len(v) for (d, l), v in self._entries.items()},
            'loads': self._loads,
        }
