"""
================================================================================
Via Fidei - Content Resolution & Local Search
================================================================================
Multi-source content for prayers, saints and Marian apparitions.

Components:
  - language.py     - Active language from user / query / default / header
  - library.py      - Built-in canonical records (English only)
  - feeds.py        - Optional external JSON feeds, normalized
  - source_cache.py - Per (domain, language) memo of feed-or-library records
  - repository.py   - Database reads (paged listing, search, lookup)
  - aggregator.py   - Listings: database page or fallback sequence
  - search.py       - Scored, deduplicated suggestions and results

Source order:
  database -> external feed -> built-in library
================================================================================
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .aggregator import ContentAggregator
from .feeds import ExternalFeedFetcher
from .library import CanonicalLibrary
from .repository import ContentRepository
from .search import SearchEngine
from .source_cache import SourceCache


@dataclass
class ContentServices:
    """Everything the content routes need, built once per app."""
    cache: SourceCache
    aggregator: ContentAggregator
    search: SearchEngine


def build_services(env: Optional[Mapping[str, Any]] = None,
                   fetcher: Optional[ExternalFeedFetcher] = None,
                   library: Optional[CanonicalLibrary] = None,
                   repository: Optional[ContentRepository] = None) -> ContentServices:
    env = env or {}
    if fetcher is None:
        timeout = env.get('EXTERNAL_FEED_TIMEOUT')
        fetcher = ExternalFeedFetcher(env=env, timeout=float(timeout) if timeout else None)
    cache = SourceCache(fetcher, library or CanonicalLibrary())
    repository = repository or ContentRepository()
    return ContentServices(
        cache=cache,
        aggregator=ContentAggregator(repository, cache),
        search=SearchEngine(repository, cache),
    )


__all__ = [
    'ContentServices', 'build_services', 'ContentAggregator', 'ExternalFeedFetcher',
    'CanonicalLibrary', 'ContentRepository', 'SearchEngine', 'SourceCache',
]
