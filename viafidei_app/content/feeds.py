"""
================================================================================
Via Fidei - External Feed Fetcher
================================================================================
Loads an optional operator-configured JSON feed for a domain and language and
normalizes its entries into ContentRecords.

URL resolution (first match wins):
  1. {DOMAIN}_EXTERNAL_URL_{LANG}   e.g. PRAYERS_EXTERNAL_URL_ES
  2. {DOMAIN}_EXTERNAL_URL          e.g. PRAYERS_EXTERNAL_URL
  3. nothing configured -> empty result, no network activity

Accepted payloads: a top-level JSON array, or an object with an "items" array.

The fetcher never raises: network, HTTP and parse failures are logged and
yield an empty list, which sends the Source Cache to the built-in library.
================================================================================
"""

import logging
import os
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

import httpx

from .domains import DomainSpec, get_domain
from .records import ContentRecord, ORIGIN_EXTERNAL, as_utc

logger = logging.getLogger(__name__)

MAX_SLUG_LENGTH = 140
_WHITESPACE = re.compile(r'\s+')


class InvalidFeedEntry(ValueError):
    """A feed entry that cannot become a ContentRecord."""


def slugify(title: str) -> str:
    """Lowercase, collapse whitespace runs to '-', cap at 140 chars."""
    return _WHITESPACE.sub('-', title.strip().lower())[:MAX_SLUG_LENGTH]


def _first_text(raw: Mapping[str, Any], keys) -> Optional[str]:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _snake(key: str) -> str:
    return re.sub(r'(?<!^)(?=[A-Z])', '_', key).lower()


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return as_utc(datetime.fromisoformat(text))
    except (ValueError, OverflowError):
        return None


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _extra_value(key: str, value: Any) -> Any:
    if key == 'patronages':
        return _string_list(value)
    if key == 'feastDay':
        return _parse_timestamp(value)
    if key == 'firstYear':
        try:
            return int(value) if value is not None else None
        except (TypeError, ValueError, OverflowError):
            return None
    return value if isinstance(value, str) else None


def normalize_entry(spec: DomainSpec, raw: Any, language: str, index: int,
                    fetched_at: datetime) -> ContentRecord:
    """
    Turn one loosely-typed feed entry into a ContentRecord.

    Raises:
        InvalidFeedEntry: the entry is not an object, or its title or body
            is missing or blank.
    """
    if not isinstance(raw, Mapping):
        raise InvalidFeedEntry(f"entry {index} is not an object")

    title = _first_text(raw, spec.title_aliases)
    if not title:
        raise InvalidFeedEntry(f"entry {index} has no {spec.title_attr}")
    body = _first_text(raw, spec.body_aliases)
    if not body:
        raise InvalidFeedEntry(f"entry {index} has no {spec.body_attr}")

    provided_slug = _first_text(raw, ('slug',))
    slug = provided_slug[:MAX_SLUG_LENGTH] if provided_slug else slugify(title)

    extra = {}
    for public_key in spec.extra_columns:
        value = raw.get(public_key, raw.get(_snake(public_key)))
        extra[public_key] = _extra_value(public_key, value)

    return ContentRecord(
        domain=spec.name,
        id=f"external-{spec.name}-{language}-{index}",
        language=language,
        slug=slug,
        title=title,
        body=body,
        tags=_string_list(raw.get('tags')),
        updated_at=_parse_timestamp(raw.get('updatedAt', raw.get('updated_at'))) or fetched_at,
        source=_first_text(raw, ('source',)),
        source_url=_first_text(raw, ('sourceUrl', 'source_url', 'url')),
        source_attribution=_first_text(raw, ('sourceAttribution', 'source_attribution')),
        extra=extra,
        origin=ORIGIN_EXTERNAL,
    )


def normalize_payload(spec: DomainSpec, payload: Any, language: str,
                      fetched_at: Optional[datetime] = None) -> List[ContentRecord]:
    """Normalize a whole feed body, dropping malformed entries."""
    fetched_at = fetched_at or datetime.now(timezone.utc)
    if isinstance(payload, Mapping):
        payload = payload.get('items')
    if not isinstance(payload, list):
        logger.warning(f"{spec.name}/{language} feed: expected an array or an object with 'items'")
        return []

    records = []
    for index, raw in enumerate(payload):
        try:
            records.append(normalize_entry(spec, raw, language, index, fetched_at))
        except InvalidFeedEntry as exc:
            logger.debug(f"{spec.name}/{language} feed: dropped {exc}")
        except Exception as exc:
            logger.warning(f"⚠️ {spec.name}/{language} feed: dropped entry {index} ({exc.__class__.__name__}: {exc})")
    return records


class ExternalFeedFetcher:
    """
    Fetches and normalizes external feeds.

    Args:
        env: Mapping holding the *_EXTERNAL_URL settings (default: os.environ)
        timeout: Request timeout in seconds (None = httpx default)
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    user_agent = "ViaFidei/1.0 (content feed)"

    def __init__(self, env: Optional[Mapping[str, str]] = None,
                 timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.env = os.environ if env is None else env
        self.timeout = timeout
        self.transport = transport

    def feed_url(self, domain: str, language: str) -> Optional[str]:
        prefix = get_domain(domain).env_prefix
        for key in (f"{prefix}_EXTERNAL_URL_{language.upper()}", f"{prefix}_EXTERNAL_URL"):
            value = (self.env.get(key) or '').strip()
            if value:
                return value
        return None

    def _client(self) -> httpx.AsyncClient:
        kwargs: Dict[str, Any] = {
            'headers': {
                'User-Agent': self.user_agent,
                'Accept': 'application/json',
            },
            'follow_redirects': True,
        }
        if self.timeout is not None:
            kwargs['timeout'] = self.timeout
        if self.transport is not None:
            kwargs['transport'] = self.transport
        return httpx.AsyncClient(**kwargs)

    async def fetch(self, domain: str, language: str) -> List[ContentRecord]:
        """Return normalized feed records, or [] when unconfigured or failing."""
        spec = get_domain(domain)
        url = self.feed_url(domain, language)
        if not url:
            return []

        fetched_at = datetime.now(timezone.utc)
        try:
            async with self._client() as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning(f"⚠️ External {domain} feed failed for '{language}': {exc}")
            return []
        except ValueError as exc:
            logger.warning(f"⚠️ External {domain} feed for '{language}' is not valid JSON: {exc}")
            return []

        records = normalize_payload(spec, payload, language, fetched_at)
        logger.info(f"External {domain} feed for '{language}': {len(records)} records")
        return records
