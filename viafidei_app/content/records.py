"""
Content record shape shared by every source.

Database rows, external feed entries and the built-in library are all turned
into ``ContentRecord`` before anything is listed, scored or deduplicated.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


ORIGIN_DATABASE = 'database'
ORIGIN_EXTERNAL = 'external'
ORIGIN_BUILTIN = 'builtin'


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (SQLite) as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _contains_folded(items, value: str) -> bool:
    folded = value.lower()
    return any(isinstance(item, str) and item.lower() == folded for item in items)


def _public_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return as_utc(value).isoformat()
    return value


@dataclass
class ContentRecord:
    """
    One prayer, saint or apparition in canonical form.

    ``title`` holds the display string (a saint's name) and ``body`` the main
    text field (prayer content, biography, story). Domain-only columns live in
    ``extra`` keyed by their public (camelCase) names.
    """
    domain: str
    id: str
    language: str
    slug: Optional[str]
    title: str
    body: str
    tags: List[str] = field(default_factory=list)
    updated_at: Optional[datetime] = None
    is_active: bool = True
    source: Optional[str] = None
    source_url: Optional[str] = None
    source_attribution: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    origin: str = ORIGIN_DATABASE

    @property
    def dedup_key(self) -> str:
        """language:slug, else language:id, else language:lowercased title."""
        key = self.slug or self.id or (self.title or '').lower()
        return f"{self.language}:{key}"

    def list_field(self, name: str) -> List[str]:
        """Return a list-valued extra (e.g. patronages) as a list."""
        value = self.extra.get(name) or []
        return list(value) if isinstance(value, (list, tuple, set)) else []

    def has_tag(self, value: str) -> bool:
        """Case-insensitive exact tag membership."""
        return _contains_folded(self.tags, value)

    def list_contains(self, name: str, value: str) -> bool:
        """Case-insensitive exact membership in a list-valued extra."""
        return _contains_folded(self.list_field(name), value)

    def to_public(self, title_key: str = 'title', body_key: str = 'content') -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'id': self.id,
            'language': self.language,
            'slug': self.slug,
            title_key: self.title,
            body_key: self.body,
        }
        for key, value in self.extra.items():
            payload[key] = _public_value(value)
        payload.update({
            'tags': list(self.tags),
            'source': self.source,
            'sourceUrl': self.source_url,
            'sourceAttribution': self.source_attribution,
            'updatedAt': _public_value(self.updated_at),
        })
        return payload
