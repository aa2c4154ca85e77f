"""Database reads for curated content (listing, search, lookup)."""

from typing import Callable, List, Optional, Tuple

from sqlalchemy import String, and_, cast, or_

from ..database import get_db_session
from .domains import DomainSpec
from .records import ContentRecord, ORIGIN_DATABASE


def record_from_row(spec: DomainSpec, row) -> ContentRecord:
    return ContentRecord(
        domain=spec.name,
        id=row.id,
        language=row.language,
        slug=row.slug,
        title=getattr(row, spec.title_attr),
        body=getattr(row, spec.body_attr),
        tags=[tag for tag in (row.tags or []) if isinstance(tag, str)],
        updated_at=row.updated_at,
        is_active=bool(row.is_active),
        source=row.source,
        source_url=row.source_url,
        source_attribution=row.source_attribution,
        extra={key: getattr(row, attr) for key, attr in spec.extra_columns.items()},
        origin=ORIGIN_DATABASE,
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(column, value: str):
    return column.ilike(f"%{_escape_like(value)}%", escape="\\")


def _json_contains(column, value: str):
    """Exact membership in a JSON string array (portable across SQLite/PostgreSQL)."""
    return cast(column, String).ilike(f'%"{_escape_like(value)}"%', escape="\\")


class ContentRepository:
    """
    Read-only queries against the content tables.

    Args:
        session_scope: Context-manager factory yielding a SQLAlchemy session
    """

    def __init__(self, session_scope: Callable = get_db_session):
        self.session_scope = session_scope

    def list_page(self, spec: DomainSpec, language: str, take: int,
                  cursor: Optional[str] = None,
                  category: Optional[str] = None) -> Tuple[List[ContentRecord], Optional[str]]:
        """
        One page of active rows ordered by title/name, then id.

        ``cursor`` is the id of the last row of the previous page. Returns the
        page and the cursor for the next one (None when exhausted).
        """
        model = spec.model
        sort_column = getattr(model, spec.title_attr)

        with self.session_scope() as session:
            query = session.query(model).filter(
                model.language == language,
                model.is_active.is_(True),
            )
            if category and 'category' in spec.extra_columns:
                query = query.filter(model.category == category)

            if cursor:
                anchor = session.query(model).filter(model.id == cursor).first()
                if anchor is None:
                    return [], None
                anchor_key = getattr(anchor, spec.title_attr)
                query = query.filter(or_(
                    sort_column > anchor_key,
                    and_(sort_column == anchor_key, model.id > anchor.id),
                ))

            rows = query.order_by(sort_column.asc(), model.id.asc()).limit(take + 1).all()

        has_more = len(rows) > take
        rows = rows[:take]
        records = [record_from_row(spec, row) for row in rows]
        next_cursor = records[-1].id if has_more and records else None
        return records, next_cursor

    def has_active_rows(self, spec: DomainSpec, language: str) -> bool:
        model = spec.model
        with self.session_scope() as session:
            return session.query(model.id).filter(
                model.language == language,
                model.is_active.is_(True),
            ).first() is not None

    def search(self, spec: DomainSpec, language: str, query: str, limit: int) -> List[ContentRecord]:
        """
        Active rows whose title/body contain ``query`` (case-insensitive) or
        whose tags include it exactly. Ordered by title, newest first on ties.
        """
        model = spec.model
        lowered = query.lower()
        clauses = [
            _contains(getattr(model, spec.title_attr), query),
            _contains(getattr(model, spec.body_attr), query),
            _json_contains(model.tags, lowered),
        ]
        for public_key in spec.text_search_fields:
            clauses.append(_contains(getattr(model, spec.extra_columns[public_key]), query))
        for public_key in spec.list_search_fields:
            clauses.append(_json_contains(getattr(model, spec.extra_columns[public_key]), lowered))

        with self.session_scope() as session:
            rows = session.query(model).filter(
                model.language == language,
                model.is_active.is_(True),
                or_(*clauses),
            ).order_by(
                getattr(model, spec.title_attr).asc(),
                model.updated_at.desc(),
            ).limit(limit).all()
            return [record_from_row(spec, row) for row in rows]

    def find(self, spec: DomainSpec, language: str, id_or_slug: str) -> Optional[ContentRecord]:
        """Look up by id, then by (slug, language). Inactive rows count as missing."""
        model = spec.model
        with self.session_scope() as session:
            row = session.query(model).filter(model.id == id_or_slug).first()
            if row is None:
                row = session.query(model).filter(
                    model.slug == id_or_slug,
                    model.language == language,
                ).first()
            if row is None or not row.is_active:
                return None
            return record_from_row(spec, row)
