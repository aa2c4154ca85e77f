from datetime import datetime, timedelta, timezone

import pytest

from viafidei_app import create_app
from viafidei_app.content.records import ContentRecord, ORIGIN_DATABASE
from viafidei_app.database import get_db_session
from viafidei_app.models import Apparition, Prayer, Saint


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'DATABASE_URL': f"sqlite:///{tmp_path / 'viafidei-test.db'}",
        'DEFAULT_LANGUAGE': None,
        'DISABLE_RATE_LIMITING': True,
    })
    yield app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


class CountingFetcher:
    """Stand-in for ExternalFeedFetcher returning canned records."""

    def __init__(self, records=None):
        self.records = records or {}
        self.calls = []

    async def fetch(self, domain, language):
        self.calls.append((domain, language))
        return list(self.records.get((domain, language), []))


class StubRepository:
    """In-memory ContentRepository double that records every call."""

    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.calls = []

    def _check(self, name):
        self.calls.append(name)
        if self.error:
            raise self.error

    def search(self, spec, language, query, limit):
        self._check('search')
        lowered = query.lower()
        return [
            r for r in self.rows
            if r.domain == spec.name and r.language == language
            and (lowered in r.title.lower() or lowered in r.body.lower() or r.has_tag(lowered))
        ][:limit]

    def list_page(self, spec, language, take, cursor=None, category=None):
        self._check('list_page')
        rows = [r for r in self.rows if r.domain == spec.name and r.language == language]
        return rows[:take], None

    def has_active_rows(self, spec, language):
        self._check('has_active_rows')
        return any(r.domain == spec.name and r.language == language for r in self.rows)

    def find(self, spec, language, id_or_slug):
        self._check('find')
        for r in self.rows:
            if r.domain == spec.name and id_or_slug in (r.id, r.slug):
                return r
        return None


def make_record(domain='prayers', title='Our Father', slug=None, body='Text', tags=None,
                language='en', origin=ORIGIN_DATABASE, record_id=None, age_days=0.0, **extra):
    return ContentRecord(
        domain=domain,
        id=record_id or f"{origin}-{slug or title}",
        language=language,
        slug=slug,
        title=title,
        body=body,
        tags=tags or [],
        updated_at=datetime.now(timezone.utc) - timedelta(days=age_days),
        extra=extra,
        origin=origin,
    )


def add_prayer(slug, title, content='A prayer.', language='en', tags=None,
               category=None, is_active=True, updated_at=None):
    with get_db_session() as session:
        row = Prayer(
            slug=slug, title=title, content=content, language=language,
            tags=tags or [], category=category, is_active=is_active,
        )
        if updated_at is not None:
            row.updated_at = updated_at
        session.add(row)
        session.flush()
        return row.id


def add_saint(slug, name, biography='A holy life.', language='en', tags=None, patronages=None):
    with get_db_session() as session:
        row = Saint(
            slug=slug, name=name, biography=biography, language=language,
            tags=tags or [], patronages=patronages or [],
        )
        session.add(row)
        session.flush()
        return row.id


def add_apparition(slug, title, story='An apparition.', language='en', location=None, tags=None):
    with get_db_session() as session:
        row = Apparition(
            slug=slug, title=title, story=story, language=language,
            location=location, tags=tags or [],
        )
        session.add(row)
        session.flush()
        return row.id
