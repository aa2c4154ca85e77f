import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from conftest import CountingFetcher, add_apparition, add_prayer, add_saint

from viafidei_app.content.aggregator import ContentAggregator, clamp_take
from viafidei_app.content.domains import get_domain
from viafidei_app.content.library import CanonicalLibrary
from viafidei_app.content.records import ORIGIN_BUILTIN, ORIGIN_DATABASE
from viafidei_app.content.repository import ContentRepository
from viafidei_app.content.scoring import score
from viafidei_app.content.source_cache import SourceCache


@pytest.fixture
def aggregator(app):
    return ContentAggregator(ContentRepository(), SourceCache(CountingFetcher(), CanonicalLibrary()))


@pytest.fixture
def repository(app):
    return ContentRepository()


def test_clamp_take():
    spec = get_domain('prayers')
    assert clamp_take(spec, None) == 20
    assert clamp_take(spec, 'abc') == 20
    assert clamp_take(spec, '0') == 20
    assert clamp_take(spec, '5') == 5
    assert clamp_take(spec, 5000) == 100
    assert clamp_take(get_domain('saints'), None) == 30


def test_empty_database_serves_builtin_library(aggregator):
    page = asyncio.run(aggregator.list('prayers', 'en'))

    assert page['nextCursor'] is None
    assert page['items'][0].slug == 'our-father'
    assert len(page['items']) == 9
    assert {r.origin for r in page['items']} == {ORIGIN_BUILTIN}


def test_fallback_ignores_take(aggregator):
    page = asyncio.run(aggregator.list('prayers', 'en', take=2))
    assert len(page['items']) == 9


def test_empty_database_non_english_is_empty(aggregator):
    assert asyncio.run(aggregator.list('saints', 'de')) == {'items': [], 'nextCursor': None}


def test_database_pages_with_cursor(aggregator):
    add_prayer('memorare', 'Memorare')
    add_prayer('angelus', 'Angelus')
    add_prayer('benedictus', 'Benedictus')

    first = asyncio.run(aggregator.list('prayers', 'en', take=2))
    assert [r.title for r in first['items']] == ['Angelus', 'Benedictus']
    assert first['nextCursor'] == first['items'][-1].id
    assert {r.origin for r in first['items']} == {ORIGIN_DATABASE}

    second = asyncio.run(aggregator.list('prayers', 'en', take=2, cursor=first['nextCursor']))
    assert [r.title for r in second['items']] == ['Memorare']
    assert second['nextCursor'] is None


def test_database_rows_never_mixed_with_fallback(aggregator):
    add_prayer('custom-novena', 'Custom Novena')

    page = asyncio.run(aggregator.list('prayers', 'en'))

    assert [r.slug for r in page['items']] == ['custom-novena']


def test_category_filter(aggregator):
    add_prayer('memorare', 'Memorare', category='MARIAN')
    add_prayer('angelus', 'Angelus', category='MARIAN')
    add_prayer('glory-be', 'Glory Be', category='TRINITARIAN')

    page = asyncio.run(aggregator.list('prayers', 'en', category='MARIAN'))
    assert [r.slug for r in page['items']] == ['angelus', 'memorare']
    assert page['items'][0].extra['category'] == 'MARIAN'


def test_filter_that_matches_nothing_returns_empty_page(aggregator):
    add_prayer('memorare', 'Memorare', category='MARIAN')

    page = asyncio.run(aggregator.list('prayers', 'en', category='EUCHARISTIC'))

    assert page == {'items': [], 'nextCursor': None}


def test_fallback_category_filter(aggregator):
    page = asyncio.run(aggregator.list('prayers', 'en', category='MARIAN'))
    assert [r.slug for r in page['items']] == ['hail-mary', 'hail-holy-queen', 'memorare']


def test_unknown_cursor_returns_empty_page(aggregator):
    add_prayer('memorare', 'Memorare')
    page = asyncio.run(aggregator.list('prayers', 'en', cursor='no-such-id'))
    assert page == {'items': [], 'nextCursor': None}


def test_inactive_rows_fall_back(aggregator):
    add_prayer('retired', 'Retired Prayer', is_active=False)

    page = asyncio.run(aggregator.list('prayers', 'en'))

    assert page['items'][0].origin == ORIGIN_BUILTIN


def test_other_language_rows_do_not_count(aggregator):
    add_prayer('padre-nuestro', 'Padre Nuestro', language='es')

    english = asyncio.run(aggregator.list('prayers', 'en'))
    spanish = asyncio.run(aggregator.list('prayers', 'es'))

    assert english['items'][0].origin == ORIGIN_BUILTIN
    assert [r.slug for r in spanish['items']] == ['padre-nuestro']


def test_find_by_id_slug_and_fallback(aggregator):
    row_id = add_prayer('custom-novena', 'Custom Novena')

    by_id = asyncio.run(aggregator.find('prayers', 'en', row_id))
    by_slug = asyncio.run(aggregator.find('prayers', 'en', 'custom-novena'))
    builtin = asyncio.run(aggregator.find('prayers', 'en', 'memorare'))
    missing = asyncio.run(aggregator.find('prayers', 'en', 'no-such-prayer'))

    assert by_id.slug == 'custom-novena'
    assert by_slug.id == row_id
    assert builtin.origin == ORIGIN_BUILTIN
    assert missing is None


def test_find_skips_inactive_row(aggregator):
    add_prayer('memorare', 'Memorare (draft)', is_active=False)

    record = asyncio.run(aggregator.find('prayers', 'en', 'memorare'))

    assert record.origin == ORIGIN_BUILTIN
    assert record.title == 'Memorare'


def test_repository_search_matches_title_body_and_exact_tag(repository):
    spec = get_domain('prayers')
    add_prayer('hail-mary', 'Hail Mary', content='Full of grace', tags=['rosary'])
    add_prayer('memorare', 'Memorare', content='Remember, O most gracious Virgin Mary')
    add_prayer('glory-be', 'Glory Be', content='Glory be to the Father', tags=['doxology'])

    assert [r.slug for r in repository.search(spec, 'en', 'MARY', 40)] == ['hail-mary', 'memorare']
    assert [r.slug for r in repository.search(spec, 'en', 'rosary', 40)] == ['hail-mary']
    assert repository.search(spec, 'en', 'ros', 40) == []
    assert [r.slug for r in repository.search(spec, 'en', 'gra', 1)] == ['hail-mary']


def test_repository_search_escapes_like_wildcards(repository):
    spec = get_domain('prayers')
    add_prayer('one', 'One', content='Plain text')

    assert repository.search(spec, 'en', '%', 40) == []
    assert repository.search(spec, 'en', '_', 40) == []


def test_repository_search_newest_first_on_title_ties(repository):
    spec = get_domain('prayers')
    add_prayer('angelus-old', 'Angelus', updated_at=datetime(2020, 1, 1))
    add_prayer('angelus-new', 'Angelus', updated_at=datetime(2020, 1, 1) + timedelta(days=30))

    assert [r.slug for r in repository.search(spec, 'en', 'angelus', 40)] == ['angelus-new', 'angelus-old']


def test_repository_search_scoped_to_active_language(repository):
    spec = get_domain('prayers')
    add_prayer('angelus', 'Angelus', language='es')
    add_prayer('angelus-draft', 'Angelus', is_active=False)

    assert repository.search(spec, 'en', 'angelus', 40) == []
    assert len(repository.search(spec, 'es', 'angelus', 40)) == 1


def test_repository_saint_patronage_search(repository):
    spec = get_domain('saints')
    add_saint('st-joseph', 'Saint Joseph', patronages=['workers', 'fathers'])

    found = repository.search(spec, 'en', 'Workers', 40)

    assert [r.title for r in found] == ['Saint Joseph']
    assert found[0].extra['patronages'] == ['workers', 'fathers']


def test_repository_apparition_location_search(repository):
    spec = get_domain('apparitions')
    add_apparition('knock', 'Our Lady of Knock', location='Knock, Ireland')

    assert [r.slug for r in repository.search(spec, 'en', 'ireland', 40)] == ['knock']


def test_repository_keeps_stored_tag_case_and_scores_case_insensitively(repository):
    spec = get_domain('saints')
    add_saint('st-patrick', 'Saint Patrick', tags=['Ireland'], patronages=['Ireland'])

    found = repository.search(spec, 'en', 'Ireland', 40)

    assert found[0].tags == ['Ireland']
    assert found[0].extra['patronages'] == ['Ireland']
    now = found[0].updated_at.replace(tzinfo=timezone.utc)
    assert score(found[0], 'Ireland', spec.weights, now) == 30 + 40 + 10 + 18
