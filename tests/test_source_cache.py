import asyncio

from conftest import CountingFetcher, make_record

from viafidei_app.content.library import CanonicalLibrary
from viafidei_app.content.records import ORIGIN_BUILTIN, ORIGIN_EXTERNAL
from viafidei_app.content.source_cache import SourceCache


def test_builtin_library_used_when_feed_is_empty():
    fetcher = CountingFetcher()
    cache = SourceCache(fetcher, CanonicalLibrary())

    records = asyncio.run(cache.get_or_load('prayers', 'en'))

    assert records[0].slug == 'our-father'
    assert all(r.origin == ORIGIN_BUILTIN for r in records)
    assert records[0].id == 'builtin-prayers-en-0'


def test_external_feed_replaces_library():
    feed = [make_record(title='Padre Nuestro', slug='padre-nuestro', language='es',
                        origin=ORIGIN_EXTERNAL)]
    cache = SourceCache(CountingFetcher({('prayers', 'es'): feed}), CanonicalLibrary())

    records = asyncio.run(cache.get_or_load('prayers', 'es'))

    assert [r.slug for r in records] == ['padre-nuestro']


def test_external_feed_not_merged_with_library_in_english():
    feed = [make_record(title='Custom Prayer', slug='custom', origin=ORIGIN_EXTERNAL)]
    cache = SourceCache(CountingFetcher({('prayers', 'en'): feed}), CanonicalLibrary())

    records = asyncio.run(cache.get_or_load('prayers', 'en'))

    assert [r.slug for r in records] == ['custom']


def test_non_english_without_feed_is_empty():
    cache = SourceCache(CountingFetcher(), CanonicalLibrary())
    assert asyncio.run(cache.get_or_load('saints', 'es')) == []


def test_entries_are_loaded_once_per_key():
    fetcher = CountingFetcher()
    cache = SourceCache(fetcher, CanonicalLibrary())

    async def scenario():
        first = await cache.get_or_load('saints', 'en')
        second = await cache.get_or_load('saints', 'en')
        empty = await cache.get_or_load('saints', 'pl')
        again = await cache.get_or_load('saints', 'pl')
        return first, second, empty, again

    first, second, empty, again = asyncio.run(scenario())

    assert first is second
    assert empty == again == []
    assert fetcher.calls == [('saints', 'en'), ('saints', 'pl')]
    assert cache.stats() == {'entries': {'saints:en': 4, 'saints:pl': 0}, 'loads': 2}


def test_domains_are_cached_independently():
    fetcher = CountingFetcher()
    cache = SourceCache(fetcher, CanonicalLibrary())

    async def scenario():
        await cache.get_or_load('saints', 'en')
        return await cache.get_or_load('apparitions', 'en')

    apparitions = asyncio.run(scenario())

    assert {r.domain for r in apparitions} == {'apparitions'}
    assert len(fetcher.calls) == 2
