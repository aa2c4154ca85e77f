from types import SimpleNamespace

from viafidei_app.content.language import from_accept_language, resolve_language


def _user(override, authenticated=True):
    return SimpleNamespace(is_authenticated=authenticated, language_override=override)


def test_user_override_wins():
    lang = resolve_language(user=_user('pl'), args={'language': 'es'},
                            default_language='fr', accept_language='de')
    assert lang == 'pl'


def test_anonymous_user_override_ignored():
    lang = resolve_language(user=_user('pl', authenticated=False), args={'language': 'es'})
    assert lang == 'es'


def test_unsupported_override_falls_through_to_query():
    assert resolve_language(user=_user('xx'), args={'lang': 'PT'}) == 'pt'


def test_language_param_before_lang_param():
    assert resolve_language(args={'language': 'it', 'lang': 'de'}) == 'it'


def test_unsupported_query_uses_default_setting():
    assert resolve_language(args={'language': 'klingon'}, default_language='uk') == 'uk'


def test_accept_language_full_tag_then_primary_subtag():
    assert resolve_language(accept_language='fr-CA,fr;q=0.8') == 'fr'
    assert resolve_language(accept_language='pt-BR') == 'pt'


def test_accept_language_skips_unsupported_entries():
    assert from_accept_language('ja-JP, zh;q=0.9, es;q=0.5', ('en', 'es')) == 'es'


def test_literal_fallback_is_english():
    assert resolve_language(args={'language': 'zz'}, default_language='zz',
                            accept_language='ja') == 'en'
    assert resolve_language() == 'en'


def test_custom_supported_set():
    assert resolve_language(args={'language': 'ru'}, supported=('en', 'es')) == 'en'
