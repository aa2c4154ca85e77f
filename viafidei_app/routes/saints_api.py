"""Saints and Our Lady (Marian apparitions) library and local search."""
from flask import Blueprint, jsonify, request

from viafidei_app.content.domains import APPARITIONS, SAINTS, get_domain
from viafidei_app.content.language import language_from_request
from viafidei_app.content.search import (
    MODE_SUGGEST, SAINT_SEARCH_TYPES, SEARCH_MODES, TYPE_ALL
)
from viafidei_app.extensions import get_content_services, run_async
from viafidei_app.log import log
from viafidei_app.rate_limit import limit_light, limit_medium
from .validators import (
    MAX_ID_LENGTH, MAX_QUERY_LENGTH, error_response, sanitize_string, validate_choice
)

saints_bp = Blueprint('saints_api', __name__, url_prefix='/api/saints')

# URL segment -> domain
_COLLECTIONS = {
    'saints': SAINTS,
    'apparitions': APPARITIONS,
}


def _list(domain: str):
    spec = get_domain(domain)
    language = language_from_request()
    cursor = sanitize_string(request.args.get('cursor', ''), max_length=MAX_ID_LENGTH).strip() or None

    try:
        page = run_async(get_content_services().aggregator.list(
            domain, language, take=request.args.get('take'), cursor=cursor
        ))
    except Exception as e:
        log(f"❌ {spec.noun}s list error: {e}")
        return jsonify({'error': f'Failed to load {domain}'}), 500

    return jsonify({
        'language': language,
        'items': [spec.public(record) for record in page['items']],
        'nextCursor': page['nextCursor'],
    })


def _detail(domain: str, id_or_slug: str):
    spec = get_domain(domain)
    language = language_from_request()
    id_or_slug = sanitize_string(id_or_slug, max_length=MAX_ID_LENGTH)

    try:
        record = run_async(get_content_services().aggregator.find(domain, language, id_or_slug))
    except Exception as e:
        log(f"❌ {spec.noun} load error: {e}")
        return jsonify({'error': f'Failed to load {spec.kind}'}), 500

    if record is None:
        return jsonify({'error': f'{spec.noun} not found'}), 404
    return jsonify({spec.kind: spec.public(record)})


@saints_bp.route('/saints')
@limit_light
def list_saints():
    return _list(SAINTS)


@saints_bp.route('/apparitions')
@limit_light
def list_apparitions():
    return _list(APPARITIONS)


@saints_bp.route('/<any(saints, apparitions):collection>/<id_or_slug>')
@limit_light
def get_detail(collection, id_or_slug):
    """Get a single saint or apparition by id or slug."""
    return _detail(_COLLECTIONS[collection], id_or_slug)


@saints_bp.route('/search/local')
@limit_medium
def search_saints():
    """
    Local search for Saints and Our Lady.

    Query: q, mode=suggest|full, type=saint|apparition|all, language
    """
    language = language_from_request()
    query = sanitize_string(request.args.get('q', ''), max_length=MAX_QUERY_LENGTH).strip()
    mode, error = validate_choice(request.args.get('mode'), SEARCH_MODES, MODE_SUGGEST, 'mode')
    if error:
        return error_response('Invalid mode', detail=error)
    search_type, error = validate_choice(request.args.get('type'), SAINT_SEARCH_TYPES, TYPE_ALL, 'type')
    if error:
        return error_response('Invalid type', detail=error)

    if not query:
        return jsonify({
            'language': language,
            'query': '',
            'suggestions': [],
            'resultsSaints': [],
            'resultsApparitions': [],
        })

    try:
        found = run_async(get_content_services().search.search_saints(language, query, mode, search_type))
    except Exception as e:
        log(f"❌ Saints search error: {e}")
        return jsonify({'error': 'Failed to search saints and apparitions'}), 500

    saint_spec = get_domain(SAINTS)
    apparition_spec = get_domain(APPARITIONS)
    return jsonify({
        'language': language,
        'query': query,
        'suggestions': found['suggestions'],
        'resultsSaints': [saint_spec.public(r) for r in found['resultsSaints']],
        'resultsApparitions': [apparition_spec.public(r) for r in found['resultsApparitions']],
    })
