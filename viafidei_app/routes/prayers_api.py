"""Prayers library and local search."""
from flask import Blueprint, jsonify, request

from viafidei_app.content.domains import PRAYERS, get_domain
from viafidei_app.content.language import language_from_request
from viafidei_app.content.search import MODE_SUGGEST, SEARCH_MODES
from viafidei_app.extensions import get_content_services, run_async
from viafidei_app.log import log
from viafidei_app.rate_limit import limit_light, limit_medium
from .validators import (
    MAX_ID_LENGTH, MAX_QUERY_LENGTH, error_response, sanitize_string, validate_choice
)

prayers_bp = Blueprint('prayers_api', __name__, url_prefix='/api/prayers')


@prayers_bp.route('')
@limit_light
def list_prayers():
    """List prayers, database first, built-in/external feed when the database is empty."""
    spec = get_domain(PRAYERS)
    language = language_from_request()
    category = sanitize_string(request.args.get('category', ''), max_length=50).strip() or None
    cursor = sanitize_string(request.args.get('cursor', ''), max_length=MAX_ID_LENGTH).strip() or None

    try:
        page = run_async(get_content_services().aggregator.list(
            PRAYERS, language, take=request.args.get('take'), cursor=cursor, category=category
        ))
    except Exception as e:
        log(f"❌ Prayers list error: {e}")
        return jsonify({'error': 'Failed to load prayers'}), 500

    return jsonify({
        'language': language,
        'items': [spec.public(record) for record in page['items']],
        'nextCursor': page['nextCursor'],
    })


@prayers_bp.route('/<id_or_slug>')
@limit_light
def get_prayer(id_or_slug):
    """Get a single prayer by id or slug."""
    spec = get_domain(PRAYERS)
    language = language_from_request()
    id_or_slug = sanitize_string(id_or_slug, max_length=MAX_ID_LENGTH)

    try:
        record = run_async(get_content_services().aggregator.find(PRAYERS, language, id_or_slug))
    except Exception as e:
        log(f"❌ Prayer load error: {e}")
        return jsonify({'error': 'Failed to load prayer'}), 500

    if record is None:
        return jsonify({'error': 'Prayer not found'}), 404
    return jsonify({'prayer': spec.public(record)})


@prayers_bp.route('/search/local')
@limit_medium
def search_prayers():
    """
    Local search inside Prayers.

    Query: q, mode=suggest|full, language
    """
    spec = get_domain(PRAYERS)
    language = language_from_request()
    query = sanitize_string(request.args.get('q', ''), max_length=MAX_QUERY_LENGTH).strip()
    mode, error = validate_choice(request.args.get('mode'), SEARCH_MODES, MODE_SUGGEST, 'mode')
    if error:
        return error_response('Invalid mode', detail=error)

    if not query:
        return jsonify({'language': language, 'query': '', 'suggestions': [], 'results': []})

    try:
        found = run_async(get_content_services().search.search(PRAYERS, language, query, mode))
    except Exception as e:
        log(f"❌ Prayers search error: {e}")
        return jsonify({'error': 'Failed to search prayers'}), 500

    return jsonify({
        'language': language,
        'query': query,
        'suggestions': found['suggestions'],
        'results': [spec.public(record) for record in found['results']],
    })
