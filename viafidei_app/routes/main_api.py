from flask import Blueprint, current_app, jsonify

from viafidei_app.content.language import SUPPORTED_LANGUAGES, language_from_request
from viafidei_app.database import check_database_connection
from viafidei_app.extensions import get_content_services
from viafidei_app.rate_limit import limit_light

main_bp = Blueprint('main_api', __name__, url_prefix='/api')


@main_bp.route('/health')
@limit_light
def health():
    """Service health, degraded when the database is unreachable."""
    db_ok = check_database_connection()
    payload = {
        'status': 'ok' if db_ok else 'degraded',
        'db': 'ok' if db_ok else 'unavailable',
        'sourceCache': get_content_services().cache.stats(),
    }
    if db_ok or not current_app.config.get('REQUIRE_DATABASE_HEALTH'):
        return jsonify(payload)
    return jsonify(payload), 503


@main_bp.route('/languages')
@limit_light
def languages():
    """Supported languages and the one this request resolves to."""
    return jsonify({
        'languages': list(current_app.config.get('SUPPORTED_LANGUAGES', SUPPORTED_LANGUAGES)),
        'default': current_app.config.get('DEFAULT_LANGUAGE') or 'en',
        'current': language_from_request(),
    })
