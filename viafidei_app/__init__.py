# Load environment variables FIRST before any other imports
from dotenv import load_dotenv
load_dotenv()

import os
import re
import time
import secrets
import uuid
from typing import Any, Mapping, Optional
from flask import Flask, jsonify, request, g

_FEED_SETTING = re.compile(r'^(PRAYERS|SAINTS|APPARITIONS)_EXTERNAL_URL(_[A-Z]{2,3})?$')


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(config: Optional[Mapping[str, Any]] = None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # =============================================================================
    # CONFIGURATION
    # =============================================================================
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))

    def get_or_create_secret_key() -> str:
        env_key = os.environ.get('SECRET_KEY')
        if env_key:
            return env_key
        key_file = os.path.join(BASE_DIR, '..', '.secret_key')
        if os.path.exists(key_file):
            with open(key_file, 'r') as f:
                return f.read().strip()
        new_key = secrets.token_hex(32)
        with open(key_file, 'w') as f:
            f.write(new_key)
        return new_key

    from .content.language import SUPPORTED_LANGUAGES

    supported = tuple(
        code.strip().lower()
        for code in os.environ.get('SUPPORTED_LANGUAGES', ','.join(SUPPORTED_LANGUAGES)).split(',')
        if code.strip()
    )

    app.config.from_mapping(
        DATABASE_URL=os.environ.get('DATABASE_URL'),
        DEFAULT_LANGUAGE=os.environ.get('DEFAULT_LANGUAGE'),
        SUPPORTED_LANGUAGES=supported,
        EXTERNAL_FEED_TIMEOUT=os.environ.get('EXTERNAL_FEED_TIMEOUT'),
        DISABLE_RATE_LIMITING=_env_flag('DISABLE_RATE_LIMITING'),
        REQUIRE_DATABASE_HEALTH=_env_flag('REQUIRE_DATABASE_HEALTH'),
        AUTO_CREATE_TABLES=_env_flag('AUTO_CREATE_TABLES', 'true'),
        HOST=os.environ.get('FLASK_HOST', '127.0.0.1'),
        PORT=int(os.environ.get('FLASK_PORT', '5000')),
        DEBUG=_env_flag('FLASK_DEBUG'),
    )
    # External feed URLs: {DOMAIN}_EXTERNAL_URL and {DOMAIN}_EXTERNAL_URL_{LANG}
    app.config.from_mapping({
        key: value for key, value in os.environ.items() if _FEED_SETTING.match(key)
    })
    if config:
        app.config.update(config)
    app.json.sort_keys = False
    if not app.config.get('SECRET_KEY'):
        app.config['SECRET_KEY'] = get_or_create_secret_key()

    # =============================================================================
    # DATABASE, LOGGING, RATE LIMITING, LOGIN
    # =============================================================================
    from .log import log, debug_log_event
    from .database import init_engine, init_database
    from .rate_limit import init_rate_limiting
    from .auth import init_login_manager

    init_engine(app.config.get('DATABASE_URL'))
    if app.config.get('AUTO_CREATE_TABLES'):
        init_database()

    init_rate_limiting(app)
    init_login_manager(app)

    @app.before_request
    def assign_request_id():
        g.request_id = uuid.uuid4().hex[:12]
        g.request_start = time.time()

    @app.after_request
    def debug_request_log(response):
        duration_ms = None
        start_time = getattr(g, 'request_start', None)
        if start_time:
            duration_ms = int((time.time() - start_time) * 1000)
        debug_log_event({
            'event': 'request',
            'request_id': getattr(g, 'request_id', None),
            'method': request.method,
            'path': request.path,
            'query': request.query_string.decode('utf-8', errors='ignore'),
            'status': response.status_code,
            'duration_ms': duration_ms,
            'remote_addr': request.remote_addr,
        })
        return response

    @app.teardown_request
    def debug_exception_log(error=None):
        if not error:
            return
        debug_log_event({
            'event': 'exception',
            'request_id': getattr(g, 'request_id', None),
            'path': request.path if request else None,
            'error_type': error.__class__.__name__,
            'error': str(error)
        })

    # =============================================================================
    # CONTENT SERVICES
    # =============================================================================
    from .extensions import init_content_services
    init_content_services(app)

    # =============================================================================
    # BLUEPRINTS & ROUTES
    # =============================================================================
    from .routes.main_api import main_bp
    from .routes.prayers_api import prayers_bp
    from .routes.saints_api import saints_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(prayers_bp)
    app.register_blueprint(saints_bp)

    @app.errorhandler(404)
    def not_found(error):
        if request.path.startswith('/api'):
            return jsonify({'error': 'Not found'}), 404
        return error

    @app.errorhandler(500)
    def internal_error(error):
        log(f"❌ Unhandled error: {error}")
        return jsonify({'error': 'Internal server error'}), 500

    log(f"Via Fidei ready: languages={','.join(app.config['SUPPORTED_LANGUAGES'])} "
        f"default={app.config.get('DEFAULT_LANGUAGE') or 'en'}")
    return app

# App instance should be created by the caller (run.py or WSGI entrypoint)
