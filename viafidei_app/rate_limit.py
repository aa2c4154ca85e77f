"""
Rate limiting configuration for the Via Fidei API.

Uses Flask-Limiter to protect API endpoints from abuse.

Rate Limit Tiers:
- Medium: /api/*/search/local (database + fallback scoring)
- Light: listings, detail pages, health
"""

import os
from flask import request, jsonify
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Initialize limiter (will be attached to app in create_app)
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["2000 per day", "300 per hour"],
    storage_uri=os.environ.get("RATELIMIT_STORAGE_URI", "memory://"),
    strategy="fixed-window",
    headers_enabled=True,
)


# ==============================================================================
# RATE LIMIT TIERS
# ==============================================================================

# Search - autocomplete fires on every keystroke
MEDIUM_LIMIT = "120 per minute"

# Light operations - fast reads
LIGHT_LIMIT = "240 per minute"


def limit_medium(f):
    """Apply medium rate limit to search endpoints."""
    return limiter.limit(MEDIUM_LIMIT)(f)


def limit_light(f):
    """Apply light rate limit to cheap operations."""
    return limiter.limit(LIGHT_LIMIT)(f)


def rate_limit_exceeded_handler(e):
    """JSON body for 429 responses."""
    retry_after = getattr(e, 'retry_after', None) or 60
    response = jsonify({
        "error": "Rate limit exceeded",
        "message": str(e.description),
        "path": request.path,
        "retry_after": retry_after
    })
    response.status_code = 429
    response.headers['Retry-After'] = str(retry_after)
    return response


def init_rate_limiting(app):
    """
    Initialize rate limiting for a Flask app.

    Call this in create_app() after app configuration.
    """
    if app.config.get("DISABLE_RATE_LIMITING"):
        app.config["RATELIMIT_ENABLED"] = False

    limiter.init_app(app)
    app.errorhandler(429)(rate_limit_exceeded_handler)

    return limiter
