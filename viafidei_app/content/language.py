"""
Active-language resolution.

Precedence, first supported value wins:
  1. authenticated user's language override
  2. ?language= or ?lang= query parameter
  3. DEFAULT_LANGUAGE setting
  4. Accept-Language header (full tag, then primary subtag)
  5. "en"

Unsupported values are skipped silently.
"""

from typing import Iterable, Mapping, Optional

from werkzeug.datastructures import LanguageAccept
from werkzeug.http import parse_accept_header

SUPPORTED_LANGUAGES = ('en', 'es', 'pt', 'fr', 'it', 'de', 'pl', 'ru', 'uk')
FALLBACK_LANGUAGE = 'en'


def _pick(value, supported) -> Optional[str]:
    if not isinstance(value, str):
        return None
    lowered = value.strip().lower()
    return lowered if lowered in supported else None


def from_accept_language(header: Optional[str], supported: Iterable[str]) -> Optional[str]:
    """First supported language in the header, by quality then order."""
    if not header:
        return None
    supported = tuple(supported)
    accept = parse_accept_header(header, LanguageAccept)
    for tag, _quality in accept:
        tag = tag.lower().replace('_', '-')
        if tag in supported:
            return tag
        primary = tag.split('-')[0]
        if primary in supported:
            return primary
    return None


def resolve_language(user=None,
                     args: Optional[Mapping[str, str]] = None,
                     default_language: Optional[str] = None,
                     accept_language: Optional[str] = None,
                     supported: Iterable[str] = SUPPORTED_LANGUAGES) -> str:
    supported = tuple(supported)
    args = args or {}

    if user is not None and getattr(user, 'is_authenticated', False):
        picked = _pick(getattr(user, 'language_override', None), supported)
        if picked:
            return picked

    for key in ('language', 'lang'):
        picked = _pick(args.get(key), supported)
        if picked:
            return picked

    picked = _pick(default_language, supported)
    if picked:
        return picked

    return from_accept_language(accept_language, supported) or FALLBACK_LANGUAGE


def language_from_request() -> str:
    """Resolve the language for the current Flask request."""
    from flask import current_app, g, request

    return resolve_language(
        user=getattr(g, 'current_user', None),
        args=request.args,
        default_language=current_app.config.get('DEFAULT_LANGUAGE'),
        accept_language=request.headers.get('Accept-Language'),
        supported=current_app.config.get('SUPPORTED_LANGUAGES', SUPPORTED_LANGUAGES),
    )
