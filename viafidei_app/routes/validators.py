"""Lightweight request validation helpers."""

from typing import Any, Iterable, Optional, Tuple

from flask import jsonify

MAX_QUERY_LENGTH = 200
MAX_ID_LENGTH = 200


def error_response(message: str, detail: Optional[str] = None,
                   code: str = 'invalid_request', status: int = 400):
    payload = {'error': message, 'code': code}
    if detail:
        payload['detail'] = detail
    return jsonify(payload), status


def sanitize_string(value: Any, max_length: int = 500) -> str:
    """
    Remove control characters and limit length.

    Non-string input becomes an empty string.
    """
    if not isinstance(value, str):
        return ""
    result = ''.join(c for c in value if c >= ' ')
    return result[:max_length]


def validate_choice(value: Optional[str], choices: Iterable[str], default: str,
                    name: str) -> Tuple[str, Optional[str]]:
    """
    Validate an enumerated query parameter.

    Returns:
        Tuple of (value_or_default, error_or_none)
    """
    choices = tuple(choices)
    if value is None or value == '':
        return default, None
    value = value.strip().lower()
    if value not in choices:
        return default, f"{name} must be one of: {', '.join(choices)}"
    return value, None
