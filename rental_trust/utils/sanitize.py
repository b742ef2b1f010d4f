"""
Input sanitization helpers for XSS prevention.
Used on free-text profile and survey fields before they are stored.
"""

import re
from typing import Any, Dict


HTML_ESCAPES = {
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#x27;',
    '/': '&#x2F;',
}

_ESCAPE_PATTERN = re.compile(r'[&<>"\'/]')
_TAG_PATTERN = re.compile(r'<[^>]*>')
_SCRIPT_PATTERN = re.compile(r'<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>', re.IGNORECASE)
_EVENT_HANDLER_PATTERN = re.compile(r'\s*on\w+\s*=\s*["\'][^"\']*["\']', re.IGNORECASE)
_JAVASCRIPT_PATTERN = re.compile(r'javascript:', re.IGNORECASE)
# data: URIs are stripped unless they carry an image
_DATA_URI_PATTERN = re.compile(r'data:(?!image/)', re.IGNORECASE)
_SPACES_PATTERN = re.compile(r'[ \t]+')
_NEWLINES_PATTERN = re.compile(r'\n{3,}')


def escape_html(value: str) -> str:
    """Escape HTML special characters."""
    return _ESCAPE_PATTERN.sub(lambda match: HTML_ESCAPES[match.group(0)], value)


def strip_html(value: str) -> str:
    """Remove HTML tags, keeping their text content."""
    return _TAG_PATTERN.sub('', value)


def sanitize_string(value: Any) -> str:
    """
    Remove dangerous patterns from a string.

    Strips script blocks, inline on* event handlers, the javascript: protocol,
    non-image data: URIs and any remaining tags, then trims whitespace.
    Non-string or empty input yields an empty string.
    """
    if not value or not isinstance(value, str):
        return ''

    value = _SCRIPT_PATTERN.sub('', value)
    value = _EVENT_HANDLER_PATTERN.sub('', value)
    value = _JAVASCRIPT_PATTERN.sub('', value)
    value = _DATA_URI_PATTERN.sub('', value)
    value = _TAG_PATTERN.sub('', value)
    return value.strip()


def sanitize_user_input(value: Any) -> str:
    """
    Clean user-entered text.

    Runs sanitize_string, collapses runs of spaces and tabs and keeps at most
    two consecutive newlines.
    """
    if not value or not isinstance(value, str):
        return ''

    value = sanitize_string(value)
    value = _SPACES_PATTERN.sub(' ', value)
    value = _NEWLINES_PATTERN.sub('\n\n', value)
    return value.strip()


def sanitize_object(obj: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sanitize every string value of a mapping, recursing into nested mappings.

    Lists and non-string scalars are returned unchanged. The input is not mutated.
    """
    result = dict(obj)

    for key, value in result.items():
        if isinstance(value, str):
            result[key] = sanitize_user_input(value)
        elif isinstance(value, dict):
            result[key] = sanitize_object(value)

    return result
