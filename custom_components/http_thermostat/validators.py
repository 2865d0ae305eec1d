"""Input validation for the HTTP thermostat integration.

These validators are used by the config flow to reject endpoint settings
that could never produce a working request.
"""

from __future__ import annotations

import json
import urllib.parse

from .request_builder import VALUE_PLACEHOLDER


def validate_url(url: str) -> tuple[bool, str | None]:
    """Validate an endpoint URL.

    Args:
        url: URL to validate.

    Returns:
        Tuple of (is_valid, error_message).
        error_message is None if valid, otherwise contains description of the error.

    Example:
        >>> validate_url("http://192.168.1.50/api/temp")
        (True, None)
        >>> validate_url("192.168.1.50/api/temp")
        (False, 'URL must start with http:// or https://')
    """
    url = url.strip()

    if not url:
        return False, "URL cannot be empty"

    if any(char.isspace() for char in url):
        return False, "URL must not contain whitespace"

    parts = urllib.parse.urlsplit(url)
    if parts.scheme not in ("http", "https"):
        return False, "URL must start with http:// or https://"

    if not parts.hostname:
        return False, "URL must include a host"

    try:
        parts.port
    except ValueError:
        return False, "Invalid port in URL"

    return True, None


def validate_body_template(template: str) -> tuple[bool, str | None]:
    """Validate a JSON body template for the set-temperature call.

    The template must contain the value placeholder and be valid JSON once
    a number is substituted for it.

    Example:
        >>> validate_body_template('{"target": {{value}}}')
        (True, None)
    """
    if VALUE_PLACEHOLDER not in template:
        return False, f"Template must contain {VALUE_PLACEHOLDER}"

    try:
        json.loads(template.replace(VALUE_PLACEHOLDER, "0"))
    except ValueError:
        return False, "Template is not valid JSON"

    return True, None
