"""Request building for the HTTP thermostat endpoints.

Turns an EndpointConfig and a logical value into a RequestDescriptor.
The body encoding is chosen from a single strategy table keyed by
ContentType and shared by every outbound operation.
"""

from __future__ import annotations

from collections.abc import Callable
import json
import logging
from typing import Any
import urllib.parse

from .constants import THERMOSTAT_DEFAULTS
from .models import ContentType, EndpointConfig, RequestDescriptor

_LOGGER = logging.getLogger(__name__)

VALUE_PLACEHOLDER = "{{value}}"


def format_value(value: float | int) -> float | int:
    """Return integral floats as int so 21.0 is sent as 21."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _encode_json(key: str, value: Any) -> str:
    return json.dumps({key: value}, separators=(",", ":"))


def _encode_form(key: str, value: Any) -> str:
    return urllib.parse.urlencode({key: value})


def _encode_plain(key: str, value: Any) -> str:
    return str(value)


BODY_ENCODERS: dict[ContentType, Callable[[str, Any], str]] = {
    ContentType.JSON: _encode_json,
    ContentType.FORM: _encode_form,
    ContentType.PLAIN: _encode_plain,
}


def _render_template(template: str, value: Any) -> str:
    """Substitute the value into a JSON body template.

    A template that is valid JSON after substitution is re-serialized
    compactly; anything else is sent as substituted.
    """
    rendered = template.replace(VALUE_PLACEHOLDER, str(value))
    try:
        return json.dumps(json.loads(rendered), separators=(",", ":"))
    except ValueError:
        _LOGGER.debug("Body template is not valid JSON after substitution: %s", rendered)
        return rendered


def _append_query(url: str, key: str, value: Any) -> str:
    parts = urllib.parse.urlsplit(url)
    query = urllib.parse.urlencode({key: value})
    if parts.query:
        query = f"{parts.query}&{query}"
    return urllib.parse.urlunsplit(parts._replace(query=query))


def encode_body(content_type: ContentType, key: str, value: Any) -> str:
    """Encode a key/value pair with the strategy for ``content_type``."""
    return BODY_ENCODERS[content_type](key, value)


def build_request(endpoint: EndpointConfig, value: float | int | None = None) -> RequestDescriptor:
    """Build the concrete request for ``endpoint`` carrying ``value``.

    GET requests never carry a body; the value, if any, is appended as a
    query parameter instead.

    Args:
        endpoint: Endpoint descriptor
        value: Logical value to send, or None

    Returns:
        RequestDescriptor with url, method, headers and encoded body.

    Example:
        >>> endpoint = EndpointConfig(url="http://heater.local/t", contentType="form-urlencoded")
        >>> build_request(endpoint, 21).body
        'value=21'
    """
    headers = {"Content-Type": endpoint.content_type.value}
    if endpoint.auth_token:
        headers["Authorization"] = f"Bearer {endpoint.auth_token}"

    key = endpoint.body_key or THERMOSTAT_DEFAULTS.BODY_KEY
    url = endpoint.url
    body = None

    if value is not None:
        value = format_value(value)
        if endpoint.method == "GET":
            url = _append_query(url, key, value)
        elif endpoint.content_type is ContentType.JSON and endpoint.body_template:
            body = _render_template(endpoint.body_template, value)
        else:
            body = encode_body(endpoint.content_type, key, value)

    return RequestDescriptor(url=url, method=endpoint.method, headers=headers, body=body)
