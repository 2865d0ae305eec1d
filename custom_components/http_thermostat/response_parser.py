"""Tolerant parsing of thermostat responses.

The device does not commit to one response shape, so the temperature is
extracted by a prioritized list of rules:

1. ``{"data": [{"name": "temp", "value": ...}, ...]}``
2. ``{"temperature": ...}``
3. otherwise the sentinel ``0.0``

A reading that does not parse as a finite number also yields the sentinel.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import math
import re
from typing import Any

from .infrastructure.errors import DeviceError

_LOGGER = logging.getLogger(__name__)

UNKNOWN_TEMPERATURE = 0.0
TEMPERATURE_ENTRY_NAME = "temp"

_NO_MATCH = object()
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _from_named_entries(body: Any) -> Any:
    if not isinstance(body, dict) or not isinstance(body.get("data"), list):
        return _NO_MATCH
    for item in body["data"]:
        if isinstance(item, dict) and item.get("name") == TEMPERATURE_ENTRY_NAME:
            return item.get("value")
    return _NO_MATCH


def _from_flat_field(body: Any) -> Any:
    if isinstance(body, dict) and "temperature" in body:
        return body["temperature"]
    return _NO_MATCH


TEMPERATURE_RULES: list[Callable[[Any], Any]] = [_from_named_entries, _from_flat_field]


def to_number(value: Any) -> float | None:
    """Read a number the lenient way, from a number or a numeric prefix.

    Example:
        >>> to_number("21.5")
        21.5
        >>> to_number("21.5C")
        21.5
        >>> to_number("warm") is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match is None:
            return None
        number = float(match.group(0))
    else:
        return None
    return number if math.isfinite(number) else None


def parse_temperature(body: Any) -> float:
    """Extract the current temperature from a decoded response body.

    Args:
        body: JSON-decoded body or raw text

    Returns:
        The temperature in °C, or ``UNKNOWN_TEMPERATURE`` when no rule
        matches or the value is not a number.
    """
    for rule in TEMPERATURE_RULES:
        raw = rule(body)
        if raw is _NO_MATCH:
            continue
        number = to_number(raw)
        if number is None:
            _LOGGER.debug("Temperature value %r is not a number", raw)
            return UNKNOWN_TEMPERATURE
        return number

    _LOGGER.debug("No temperature found in response: %s", body)
    return UNKNOWN_TEMPERATURE


def raise_for_device_error(body: Any) -> None:
    """Raise DeviceError if the body carries a non-empty ``error`` field."""
    if isinstance(body, dict):
        error = body.get("error")
        if error:
            raise DeviceError(str(error))
