"""Endpoint configuration built from a config entry."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NamedTuple

from .constants import (
    CONF_API_CONTENT_TYPE,
    CONF_API_GET_TEMPERATURE,
    CONF_API_GET_TOKEN,
    CONF_API_SET_OFF,
    CONF_API_SET_OFF_METHOD,
    CONF_API_SET_OFF_TOKEN,
    CONF_API_SET_TEMPERATURE,
    CONF_API_SET_TEMPERATURE_BODY_KEY,
    CONF_API_SET_TEMPERATURE_BODY_TEMPLATE,
    CONF_API_SET_TEMPERATURE_CONTENT_TYPE,
    CONF_API_SET_TEMPERATURE_METHOD,
    CONF_API_SET_TEMPERATURE_TOKEN,
    THERMOSTAT_DEFAULTS,
)
from .models import ContentType, EndpointConfig


class Endpoints(NamedTuple):
    """The three endpoint descriptors of one accessory."""

    get_temperature: EndpointConfig | None
    set_temperature: EndpointConfig | None
    set_off: EndpointConfig | None


def build_endpoints(data: Mapping[str, Any]) -> Endpoints:
    """Build the endpoint descriptors from config entry data.

    Endpoints whose URL is missing or blank are returned as None. The
    set endpoints fall back to the shared ``api_content_type`` when they
    have no content type of their own.
    """
    shared_content_type = ContentType(data.get(CONF_API_CONTENT_TYPE) or THERMOSTAT_DEFAULTS.CONTENT_TYPE)

    get_temperature = None
    if (data.get(CONF_API_GET_TEMPERATURE) or "").strip():
        get_temperature = EndpointConfig(
            url=data[CONF_API_GET_TEMPERATURE].strip(),
            method="GET",
            auth_token=data.get(CONF_API_GET_TOKEN),
            content_type=ContentType.JSON,
        )

    set_temperature = None
    if (data.get(CONF_API_SET_TEMPERATURE) or "").strip():
        set_temperature = EndpointConfig(
            url=data[CONF_API_SET_TEMPERATURE].strip(),
            method=data.get(CONF_API_SET_TEMPERATURE_METHOD),
            auth_token=data.get(CONF_API_SET_TEMPERATURE_TOKEN),
            content_type=data.get(CONF_API_SET_TEMPERATURE_CONTENT_TYPE) or shared_content_type,
            body_key=data.get(CONF_API_SET_TEMPERATURE_BODY_KEY),
            body_template=data.get(CONF_API_SET_TEMPERATURE_BODY_TEMPLATE),
        )

    set_off = None
    if (data.get(CONF_API_SET_OFF) or "").strip():
        set_off = EndpointConfig(
            url=data[CONF_API_SET_OFF].strip(),
            method=data.get(CONF_API_SET_OFF_METHOD),
            auth_token=data.get(CONF_API_SET_OFF_TOKEN),
            content_type=shared_content_type,
        )

    return Endpoints(get_temperature, set_temperature, set_off)
