"""Tests for building endpoints from config entry data."""

from custom_components.http_thermostat.config import build_endpoints
from custom_components.http_thermostat.models import ContentType


def test_all_endpoints(entry_data):
    endpoints = build_endpoints(entry_data)

    assert endpoints.get_temperature.url == "http://192.168.1.50/api/sensors"
    assert endpoints.get_temperature.method == "GET"
    assert endpoints.get_temperature.auth_token == "get-token"
    assert endpoints.set_temperature.method == "POST"
    assert endpoints.set_temperature.content_type is ContentType.JSON
    assert endpoints.set_off.url == "http://192.168.1.50/api/off"


def test_missing_get_endpoint(entry_data):
    entry_data["api_get_temperature"] = "  "

    endpoints = build_endpoints(entry_data)

    assert endpoints.get_temperature is None
    assert endpoints.set_temperature is not None


def test_shared_content_type_fallback(entry_data):
    entry_data["api_content_type"] = "application/x-www-form-urlencoded"

    endpoints = build_endpoints(entry_data)

    assert endpoints.set_temperature.content_type is ContentType.FORM
    assert endpoints.set_off.content_type is ContentType.FORM


def test_set_temperature_overrides(entry_data):
    entry_data.update(
        {
            "api_set_temperature_method": "put",
            "api_set_temperature_token": "set-token",
            "api_set_temperature_content_type": "text/plain",
            "api_set_temperature_body_key": "target",
        }
    )

    endpoint = build_endpoints(entry_data).set_temperature

    assert endpoint.method == "PUT"
    assert endpoint.auth_token == "set-token"
    assert endpoint.content_type is ContentType.PLAIN
    assert endpoint.body_key == "target"
    assert build_endpoints(entry_data).set_off.content_type is ContentType.JSON


def test_off_method_default():
    endpoints = build_endpoints({"api_set_off": "http://heater.local/off"})

    assert endpoints.set_off.method == "POST"
    assert endpoints.get_temperature is None
    assert endpoints.set_temperature is None
