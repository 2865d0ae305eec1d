"""Tests for validators module."""

from custom_components.http_thermostat.validators import (
    validate_body_template,
    validate_url,
)


class TestValidateUrl:
    """Tests for validate_url function."""

    def test_valid_urls(self):
        for url in (
            "http://192.168.1.50/api/temp",
            "https://heater.local:8443/api?zone=1",
            "  http://heater.local  ",
        ):
            is_valid, error = validate_url(url)
            assert is_valid is True
            assert error is None

    def test_empty_url(self):
        is_valid, error = validate_url("   ")
        assert is_valid is False
        assert "empty" in error.lower()

    def test_missing_scheme(self):
        is_valid, error = validate_url("192.168.1.50/api/temp")
        assert is_valid is False
        assert "http" in error

    def test_unsupported_scheme(self):
        is_valid, error = validate_url("ftp://heater.local/temp")
        assert is_valid is False

    def test_whitespace_inside(self):
        is_valid, error = validate_url("http://heater.local/set temp")
        assert is_valid is False
        assert "whitespace" in error

    def test_missing_host(self):
        is_valid, error = validate_url("http:///api")
        assert is_valid is False
        assert "host" in error

    def test_invalid_port(self):
        is_valid, error = validate_url("http://heater.local:99999/")
        assert is_valid is False
        assert "port" in error


class TestValidateBodyTemplate:
    def test_valid_template(self):
        assert validate_body_template('{"target": {{value}}}') == (True, None)

    def test_missing_placeholder(self):
        is_valid, error = validate_body_template('{"target": 21}')
        assert is_valid is False
        assert "{{value}}" in error

    def test_not_json(self):
        is_valid, error = validate_body_template("target={{value}}")
        assert is_valid is False
        assert "JSON" in error
