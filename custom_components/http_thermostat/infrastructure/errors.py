"""Custom exceptions for the HTTP thermostat integration."""


class HttpThermostatError(Exception):
    """Base exception for the HTTP thermostat."""


class ConfigError(HttpThermostatError):
    """Raised when an endpoint required by an operation is not configured."""


class NetworkError(HttpThermostatError):
    """Raised when the connection to the device fails or is reset."""


class RequestTimeoutError(NetworkError):
    """Raised when the device does not answer within the request timeout."""


class ParseError(HttpThermostatError):
    """Raised when a response must be JSON and is not."""


class DeviceError(HttpThermostatError):
    """Raised when the device answers with an error field."""


class ValidationError(HttpThermostatError):
    """Raised when a requested value is outside the supported set."""
