"""Infrastructure layer for the HTTP thermostat integration.

This package contains the error taxonomy shared by the transport,
the response parser and the synchronization engine.
"""

from .errors import (
    ConfigError,
    DeviceError,
    HttpThermostatError,
    NetworkError,
    ParseError,
    RequestTimeoutError,
    ValidationError,
)

__all__ = [
    "HttpThermostatError",
    "ConfigError",
    "NetworkError",
    "RequestTimeoutError",
    "ParseError",
    "DeviceError",
    "ValidationError",
]
