"""Constants for the HTTP thermostat integration."""

from __future__ import annotations

from pydantic import BaseModel, Field

# Integration Domain
DOMAIN = "http_thermostat"

# Supported Platforms
PLATFORMS = ["climate"]

# Config entry keys
CONF_NAME = "name"
CONF_API_GET_TEMPERATURE = "api_get_temperature"
CONF_API_GET_TOKEN = "api_get_token"
CONF_API_SET_TEMPERATURE = "api_set_temperature"
CONF_API_SET_TEMPERATURE_METHOD = "api_set_temperature_method"
CONF_API_SET_TEMPERATURE_TOKEN = "api_set_temperature_token"
CONF_API_SET_TEMPERATURE_CONTENT_TYPE = "api_set_temperature_content_type"
CONF_API_SET_TEMPERATURE_BODY_KEY = "api_set_temperature_body_key"
CONF_API_SET_TEMPERATURE_BODY_TEMPLATE = "api_set_temperature_body_template"
CONF_API_SET_OFF = "api_set_off"
CONF_API_SET_OFF_METHOD = "api_set_off_method"
CONF_API_SET_OFF_TOKEN = "api_set_off_token"
CONF_API_CONTENT_TYPE = "api_content_type"
CONF_POLL_INTERVAL = "poll_interval"
CONF_REQUEST_TIMEOUT = "request_timeout"

# Durable layout entry names
STORE_CURRENT_TEMPERATURE = "currentTemperature"
STORE_TARGET_TEMPERATURE = "targetTemperature"
STORE_TARGET_MODE = "targetHeatingCoolingState"
STORAGE_VERSION = 1

HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


class ThermostatDefaults(BaseModel):
    """Default values for the thermostat and its endpoints.

    Immutable values used when the durable store is empty and when an
    option is left out of the config entry.
    """

    model_config = {"frozen": True}

    CURRENT_TEMPERATURE: float = Field(default=20.0, description="Current temperature before the first reading")
    TARGET_TEMPERATURE: float = Field(default=19.0, description="Target temperature before anything is persisted")
    METHOD: str = Field(default="POST", description="HTTP method for set endpoints")
    BODY_KEY: str = Field(default="value", description="Key wrapping the value in json and form bodies")
    CONTENT_TYPE: str = Field(default="application/json", description="Body encoding for set endpoints")
    OFF_DELAY: int = Field(default=5, description="Shutdown grace period sent to the off endpoint in seconds")
    POLL_INTERVAL: int = Field(default=60, description="Seconds between current temperature polls")
    MIN_POLL_INTERVAL: int = Field(default=5, description="Lowest accepted poll interval in seconds")
    REQUEST_TIMEOUT: int = Field(default=30, description="Total request timeout in seconds, 0 disables it")
    MIN_TEMP: float = Field(default=5.0, description="Lowest target temperature offered to the hub")
    MAX_TEMP: float = Field(default=30.0, description="Highest target temperature offered to the hub")
    TEMPERATURE_STEP: float = Field(default=0.5, description="Target temperature step")


# Create a default instance for easy access
THERMOSTAT_DEFAULTS = ThermostatDefaults()
