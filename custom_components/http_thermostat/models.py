"""Data models for the HTTP thermostat integration.

This module provides Pydantic models for the device mirror, its durable
subset and the immutable endpoint descriptors, with validation and type
safety at every boundary.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import (
    STORE_CURRENT_TEMPERATURE,
    STORE_TARGET_MODE,
    STORE_TARGET_TEMPERATURE,
    THERMOSTAT_DEFAULTS,
)


class HeatingMode(IntEnum):
    """Heating modes supported by the thermostat.

    The numbering matches the durable ``targetHeatingCoolingState`` entry.
    """

    OFF = 0
    HEAT = 1


class ContentType(StrEnum):
    """Body encodings understood by the device endpoints."""

    JSON = "application/json"
    FORM = "application/x-www-form-urlencoded"
    PLAIN = "text/plain"

    @classmethod
    def _missing_(cls, value: object) -> ContentType | None:
        # Accept the short names used in hand-written configs
        short_names = {
            "json": cls.JSON,
            "form-urlencoded": cls.FORM,
            "form": cls.FORM,
            "plain": cls.PLAIN,
            "text": cls.PLAIN,
        }
        if isinstance(value, str):
            return short_names.get(value.strip().lower())
        return None


# Base model for all HTTP thermostat data models
class HttpThermostatModel(BaseModel):
    """Base model for all HTTP thermostat data structures."""

    model_config = {"validate_assignment": True, "populate_by_name": True}


class EndpointConfig(HttpThermostatModel):
    """Descriptor of one remote HTTP operation.

    One instance exists per logical operation (get temperature, set
    temperature, set off). It is built from the config entry and never
    mutated afterwards.

    Attributes:
        url: Absolute URL of the endpoint
        method: HTTP method, normalized to upper case
        auth_token: Optional bearer token passed through unchanged
        content_type: Body encoding, json when not configured
        body_key: Key wrapping the value in json and form bodies
        body_template: Optional JSON template containing ``{{value}}``

    Example:
        >>> endpoint = EndpointConfig(url="http://heater.local/temp", method="put")
        >>> endpoint.method
        'PUT'
        >>> endpoint.content_type
        <ContentType.JSON: 'application/json'>
    """

    model_config = {"frozen": True}

    url: str = Field(..., min_length=1, description="Absolute URL of the endpoint")
    method: str = Field(default=THERMOSTAT_DEFAULTS.METHOD, description="HTTP method")
    auth_token: str | None = Field(default=None, alias="token", description="Bearer token")
    content_type: ContentType = Field(
        default=ContentType.JSON,
        alias="contentType",
        description="Body encoding",
    )
    body_key: str | None = Field(default=None, alias="bodyKey", description="Key wrapping the value")
    body_template: str | None = Field(
        default=None,
        alias="body",
        description="JSON body template containing {{value}}",
    )

    @field_validator("method", mode="before")
    @classmethod
    def _normalize_method(cls, v):
        if not v:
            return THERMOSTAT_DEFAULTS.METHOD
        return str(v).strip().upper()

    @field_validator("content_type", mode="before")
    @classmethod
    def _default_content_type(cls, v):
        return ContentType.JSON if v in (None, "") else v

    @field_validator("auth_token", "body_key", "body_template", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class RequestDescriptor(HttpThermostatModel):
    """A concrete HTTP request ready for the transport."""

    model_config = {"frozen": True}

    url: str
    method: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | None = None


class PersistedState(HttpThermostatModel):
    """Durable subset of the thermostat state.

    Serialized by alias so the stored document carries exactly the three
    entries ``currentTemperature``, ``targetTemperature`` and
    ``targetHeatingCoolingState``. Missing or null entries fall back to
    their defaults individually.
    """

    model_config = {"frozen": True}

    current_temperature: float = Field(
        default=THERMOSTAT_DEFAULTS.CURRENT_TEMPERATURE,
        alias=STORE_CURRENT_TEMPERATURE,
        allow_inf_nan=False,
    )
    target_temperature: float = Field(
        default=THERMOSTAT_DEFAULTS.TARGET_TEMPERATURE,
        alias=STORE_TARGET_TEMPERATURE,
        allow_inf_nan=False,
    )
    target_mode: HeatingMode = Field(default=HeatingMode.OFF, alias=STORE_TARGET_MODE)

    @model_validator(mode="before")
    @classmethod
    def _drop_missing_entries(cls, v):
        if isinstance(v, dict):
            return {key: value for key, value in v.items() if value is not None}
        return v

    def to_storage(self) -> dict[str, Any]:
        """Return the document written to the durable store."""
        return self.model_dump(by_alias=True, mode="json")


class ThermostatState(HttpThermostatModel):
    """In-memory mirror of the remote thermostat.

    Owned by the synchronization engine; other components only ever see
    copies of it.

    Attributes:
        current_temperature: Last accepted temperature reading in °C
        target_temperature: Last accepted target temperature in °C
        current_mode: Mode the heater is believed to be in
        target_mode: Mode requested by the hub
    """

    current_temperature: float = Field(
        default=THERMOSTAT_DEFAULTS.CURRENT_TEMPERATURE,
        allow_inf_nan=False,
    )
    target_temperature: float = Field(
        default=THERMOSTAT_DEFAULTS.TARGET_TEMPERATURE,
        allow_inf_nan=False,
    )
    current_mode: HeatingMode = HeatingMode.OFF
    target_mode: HeatingMode = HeatingMode.OFF

    @classmethod
    def from_persisted(cls, persisted: PersistedState) -> ThermostatState:
        """Build the mirror from the durable subset."""
        return cls(
            current_temperature=persisted.current_temperature,
            target_temperature=persisted.target_temperature,
            current_mode=persisted.target_mode,
            target_mode=persisted.target_mode,
        )

    def to_persisted(self) -> PersistedState:
        """Return the durable subset of this state."""
        return PersistedState(
            current_temperature=self.current_temperature,
            target_temperature=self.target_temperature,
            target_mode=self.target_mode,
        )
