"""Config flow for the HTTP thermostat integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant.config_entries import ConfigEntry, ConfigFlow, OptionsFlow

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
    CONF_NAME,
    CONF_POLL_INTERVAL,
    CONF_REQUEST_TIMEOUT,
    DOMAIN,
    HTTP_METHODS,
    THERMOSTAT_DEFAULTS,
)
from .models import ContentType
from .validators import validate_body_template, validate_url

_LOGGER = logging.getLogger(__name__)

CONTENT_TYPES = [content_type.value for content_type in ContentType]

URL_FIELDS = (CONF_API_GET_TEMPERATURE, CONF_API_SET_TEMPERATURE, CONF_API_SET_OFF)

POLL_INTERVAL_SCHEMA = vol.All(vol.Coerce(int), vol.Range(min=THERMOSTAT_DEFAULTS.MIN_POLL_INTERVAL))
REQUEST_TIMEOUT_SCHEMA = vol.All(vol.Coerce(int), vol.Range(min=0))

USER_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_NAME): str,
        vol.Optional(CONF_API_GET_TEMPERATURE, default=""): str,
        vol.Optional(CONF_API_GET_TOKEN): str,
        vol.Required(CONF_API_SET_TEMPERATURE): str,
        vol.Optional(CONF_API_SET_TEMPERATURE_METHOD, default=THERMOSTAT_DEFAULTS.METHOD): vol.In(HTTP_METHODS),
        vol.Optional(CONF_API_SET_TEMPERATURE_TOKEN): str,
        vol.Optional(CONF_API_SET_TEMPERATURE_CONTENT_TYPE): vol.In(CONTENT_TYPES),
        vol.Optional(CONF_API_SET_TEMPERATURE_BODY_KEY): str,
        vol.Optional(CONF_API_SET_TEMPERATURE_BODY_TEMPLATE): str,
        vol.Required(CONF_API_SET_OFF): str,
        vol.Optional(CONF_API_SET_OFF_METHOD, default=THERMOSTAT_DEFAULTS.METHOD): vol.In(HTTP_METHODS),
        vol.Optional(CONF_API_SET_OFF_TOKEN): str,
        vol.Optional(CONF_API_CONTENT_TYPE, default=THERMOSTAT_DEFAULTS.CONTENT_TYPE): vol.In(CONTENT_TYPES),
        vol.Optional(CONF_POLL_INTERVAL, default=THERMOSTAT_DEFAULTS.POLL_INTERVAL): POLL_INTERVAL_SCHEMA,
        vol.Optional(CONF_REQUEST_TIMEOUT, default=THERMOSTAT_DEFAULTS.REQUEST_TIMEOUT): REQUEST_TIMEOUT_SCHEMA,
    }
)


def validate_user_input(user_input: dict[str, Any]) -> dict[str, str]:
    """Return form errors keyed by field; empty when the input is usable."""
    errors: dict[str, str] = {}

    for field in URL_FIELDS:
        url = (user_input.get(field) or "").strip()
        if field == CONF_API_GET_TEMPERATURE and not url:
            continue
        is_valid, error_message = validate_url(url)
        if not is_valid:
            _LOGGER.debug("Invalid %s %r: %s", field, url, error_message)
            errors[field] = "invalid_url"

    template = user_input.get(CONF_API_SET_TEMPERATURE_BODY_TEMPLATE)
    if template:
        is_valid, error_message = validate_body_template(template)
        if not is_valid:
            _LOGGER.debug("Invalid body template %r: %s", template, error_message)
            errors[CONF_API_SET_TEMPERATURE_BODY_TEMPLATE] = "invalid_template"

    return errors


class HttpThermostatConfigFlow(ConfigFlow, domain=DOMAIN):
    VERSION = 1

    async def async_step_user(self, user_input=None):
        errors = {}

        if user_input is not None:
            await self.async_set_unique_id(user_input[CONF_NAME])
            self._abort_if_unique_id_configured()

            errors = validate_user_input(user_input)
            if not errors:
                return self.async_create_entry(title=user_input[CONF_NAME], data=user_input)

        return self.async_show_form(
            step_id="user",
            data_schema=self.add_suggested_values_to_schema(USER_SCHEMA, user_input or {}),
            errors=errors,
        )

    @classmethod
    def async_get_options_flow(cls, entry: ConfigEntry):
        return HttpThermostatOptionsFlow(entry)


class HttpThermostatOptionsFlow(OptionsFlow):
    def __init__(self, entry):
        self.entry = entry

    async def async_step_init(self, user_input=None):
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        current = {**self.entry.data, **self.entry.options}
        return self.async_show_form(
            step_id="init",
            data_schema=vol.Schema(
                {
                    vol.Optional(
                        CONF_POLL_INTERVAL,
                        default=current.get(CONF_POLL_INTERVAL, THERMOSTAT_DEFAULTS.POLL_INTERVAL),
                    ): POLL_INTERVAL_SCHEMA,
                    vol.Optional(
                        CONF_REQUEST_TIMEOUT,
                        default=current.get(CONF_REQUEST_TIMEOUT, THERMOSTAT_DEFAULTS.REQUEST_TIMEOUT),
                    ): REQUEST_TIMEOUT_SCHEMA,
                }
            ),
        )
