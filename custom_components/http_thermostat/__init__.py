"""HTTP thermostat integration for Home Assistant."""

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .config import build_endpoints
from .constants import (
    CONF_POLL_INTERVAL,
    CONF_REQUEST_TIMEOUT,
    DOMAIN,
    PLATFORMS,
    THERMOSTAT_DEFAULTS,
)
from .coordinator import HttpThermostatCoordinator
from .engine import ThermostatSyncEngine
from .store import ThermostatStateStore
from .transport import HttpTransport

CONFIG_SCHEMA = cv.config_entry_only_config_schema(DOMAIN)

_LOGGER = logging.getLogger(__name__)


async def async_setup(hass: HomeAssistant, config: dict) -> bool:
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up an HTTP thermostat from a config entry."""
    options = {**entry.data, **entry.options}
    endpoints = build_endpoints(options)
    if endpoints.get_temperature is None:
        _LOGGER.warning("%s: no get-temperature endpoint configured, polling will fail", entry.title)

    transport = HttpTransport(
        async_get_clientsession(hass),
        request_timeout=options.get(CONF_REQUEST_TIMEOUT, THERMOSTAT_DEFAULTS.REQUEST_TIMEOUT),
    )
    engine = ThermostatSyncEngine(
        transport,
        ThermostatStateStore(hass, entry.entry_id),
        get_temperature=endpoints.get_temperature,
        set_temperature=endpoints.set_temperature,
        set_off=endpoints.set_off,
    )
    await engine.async_load()

    poll_interval = options.get(CONF_POLL_INTERVAL, THERMOSTAT_DEFAULTS.POLL_INTERVAL)
    _LOGGER.info("Starting temperature polling every %s seconds", poll_interval)
    coordinator = HttpThermostatCoordinator(hass, entry, engine, poll_interval)
    # Initial fetch; a failure is logged by the coordinator and does not block setup
    await coordinator.async_refresh()

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = {
        "engine": engine,
        "coordinator": coordinator,
    }

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    entry.async_on_unload(entry.add_update_listener(async_reload_entry))
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        hass.data[DOMAIN].pop(entry.entry_id)
    return unload_ok


async def async_reload_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    await hass.config_entries.async_reload(entry.entry_id)


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Remove the persisted state of a deleted entry."""
    await ThermostatStateStore(hass, entry.entry_id).async_remove()
