"""Climate platform for the HTTP thermostat integration."""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.climate import (
    ATTR_HVAC_MODE,
    ClimateEntity,
    ClimateEntityFeature,
    HVACAction,
    HVACMode,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError, ServiceValidationError
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .constants import DOMAIN, THERMOSTAT_DEFAULTS
from .coordinator import HttpThermostatCoordinator
from .engine import ThermostatSyncEngine
from .infrastructure.errors import HttpThermostatError, ValidationError
from .models import HeatingMode

_LOGGER = logging.getLogger(__name__)

HVAC_MODE_MAPPING = {
    HeatingMode.OFF: HVACMode.OFF,
    HeatingMode.HEAT: HVACMode.HEAT,
}

HVAC_MODE_REVERSE_MAPPING = {v: k for k, v in HVAC_MODE_MAPPING.items()}


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the HTTP thermostat climate entity."""
    data = hass.data[DOMAIN][config_entry.entry_id]
    async_add_entities([HttpThermostatClimate(data["coordinator"], data["engine"], config_entry)])


class HttpThermostatClimate(CoordinatorEntity[HttpThermostatCoordinator], ClimateEntity):
    """Thermostat entity backed by the synchronization engine.

    Reads are answered from the engine's mirror without network I/O.
    Writes go through the engine; its errors are turned into Home
    Assistant service errors here and nowhere else.
    """

    _attr_has_entity_name = True
    _attr_name = None
    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = THERMOSTAT_DEFAULTS.TEMPERATURE_STEP
    _attr_min_temp = THERMOSTAT_DEFAULTS.MIN_TEMP
    _attr_max_temp = THERMOSTAT_DEFAULTS.MAX_TEMP
    _attr_hvac_modes = list(HVAC_MODE_REVERSE_MAPPING)
    _attr_supported_features = (
        ClimateEntityFeature.TARGET_TEMPERATURE
        | ClimateEntityFeature.TURN_OFF
        | ClimateEntityFeature.TURN_ON
    )

    def __init__(
        self,
        coordinator: HttpThermostatCoordinator,
        engine: ThermostatSyncEngine,
        entry: ConfigEntry,
    ) -> None:
        """Initialize the climate entity."""
        super().__init__(coordinator)
        self._engine = engine
        self._attr_unique_id = f"{entry.entry_id}_climate"
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, entry.entry_id)},
            name=entry.title,
            manufacturer="HTTP Thermostat",
            model="HTTP API",
        )

    @property
    def available(self) -> bool:
        """Return True; the mirror always has a value to serve."""
        return True

    @property
    def current_temperature(self) -> float | None:
        """Return the last accepted temperature reading."""
        return self._engine.state.current_temperature

    @property
    def target_temperature(self) -> float | None:
        """Return the target temperature."""
        return self._engine.get_target_temperature()

    @property
    def hvac_mode(self) -> HVACMode:
        """Return the target heating mode."""
        return HVAC_MODE_MAPPING[self._engine.get_target_mode()]

    @property
    def hvac_action(self) -> HVACAction:
        """Return HEATING while the heater is believed to be on."""
        if self._engine.get_current_mode() is HeatingMode.HEAT:
            return HVACAction.HEATING
        return HVACAction.OFF

    async def async_set_temperature(self, **kwargs: Any) -> None:
        """Set a new target temperature, optionally with a new mode."""
        if (hvac_mode := kwargs.get(ATTR_HVAC_MODE)) is not None:
            await self.async_set_hvac_mode(hvac_mode)

        temperature = kwargs.get(ATTR_TEMPERATURE)
        if temperature is None:
            return

        try:
            await self._engine.async_set_target_temperature(temperature)
        except ValidationError as err:
            raise ServiceValidationError(str(err)) from err
        except HttpThermostatError as err:
            _LOGGER.error("Failed to set temperature: %s", err)
            raise HomeAssistantError(f"Failed to set temperature to {temperature}: {err}") from err
        finally:
            self.async_write_ha_state()

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Set the heating mode; only OFF and HEAT are accepted."""
        mode = HVAC_MODE_REVERSE_MAPPING.get(hvac_mode)
        if mode is None:
            raise ServiceValidationError(f"Unsupported HVAC mode: {hvac_mode}")

        try:
            await self._engine.async_set_target_mode(mode)
        except HttpThermostatError as err:
            _LOGGER.error("Error setting heating mode to %s: %s", hvac_mode, err)
            raise HomeAssistantError(f"Failed to set HVAC mode to {hvac_mode}: {err}") from err
        finally:
            self.async_write_ha_state()
