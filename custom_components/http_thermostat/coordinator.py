"""Poll loop for the HTTP thermostat."""

from __future__ import annotations

from datetime import timedelta
import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .constants import THERMOSTAT_DEFAULTS
from .engine import ThermostatSyncEngine
from .infrastructure.errors import HttpThermostatError
from .models import ThermostatState

_LOGGER = logging.getLogger(__name__)


class HttpThermostatCoordinator(DataUpdateCoordinator[ThermostatState]):
    """Refresh the current temperature every poll interval.

    A failed poll is raised as UpdateFailed, which the coordinator logs
    and keeps inside the poll; the mirror keeps its last good reading.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        entry: ConfigEntry,
        engine: ThermostatSyncEngine,
        poll_interval: int = THERMOSTAT_DEFAULTS.POLL_INTERVAL,
    ) -> None:
        super().__init__(
            hass,
            _LOGGER,
            config_entry=entry,
            name=f"HTTP Thermostat {entry.title}",
            update_interval=timedelta(seconds=poll_interval),
        )
        self.engine = engine

    async def _async_update_data(self) -> ThermostatState:
        try:
            temperature = await self.engine.async_get_current_temperature()
        except HttpThermostatError as err:
            _LOGGER.warning("Polling error: %s", err)
            raise UpdateFailed(f"Error fetching current temperature: {err}") from err

        _LOGGER.debug("Updated current temperature to %s°C", temperature)
        return self.engine.state
