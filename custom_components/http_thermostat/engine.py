"""State synchronization between the hub, the durable store and the device.

The engine owns the ThermostatState. Every change goes through one of
its transition methods; readers get copies. All methods run on the event
loop and suspend only inside the transport and the store, so concurrent
operations interleave at those points and the last response wins.
"""

from __future__ import annotations

import logging
import math

from .constants import THERMOSTAT_DEFAULTS
from .infrastructure.errors import (
    ConfigError,
    HttpThermostatError,
    ValidationError,
)
from .models import EndpointConfig, HeatingMode, ThermostatState
from .request_builder import build_request
from .response_parser import parse_temperature, raise_for_device_error
from .store import ThermostatStateStore
from .transport import HttpTransport

_LOGGER = logging.getLogger(__name__)


class ThermostatSyncEngine:
    """Serve hub reads and writes from a local mirror of the device.

    Failed set operations are reported to the caller but local changes
    that were already applied stay applied; the mirror converges again
    on the next successful temperature read.
    """

    def __init__(
        self,
        transport: HttpTransport,
        store: ThermostatStateStore,
        *,
        get_temperature: EndpointConfig | None = None,
        set_temperature: EndpointConfig | None = None,
        set_off: EndpointConfig | None = None,
        off_delay: int = THERMOSTAT_DEFAULTS.OFF_DELAY,
    ) -> None:
        self._transport = transport
        self._store = store
        self._get_temperature = get_temperature
        self._set_temperature = set_temperature
        self._set_off = set_off
        self._off_delay = off_delay
        self._state = ThermostatState()

    @property
    def state(self) -> ThermostatState:
        """Return a copy of the current mirror."""
        return self._state.model_copy()

    async def async_load(self) -> None:
        """Replace the startup defaults with the persisted state."""
        persisted = await self._store.async_load()
        self._state = ThermostatState.from_persisted(persisted)

    async def _async_persist(self) -> None:
        await self._store.async_save(self._state.to_persisted())

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def async_get_current_temperature(self) -> float:
        """Fetch the current temperature from the device.

        Returns:
            The temperature reported by the device, 0.0 if the response
            holds no usable reading.

        Raises:
            ConfigError: No get-temperature endpoint is configured.
            NetworkError: The device could not be reached.
            DeviceError: The device answered with an error field.
        """
        if self._get_temperature is None:
            _LOGGER.error("Cannot read temperature: no get-temperature endpoint configured")
            raise ConfigError("Get-temperature endpoint is not configured")

        _LOGGER.debug("Fetching temperature from %s", self._get_temperature.url)
        body = await self._transport.async_request(build_request(self._get_temperature))
        raise_for_device_error(body)
        temperature = parse_temperature(body)

        changed = temperature != self._state.current_temperature
        self._state.current_temperature = temperature
        if changed:
            await self._async_persist()
        return temperature

    def get_target_temperature(self) -> float:
        """Return the target temperature from the mirror."""
        return self._state.target_temperature

    def get_target_mode(self) -> HeatingMode:
        """Return the target heating mode from the mirror."""
        return self._state.target_mode

    def get_current_mode(self) -> HeatingMode:
        """Return the heating mode the device is believed to be in."""
        return self._state.current_mode

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def async_set_target_temperature(self, value: float) -> None:
        """Send a new target temperature and record it once accepted.

        Raises:
            ConfigError: No set-temperature endpoint is configured.
            ValidationError: The value is not a finite number.
            NetworkError: The device could not be reached.
            DeviceError: The device answered with an error field.
        """
        if self._set_temperature is None:
            raise ConfigError("Set-temperature endpoint is not configured")
        value = float(value)
        if not math.isfinite(value):
            raise ValidationError(f"Target temperature must be finite, got {value}")

        _LOGGER.info("Setting target temperature to %s°C", value)
        try:
            body = await self._transport.async_request(build_request(self._set_temperature, value))
            raise_for_device_error(body)
        except HttpThermostatError as err:
            _LOGGER.warning("Failed to set target temperature to %s: %s", value, err)
            raise

        self._state.target_temperature = value
        await self._async_persist()

    async def async_set_target_mode(self, mode: HeatingMode | int | str) -> None:
        """Switch the heating mode.

        The mode is applied and persisted locally first. Turning OFF also
        tells the device to stop after its grace period; HEAT needs no call.

        Raises:
            ValidationError: The mode is not OFF or HEAT.
            ConfigError: OFF was requested and no off endpoint is configured.
            NetworkError: The device could not be reached.
            ParseError: The off response is not JSON.
            DeviceError: The off response carries an error field.
        """
        mode = self._coerce_mode(mode)

        self._state.current_mode = mode
        self._state.target_mode = mode
        await self._async_persist()
        _LOGGER.info("Heating mode set to %s", mode.name)

        if mode is HeatingMode.OFF:
            await self._async_send_off()

    async def _async_send_off(self) -> None:
        if self._set_off is None:
            raise ConfigError("Off endpoint is not configured")

        try:
            body = await self._transport.async_request(
                build_request(self._set_off, self._off_delay),
                require_json=True,
            )
            raise_for_device_error(body)
        except HttpThermostatError as err:
            _LOGGER.warning("Error switching heating off: %s", err)
            raise
        _LOGGER.info("Device told to switch off after %ss", self._off_delay)

    @staticmethod
    def _coerce_mode(mode: HeatingMode | int | str) -> HeatingMode:
        if isinstance(mode, bool):
            raise ValidationError(f"Unsupported heating mode: {mode!r}")
        try:
            if isinstance(mode, str):
                return HeatingMode[mode.strip().upper()]
            return HeatingMode(mode)
        except (KeyError, ValueError) as err:
            raise ValidationError(f"Unsupported heating mode: {mode!r}") from err
