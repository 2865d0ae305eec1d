"""Durable mirror of the last known thermostat state."""

from __future__ import annotations

import logging

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import Store
from pydantic import ValidationError

from .constants import DOMAIN, STORAGE_VERSION
from .models import PersistedState

_LOGGER = logging.getLogger(__name__)


class ThermostatStateStore:
    """Load and save the persisted state of one accessory.

    ``async_save`` is a no-op until ``async_load`` has finished, so the
    defaults served during startup never overwrite durable state that has
    not been read yet. There is no locking; all callers run on the event
    loop through the synchronization engine.
    """

    def __init__(self, hass: HomeAssistant, accessory_id: str) -> None:
        self._store: Store[dict] = Store(hass, STORAGE_VERSION, f"{DOMAIN}.{accessory_id}")
        self._initialized = False

    @property
    def initialized(self) -> bool:
        """Return True once the durable state has been loaded."""
        return self._initialized

    async def async_load(self) -> PersistedState:
        """Return the persisted state, or defaults when nothing usable is stored."""
        data = await self._store.async_load()
        self._initialized = True

        if data is None:
            _LOGGER.info("No persisted state found, using defaults")
            return PersistedState()

        if not isinstance(data, dict):
            _LOGGER.warning("Ignoring invalid persisted state %s", data)
            return PersistedState()

        try:
            persisted = PersistedState.model_validate(data)
        except ValidationError as err:
            # Unusable entries fall back to their defaults one by one
            invalid = {error["loc"][0] for error in err.errors() if error["loc"]}
            _LOGGER.warning("Ignoring invalid persisted entries %s: %s", sorted(invalid), err)
            try:
                persisted = PersistedState.model_validate(
                    {key: value for key, value in data.items() if key not in invalid}
                )
            except ValidationError:
                return PersistedState()

        _LOGGER.info(
            "Loaded persisted state: current %s, target %s, mode %s",
            persisted.current_temperature,
            persisted.target_temperature,
            persisted.target_mode.name,
        )
        return persisted

    async def async_save(self, state: PersistedState) -> None:
        """Write all persisted fields together."""
        if not self._initialized:
            _LOGGER.debug("Store not loaded yet, skipping save")
            return
        await self._store.async_save(state.to_storage())
        _LOGGER.debug("State saved: %s", state.to_storage())

    async def async_remove(self) -> None:
        """Delete the persisted state of this accessory."""
        await self._store.async_remove()
        _LOGGER.debug("Persisted state removed")
