"""Common fixtures for HTTP thermostat tests."""
import pytest
from unittest.mock import AsyncMock, MagicMock
from homeassistant.core import HomeAssistant
from homeassistant.config_entries import ConfigEntry

from custom_components.http_thermostat.engine import ThermostatSyncEngine
from custom_components.http_thermostat.models import (
    ContentType,
    EndpointConfig,
    PersistedState,
)


@pytest.fixture
def mock_hass():
    """Create a mock Home Assistant instance."""
    hass = MagicMock(spec=HomeAssistant)
    hass.data = {}
    hass.loop = None
    hass.async_create_task = MagicMock()
    hass.add_job = MagicMock()
    return hass


@pytest.fixture
def entry_data():
    """Config entry data for a fully configured thermostat."""
    return {
        "name": "Living Room",
        "api_get_temperature": "http://192.168.1.50/api/sensors",
        "api_get_token": "get-token",
        "api_set_temperature": "http://192.168.1.50/api/target",
        "api_set_temperature_method": "POST",
        "api_set_off": "http://192.168.1.50/api/off",
        "api_set_off_method": "POST",
        "api_content_type": "application/json",
        "poll_interval": 60,
        "request_timeout": 30,
    }


@pytest.fixture
def mock_config_entry(entry_data):
    """Create a mock config entry."""
    entry = MagicMock(spec=ConfigEntry)
    entry.entry_id = "test_entry_id"
    entry.title = "Living Room"
    entry.data = entry_data
    entry.options = {}
    return entry


@pytest.fixture
def get_endpoint():
    return EndpointConfig(url="http://192.168.1.50/api/sensors", method="GET", token="get-token")


@pytest.fixture
def set_endpoint():
    return EndpointConfig(url="http://192.168.1.50/api/target", method="POST")


@pytest.fixture
def off_endpoint():
    return EndpointConfig(
        url="http://192.168.1.50/api/off",
        method="POST",
        content_type=ContentType.FORM,
    )


@pytest.fixture
def mock_transport():
    """Create a mock HttpTransport."""
    transport = MagicMock()
    transport.async_request = AsyncMock(return_value={"data": [{"name": "temp", "value": "21.5"}]})
    return transport


@pytest.fixture
def mock_store():
    """Create a mock ThermostatStateStore that has finished loading."""
    store = MagicMock()
    store.async_load = AsyncMock(return_value=PersistedState())
    store.async_save = AsyncMock()
    store.initialized = True
    return store


@pytest.fixture
def engine(mock_transport, mock_store, get_endpoint, set_endpoint, off_endpoint):
    """Create an engine with all three endpoints configured."""
    return ThermostatSyncEngine(
        mock_transport,
        mock_store,
        get_temperature=get_endpoint,
        set_temperature=set_endpoint,
        set_off=off_endpoint,
    )


@pytest.fixture
def mock_coordinator():
    """Create a mock coordinator."""
    coordinator = MagicMock()
    coordinator.async_request_refresh = AsyncMock()
    coordinator.async_add_listener = MagicMock(return_value=lambda: None)
    coordinator.last_update_success = True
    return coordinator
