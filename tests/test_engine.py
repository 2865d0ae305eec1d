"""Tests for the state synchronization engine."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from custom_components.http_thermostat.engine import ThermostatSyncEngine
from custom_components.http_thermostat.infrastructure.errors import (
    ConfigError,
    DeviceError,
    NetworkError,
    ParseError,
    ValidationError,
)
from custom_components.http_thermostat.models import HeatingMode, PersistedState


class TestStartup:
    """Test the engine lifecycle before and after the store loads."""

    def test_serves_defaults_before_load(self, engine):
        assert engine.state.current_temperature == 20.0
        assert engine.get_target_temperature() == 19.0
        assert engine.get_target_mode() is HeatingMode.OFF

    @pytest.mark.asyncio
    async def test_load_replaces_defaults(self, engine, mock_store):
        mock_store.async_load.return_value = PersistedState(
            current_temperature=18.0,
            target_temperature=22.5,
            target_mode=HeatingMode.HEAT,
        )

        await engine.async_load()

        assert engine.state.current_temperature == 18.0
        assert engine.get_target_temperature() == 22.5
        assert engine.get_target_mode() is HeatingMode.HEAT
        assert engine.get_current_mode() is HeatingMode.HEAT

    def test_state_is_a_copy(self, engine):
        snapshot = engine.state
        snapshot.target_temperature = 25.0

        assert engine.get_target_temperature() == 19.0


class TestGetCurrentTemperature:
    """Test reading the current temperature."""

    @pytest.mark.asyncio
    async def test_reads_named_entry(self, engine, mock_transport):
        temperature = await engine.async_get_current_temperature()

        assert temperature == 21.5
        assert engine.state.current_temperature == 21.5
        request = mock_transport.async_request.call_args.args[0]
        assert request.method == "GET"
        assert request.body is None
        assert request.headers["Authorization"] == "Bearer get-token"

    @pytest.mark.asyncio
    async def test_unknown_shape_reads_zero(self, engine, mock_transport):
        mock_transport.async_request.return_value = {"status": "ok"}

        assert await engine.async_get_current_temperature() == 0
        assert engine.state.current_temperature == 0

    @pytest.mark.asyncio
    async def test_persists_changed_reading(self, engine, mock_store):
        await engine.async_get_current_temperature()

        saved = mock_store.async_save.call_args.args[0]
        assert saved.current_temperature == 21.5
        assert saved.target_temperature == 19.0

    @pytest.mark.asyncio
    async def test_unchanged_reading_not_persisted(self, engine, mock_store, mock_transport):
        mock_transport.async_request.return_value = {"temperature": 20.0}

        await engine.async_get_current_temperature()

        mock_store.async_save.assert_not_called()

    @pytest.mark.asyncio
    async def test_network_error_keeps_last_value(self, engine, mock_transport):
        await engine.async_get_current_temperature()
        mock_transport.async_request.side_effect = NetworkError("refused")

        with pytest.raises(NetworkError):
            await engine.async_get_current_temperature()

        assert engine.state.current_temperature == 21.5

    @pytest.mark.asyncio
    async def test_device_error_keeps_last_value(self, engine, mock_transport):
        mock_transport.async_request.return_value = {"error": "sensor fault", "temperature": 99}

        with pytest.raises(DeviceError):
            await engine.async_get_current_temperature()

        assert engine.state.current_temperature == 20.0

    @pytest.mark.asyncio
    async def test_unconfigured_endpoint(self, mock_transport, mock_store, set_endpoint, off_endpoint):
        """Test that a missing endpoint fails and later calls are still served."""
        engine = ThermostatSyncEngine(
            mock_transport,
            mock_store,
            set_temperature=set_endpoint,
            set_off=off_endpoint,
        )

        with pytest.raises(ConfigError):
            await engine.async_get_current_temperature()

        mock_transport.async_request.assert_not_called()
        assert engine.get_target_temperature() == 19.0
        await engine.async_set_target_temperature(22)
        assert engine.get_target_temperature() == 22.0

    @pytest.mark.asyncio
    async def test_last_response_wins(self, engine, mock_transport):
        """Test that overlapping reads resolve in arrival order."""
        first_response = asyncio.Event()

        async def respond(request, **kwargs):
            if not first_response.is_set():
                first_response.set()
                await asyncio.sleep(0.01)
                return {"temperature": 18.0}
            return {"temperature": 23.0}

        mock_transport.async_request = AsyncMock(side_effect=respond)

        slow = asyncio.create_task(engine.async_get_current_temperature())
        await first_response.wait()
        await engine.async_get_current_temperature()
        await slow

        assert engine.state.current_temperature == 18.0


class TestSetTargetTemperature:
    """Test setting the target temperature."""

    @pytest.mark.asyncio
    async def test_success_updates_and_persists(self, engine, mock_transport, mock_store):
        mock_transport.async_request.return_value = "OK"

        await engine.async_set_target_temperature(22.5)

        request = mock_transport.async_request.call_args.args[0]
        assert request.method == "POST"
        assert request.url == "http://192.168.1.50/api/target"
        assert request.body == '{"value":22.5}'
        assert engine.get_target_temperature() == 22.5
        mock_store.async_save.assert_awaited_once_with(
            PersistedState(current_temperature=20.0, target_temperature=22.5, target_mode=HeatingMode.OFF)
        )

    @pytest.mark.asyncio
    async def test_network_failure_reported(self, engine, mock_transport, mock_store):
        mock_transport.async_request.side_effect = NetworkError("reset")

        with pytest.raises(NetworkError):
            await engine.async_set_target_temperature(24)

        assert engine.get_target_temperature() == 19.0
        mock_store.async_save.assert_not_called()

    @pytest.mark.asyncio
    async def test_device_error_reported(self, engine, mock_transport):
        mock_transport.async_request.return_value = {"error": "out of range"}

        with pytest.raises(DeviceError):
            await engine.async_set_target_temperature(40)

    @pytest.mark.asyncio
    async def test_non_finite_rejected(self, engine, mock_transport):
        with pytest.raises(ValidationError):
            await engine.async_set_target_temperature(float("nan"))

        mock_transport.async_request.assert_not_called()

    @pytest.mark.asyncio
    async def test_unconfigured_endpoint(self, mock_transport, mock_store):
        engine = ThermostatSyncEngine(mock_transport, mock_store)

        with pytest.raises(ConfigError):
            await engine.async_set_target_temperature(21)


class TestSetTargetMode:
    """Test the OFF/HEAT mode transitions."""

    @pytest.mark.asyncio
    async def test_off_sends_one_request_with_delay(self, engine, mock_transport):
        mock_transport.async_request.return_value = {"status": "ok"}

        await engine.async_set_target_mode(HeatingMode.OFF)

        assert mock_transport.async_request.call_count == 1
        request = mock_transport.async_request.call_args.args[0]
        assert request.url == "http://192.168.1.50/api/off"
        assert request.body == "value=5"
        assert mock_transport.async_request.call_args.kwargs == {"require_json": True}

    @pytest.mark.asyncio
    async def test_heat_sends_nothing(self, engine, mock_transport, mock_store):
        await engine.async_set_target_mode(HeatingMode.HEAT)

        mock_transport.async_request.assert_not_called()
        assert engine.get_target_mode() is HeatingMode.HEAT
        assert engine.get_current_mode() is HeatingMode.HEAT
        saved = mock_store.async_save.call_args.args[0]
        assert saved.target_mode is HeatingMode.HEAT

    @pytest.mark.asyncio
    async def test_off_device_error_keeps_local_mode(self, engine, mock_transport, mock_store):
        """Test that a refused OFF is reported but stays applied locally."""
        await engine.async_set_target_mode(HeatingMode.HEAT)
        mock_transport.async_request.return_value = {"error": "offline"}

        with pytest.raises(DeviceError, match="offline"):
            await engine.async_set_target_mode(HeatingMode.OFF)

        assert engine.get_target_mode() is HeatingMode.OFF
        assert engine.get_current_mode() is HeatingMode.OFF
        saved = mock_store.async_save.call_args.args[0]
        assert saved.target_mode is HeatingMode.OFF

    @pytest.mark.asyncio
    async def test_off_non_json_response(self, engine, mock_transport):
        mock_transport.async_request.side_effect = ParseError("not json")

        with pytest.raises(ParseError):
            await engine.async_set_target_mode(HeatingMode.OFF)

        assert engine.get_target_mode() is HeatingMode.OFF

    @pytest.mark.asyncio
    async def test_off_without_endpoint(self, mock_transport, mock_store):
        engine = ThermostatSyncEngine(mock_transport, mock_store)
        await engine.async_set_target_mode(HeatingMode.HEAT)

        with pytest.raises(ConfigError):
            await engine.async_set_target_mode(HeatingMode.OFF)

        assert engine.get_target_mode() is HeatingMode.OFF

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode", [2, 3, "cool", "auto", -1, True, False])
    async def test_unsupported_mode_rejected(self, engine, mock_transport, mock_store, mode):
        with pytest.raises(ValidationError):
            await engine.async_set_target_mode(mode)

        mock_transport.async_request.assert_not_called()
        mock_store.async_save.assert_not_called()
        assert engine.get_target_mode() is HeatingMode.OFF

    @pytest.mark.asyncio
    async def test_mode_by_name(self, engine):
        await engine.async_set_target_mode("heat")
        assert engine.get_target_mode() is HeatingMode.HEAT
