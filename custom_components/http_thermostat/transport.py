"""HTTP transport for the thermostat device."""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from .constants import THERMOSTAT_DEFAULTS
from .infrastructure.errors import NetworkError, ParseError, RequestTimeoutError
from .models import RequestDescriptor

_LOGGER = logging.getLogger(__name__)


class HttpTransport:
    """Execute one HTTP request and return the parsed body.

    The transport keeps no state besides the session. A response whose
    body is not JSON is returned as raw text unless the caller requires
    JSON. The HTTP status does not decide success; callers inspect the
    body for an error field instead.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        request_timeout: float = THERMOSTAT_DEFAULTS.REQUEST_TIMEOUT,
    ) -> None:
        """Initialize the transport.

        Args:
            session: Shared session; a private one is created lazily when None
            request_timeout: Total timeout per request in seconds, 0 disables it
        """
        self._session = session
        self._owns_session = session is None
        self.request_timeout = request_timeout

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the session if this transport created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def _timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self.request_timeout or None)

    async def async_request(self, request: RequestDescriptor, *, require_json: bool = False) -> Any:
        """Perform ``request`` and return the decoded body.

        Args:
            request: Request built by the request builder
            require_json: Fail with ParseError instead of returning raw text

        Returns:
            The JSON-decoded body, or the raw text when it is not JSON and
            ``require_json`` is False.

        Raises:
            RequestTimeoutError: The device did not answer in time.
            NetworkError: The connection failed or was reset.
            ParseError: JSON was required and the body is not JSON.
        """
        session = await self._get_session()
        _LOGGER.debug("HTTP %s %s body=%s", request.method, request.url, request.body)

        try:
            async with session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=self._timeout(),
            ) as response:
                status = response.status
                text = await response.text(errors="replace")
        except TimeoutError as err:
            _LOGGER.error("HTTP timeout after %ss: %s %s", self.request_timeout, request.method, request.url)
            raise RequestTimeoutError(f"Timeout calling {request.url}") from err
        except aiohttp.ClientError as err:
            _LOGGER.error("HTTP error: %s", err)
            raise NetworkError(f"Error calling {request.url}: {err}") from err

        _LOGGER.debug("HTTP %s %s", status, text)
        if status >= 400:
            _LOGGER.warning("%s %s answered with status %s", request.method, request.url, status)

        try:
            return json.loads(text)
        except ValueError as err:
            if require_json:
                raise ParseError(f"Response from {request.url} is not valid JSON: {text!r}") from err
            return text
