"""HTTP/JSON transport for the floodlight's local API."""

import asyncio
import json
import logging
from typing import Any, Callable, Optional

import aiohttp

from floodlight.devices.errors import (
    DecodeError,
    DeviceConnectionError,
    FloodlightError,
    HTTPStatusError,
    RequestTimeoutError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class DeviceTransport:
    """Issues single request/response exchanges against one device.

    Every call races the exchange against a timer. Whichever settles first
    decides the outcome of the call; the exchange itself is never aborted by
    the timer and keeps running in the background. A success that lands after
    the timer already fired is handed to ``on_late_result`` instead of the
    caller, so a slow device can still refresh cached state without
    overriding a fallback that was already returned.
    """

    def __init__(
        self,
        host: str,
        port: int,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.host = host
        self.port = port
        self._session = session
        self._owns_session = session is None
        self._pending: set[asyncio.Task] = set()

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def _get_session(self) -> aiohttp.ClientSession:
        """Lazily create the client session inside the running loop."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[dict[str, Any]] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        on_late_result: Optional[Callable[[Any], None]] = None,
    ) -> Any:
        """Perform one exchange and return the decoded JSON body.

        Raises:
            RequestTimeoutError: the timer fired before the device answered
            DeviceConnectionError: the connection could not be made or broke
            HTTPStatusError: the device answered outside [200, 400)
            DecodeError: the body was not valid JSON
        """
        loop = asyncio.get_running_loop()
        completion: asyncio.Future = loop.create_future()
        exchange = asyncio.create_task(self._exchange(method, path, body))
        self._pending.add(exchange)

        def on_timeout() -> None:
            if completion.done():
                return
            logger.debug(f"Timeout after {timeout}s waiting for {method} {path}")
            completion.set_exception(
                RequestTimeoutError(f"{method} {path} timed out after {timeout}s")
            )

        timer = loop.call_later(timeout, on_timeout)

        def on_exchange_done(task: asyncio.Task) -> None:
            self._pending.discard(task)
            timer.cancel()
            if task.cancelled():
                if not completion.done():
                    completion.cancel()
                return
            error = task.exception()
            if not completion.done():
                if error is not None:
                    completion.set_exception(error)
                else:
                    completion.set_result(task.result())
                return
            # The timer (or the caller) already won; this result is late.
            if error is not None:
                logger.debug(f"Discarding late failure for {method} {path}: {error}")
            elif on_late_result is not None:
                logger.debug(f"Late response for {method} {path}")
                try:
                    on_late_result(task.result())
                except FloodlightError as e:
                    logger.warning(f"Could not apply late response for {path}: {e}")
            else:
                logger.debug(f"Discarding late response for {method} {path}")

        exchange.add_done_callback(on_exchange_done)

        try:
            return await completion
        except asyncio.CancelledError:
            exchange.cancel()
            raise

    async def _exchange(self, method: str, path: str, body: Optional[dict[str, Any]]) -> Any:
        url = f"{self.base_url}{path}"
        headers = {}
        data = None
        if body is not None:
            data = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"
            headers["Content-Length"] = str(len(data))

        logger.debug(f"request -> {method} {url} {body if body is not None else ''}")
        session = self._get_session()
        try:
            async with session.request(
                method, url, data=data, headers=headers, allow_redirects=False
            ) as response:
                status = response.status
                logger.debug(f"response status -> {status}")
                chunks = []
                async for chunk in response.content.iter_any():
                    chunks.append(chunk)
        except aiohttp.ClientError as e:
            raise DeviceConnectionError(f"{method} {url} failed: {e}") from e
        except OSError as e:
            raise DeviceConnectionError(f"{method} {url} failed: {e}") from e

        if status < 200 or status >= 400:
            raise HTTPStatusError(status)

        raw = b"".join(chunks)
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(f"Malformed JSON from {url}: {raw[:200]!r}") from e
        logger.debug(f"response body -> {data}")
        return data

    async def drain(self) -> None:
        """Wait for every exchange still in flight, including timed-out ones."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        """Abandon in-flight exchanges and release the session if we own it."""
        for task in list(self._pending):
            task.cancel()
        await self.drain()
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
