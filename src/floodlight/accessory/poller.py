"""Background refresh of floodlight state."""

import asyncio
import logging
from typing import Callable, Optional

from floodlight.accessory.state_cache import POLL_READ_TIMEOUT, AccessoryStateCache
from floodlight.devices.codec import FloodlightState
from floodlight.devices.errors import FloodlightError

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 3.0


class PollingDriver:
    """Periodically reads the device and pushes the result to the hub.

    The next cycle is scheduled only after the previous read has settled, so
    a slow device never causes overlapping polls.
    """

    def __init__(
        self,
        cache: AccessoryStateCache,
        push: Callable[[FloodlightState], None],
        interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float = POLL_READ_TIMEOUT,
    ):
        self._cache = cache
        self._push = push
        self.interval = interval
        self.timeout = timeout
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info(f"Polling every {self.interval}s")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.warning(f"Polling task ended with error: {e}")
        finally:
            self._task = None

    async def poll_once(self) -> Optional[FloodlightState]:
        """Run a single cycle; failures are logged and reported as None."""
        try:
            state = await self._cache.get_state(timeout=self.timeout)
        except FloodlightError as e:
            logger.warning(f"Polling failed: {e}")
            return None
        except Exception as e:
            logger.error(f"Error refreshing state while polling: {e}")
            return None
        try:
            self._push(state)
        except Exception as e:
            logger.error(f"Failed to push polled state: {e}")
        return state

    async def _run(self) -> None:
        while True:
            await self.poll_once()
            await asyncio.sleep(self.interval)
