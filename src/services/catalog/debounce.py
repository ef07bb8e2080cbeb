import asyncio
import logging
from typing import Callable, Optional

from config import settings

logger = logging.getLogger(__name__)


class QueryDebouncer:
    """Delays a callback until the input has been quiet for ``delay`` seconds.

    Each ``submit`` cancels the pending call, so only the last value of a burst
    of keystrokes reaches the callback. Timers run on the asyncio event loop.
    """

    def __init__(
        self,
        callback: Callable[[str], None],
        delay: Optional[float] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.callback = callback
        self.delay = settings.search_debounce_ms / 1000 if delay is None else delay
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending_value: Optional[str] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def submit(self, value: str) -> None:
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._pending_value = value
        self._handle = loop.call_later(self.delay, self._fire)

    def flush(self) -> None:
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending_value = None

    def _fire(self) -> None:
        value = self._pending_value or ""
        self._handle = None
        self._pending_value = None
        logger.debug(f"Committing debounced query {value!r}")
        self.callback(value)
