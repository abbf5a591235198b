import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """Delay-then-fire timer. Each trigger resets the timer; cancel() tears it down."""

    def __init__(self, delay: float):
        self.delay = delay
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self, action: Callable[[], Awaitable[None]]) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire(action))

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _fire(self, action: Callable[[], Awaitable[None]]) -> None:
        await asyncio.sleep(self.delay)
        try:
            await action()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Debounced action failed: {e}")
