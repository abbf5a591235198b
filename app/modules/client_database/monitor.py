import asyncio
import logging
from typing import Awaitable, Callable, Optional

from app.core.debounce import Debouncer
from app.modules.client_database import prober
from app.modules.client_database.prober import ConnectionStatus, ProbeResult

logger = logging.getLogger(__name__)

StatusListener = Callable[[ProbeResult], Awaitable[None]]


class ConnectionMonitor:
    """Live connection status for a client database form.

    disconnected -> connecting -> connected | error. Each edit re-arms the
    quiet-period timer; emptying either field drops back to disconnected.
    """

    def __init__(
        self,
        on_change: StatusListener,
        quiet_period: float,
        probe: Optional[Callable[[str, str], ProbeResult]] = None,
    ):
        self._on_change = on_change
        self._probe = probe
        self._debouncer = Debouncer(quiet_period)
        self.state = ProbeResult(status=ConnectionStatus.DISCONNECTED)

    @property
    def status(self) -> ConnectionStatus:
        return self.state.status

    async def update(self, url: str, key: str) -> None:
        if not (url or "").strip() or not (key or "").strip():
            self._debouncer.cancel()
            await self._publish(ProbeResult(status=ConnectionStatus.DISCONNECTED))
            return
        self._debouncer.trigger(lambda: self._run_probe(url, key))

    def close(self) -> None:
        self._debouncer.cancel()

    async def _run_probe(self, url: str, key: str) -> None:
        await self._publish(ProbeResult(status=ConnectionStatus.CONNECTING))
        probe = self._probe or prober.probe_connection
        result = await asyncio.to_thread(probe, url, key)
        await self._publish(result)

    async def _publish(self, result: ProbeResult) -> None:
        if result == self.state:
            return
        self.state = result
        await self._on_change(result)
