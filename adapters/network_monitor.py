"""
Network reachability monitor.

A background task periodically opens a TCP connection to a well-known host
and records whether it succeeded. Search endpoints read ``is_connected`` and
fail fast with an offline error instead of waiting for a request timeout.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from app.config import settings

logger = logging.getLogger("countme.network")


class NetworkMonitor:
    """
    Args:
        host / port: probe target
        interval: seconds between probes
        timeout: connect timeout in seconds
        probe: optional coroutine function returning True when online
    """

    def __init__(
        self,
        host: str = "1.1.1.1",
        port: int = 53,
        interval: float = 10.0,
        timeout: float = 3.0,
        probe: Optional[Callable[[], Awaitable[bool]]] = None,
    ):
        self.host = host
        self.port = port
        self.interval = interval
        self.timeout = timeout
        self._probe = probe or self._tcp_probe
        self._task: Optional[asyncio.Task] = None
        self.is_connected = True

    @classmethod
    def from_settings(cls) -> "NetworkMonitor":
        return cls(
            host=settings.network_probe_host,
            port=settings.network_probe_port,
            interval=settings.network_probe_interval_sec,
            timeout=settings.network_probe_timeout_sec,
        )

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _tcp_probe(self) -> bool:
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port), timeout=self.timeout
            )
        except (OSError, asyncio.TimeoutError):
            return False
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return True

    async def check_once(self) -> bool:
        """Probe now and update ``is_connected``."""
        connected = await self._probe()
        if connected != self.is_connected:
            logger.info("Network status changed: %s", "online" if connected else "offline")
        self.is_connected = connected
        return connected

    async def _run(self) -> None:
        while True:
            await self.check_once()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Start the background probe loop (no-op when already running)."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Network monitor started (probe %s:%s)", self.host, self.port)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        await asyncio.wait([self._task])
        self._task = None
        logger.info("Network monitor stopped")
