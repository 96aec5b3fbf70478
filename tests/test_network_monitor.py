"""
Tests for the network reachability monitor.

Probes are injected so no real connection is attempted.
"""

import asyncio

from adapters.network_monitor import NetworkMonitor


class ScriptedProbe:
    """Returns the given results in order, repeating the last one."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def __call__(self) -> bool:
        self.calls += 1
        if len(self.results) > 1:
            return self.results.pop(0)
        return self.results[0]


def test_assumes_online_before_first_probe():
    monitor = NetworkMonitor(probe=ScriptedProbe(False))

    assert monitor.is_connected is True
    assert monitor.running is False


def test_check_once_updates_status():
    monitor = NetworkMonitor(probe=ScriptedProbe(False, True))

    assert asyncio.run(monitor.check_once()) is False
    assert monitor.is_connected is False
    assert asyncio.run(monitor.check_once()) is True
    assert monitor.is_connected is True


def test_background_loop_probes_repeatedly():
    """
    Verifies:
    - start() launches the probe loop
    - status follows the probe results
    - stop() cancels the loop
    """
    probe = ScriptedProbe(True, False)
    monitor = NetworkMonitor(interval=0.01, probe=probe)

    async def scenario():
        monitor.start()
        assert monitor.running is True
        # starting twice keeps the same loop
        monitor.start()
        await asyncio.sleep(0.05)
        status = monitor.is_connected
        await monitor.stop()
        return status

    assert asyncio.run(scenario()) is False
    assert probe.calls >= 2
    assert monitor.running is False


def test_stop_without_start_is_noop():
    asyncio.run(NetworkMonitor(probe=ScriptedProbe(True)).stop())


def test_tcp_probe_unreachable_host():
    """A refused connection on localhost reports offline"""
    monitor = NetworkMonitor(host="127.0.0.1", port=1, timeout=0.5)

    assert asyncio.run(monitor.check_once()) is False
