"""Pytest configuration for stacklet tests.

The machine can be handed endless loops (see the time limit tests), so
every test runs under a SIGALRM deadline.
"""

import signal
import sys

import pytest

DEFAULT_TIMEOUT = 5


def pytest_configure(config):
    config.addinivalue_line("markers", "timeout(seconds): override the per-test deadline")


def _on_timeout(signum, frame):
    pytest.fail("Test exceeded its deadline")


@pytest.fixture(autouse=True)
def deadline(request):
    """Fail any test that runs past its deadline (Unix only)."""
    if sys.platform == "win32":
        yield
        return
    marker = request.node.get_closest_marker("timeout")
    seconds = marker.args[0] if marker else DEFAULT_TIMEOUT
    previous = signal.signal(signal.SIGALRM, _on_timeout)
    signal.alarm(seconds)
    try:
        yield
    finally:
        signal.alarm(0)
        signal.signal(signal.SIGALRM, previous)
