"""Pytest configuration for stacksim tests."""

import pytest
import signal
import sys

from stacksim import AsyncScheduler, CallStack, PropagationEngine


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "timeout(seconds): set custom timeout for test")


def timeout_handler(signum, frame):
    """Handle timeout signal."""
    pytest.fail("Test timed out")


@pytest.fixture(autouse=True)
def test_timeout(request):
    """Apply a timeout to all tests.

    Default is 10 seconds, but tests can use a longer timeout by marking them:
    @pytest.mark.timeout(30)  # 30 second timeout
    """
    if sys.platform != "win32":
        marker = request.node.get_closest_marker("timeout")
        timeout_seconds = marker.args[0] if marker else 10

        old_handler = signal.signal(signal.SIGALRM, timeout_handler)
        signal.alarm(timeout_seconds)
        yield
        signal.alarm(0)
        signal.signal(signal.SIGALRM, old_handler)
    else:
        yield


@pytest.fixture
def stack():
    return CallStack()


@pytest.fixture
def engine():
    return PropagationEngine()


@pytest.fixture
def scheduler(engine):
    return AsyncScheduler(engine=engine)
