"""
Test fixtures and configuration.
"""

import logging
import os

import pytest

from crieur.config.settings import reset_settings
from crieur.reporter import SystemReporter

os.environ.setdefault("ENV", "test")


@pytest.fixture(scope="session")
def test_reporter() -> SystemReporter:
    """Reporter shared by all tests."""
    return SystemReporter(name="crieur.tests", level=logging.INFO, verbose=1)


@pytest.fixture(autouse=True)
def attach_reporter(request, test_reporter):
    """Expose the test reporter as self.reporter on test classes."""
    if request.instance is not None:
        request.instance.reporter = test_reporter
    yield


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings between tests."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def quiet_reporter() -> SystemReporter:
    """Reporter for components under test (errors only)."""
    return SystemReporter(name="crieur.component", level=logging.ERROR, verbose=0)
