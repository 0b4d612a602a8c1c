"""
Shared fixtures for the DeFi Composer test suite.
"""
import pytest

from defi_composer.application.api import CompositionEngine
from defi_composer.application.events import EventBus
from defi_composer.features.compositions.application import CompositionStore
from defi_composer.utils.message import Log


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep engine logging out of test output."""
    Log.set_level("ERROR")
    yield
    Log.set_level("INFO")


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def store(event_bus):
    return CompositionStore(event_bus=event_bus)


@pytest.fixture
def engine():
    return CompositionEngine.create("Test Composition")
