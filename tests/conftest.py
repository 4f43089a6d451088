from unittest.mock import MagicMock

import pytest

from catalog.shared.domain.events import DomainEvent
from catalog.shared.infrastructure.bus import InMemoryEventBus
from catalog.sku.repositories.memory_repository import InMemoryCatalogRepository


class RecordingHandler:
    """Collects every event it is handed."""

    def __init__(self):
        self.events = []

    def handle(self, event):
        self.events.append(event)


class FailingHandler:
    """Raises on every event, like a subscriber with a bug."""

    def handle(self, event):
        raise RuntimeError("subscriber failed")


@pytest.fixture()
def repo():
    return InMemoryCatalogRepository()


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.exists_by_sku.return_value = False
    return repo


@pytest.fixture()
def rng():
    """Random source that always draws 1234 unless told otherwise."""
    source = MagicMock()
    source.randint.return_value = 1234
    return source


@pytest.fixture()
def bus():
    return InMemoryEventBus()


@pytest.fixture()
def failing_handler():
    return FailingHandler()


@pytest.fixture()
def recorded_events(bus):
    handler = RecordingHandler()
    bus.subscribe(DomainEvent, handler)
    return handler.events
