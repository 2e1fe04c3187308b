import pytest

from errors import PersistenceWriteFailure
from storage import MemorySlot
from week_store import WeekStore


class BrokenSlot(MemorySlot):
    """Slot whose writes always fail, reads behave normally."""

    def write(self, text):
        raise PersistenceWriteFailure("disk full")


@pytest.fixture
def slot():
    return MemorySlot()


@pytest.fixture
def store(slot):
    store = WeekStore(slot)
    store.load()
    return store


@pytest.fixture
def broken_store():
    store = WeekStore(BrokenSlot())
    store.load()
    return store
