import sys
import os
from datetime import datetime, timedelta, timezone

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from sticky_notes.storage.backends import MemoryStorage


class FakeSignal:
    def __init__(self):
        self._slots = []

    def connect(self, slot):
        self._slots.append(slot)

    def emit(self, *args):
        for slot in list(self._slots):
            slot(*args)


class FakeTimer:
    """Single-shot timer driven by the test instead of an event loop."""

    def __init__(self, interval_ms):
        self.interval_ms = interval_ms
        self.timeout = FakeSignal()
        self.starts = 0
        self.deleted = False
        self._active = False

    def start(self):
        self.starts += 1
        self._active = True

    def stop(self):
        self._active = False

    def isActive(self):
        return self._active

    def deleteLater(self):
        self.deleted = True

    def fire(self):
        if self._active:
            self._active = False
            self.timeout.emit()


class TimerFactory:
    def __init__(self):
        self.created = []

    def __call__(self, interval_ms):
        timer = FakeTimer(interval_ms)
        self.created.append(timer)
        return timer


class StepClock:
    """Each call returns a moment one second after the previous one."""

    def __init__(self, start=datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def timers():
    return TimerFactory()
