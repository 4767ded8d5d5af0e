from __future__ import annotations

from collections.abc import Iterator
from typing import Callable

import pytest

from chordgen import engine


@pytest.fixture(autouse=True)
def _release_engine() -> Iterator[None]:
    yield
    engine.release()


class FakeEngine:
    """Audio clock and callback queue without any rendering."""

    def __init__(self, current_time: float = 0.0) -> None:
        self.current_time = current_time
        self.callbacks: list[tuple[float, Callable[[], None]]] = []
        self.scheduled: list[tuple[float, int]] = []

    def call_at(self, time: float, callback: Callable[[], None]) -> None:
        self.callbacks.append((time, callback))

    def schedule(self, start_time: float, dry, send=None) -> None:
        self.scheduled.append((start_time, len(dry)))

    def fire_due(self) -> None:
        due = [item for item in self.callbacks if item[0] <= self.current_time]
        self.callbacks = [item for item in self.callbacks if item[0] > self.current_time]
        for _, callback in sorted(due, key=lambda item: item[0]):
            callback()


class RecordingVoices:
    def __init__(self) -> None:
        self.notes: list[tuple[float, float, float, str]] = []
        self.chords: list[tuple[float, tuple[float, ...], float, str]] = []

    def render(self, frequency, start_time, duration, timbre, *, volume, reverb) -> None:
        self.notes.append((start_time, frequency, duration, timbre))

    def render_chord(self, frequencies, start_time, duration, timbre, *, volume, reverb) -> None:
        self.chords.append((start_time, tuple(frequencies), duration, timbre))


class RecordingPercussion:
    def __init__(self) -> None:
        self.hits: list[tuple[str, float]] = []
        self.clicks: list[tuple[float, bool]] = []

    def trigger(self, instrument, time, volume) -> None:
        self.hits.append((instrument, time))

    def metronome(self, time, accent) -> None:
        self.clicks.append((time, accent))


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def voices() -> RecordingVoices:
    return RecordingVoices()


@pytest.fixture
def percussion() -> RecordingPercussion:
    return RecordingPercussion()
