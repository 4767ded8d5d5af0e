"""Procedural percussion: kick, snare, closed/open hi-hat and metronome click."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, TypeAlias

import numpy as np

from .audio import FloatArray
from .dsp import Automation, apply_filter, num_samples, oscillator, white_noise
from .patterns import DrumInstrument

if TYPE_CHECKING:
    from .engine import AudioEngine

HitFn: TypeAlias = Callable[[float, np.random.Generator], FloatArray]

KICK_DURATION = 0.3
SNARE_DURATION = 0.2
CLOSED_HAT_DURATION = 0.05
OPEN_HAT_DURATION = 0.3
CLICK_DURATION = 0.05


def kick(volume: float, _rng: np.random.Generator) -> FloatArray:
    """Sine swept exponentially from 150 Hz to 40 Hz."""
    n = num_samples(KICK_DURATION)
    sweep = Automation().set_value_at_time(150.0, 0.0).exponential_ramp_to_value_at_time(40.0, 0.1)
    tone = oscillator("sine", sweep.render(n), KICK_DURATION)
    gain = Automation().set_value_at_time(volume * 0.8, 0.0).exponential_ramp_to_value_at_time(0.001, 0.3)
    return tone * gain.render(n)


def snare(volume: float, rng: np.random.Generator) -> FloatArray:
    """Highpassed noise burst layered with a short 180 Hz body."""
    n = num_samples(SNARE_DURATION)
    level = volume * 0.4
    noise = apply_filter(white_noise(SNARE_DURATION, rng), "highpass", 1000.0)
    noise_gain = Automation().set_value_at_time(level, 0.0).exponential_ramp_to_value_at_time(0.001, 0.15)
    body = oscillator("sine", 180.0, SNARE_DURATION)
    body_gain = Automation().set_value_at_time(level * 0.5, 0.0).exponential_ramp_to_value_at_time(0.001, 0.1)
    return noise * noise_gain.render(n) + body * body_gain.render(n)


def _hat(volume: float, rng: np.random.Generator, *, is_open: bool) -> FloatArray:
    duration = OPEN_HAT_DURATION if is_open else CLOSED_HAT_DURATION
    decay = 0.2 if is_open else 0.05
    level = volume * (0.25 if is_open else 0.2)
    n = num_samples(duration)
    noise = apply_filter(white_noise(duration, rng), "highpass", 7000.0)
    gain = Automation().set_value_at_time(level, 0.0).exponential_ramp_to_value_at_time(0.001, decay)
    return noise * gain.render(n)


def hihat(volume: float, rng: np.random.Generator) -> FloatArray:
    return _hat(volume, rng, is_open=False)


def open_hat(volume: float, rng: np.random.Generator) -> FloatArray:
    return _hat(volume, rng, is_open=True)


def click(accent: bool) -> FloatArray:
    n = num_samples(CLICK_DURATION)
    tone = oscillator("sine", 1000.0 if accent else 800.0, CLICK_DURATION)
    gain = Automation().set_value_at_time(0.1, 0.0).exponential_ramp_to_value_at_time(0.001, 0.05)
    return tone * gain.render(n)


DRUM_HITS: Mapping[DrumInstrument, HitFn] = MappingProxyType(
    {
        "kick": kick,
        "snare": snare,
        "hihat": hihat,
        "open_hat": open_hat,
    }
)


class PercussionSynthesizer:
    def __init__(self, engine: "AudioEngine", rng: np.random.Generator | None = None) -> None:
        self._engine = engine
        self._rng = rng if rng is not None else np.random.default_rng()

    def trigger(self, instrument: DrumInstrument, time: float, volume: float) -> None:
        self._engine.schedule(time, DRUM_HITS[instrument](volume, self._rng))

    def metronome(self, time: float, accent: bool) -> None:
        self._engine.schedule(time, click(accent))
