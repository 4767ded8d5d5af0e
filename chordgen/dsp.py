# pyright: reportUnknownVariableType=false
# pyright: reportUnknownMemberType=false
# pyright: reportUnknownArgumentType=false

"""
Synthesis primitives shared by the voice and percussion synthesizers:

1. Oscillators: phase-accumulating sine/triangle/sawtooth/square, so the
   frequency may be a constant or a per-sample curve (sweeps, FM)
2. Automation: breakpoint curves (set / linear ramp / exponential ramp)
3. Filters: biquad lowpass/highpass, static or with an automated cutoff
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Literal, TypeAlias

import numpy as np
from numpy.typing import NDArray
from scipy.signal import lfilter  # type: ignore[import]

from .audio import SAMPLE_RATE, FloatArray

Waveform: TypeAlias = Literal["sine", "triangle", "sawtooth", "square"]
FilterKind: TypeAlias = Literal["lowpass", "highpass"]
Frequency: TypeAlias = float | FloatArray

# Automated filter coefficients are refreshed once per quantum
QUANTUM = 128


def num_samples(duration: float, sr: int = SAMPLE_RATE) -> int:
    return max(0, int(round(duration * sr)))


# =============================================================================
# OSCILLATORS
# =============================================================================


def _phase(frequency: Frequency, n: int, sr: int) -> tuple[FloatArray, FloatArray]:
    """Per-sample phase in cycles [0, 1) and per-sample phase increment."""
    freq = np.broadcast_to(np.asarray(frequency, dtype=np.float64), (n,))
    increments = freq / sr
    if n == 0:
        return np.zeros(0), increments
    phase = np.concatenate(([0.0], np.cumsum(increments[:-1]))) % 1.0
    return phase, increments


def _polyblep(phase: FloatArray, dt: FloatArray) -> FloatArray:
    """2-point PolyBLEP residual for a unit step at phase 0."""
    dt = np.clip(np.abs(dt), 1e-9, 0.5)
    correction = np.zeros_like(phase)

    rising = phase < dt
    t1 = phase[rising] / dt[rising]
    correction[rising] = t1 + t1 - t1 * t1 - 1.0

    falling = phase > 1.0 - dt
    t2 = (phase[falling] - 1.0) / dt[falling]
    correction[falling] = t2 * t2 + t2 + t2 + 1.0
    return correction


def _sine(phase: FloatArray, _dt: FloatArray) -> FloatArray:
    return np.sin(2 * np.pi * phase)


def _triangle(phase: FloatArray, _dt: FloatArray) -> FloatArray:
    return 1.0 - 4.0 * np.abs(((phase + 0.25) % 1.0) - 0.5)


def _sawtooth(phase: FloatArray, dt: FloatArray) -> FloatArray:
    return 2.0 * phase - 1.0 - _polyblep(phase, dt)


def _square(phase: FloatArray, dt: FloatArray) -> FloatArray:
    naive = np.where(phase < 0.5, 1.0, -1.0)
    return naive + _polyblep(phase, dt) - _polyblep((phase + 0.5) % 1.0, dt)


WAVEFORMS: Mapping[Waveform, Callable[[FloatArray, FloatArray], FloatArray]] = MappingProxyType(
    {
        "sine": _sine,
        "triangle": _triangle,
        "sawtooth": _sawtooth,
        "square": _square,
    }
)


def oscillator(
    waveform: Waveform,
    frequency: Frequency,
    duration: float,
    sr: int = SAMPLE_RATE,
) -> FloatArray:
    """Unit-amplitude oscillator; ``frequency`` may vary per sample."""
    n = num_samples(duration, sr)
    phase, increments = _phase(frequency, n, sr)
    return WAVEFORMS[waveform](phase, increments)


def white_noise(duration: float, rng: np.random.Generator, sr: int = SAMPLE_RATE) -> FloatArray:
    return rng.uniform(-1.0, 1.0, num_samples(duration, sr))


def fit_length(signal: FloatArray, n: int) -> FloatArray:
    if len(signal) >= n:
        return signal[:n]
    return np.pad(signal, (0, n - len(signal)))


# =============================================================================
# AUTOMATION
# =============================================================================


@dataclass
class Automation:
    """Breakpoint curve over a note's lifetime, times in seconds from note start.

    Events are applied in time order. A ramp runs from the previous event's
    (time, value) to its own; exponential ramps that would cross or start at
    zero hold the previous value instead.
    """

    default: float = 0.0
    _events: list[tuple[float, int, str, float]] = field(default_factory=list)

    def _add(self, kind: str, value: float, time: float) -> "Automation":
        self._events.append((time, len(self._events), kind, value))
        return self

    def set_value_at_time(self, value: float, time: float) -> "Automation":
        return self._add("set", value, time)

    def linear_ramp_to_value_at_time(self, value: float, time: float) -> "Automation":
        return self._add("linear", value, time)

    def exponential_ramp_to_value_at_time(self, value: float, time: float) -> "Automation":
        return self._add("exponential", value, time)

    def render(self, n: int, sr: int = SAMPLE_RATE) -> FloatArray:
        t = np.arange(n) / sr
        values = np.full(n, self.default, dtype=np.float64)
        prev_time, prev_value = 0.0, self.default
        for time, _, kind, value in sorted(self._events):
            start = int(np.searchsorted(t, prev_time, side="left"))
            end = int(np.searchsorted(t, time, side="left"))
            segment = t[start:end]
            span = time - prev_time
            if kind == "linear" and span > 0:
                values[start:end] = prev_value + (value - prev_value) * (segment - prev_time) / span
            elif kind == "exponential" and span > 0 and prev_value * value > 0:
                values[start:end] = prev_value * (value / prev_value) ** ((segment - prev_time) / span)
            else:
                values[start:end] = prev_value
            prev_time, prev_value = time, value
        values[int(np.searchsorted(t, prev_time, side="left")) :] = prev_value
        return values


# =============================================================================
# FILTERS
# =============================================================================


def _quantize(value: float, step: float = 0.1) -> float:
    return round(value / step) * step


@lru_cache(maxsize=4096)
def _biquad_cached(
    kind: FilterKind, cutoff: float, q: float, sr: int
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    w0 = 2 * math.pi * cutoff / sr
    cos_w0 = math.cos(w0)
    alpha = math.sin(w0) / (2 * q)
    if kind == "lowpass":
        b = ((1 - cos_w0) / 2, 1 - cos_w0, (1 - cos_w0) / 2)
    else:
        b = ((1 + cos_w0) / 2, -(1 + cos_w0), (1 + cos_w0) / 2)
    a0 = 1 + alpha
    a = (1.0, -2 * cos_w0 / a0, (1 - alpha) / a0)
    return np.array(b) / a0, np.array(a)


def biquad_coefficients(
    kind: FilterKind, cutoff: float, q: float = 1.0, sr: int = SAMPLE_RATE
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    clamped = min(max(cutoff, 10.0), sr * 0.49)
    return _biquad_cached(kind, _quantize(clamped), max(q, 1e-4), sr)


def apply_filter(
    signal: FloatArray,
    kind: FilterKind,
    cutoff: Frequency,
    q: float = 1.0,
    sr: int = SAMPLE_RATE,
) -> FloatArray:
    """Biquad filter; an array ``cutoff`` is sampled once per quantum."""
    if np.ndim(cutoff) == 0:
        b, a = biquad_coefficients(kind, float(cutoff), q, sr)  # type: ignore[arg-type]
        return np.asarray(lfilter(b, a, signal), dtype=np.float64)

    curve = np.asarray(cutoff, dtype=np.float64)
    output = np.empty_like(signal)
    state = np.zeros(2)
    for start in range(0, len(signal), QUANTUM):
        stop = start + QUANTUM
        b, a = biquad_coefficients(kind, float(curve[start]), q, sr)
        filtered, state = lfilter(b, a, signal[start:stop], zi=state)
        output[start:stop] = filtered
    return output
