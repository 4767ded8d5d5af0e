# pyright: reportUnknownVariableType=false
# pyright: reportUnknownMemberType=false

"""
Voice synthesizer: one note of one timbre rendered to sample buffers.

Each timbre is a fixed recipe (oscillator stack, filter, amplitude envelope,
reverb send) registered in ``TIMBRES``. Recipes share the signature
``(frequency, duration, volume, reverb) -> RenderedVoice``; the synthesizer
places the result on the engine at the requested start time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, TypeAlias

import numpy as np

from .audio import FloatArray
from .dsp import Automation, apply_filter, num_samples, oscillator

if TYPE_CHECKING:
    from .engine import AudioEngine

_LOGGER = logging.getLogger("chordgen.voices")

@dataclass(frozen=True, slots=True)
class RenderedVoice:
    """Dry signal for the master bus plus the signal sent to the reverb."""

    dry: FloatArray
    send: FloatArray = field(default_factory=lambda: np.zeros(0))


TimbreFn: TypeAlias = Callable[[float, float, float, float], RenderedVoice]


def _routed(signal: FloatArray, *, wet: float, dry: float = 1.0) -> RenderedVoice:
    if wet <= 0.0:
        return RenderedVoice(signal * dry)
    return RenderedVoice(signal * dry, signal * wet)


def _sustain_envelope(level: float, attack: float, release: float, duration: float) -> Automation:
    """Linear attack to ``level``, hold, linear release ending at ``duration``."""
    return (
        Automation()
        .set_value_at_time(0.0, 0.0)
        .linear_ramp_to_value_at_time(level, attack)
        .set_value_at_time(level, duration - release)
        .linear_ramp_to_value_at_time(0.0, duration)
    )


def pad(frequency: float, duration: float, volume: float, reverb: float) -> RenderedVoice:
    """Sawtooth and slightly sharp triangle through a soft lowpass."""
    n = num_samples(duration)
    tone = oscillator("sawtooth", frequency, duration) + oscillator("triangle", frequency * 1.002, duration)
    tone = apply_filter(tone, "lowpass", 2000.0, q=1.0)
    envelope = _sustain_envelope(volume * 0.15, 0.1, 0.1, duration)
    return _routed(tone * envelope.render(n), wet=reverb, dry=1.0 - reverb)


def pluck(frequency: float, duration: float, volume: float, _reverb: float) -> RenderedVoice:
    n = num_samples(duration)
    tone = oscillator("triangle", frequency, duration)
    cutoff = Automation().set_value_at_time(4000.0, 0.0).exponential_ramp_to_value_at_time(500.0, 0.5)
    tone = apply_filter(tone, "lowpass", cutoff.render(n))
    envelope = (
        Automation()
        .set_value_at_time(volume * 0.3, 0.0)
        .exponential_ramp_to_value_at_time(0.001, min(duration, 1.5))
    )
    return RenderedVoice(tone * envelope.render(n))


def keys(frequency: float, duration: float, volume: float, reverb: float) -> RenderedVoice:
    n = num_samples(duration)
    tone = oscillator("sine", frequency, duration) + oscillator("triangle", frequency * 2, duration)
    tone = apply_filter(tone, "lowpass", 3000.0)
    envelope = (
        Automation()
        .set_value_at_time(volume * 0.2, 0.0)
        .set_value_at_time(volume * 0.14, 0.1)
        .linear_ramp_to_value_at_time(0.0, duration - 0.1)
    )
    return _routed(tone * envelope.render(n), wet=reverb * 0.5, dry=1.0 - reverb * 0.5)


def strings(frequency: float, duration: float, volume: float, reverb: float) -> RenderedVoice:
    n = num_samples(duration)
    tone = sum(oscillator("sawtooth", frequency * detune, duration) for detune in (1.0, 1.003, 0.997))
    tone = apply_filter(np.asarray(tone), "lowpass", 1500.0, q=0.5)
    envelope = _sustain_envelope(volume * 0.1, 0.15, 0.15, duration)
    return _routed(tone * envelope.render(n), wet=reverb * 0.8)


_ORGAN_HARMONICS = ((1, 1.0), (2, 0.5), (3, 0.25), (4, 0.125))


def organ(frequency: float, duration: float, volume: float, reverb: float) -> RenderedVoice:
    """Four sine harmonics with halving levels, no filter."""
    n = num_samples(duration)
    tone = sum(oscillator("sine", frequency * harmonic, duration) * level for harmonic, level in _ORGAN_HARMONICS)
    envelope = _sustain_envelope(volume * 0.12, 0.05, 0.1, duration)
    return _routed(np.asarray(tone) * envelope.render(n), wet=reverb * 0.3)


_BELL_PARTIALS = (1.0, 2.4, 3.0, 4.5, 5.33)
_BELL_LEVELS = (1.0, 0.6, 0.4, 0.25, 0.2)


def bell(frequency: float, duration: float, volume: float, reverb: float) -> RenderedVoice:
    """Inharmonic sine partials; higher partials decay sooner."""
    n = num_samples(duration)
    tone = np.zeros(n)
    for i, (partial, level) in enumerate(zip(_BELL_PARTIALS, _BELL_LEVELS)):
        envelope = (
            Automation()
            .set_value_at_time(volume * 0.15 * level, 0.0)
            .exponential_ramp_to_value_at_time(0.001, duration * (1 - i * 0.15))
        )
        tone += oscillator("sine", frequency * partial, duration) * envelope.render(n)
    return _routed(tone, wet=reverb * 0.6)


def bass(frequency: float, duration: float, volume: float, _reverb: float) -> RenderedVoice:
    """Sawtooth and square one octave down through a resonant lowpass."""
    n = num_samples(duration)
    root = frequency / 2
    tone = oscillator("sawtooth", root, duration) + oscillator("square", root, duration)
    tone = apply_filter(tone, "lowpass", 400.0, q=2.0)
    envelope = (
        Automation()
        .set_value_at_time(volume * 0.25, 0.0)
        .set_value_at_time(volume * 0.2, 0.1)
        .linear_ramp_to_value_at_time(0.0, duration)
    )
    return RenderedVoice(tone * envelope.render(n))


def lead(frequency: float, duration: float, volume: float, reverb: float) -> RenderedVoice:
    n = num_samples(duration)
    tone = oscillator("sawtooth", frequency, duration) + oscillator("square", frequency * 1.005, duration)
    cutoff = Automation().set_value_at_time(3000.0, 0.0).linear_ramp_to_value_at_time(1000.0, duration)
    tone = apply_filter(tone, "lowpass", cutoff.render(n), q=4.0)
    envelope = (
        Automation()
        .set_value_at_time(0.0, 0.0)
        .linear_ramp_to_value_at_time(volume * 0.18, 0.02)
        .set_value_at_time(volume * 0.13, 0.1)
        .linear_ramp_to_value_at_time(0.0, duration)
    )
    return _routed(tone * envelope.render(n), wet=reverb * 0.4)


def brass(frequency: float, duration: float, volume: float, reverb: float) -> RenderedVoice:
    """Two sawtooths an octave apart with an opening filter swell."""
    n = num_samples(duration)
    tone = oscillator("sawtooth", frequency, duration) + oscillator("sawtooth", frequency * 2.01, duration)
    cutoff = (
        Automation()
        .set_value_at_time(500.0, 0.0)
        .linear_ramp_to_value_at_time(2500.0, 0.15)
        .linear_ramp_to_value_at_time(1500.0, duration)
    )
    tone = apply_filter(tone, "lowpass", cutoff.render(n), q=1.0)
    envelope = (
        Automation()
        .set_value_at_time(0.0, 0.0)
        .linear_ramp_to_value_at_time(volume * 0.15, 0.1)
        .set_value_at_time(volume * 0.12, 0.2)
        .linear_ramp_to_value_at_time(0.0, duration)
    )
    return _routed(tone * envelope.render(n), wet=reverb * 0.3)


def fm(frequency: float, duration: float, volume: float, _reverb: float) -> RenderedVoice:
    """Sine carrier frequency-modulated by a sine at twice its pitch."""
    n = num_samples(duration)
    modulator = oscillator("sine", frequency * 2, duration) * (frequency * 1.5)
    tone = oscillator("sine", frequency + modulator, duration)
    envelope = (
        Automation()
        .set_value_at_time(0.0, 0.0)
        .linear_ramp_to_value_at_time(volume * 0.2, 0.05)
        .exponential_ramp_to_value_at_time(0.001, duration)
    )
    return RenderedVoice(tone * envelope.render(n))


def supersaw(frequency: float, duration: float, volume: float, reverb: float) -> RenderedVoice:
    """Seven sawtooths spread 1% apart around the pitch."""
    n = num_samples(duration)
    tone = sum(oscillator("sawtooth", frequency * (1 + (i - 3) * 0.01), duration) for i in range(7))
    tone = apply_filter(np.asarray(tone), "lowpass", 4000.0, q=1.0)
    envelope = _sustain_envelope(volume * 0.08, 0.05, 0.1, duration)
    return _routed(tone * envelope.render(n), wet=reverb * 0.5)


def wobble(frequency: float, duration: float, volume: float, _reverb: float) -> RenderedVoice:
    """Sawtooth through a resonant lowpass swept by a 4 Hz LFO."""
    n = num_samples(duration)
    tone = oscillator("sawtooth", frequency, duration)
    cutoff = 1500.0 + 1000.0 * oscillator("sine", 4.0, duration)
    tone = apply_filter(tone, "lowpass", cutoff, q=8.0)
    envelope = _sustain_envelope(volume * 0.2, 0.05, 0.1, duration)
    return RenderedVoice(tone * envelope.render(n))


TIMBRES: Mapping[str, TimbreFn] = MappingProxyType(
    {
        "pad": pad,
        "pluck": pluck,
        "keys": keys,
        "strings": strings,
        "organ": organ,
        "bell": bell,
        "bass": bass,
        "lead": lead,
        "brass": brass,
        "fm": fm,
        "supersaw": supersaw,
        "wobble": wobble,
    }
)

DEFAULT_TIMBRE = next(iter(TIMBRES))


def resolve_timbre(timbre: str) -> str:
    if timbre in TIMBRES:
        return timbre
    _LOGGER.debug("Unknown timbre %r; using %s", timbre, DEFAULT_TIMBRE)
    return DEFAULT_TIMBRE


def render_voice(
    frequency: float,
    duration: float,
    timbre: str,
    *,
    volume: float,
    reverb: float,
) -> RenderedVoice:
    return TIMBRES[resolve_timbre(timbre)](frequency, duration, volume, reverb)


class VoiceSynthesizer:
    """Renders notes and hands them to the engine's active-voice registry."""

    def __init__(self, engine: "AudioEngine") -> None:
        self._engine = engine

    def render(
        self,
        frequency: float,
        start_time: float,
        duration: float,
        timbre: str,
        *,
        volume: float,
        reverb: float,
    ) -> None:
        voice = render_voice(frequency, duration, timbre, volume=volume, reverb=reverb)
        self._engine.schedule(start_time, voice.dry, voice.send)

    def render_chord(
        self,
        frequencies: Iterable[float],
        start_time: float,
        duration: float,
        timbre: str,
        *,
        volume: float,
        reverb: float,
    ) -> None:
        for frequency in frequencies:
            self.render(frequency, start_time, duration, timbre, volume=volume, reverb=reverb)
