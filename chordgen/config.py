from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidConfigError

_LOGGER = logging.getLogger("chordgen.config")

TEMPO_MIN = 40
TEMPO_MAX = 200
STEPS_PER_BEAT = 4
# Arpeggio notes and rhythmic chord stabs last one and a half sixteenths
SHORT_NOTE_STEPS = 1.5

Meter: TypeAlias = Literal[3, 4, 6]
BarsPerChord: TypeAlias = Literal[1, 2, 4]


def clamp_tempo(value: float) -> int:
    return int(min(max(round(value), TEMPO_MIN), TEMPO_MAX))


class PlaybackSettings(BaseModel):
    """Transport and sound settings read by the scheduler on every step.

    Lookup names (drum style, synth, rhythm) stay plain strings: unknown names
    fall back to defaults at lookup time rather than failing validation.
    """

    bpm: int = 90
    meter: Meter = 4
    bars_per_chord: BarsPerChord = 2
    drums_enabled: bool = True
    drum_style: str = "basic"
    metronome_enabled: bool = False
    chord_volume: float = Field(default=0.7, ge=0.0, le=1.0)
    drum_volume: float = Field(default=0.6, ge=0.0, le=1.0)
    reverb_mix: float = Field(default=0.4, ge=0.0, le=1.0)
    synth: str = "pad"
    rhythm: str = "sustained"

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("bpm", mode="before")
    @classmethod
    def _clamp_bpm(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("bpm must be a number")
        try:
            number = float(value)
        except TypeError as exc:
            raise ValueError("bpm must be a number") from exc
        if not math.isfinite(number):
            raise ValueError("bpm must be finite")
        return clamp_tempo(number)

    @property
    def seconds_per_beat(self) -> float:
        return 60.0 / self.bpm

    @property
    def step_duration(self) -> float:
        return self.seconds_per_beat / STEPS_PER_BEAT

    @property
    def steps_per_bar(self) -> int:
        return self.meter * STEPS_PER_BEAT

    @property
    def steps_per_chord(self) -> int:
        return self.steps_per_bar * self.bars_per_chord

    @property
    def chord_duration(self) -> float:
        return self.seconds_per_beat * self.meter * self.bars_per_chord

    @property
    def short_note_duration(self) -> float:
        return self.step_duration * SHORT_NOTE_STEPS

    def update(self, **changes: Any) -> "PlaybackSettings":
        """Return a validated copy with ``changes`` applied."""
        return parse_settings({**self.model_dump(), **changes})

    def commit_tempo(self, raw: str | float) -> "PlaybackSettings":
        """Apply free-form tempo input; unparseable input keeps the current tempo."""
        try:
            number = float(raw)
        except (TypeError, ValueError):
            _LOGGER.info("Ignoring tempo input %r; keeping %d BPM", raw, self.bpm)
            return self
        if not math.isfinite(number):
            _LOGGER.info("Ignoring tempo input %r; keeping %d BPM", raw, self.bpm)
            return self
        return self.model_copy(update={"bpm": clamp_tempo(number)})


class GeneratorConfig(BaseModel):
    """Harmonic inputs: key, mode and style names."""

    key: str = "C"
    mode: str = "major"
    style: str = "modern"

    model_config = ConfigDict(frozen=True, extra="forbid")


def parse_settings(payload: Mapping[str, Any]) -> PlaybackSettings:
    try:
        return PlaybackSettings.model_validate(dict(payload))
    except ValidationError as exc:
        raise InvalidConfigError(str(exc)) from exc
