"""Drum-hit patterns per style and meter, and synth rhythm patterns.

One step is a sixteenth note. Drum patterns are 16 steps long in 4/4 and 12
steps long in 3/4 and 6/8; synth rhythms are always 16 steps long.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, TypeAlias

_LOGGER = logging.getLogger("chordgen.patterns")

DrumInstrument: TypeAlias = Literal["kick", "snare", "hihat", "open_hat"]
ArpDirection: TypeAlias = Literal["up", "down", "updown", "random"]
Pattern: TypeAlias = tuple[int, ...]
DrumPattern: TypeAlias = Mapping[DrumInstrument, Pattern]

DRUM_INSTRUMENTS: tuple[DrumInstrument, ...] = ("kick", "snare", "hihat", "open_hat")
DEFAULT_METER = 4

DRUM_STYLE_PATTERNS: Mapping[str, Mapping[int, DrumPattern]] = MappingProxyType(
    {
        "basic": {
            4: {
                "kick": (1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0),
                "snare": (0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0),
                "hihat": (1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1),
            },
            3: {
                "kick": (1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 0),
                "hihat": (1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
            6: {
                "kick": (1, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 0),
                "hihat": (1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
        },
        "hiphop": {
            4: {
                "kick": (1, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 1, 0),
                "snare": (0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 1),
                "hihat": (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0),
            },
            3: {
                "kick": (1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 1),
                "hihat": (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
            6: {
                "kick": (1, 0, 0, 0, 0, 1, 1, 0, 0, 0, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 1),
                "hihat": (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
        },
        "house": {
            4: {
                "kick": (1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0),
                "snare": (0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0),
                "hihat": (0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1),
            },
            3: {
                "kick": (1, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 0),
                "hihat": (0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0, 1),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
            6: {
                "kick": (1, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 0),
                "hihat": (0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0, 1),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
        },
        "trap": {
            4: {
                "kick": (1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 0, 0),
                "snare": (0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0),
                "hihat": (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0),
            },
            3: {
                "kick": (1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 0),
                "hihat": (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
            6: {
                "kick": (1, 0, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 0),
                "hihat": (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
        },
        "dnb": {
            4: {
                "kick": (1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0),
                "snare": (0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0),
                "hihat": (1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1),
            },
            3: {
                "kick": (1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 1, 0),
                "hihat": (1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
            6: {
                "kick": (1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 1, 0),
                "hihat": (1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
        },
        "reggae": {
            4: {
                "kick": (1, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 0, 0),
                "snare": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0),
                "hihat": (0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
            },
            3: {
                "kick": (1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0),
                "snare": (0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0),
                "hihat": (0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0, 1),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
            6: {
                "kick": (1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0),
                "snare": (0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0),
                "hihat": (0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0, 1),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
        },
        "shuffle": {
            4: {
                "kick": (1, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0, 0),
                "snare": (0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0),
                "hihat": (1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1, 0),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1),
            },
            3: {
                "kick": (1, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 0),
                "hihat": (1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
            6: {
                "kick": (1, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 0),
                "hihat": (1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1),
                "open_hat": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
            },
        },
        "bossa": {
            4: {
                "kick": (1, 0, 0, 1, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 0, 0),
                "snare": (0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 1, 0),
                "hihat": (1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1, 0),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
            },
            3: {
                "kick": (1, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 0),
                "snare": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
                "hihat": (1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
            },
            6: {
                "kick": (1, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 0),
                "snare": (0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1),
                "hihat": (1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
            },
        },
        "reggaeton": {
            4: {
                "kick": (1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0),
                "snare": (0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1),
                "hihat": (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
            },
            3: {
                "kick": (1, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0),
                "snare": (0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0, 1),
                "hihat": (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
            },
            6: {
                "kick": (1, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0),
                "snare": (0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0, 1),
                "hihat": (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
            },
        },
        "none": {
            4: {
                "kick": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
                "snare": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
                "hihat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
            },
            3: {
                "kick": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
                "snare": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
                "hihat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
            },
            6: {
                "kick": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
                "snare": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
                "hihat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
                "open_hat": (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
            },
        },
    }
)

DRUM_STYLES: tuple[str, ...] = tuple(DRUM_STYLE_PATTERNS)


@dataclass(frozen=True, slots=True)
class SynthRhythm:
    """A 16-step trigger pattern for the chord voice.

    ``arp_direction`` is set for arpeggio rhythms, which sound one chord tone
    per trigger instead of the whole chord.
    """

    name: str
    pattern: Pattern
    arp_direction: ArpDirection | None = None

    @property
    def is_arpeggio(self) -> bool:
        return self.arp_direction is not None


_EIGHTHS: Pattern = (1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0)

SYNTH_RHYTHMS: Mapping[str, SynthRhythm] = MappingProxyType(
    {
        "sustained": SynthRhythm("Sustained", (1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0)),
        "pulse": SynthRhythm("Pulse", (1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0)),
        "offbeat": SynthRhythm("Offbeat", (0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0)),
        "staccato": SynthRhythm("Staccato", _EIGHTHS),
        "syncopated": SynthRhythm("Syncopated", (1, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 0, 0, 0, 1, 0)),
        "triplet": SynthRhythm("Triplet", (1, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0, 1, 0, 0, 0)),
        "dotted": SynthRhythm("Dotted", (1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 0, 0)),
        "driving": SynthRhythm("Driving", (1, 0, 1, 0, 1, 0, 1, 0, 1, 1, 1, 0, 1, 0, 1, 0)),
        "sparse": SynthRhythm("Sparse", (1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0)),
        "arp_up": SynthRhythm("Arp Up", _EIGHTHS, "up"),
        "arp_down": SynthRhythm("Arp Down", _EIGHTHS, "down"),
        "arp_updown": SynthRhythm("Arp U/D", _EIGHTHS, "updown"),
        "arp_random": SynthRhythm("Arp Rand", _EIGHTHS, "random"),
    }
)

SUSTAINED_RHYTHM = "sustained"


def resolve_drum_style(style: str) -> str:
    if style in DRUM_STYLE_PATTERNS:
        return style
    fallback = DRUM_STYLES[0]
    _LOGGER.debug("Unknown drum style %r; using %s", style, fallback)
    return fallback


def drum_pattern(style: str, meter: int) -> DrumPattern:
    """Pattern table for a drum style and meter, falling back to basic and 4/4."""
    by_meter = DRUM_STYLE_PATTERNS[resolve_drum_style(style)]
    return by_meter.get(meter, by_meter[DEFAULT_METER])


def drum_pattern_length(pattern: DrumPattern) -> int:
    return len(pattern["kick"])


def resolve_rhythm(name: str) -> str:
    if name in SYNTH_RHYTHMS:
        return name
    _LOGGER.debug("Unknown synth rhythm %r; using %s", name, SUSTAINED_RHYTHM)
    return SUSTAINED_RHYTHM
