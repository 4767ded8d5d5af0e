"""Static music-theory tables and the lookups built on them.

Every lookup resolves unknown names to the first entry of its table, so callers
never see a KeyError for a style, mode, key or chord type.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal, TypeAlias

_LOGGER = logging.getLogger("chordgen.theory")

NoteName: TypeAlias = Literal["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
ModeFamily: TypeAlias = Literal["major", "minor"]

REFERENCE_OCTAVE = 4
CHORD_OCTAVE = 3

NOTES: tuple[NoteName, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

# Reference frequencies at octave 4 (A4 = 440 Hz)
NOTE_FREQS: Mapping[str, float] = MappingProxyType(
    {
        "C": 261.63,
        "C#": 277.18,
        "D": 293.66,
        "D#": 311.13,
        "E": 329.63,
        "F": 349.23,
        "F#": 369.99,
        "G": 392.00,
        "G#": 415.30,
        "A": 440.00,
        "A#": 466.16,
        "B": 493.88,
    }
)

# Semitone offsets from the root
SCALES: Mapping[str, tuple[int, ...]] = MappingProxyType(
    {
        "major": (0, 2, 4, 5, 7, 9, 11),
        "minor": (0, 2, 3, 5, 7, 8, 10),
        "dorian": (0, 2, 3, 5, 7, 9, 10),
        "mixolydian": (0, 2, 4, 5, 7, 9, 10),
        "lydian": (0, 2, 4, 6, 7, 9, 11),
        "phrygian": (0, 1, 3, 5, 7, 8, 10),
        "locrian": (0, 1, 3, 5, 6, 8, 10),
        "aeolian": (0, 2, 3, 5, 7, 8, 10),
        "harmonic_minor": (0, 2, 3, 5, 7, 8, 11),
        "melodic_minor": (0, 2, 3, 5, 7, 9, 11),
        "whole_tone": (0, 2, 4, 6, 8, 10),
        "blues": (0, 3, 5, 6, 7, 10),
        "pentatonic_major": (0, 2, 4, 7, 9),
        "pentatonic_minor": (0, 3, 5, 7, 10),
        "hungarian": (0, 2, 3, 6, 7, 8, 11),
        "japanese": (0, 1, 5, 7, 8),
        "arabian": (0, 2, 4, 5, 6, 8, 10),
        "persian": (0, 1, 4, 5, 6, 8, 11),
        "bebop": (0, 2, 4, 5, 7, 9, 10, 11),
        "chromatic": (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11),
    }
)

MINOR_FAMILY_MODES: frozenset[str] = frozenset(
    {
        "minor",
        "dorian",
        "phrygian",
        "locrian",
        "aeolian",
        "harmonic_minor",
        "melodic_minor",
        "hungarian",
        "persian",
    }
)

# Offsets >= 12 are 9th/11th/13th extensions above the octave
CHORD_TYPES: Mapping[str, tuple[int, ...]] = MappingProxyType(
    {
        "maj": (0, 4, 7),
        "min": (0, 3, 7),
        "maj7": (0, 4, 7, 11),
        "min7": (0, 3, 7, 10),
        "dom7": (0, 4, 7, 10),
        "7sus4": (0, 5, 7, 10),
        "add9": (0, 4, 7, 14),
        "madd9": (0, 3, 7, 14),
        "maj9": (0, 4, 7, 11, 14),
        "min9": (0, 3, 7, 10, 14),
        "sus2": (0, 2, 7),
        "sus4": (0, 5, 7),
        "6": (0, 4, 7, 9),
        "min6": (0, 3, 7, 9),
        "dim": (0, 3, 6),
        "dim7": (0, 3, 6, 9),
        "m7b5": (0, 3, 6, 10),
        "aug": (0, 4, 8),
        "11": (0, 4, 7, 10, 14, 17),
        "min11": (0, 3, 7, 10, 14, 17),
        "13": (0, 4, 7, 10, 14, 21),
        "7#9": (0, 4, 7, 10, 15),
        "7b9": (0, 4, 7, 10, 13),
    }
)

CHORD_SUFFIXES: Mapping[str, str] = MappingProxyType(
    {
        "maj": "",
        "min": "m",
        "maj7": "maj7",
        "min7": "m7",
        "dom7": "7",
        "7sus4": "7sus4",
        "add9": "add9",
        "madd9": "madd9",
        "maj9": "maj9",
        "min9": "m9",
        "sus2": "sus2",
        "sus4": "sus4",
        "6": "6",
        "min6": "m6",
        "dim": "dim",
        "dim7": "dim7",
        "m7b5": "m7b5",
        "aug": "aug",
        "11": "11",
        "min11": "m11",
        "13": "13",
        "7#9": "7#9",
        "7b9": "7b9",
    }
)

CHORD_TYPE_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "maj": "Major",
        "min": "Minor",
        "maj7": "Major 7",
        "min7": "Minor 7",
        "dom7": "Dominant 7",
        "7sus4": "Dom 7sus4",
        "add9": "Add 9",
        "madd9": "Minor add9",
        "maj9": "Major 9",
        "min9": "Minor 9",
        "sus2": "Sus 2",
        "sus4": "Sus 4",
        "6": "Major 6",
        "min6": "Minor 6",
        "dim": "Diminished",
        "dim7": "Dim 7",
        "m7b5": "Half-dim",
        "aug": "Augmented",
        "11": "Dominant 11",
        "min11": "Minor 11",
        "13": "Dominant 13",
        "7#9": "7 Sharp 9",
        "7b9": "7 Flat 9",
    }
)


def _first_key(table: Mapping[str, object]) -> str:
    return next(iter(table))


def resolve_key(key: str) -> NoteName:
    """Normalize a key name, falling back to C."""
    candidate = key.strip().upper() if isinstance(key, str) else ""
    for note in NOTES:
        if note == candidate:
            return note
    _LOGGER.debug("Unknown key %r; using %s", key, NOTES[0])
    return NOTES[0]


def resolve_mode(mode: str) -> str:
    if mode in SCALES:
        return mode
    fallback = _first_key(SCALES)
    _LOGGER.debug("Unknown mode %r; using %s", mode, fallback)
    return fallback


def resolve_chord_type(chord_type: str) -> str:
    if chord_type in CHORD_TYPES:
        return chord_type
    fallback = _first_key(CHORD_TYPES)
    _LOGGER.debug("Unknown chord type %r; using %s", chord_type, fallback)
    return fallback


def mode_family(mode: str) -> ModeFamily:
    return "minor" if resolve_mode(mode) in MINOR_FAMILY_MODES else "major"


def note_index(note: str) -> int:
    return NOTES.index(resolve_key(note))


def note_frequency(note: str, octave: int = REFERENCE_OCTAVE) -> float:
    """Frequency of a pitch class at the given octave."""
    return NOTE_FREQS[resolve_key(note)] * math.pow(2, octave - REFERENCE_OCTAVE)


def scale_notes(key: str, mode: str) -> list[NoteName]:
    """Note names of the scale built on ``key``, one per offset in ``mode``."""
    root = note_index(key)
    return [NOTES[(root + offset) % 12] for offset in SCALES[resolve_mode(mode)]]


def chord_frequencies(root: str, chord_type: str, octave: int = CHORD_OCTAVE) -> list[float]:
    """Absolute frequencies of a chord, carrying offsets past 12 into higher octaves."""
    root_index = note_index(root)
    frequencies: list[float] = []
    for offset in CHORD_TYPES[resolve_chord_type(chord_type)]:
        semitone = root_index + offset
        frequencies.append(note_frequency(NOTES[semitone % 12], octave + semitone // 12))
    return frequencies


def chord_display_name(root: str, chord_type: str) -> str:
    resolved = resolve_chord_type(chord_type)
    return resolve_key(root) + CHORD_SUFFIXES[resolved]


def chord_type_long_name(chord_type: str) -> str:
    return CHORD_TYPE_NAMES[resolve_chord_type(chord_type)]
