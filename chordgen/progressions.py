from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TypeAlias

from .theory import ModeFamily

# (scale degree 1-7, chord type)
ChordDegree: TypeAlias = tuple[int, str]
ProgressionTemplate: TypeAlias = tuple[ChordDegree, ...]

STYLE_PROGRESSIONS: Mapping[str, Mapping[ModeFamily, tuple[ProgressionTemplate, ...]]] = MappingProxyType(
    {
        "modern": {
            "major": (
                ((1, "maj"), (5, "maj"), (6, "min"), (4, "maj")),
                ((1, "maj"), (4, "add9"), (6, "min7"), (5, "sus4")),
                ((6, "min"), (4, "maj"), (1, "maj"), (5, "maj")),
                ((1, "maj7"), (3, "min7"), (4, "maj7"), (5, "dom7")),
            ),
            "minor": (
                ((1, "min"), (6, "maj"), (3, "maj"), (7, "maj")),
                ((1, "min7"), (4, "min7"), (6, "maj7"), (5, "dom7")),
                ((1, "min"), (7, "maj"), (6, "maj"), (7, "maj")),
                ((6, "maj"), (7, "maj"), (1, "min"), (1, "min")),
            ),
        },
        "electronic": {
            "major": (
                ((1, "sus2"), (4, "sus2"), (5, "sus4"), (1, "maj")),
                ((1, "maj"), (1, "maj"), (4, "maj"), (4, "maj")),
                ((6, "min7"), (4, "add9"), (1, "maj"), (5, "7sus4")),
                ((1, "add9"), (5, "sus4"), (6, "min"), (4, "add9")),
            ),
            "minor": (
                ((1, "min"), (1, "min"), (6, "maj"), (7, "maj")),
                ((1, "madd9"), (4, "min"), (6, "maj"), (7, "sus2")),
                ((1, "min7"), (3, "maj"), (6, "maj"), (7, "maj")),
                ((1, "min"), (7, "sus2"), (6, "sus2"), (4, "min")),
            ),
        },
        "ambient": {
            "major": (
                ((1, "maj9"), (4, "maj7"), (2, "min9"), (5, "7sus4")),
                ((1, "add9"), (6, "min9"), (4, "maj9"), (5, "sus4")),
                ((1, "maj7"), (3, "min7"), (6, "min9"), (4, "maj9")),
                ((4, "maj9"), (1, "maj7"), (5, "sus4"), (6, "min9")),
            ),
            "minor": (
                ((1, "min9"), (4, "min7"), (6, "maj9"), (3, "maj7")),
                ((1, "min7"), (7, "maj7"), (6, "maj9"), (4, "min9")),
                ((6, "maj9"), (3, "maj7"), (7, "maj"), (1, "min9")),
                ((1, "madd9"), (6, "maj7"), (7, "sus2"), (4, "min7")),
            ),
        },
        "jazzy": {
            "major": (
                ((2, "min9"), (5, "dom7"), (1, "maj9"), (6, "min7")),
                ((1, "maj9"), (4, "maj7"), (3, "min7"), (6, "dom7")),
                ((1, "6"), (2, "min7"), (5, "dom7"), (1, "maj7")),
                ((3, "min7"), (6, "dom7"), (2, "min7"), (5, "dom7")),
            ),
            "minor": (
                ((1, "min9"), (4, "min7"), (5, "dom7"), (1, "min6")),
                ((2, "m7b5"), (5, "dom7"), (1, "min9"), (6, "maj7")),
                ((1, "min7"), (7, "dom7"), (3, "maj7"), (6, "min7")),
                ((1, "min9"), (4, "dom7"), (7, "maj7"), (3, "6")),
            ),
        },
        "lofi": {
            "major": (
                ((2, "min7"), (5, "dom7"), (1, "maj7"), (1, "maj7")),
                ((1, "maj7"), (6, "min7"), (2, "min7"), (5, "7sus4")),
                ((4, "maj7"), (3, "min7"), (2, "min7"), (1, "maj7")),
                ((1, "maj9"), (4, "maj7"), (6, "min9"), (5, "dom7")),
            ),
            "minor": (
                ((1, "min9"), (4, "min7"), (7, "maj7"), (3, "maj7")),
                ((6, "maj7"), (7, "maj7"), (1, "min7"), (4, "min7")),
                ((1, "min7"), (6, "maj9"), (3, "maj7"), (7, "dom7")),
                ((2, "m7b5"), (5, "dom7"), (1, "min9"), (4, "min7")),
            ),
        },
        "cinematic": {
            "major": (
                ((1, "maj"), (3, "min"), (4, "maj"), (1, "maj")),
                ((1, "sus2"), (5, "sus4"), (6, "min"), (4, "add9")),
                ((6, "min"), (3, "min"), (4, "maj"), (1, "sus2")),
                ((1, "add9"), (6, "min"), (4, "maj"), (5, "sus4")),
            ),
            "minor": (
                ((1, "min"), (6, "maj"), (3, "maj"), (4, "min")),
                ((1, "madd9"), (7, "maj"), (6, "sus2"), (6, "maj")),
                ((4, "min"), (1, "min"), (6, "maj"), (7, "sus2")),
                ((1, "min"), (5, "min"), (6, "maj"), (7, "maj")),
            ),
        },
        "rnb": {
            "major": (
                ((1, "maj9"), (4, "maj7"), (2, "min9"), (5, "13")),
                ((1, "maj7"), (6, "min9"), (4, "maj9"), (5, "11")),
                ((2, "min11"), (5, "13"), (1, "maj9"), (4, "maj7")),
                ((1, "6"), (3, "min7"), (6, "min9"), (2, "min7")),
            ),
            "minor": (
                ((1, "min9"), (4, "min11"), (7, "maj9"), (3, "maj7")),
                ((6, "maj9"), (7, "13"), (1, "min9"), (4, "min7")),
                ((1, "min9"), (5, "dom7"), (4, "min7"), (6, "maj7")),
                ((2, "m7b5"), (5, "13"), (1, "min9"), (6, "maj9")),
            ),
        },
        "gospel": {
            "major": (
                ((1, "maj7"), (4, "maj9"), (5, "dom7"), (1, "maj9")),
                ((4, "maj7"), (4, "min7"), (1, "maj7"), (1, "maj7")),
                ((2, "min7"), (5, "dom7"), (3, "min7"), (6, "dom7")),
                ((1, "maj7"), (3, "dom7"), (6, "min9"), (2, "min7")),
            ),
            "minor": (
                ((1, "min9"), (4, "min7"), (5, "dom7"), (1, "min7")),
                ((6, "maj7"), (7, "dom7"), (1, "min9"), (5, "dom7")),
                ((4, "min7"), (5, "dom7"), (1, "min9"), (6, "maj7")),
                ((2, "m7b5"), (5, "dom7"), (1, "min7"), (4, "min7")),
            ),
        },
        "funk": {
            "major": (
                ((1, "dom7"), (4, "dom7"), (1, "dom7"), (5, "dom7")),
                ((1, "dom7"), (1, "dom7"), (4, "dom7"), (1, "dom7")),
                ((2, "min7"), (5, "dom7"), (1, "dom7"), (1, "dom7")),
                ((1, "dom7"), (3, "dom7"), (4, "dom7"), (5, "dom7")),
            ),
            "minor": (
                ((1, "min7"), (4, "min7"), (1, "min7"), (5, "dom7")),
                ((1, "min7"), (1, "min7"), (4, "dom7"), (1, "min7")),
                ((6, "dom7"), (7, "dom7"), (1, "min7"), (1, "min7")),
                ((1, "min7"), (3, "maj7"), (4, "dom7"), (5, "dom7")),
            ),
        },
        "indie": {
            "major": (
                ((1, "maj"), (5, "maj"), (6, "min"), (4, "maj")),
                ((1, "add9"), (4, "add9"), (6, "madd9"), (5, "sus4")),
                ((4, "maj"), (1, "maj"), (5, "maj"), (6, "min")),
                ((1, "sus2"), (3, "min"), (4, "add9"), (1, "maj")),
            ),
            "minor": (
                ((1, "min"), (3, "maj"), (7, "maj"), (4, "min")),
                ((1, "madd9"), (6, "sus2"), (3, "add9"), (7, "sus4")),
                ((6, "maj"), (3, "maj"), (7, "maj"), (1, "min")),
                ((1, "min"), (4, "min"), (6, "add9"), (7, "sus2")),
            ),
        },
        "bossa": {
            "major": (
                ((1, "maj9"), (2, "min9"), (3, "min7"), (6, "dom7")),
                ((1, "maj7"), (7, "dim7"), (2, "min7"), (5, "dom7")),
                ((1, "6"), (4, "maj7"), (5, "dom7"), (1, "maj9")),
                ((2, "min7"), (5, "7#9"), (1, "maj9"), (4, "maj7")),
            ),
            "minor": (
                ((1, "min9"), (4, "min7"), (7, "dom7"), (3, "maj7")),
                ((2, "m7b5"), (5, "7b9"), (1, "min9"), (6, "maj7")),
                ((1, "min7"), (6, "maj9"), (2, "m7b5"), (5, "dom7")),
                ((1, "min6"), (4, "min9"), (7, "maj7"), (3, "6")),
            ),
        },
        "reggaeton": {
            "major": (
                ((6, "min"), (4, "maj"), (1, "maj"), (5, "maj")),
                ((1, "maj"), (6, "min"), (4, "maj"), (5, "maj")),
                ((1, "maj"), (4, "maj"), (6, "min"), (5, "maj")),
                ((6, "min"), (5, "maj"), (4, "maj"), (1, "maj")),
            ),
            "minor": (
                ((1, "min"), (6, "maj"), (3, "maj"), (7, "maj")),
                ((1, "min"), (7, "maj"), (6, "maj"), (3, "maj")),
                ((1, "min"), (4, "min"), (6, "maj"), (7, "maj")),
                ((6, "maj"), (7, "maj"), (1, "min"), (1, "min")),
            ),
        },
        "country": {
            "major": (
                ((1, "maj"), (4, "maj"), (1, "maj"), (5, "maj")),
                ((1, "maj"), (5, "maj"), (4, "maj"), (1, "maj")),
                ((1, "maj"), (4, "maj"), (5, "dom7"), (1, "maj")),
                ((1, "maj"), (6, "min"), (4, "maj"), (5, "maj")),
            ),
            "minor": (
                ((1, "min"), (4, "min"), (1, "min"), (5, "min")),
                ((1, "min"), (7, "maj"), (1, "min"), (5, "min")),
                ((1, "min"), (4, "min"), (6, "maj"), (5, "dom7")),
                ((1, "min"), (6, "maj"), (7, "maj"), (1, "min")),
            ),
        },
        "metal": {
            "major": (
                ((1, "maj"), (7, "maj"), (6, "min"), (5, "maj")),
                ((1, "maj"), (4, "maj"), (5, "maj"), (7, "maj")),
                ((1, "maj"), (6, "min"), (7, "maj"), (1, "maj")),
                ((1, "maj"), (3, "min"), (7, "maj"), (4, "maj")),
            ),
            "minor": (
                ((1, "min"), (6, "maj"), (7, "maj"), (1, "min")),
                ((1, "min"), (4, "min"), (5, "min"), (1, "min")),
                ((1, "min"), (7, "maj"), (6, "maj"), (5, "maj")),
                ((1, "min"), (2, "dim"), (7, "maj"), (1, "min")),
            ),
        },
        "classical": {
            "major": (
                ((1, "maj"), (4, "maj"), (5, "dom7"), (1, "maj")),
                ((1, "maj"), (5, "maj"), (6, "min"), (3, "min")),
                ((1, "maj"), (6, "min"), (2, "min"), (5, "dom7")),
                ((4, "maj"), (5, "dom7"), (3, "min"), (6, "min")),
            ),
            "minor": (
                ((1, "min"), (4, "min"), (5, "dom7"), (1, "min")),
                ((1, "min"), (7, "maj"), (3, "maj"), (5, "dom7")),
                ((6, "maj"), (3, "maj"), (7, "maj"), (1, "min")),
                ((1, "min"), (5, "dom7"), (6, "maj"), (5, "dom7")),
            ),
        },
        "disco": {
            "major": (
                ((1, "maj7"), (2, "min7"), (3, "min7"), (4, "maj7")),
                ((6, "min7"), (5, "dom7"), (4, "maj7"), (1, "maj7")),
                ((1, "maj"), (4, "maj"), (5, "dom7"), (4, "maj")),
                ((2, "min7"), (5, "dom7"), (1, "maj7"), (6, "min7")),
            ),
            "minor": (
                ((1, "min7"), (4, "min7"), (5, "dom7"), (1, "min7")),
                ((6, "maj7"), (7, "dom7"), (1, "min7"), (4, "min7")),
                ((1, "min"), (6, "maj"), (7, "maj"), (1, "min")),
                ((1, "min7"), (7, "maj7"), (6, "maj7"), (5, "dom7")),
            ),
        },
        "synthwave": {
            "major": (
                ((1, "maj7"), (5, "sus4"), (6, "min7"), (4, "maj7")),
                ((1, "add9"), (4, "add9"), (5, "sus2"), (6, "min")),
                ((6, "min"), (5, "maj"), (4, "maj"), (1, "maj")),
                ((1, "maj"), (3, "min"), (4, "maj"), (5, "sus4")),
            ),
            "minor": (
                ((1, "min7"), (4, "min"), (7, "maj"), (6, "maj")),
                ((1, "madd9"), (6, "maj"), (7, "add9"), (4, "min")),
                ((6, "maj"), (7, "maj"), (1, "min"), (5, "sus4")),
                ((1, "min"), (7, "sus2"), (6, "maj"), (3, "maj")),
            ),
        },
        "edm": {
            "major": (
                ((1, "maj"), (5, "maj"), (6, "min"), (4, "maj")),
                ((1, "sus2"), (5, "sus4"), (6, "min"), (4, "sus2")),
                ((6, "min"), (4, "maj"), (1, "maj"), (5, "sus4")),
                ((1, "add9"), (4, "add9"), (6, "min"), (5, "sus4")),
            ),
            "minor": (
                ((1, "min"), (6, "maj"), (7, "maj"), (4, "min")),
                ((1, "min"), (7, "maj"), (6, "maj"), (7, "maj")),
                ((6, "maj"), (7, "sus2"), (1, "min"), (4, "min")),
                ((1, "madd9"), (4, "min"), (6, "sus2"), (7, "maj")),
            ),
        },
        "latin": {
            "major": (
                ((1, "maj7"), (4, "dom7"), (1, "maj7"), (5, "dom7")),
                ((2, "min7"), (5, "dom7"), (1, "maj7"), (6, "dom7")),
                ((1, "maj7"), (2, "min7"), (5, "dom7"), (1, "6")),
                ((1, "6"), (4, "maj7"), (2, "min7"), (5, "dom7")),
            ),
            "minor": (
                ((1, "min7"), (4, "dom7"), (1, "min7"), (5, "dom7")),
                ((2, "m7b5"), (5, "dom7"), (1, "min9"), (1, "min7")),
                ((1, "min7"), (4, "min7"), (7, "dom7"), (3, "maj7")),
                ((1, "min6"), (4, "min7"), (5, "dom7"), (1, "min7")),
            ),
        },
        "afrobeat": {
            "major": (
                ((1, "dom7"), (4, "dom7"), (1, "dom7"), (4, "dom7")),
                ((1, "maj7"), (5, "dom7"), (4, "maj7"), (1, "maj7")),
                ((1, "dom7"), (1, "dom7"), (4, "dom7"), (5, "dom7")),
                ((2, "min7"), (5, "dom7"), (1, "maj7"), (4, "dom7")),
            ),
            "minor": (
                ((1, "min7"), (4, "dom7"), (1, "min7"), (4, "dom7")),
                ((1, "min7"), (7, "dom7"), (6, "maj7"), (5, "dom7")),
                ((1, "min7"), (1, "min7"), (4, "min7"), (5, "dom7")),
                ((6, "maj7"), (5, "dom7"), (1, "min7"), (4, "min7")),
            ),
        },
    }
)

STYLES: tuple[str, ...] = tuple(STYLE_PROGRESSIONS)
