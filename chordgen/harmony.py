"""Harmonic generator: (key, mode, style) -> concrete chord progression."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .progressions import STYLE_PROGRESSIONS, STYLES, ProgressionTemplate
from .theory import (
    CHORD_OCTAVE,
    chord_display_name,
    chord_frequencies,
    mode_family,
    resolve_chord_type,
    resolve_key,
    scale_notes,
)

_LOGGER = logging.getLogger("chordgen.harmony")

DEFAULT_STYLE = STYLES[0]


@dataclass(frozen=True, slots=True)
class Chord:
    """A chord instance; frequencies are derived from root and chord type."""

    root: str
    chord_type: str
    name: str
    frequencies: tuple[float, ...]

    @classmethod
    def build(cls, root: str, chord_type: str, octave: int = CHORD_OCTAVE) -> "Chord":
        resolved_root = resolve_key(root)
        resolved_type = resolve_chord_type(chord_type)
        return cls(
            root=resolved_root,
            chord_type=resolved_type,
            name=chord_display_name(resolved_root, resolved_type),
            frequencies=tuple(chord_frequencies(resolved_root, resolved_type, octave)),
        )


Progression = list[Chord]


def resolve_style(style: str) -> str:
    if style in STYLE_PROGRESSIONS:
        return style
    _LOGGER.debug("Unknown style %r; using %s", style, DEFAULT_STYLE)
    return DEFAULT_STYLE


def template_pool(style: str, mode: str) -> tuple[ProgressionTemplate, ...]:
    return STYLE_PROGRESSIONS[resolve_style(style)][mode_family(mode)]


def choose_template(
    style: str,
    mode: str,
    rng: np.random.Generator | None = None,
) -> ProgressionTemplate:
    pool = template_pool(style, mode)
    generator = rng if rng is not None else np.random.default_rng()
    return pool[int(generator.integers(len(pool)))]


def instantiate(template: ProgressionTemplate, key: str, mode: str) -> Progression:
    """Resolve each (degree, chord type) of a template against the key's scale."""
    scale = scale_notes(key, mode)
    return [Chord.build(scale[(degree - 1) % len(scale)], chord_type) for degree, chord_type in template]


def generate_progression(
    key: str,
    mode: str,
    style: str,
    rng: np.random.Generator | None = None,
) -> Progression:
    template = choose_template(style, mode, rng)
    progression = instantiate(template, key, mode)
    _LOGGER.info(
        "Generated %s %s/%s progression: %s",
        resolve_key(key),
        mode,
        resolve_style(style),
        " - ".join(chord.name for chord in progression),
    )
    return progression
