from __future__ import annotations

import numpy as np
import pytest

from chordgen.harmony import Chord, choose_template, generate_progression, instantiate, resolve_style, template_pool
from chordgen.progressions import STYLE_PROGRESSIONS, STYLES
from chordgen.theory import CHORD_TYPES, scale_notes


def test_every_style_has_four_templates_per_family() -> None:
    assert len(STYLES) == 20
    for style, families in STYLE_PROGRESSIONS.items():
        assert set(families) == {"major", "minor"}, style
        for templates in families.values():
            assert len(templates) == 4
            for template in templates:
                for degree, chord_type in template:
                    assert 1 <= degree <= 7
                    assert chord_type in CHORD_TYPES


def test_generate_c_major_modern() -> None:
    chords = generate_progression("C", "major", "modern", np.random.default_rng(3))
    assert len(chords) == 4
    scale = scale_notes("C", "major")
    assert all(chord.root in scale for chord in chords)
    assert [(scale.index(c.root) + 1, c.chord_type) for c in chords] in [
        list(template) for template in STYLE_PROGRESSIONS["modern"]["major"]
    ]


def test_minor_family_modes_use_minor_pool() -> None:
    assert template_pool("jazzy", "dorian") == STYLE_PROGRESSIONS["jazzy"]["minor"]
    assert template_pool("jazzy", "lydian") == STYLE_PROGRESSIONS["jazzy"]["major"]


def test_unknown_style_falls_back_to_modern() -> None:
    assert resolve_style("polka") == "modern"
    assert template_pool("polka", "major") == STYLE_PROGRESSIONS["modern"]["major"]


def test_choose_template_is_reproducible_with_seed() -> None:
    first = choose_template("pop", "major", np.random.default_rng(42))
    second = choose_template("pop", "major", np.random.default_rng(42))
    assert first == second


def test_instantiate_resolves_degrees_against_key() -> None:
    chords = instantiate(((1, "min"), (4, "min7"), (5, "dom7")), "A", "minor")
    assert [chord.name for chord in chords] == ["Am", "Dm7", "E7"]


def test_degrees_wrap_in_short_scales() -> None:
    chords = instantiate(((6, "maj"), (7, "maj")), "C", "pentatonic_major")
    # Five-note scale: degree 6 wraps to the root, degree 7 to the second
    assert [chord.root for chord in chords] == ["C", "D"]


def test_chord_build_normalizes() -> None:
    chord = Chord.build("g", "nope")
    assert chord.root == "G"
    assert chord.chord_type == "maj"
    assert chord.name == "G"
    assert chord.frequencies == pytest.approx((196.0, 246.94, 293.66))


def test_templates_are_read_only() -> None:
    with pytest.raises(TypeError):
        STYLE_PROGRESSIONS["modern"] = {}  # type: ignore[index]
