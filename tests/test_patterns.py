from __future__ import annotations

from chordgen.patterns import (
    DRUM_INSTRUMENTS,
    DRUM_STYLE_PATTERNS,
    DRUM_STYLES,
    SYNTH_RHYTHMS,
    drum_pattern,
    drum_pattern_length,
    resolve_drum_style,
    resolve_rhythm,
)


def test_drum_patterns_have_consistent_lengths() -> None:
    assert len(DRUM_STYLES) == 10
    for style, by_meter in DRUM_STYLE_PATTERNS.items():
        assert set(by_meter) == {3, 4, 6}, style
        for meter, pattern in by_meter.items():
            expected = 16 if meter == 4 else 12
            assert {len(pattern[instrument]) for instrument in DRUM_INSTRUMENTS} == {expected}


def test_none_style_is_silent() -> None:
    for pattern in DRUM_STYLE_PATTERNS["none"].values():
        assert not any(any(pattern[instrument]) for instrument in DRUM_INSTRUMENTS)


def test_drum_pattern_fallbacks() -> None:
    assert resolve_drum_style("polka") == "basic"
    assert drum_pattern("polka", 4) == DRUM_STYLE_PATTERNS["basic"][4]
    assert drum_pattern("trap", 5) == DRUM_STYLE_PATTERNS["trap"][4]
    assert drum_pattern_length(drum_pattern("house", 3)) == 12


def test_synth_rhythms() -> None:
    assert len(SYNTH_RHYTHMS) == 13
    for rhythm in SYNTH_RHYTHMS.values():
        assert len(rhythm.pattern) == 16
    assert SYNTH_RHYTHMS["arp_updown"].is_arpeggio
    assert SYNTH_RHYTHMS["arp_updown"].arp_direction == "updown"
    assert not SYNTH_RHYTHMS["pulse"].is_arpeggio


def test_unknown_rhythm_resolves_to_sustained() -> None:
    assert resolve_rhythm("swing") == "sustained"
    assert resolve_rhythm("offbeat") == "offbeat"
