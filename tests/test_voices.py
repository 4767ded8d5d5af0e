from __future__ import annotations

import numpy as np
import pytest

from chordgen.dsp import num_samples
from chordgen.engine import AudioEngine
from chordgen.voices import DEFAULT_TIMBRE, TIMBRES, RenderedVoice, VoiceSynthesizer, render_voice, resolve_timbre


@pytest.mark.parametrize("timbre", sorted(TIMBRES))
def test_every_timbre_renders_the_note_length(timbre: str) -> None:
    voice = render_voice(220.0, 0.4, timbre, volume=0.7, reverb=0.4)
    n = num_samples(0.4)
    assert len(voice.dry) == n
    assert len(voice.send) in (0, n)
    assert np.all(np.isfinite(voice.dry))
    assert np.max(np.abs(voice.dry)) > 0.0
    assert np.max(np.abs(voice.dry)) < 1.0


@pytest.mark.parametrize("timbre", sorted(set(TIMBRES) - {"bell"}))
def test_zero_volume_is_silent(timbre: str) -> None:
    voice = render_voice(220.0, 0.3, timbre, volume=0.0, reverb=0.4)
    assert np.allclose(voice.dry, 0.0)


def test_twelve_timbres_with_pad_first() -> None:
    assert len(TIMBRES) == 12
    assert DEFAULT_TIMBRE == "pad"


def test_unknown_timbre_falls_back_to_pad() -> None:
    assert resolve_timbre("theremin") == "pad"
    fallback = render_voice(220.0, 0.2, "theremin", volume=0.5, reverb=0.0)
    pad = render_voice(220.0, 0.2, "pad", volume=0.5, reverb=0.0)
    assert np.allclose(fallback.dry, pad.dry)


def test_reverb_send_routing() -> None:
    dry_only = render_voice(220.0, 0.2, "pad", volume=0.5, reverb=0.0)
    assert dry_only.send.size == 0
    wet = render_voice(220.0, 0.2, "strings", volume=0.5, reverb=0.5)
    assert wet.send.size == wet.dry.size
    # Pluck never feeds the reverb
    assert render_voice(220.0, 0.2, "pluck", volume=0.5, reverb=1.0).send.size == 0


def test_synthesizer_registers_one_voice_per_chord_tone() -> None:
    engine = AudioEngine(rng=np.random.default_rng(0))
    synth = VoiceSynthesizer(engine)
    synth.render_chord([130.8, 164.8, 196.0], 0.5, 0.2, "keys", volume=0.7, reverb=0.2)
    assert engine.active_voice_count == 3


def test_zero_volume_bell_is_silent_until_partials_settle() -> None:
    # Upper partials ramp from 0 toward 0.001 and then hold that floor
    duration = 0.3
    voice = render_voice(220.0, duration, "bell", volume=0.0, reverb=0.0)
    settle = num_samples(duration * (1 - 4 * 0.15))
    assert np.allclose(voice.dry[:settle], 0.0)
    assert np.max(np.abs(voice.dry)) < 0.01


def test_rendered_voice_defaults_to_no_send() -> None:
    first = RenderedVoice(np.ones(4))
    second = RenderedVoice(np.ones(4))
    assert first.send.size == 0
    assert first.send is not second.send
