from __future__ import annotations

import re

import numpy as np
import pytest

from chordgen import engine as audio_engine
from chordgen.audio import SAMPLE_RATE
from chordgen.config import GeneratorConfig, PlaybackSettings
from chordgen.errors import InvalidConfigError
from chordgen.harmony import Chord
from chordgen.session import PlaybackSession, render_offline
from chordgen.theory import scale_notes


def _session(**settings: object) -> PlaybackSession:
    return PlaybackSession(
        GeneratorConfig(key="C", mode="major", style="modern"),
        PlaybackSettings(**settings),
        live=False,
        rng=np.random.default_rng(7),
    )


def test_generate_replaces_progression() -> None:
    session = _session()
    chords = session.generate()
    assert len(chords) == 4
    assert session.progression == chords
    assert all(chord.root in scale_notes("C", "major") for chord in chords)


def test_edit_chord_in_range_only() -> None:
    session = _session()
    session.replace_progression([Chord.build("C", "maj"), Chord.build("F", "maj")])
    assert session.edit_chord(5, "D", "min") is None
    assert [chord.name for chord in session.progression] == ["C", "F"]
    edited = session.edit_chord(1, "D", "min7")
    assert edited is not None and edited.name == "Dm7"
    assert [chord.name for chord in session.progression] == ["C", "Dm7"]


def test_save_and_load() -> None:
    session = _session()
    assert session.save() is None
    original = session.generate()
    entry = session.save()
    assert entry is not None
    assert re.fullmatch(r"C major - \d{2}:\d{2}:\d{2}", entry.label)
    assert session.save("mine") is not None
    assert [saved.label for saved in session.saved][1] == "mine"

    session.replace_progression([Chord.build("A", "min")])
    assert session.load(0) is True
    assert session.progression == original


def test_load_out_of_range_is_ignored() -> None:
    session = _session()
    current = session.generate()
    session.save()
    assert session.load(3) is False
    assert session.load(-1) is False
    assert session.progression == current


def test_configure_validates() -> None:
    session = _session()
    assert session.configure(key="A", mode="minor").mode == "minor"
    with pytest.raises(InvalidConfigError):
        session.configure(tempo=100)


def test_settings_updates_swap_atomically() -> None:
    session = _session()
    before = session.settings
    session.update_settings(rhythm="arp_down", meter=3)
    assert before.rhythm == "sustained"
    assert session.settings.rhythm == "arp_down"
    assert session.commit_tempo("oops") == 90
    assert session.commit_tempo("500") == 200


def test_offline_playback_publishes_chords_and_renders() -> None:
    seen: list[int] = []
    session = PlaybackSession(live=False, rng=np.random.default_rng(1), on_chord_change=seen.append)
    assert session.active_chord_index == -1
    session.start(threaded=False)
    assert session.is_playing
    assert len(session.progression) == 4
    session.advance(1.0)
    assert seen == [0]
    assert session.active_chord_index == 0
    assert session.position is not None
    audio = session.rendered_audio()
    assert len(audio) == SAMPLE_RATE
    assert np.max(np.abs(audio)) > 0.0
    assert session.analysis_levels().shape == (32,)

    session.stop()
    assert not session.is_playing
    assert session.active_chord_index == -1
    assert audio_engine.current() is None


def test_regenerate_while_playing_restarts_from_first_chord() -> None:
    session = _session(bpm=200, bars_per_chord=1)
    session.start(threaded=False)
    session.advance(2.0)
    assert session.scheduler is not None
    assert session.scheduler.clock.chord_index == 1
    session.generate()
    assert session.scheduler.clock.chord_index == 0
    assert session.scheduler.clock.step == 0
    session.stop()


def test_preview_chord_sounds_immediately() -> None:
    session = _session()
    assert session.preview_chord(0) is False
    session.replace_progression([Chord.build("C", "maj7")])
    assert session.preview_chord(0) is True
    engine = audio_engine.current()
    assert engine is not None
    assert engine.active_voice_count == 4
    assert not session.is_playing
    session.stop()


def test_render_offline() -> None:
    chords = [Chord.build("A", "min"), Chord.build("F", "maj")]
    progression, audio = render_offline(0.5, rng=np.random.default_rng(0), progression=chords)
    assert progression == tuple(chords)
    assert len(audio) == SAMPLE_RATE // 2
    assert audio.dtype == np.float32
    assert audio_engine.current() is None
