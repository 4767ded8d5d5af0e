from __future__ import annotations

import time

import pytest

from chordgen.arpeggiator import Arpeggiator
from chordgen.config import PlaybackSettings
from chordgen.harmony import Chord
from chordgen.scheduler import LOOKAHEAD, START_DELAY, Scheduler

C_MAJOR = Chord.build("C", "maj")
G_MAJOR = Chord.build("G", "maj")


class _Holder:
    def __init__(self, settings: PlaybackSettings, progression: list[Chord]) -> None:
        self.settings = settings
        self.progression = progression


def _scheduler(engine, voices, percussion, holder: _Holder) -> Scheduler:
    return Scheduler(
        engine,
        settings=lambda: holder.settings,
        progression=lambda: holder.progression,
        voices=voices,
        percussion=percussion,
        arpeggiator=Arpeggiator(),
    )


def _run_steps(scheduler: Scheduler, engine, settings: PlaybackSettings, steps: int) -> None:
    # Horizon lands half a step past the last wanted step
    engine.current_time = START_DELAY + (steps - 0.5) * settings.step_duration - LOOKAHEAD
    scheduler.tick()


def test_first_step_is_delayed_from_now(fake_engine, voices, percussion) -> None:
    fake_engine.current_time = 2.0
    holder = _Holder(PlaybackSettings(), [C_MAJOR])
    scheduler = _scheduler(fake_engine, voices, percussion, holder)
    scheduler.start(threaded=False)
    assert voices.chords[0][0] == pytest.approx(2.0 + START_DELAY)
    assert scheduler.playing


def test_chord_changes_on_boundary(fake_engine, voices, percussion) -> None:
    settings = PlaybackSettings(bpm=120, meter=4, bars_per_chord=2, rhythm="pulse", drums_enabled=False)
    holder = _Holder(settings, [C_MAJOR, G_MAJOR])
    scheduler = _scheduler(fake_engine, voices, percussion, holder)
    scheduler.start(threaded=False)
    _run_steps(scheduler, fake_engine, settings, 64)

    # Pulse triggers every fourth step: 8 per 32-step chord
    assert len(voices.chords) == 16
    assert all(chord[1] == C_MAJOR.frequencies for chord in voices.chords[:8])
    assert all(chord[1] == G_MAJOR.frequencies for chord in voices.chords[8:])
    boundary = START_DELAY + 32 * settings.step_duration
    assert voices.chords[8][0] == pytest.approx(boundary)
    assert scheduler.clock.chord_index == 0
    assert scheduler.clock.step == 0


def test_irregular_ticks_do_not_drift(fake_engine, voices, percussion) -> None:
    settings = PlaybackSettings(bpm=137, metronome_enabled=True, drums_enabled=False)
    holder = _Holder(settings, [C_MAJOR])
    scheduler = _scheduler(fake_engine, voices, percussion, holder)
    scheduler.start(threaded=False)
    for now in (0.0, 0.013, 0.2, 0.21, 0.9, 0.95, 2.4, 2.41, 2.47, 5.0):
        fake_engine.current_time = now
        scheduler.tick()

    times = [time for time, _ in percussion.clicks]
    assert len(times) == len(set(times))
    for beat, time in enumerate(times):
        assert time == pytest.approx(START_DELAY + beat * 4 * settings.step_duration, abs=1e-9)
    assert times[-1] < 5.0 + LOOKAHEAD


def test_tick_schedules_only_within_lookahead(fake_engine, voices, percussion) -> None:
    settings = PlaybackSettings(bpm=60, metronome_enabled=True)
    scheduler = _scheduler(fake_engine, voices, percussion, _Holder(settings, [C_MAJOR]))
    scheduler.start(threaded=False)
    # 0.25 s steps: only the step at 0.1 fits before 0.2
    assert scheduler.clock.next_event_time == pytest.approx(0.35)
    assert scheduler.tick() == 0
    fake_engine.current_time = 0.2
    assert scheduler.tick() == 1


def test_metronome_accents_downbeats(fake_engine, voices, percussion) -> None:
    settings = PlaybackSettings(meter=3, bars_per_chord=2, metronome_enabled=True)
    scheduler = _scheduler(fake_engine, voices, percussion, _Holder(settings, [C_MAJOR]))
    scheduler.start(threaded=False)
    _run_steps(scheduler, fake_engine, settings, 24)
    assert [accent for _, accent in percussion.clicks] == [True, False, False, True, False, False]


def test_drum_pattern_follows_style_and_meter(fake_engine, voices, percussion) -> None:
    settings = PlaybackSettings(drum_style="basic", meter=4)
    scheduler = _scheduler(fake_engine, voices, percussion, _Holder(settings, [C_MAJOR]))
    scheduler.start(threaded=False)
    _run_steps(scheduler, fake_engine, settings, 16)
    kicks = [time for instrument, time in percussion.hits if instrument == "kick"]
    assert kicks == pytest.approx([START_DELAY + step * settings.step_duration for step in (0, 4, 8, 12)])


def test_disabled_drums_are_silent(fake_engine, voices, percussion) -> None:
    settings = PlaybackSettings(drums_enabled=False)
    scheduler = _scheduler(fake_engine, voices, percussion, _Holder(settings, [C_MAJOR]))
    scheduler.start(threaded=False)
    _run_steps(scheduler, fake_engine, settings, 32)
    assert percussion.hits == []


def test_sustained_plays_once_per_chord(fake_engine, voices, percussion) -> None:
    settings = PlaybackSettings(bars_per_chord=1, drums_enabled=False)
    scheduler = _scheduler(fake_engine, voices, percussion, _Holder(settings, [C_MAJOR, G_MAJOR]))
    scheduler.start(threaded=False)
    _run_steps(scheduler, fake_engine, settings, 32)
    assert [chord[1] for chord in voices.chords] == [C_MAJOR.frequencies, G_MAJOR.frequencies]
    assert all(chord[2] == pytest.approx(settings.chord_duration) for chord in voices.chords)


def test_unknown_rhythm_plays_sustained(fake_engine, voices, percussion) -> None:
    settings = PlaybackSettings(bars_per_chord=1, drums_enabled=False, rhythm="swing")
    scheduler = _scheduler(fake_engine, voices, percussion, _Holder(settings, [C_MAJOR]))
    scheduler.start(threaded=False)
    _run_steps(scheduler, fake_engine, settings, 16)
    assert len(voices.chords) == 1


def test_arpeggio_restarts_on_each_chord(fake_engine, voices, percussion) -> None:
    settings = PlaybackSettings(bars_per_chord=1, drums_enabled=False, rhythm="arp_up")
    scheduler = _scheduler(fake_engine, voices, percussion, _Holder(settings, [C_MAJOR, G_MAJOR]))
    scheduler.start(threaded=False)
    _run_steps(scheduler, fake_engine, settings, 32)

    notes = [frequency for _, frequency, _, _ in voices.notes]
    c, e, g = C_MAJOR.frequencies
    assert notes[:8] == [c, e, g, c, e, g, c, e]
    assert notes[8] == G_MAJOR.frequencies[0]
    assert all(duration == pytest.approx(settings.short_note_duration) for _, _, duration, _ in voices.notes)


def test_empty_progression_keeps_clock_running(fake_engine, voices, percussion) -> None:
    settings = PlaybackSettings(metronome_enabled=True)
    scheduler = _scheduler(fake_engine, voices, percussion, _Holder(settings, []))
    scheduler.start(threaded=False)
    _run_steps(scheduler, fake_engine, settings, 40)
    assert voices.chords == [] and voices.notes == []
    assert len(percussion.clicks) == 10
    assert scheduler.clock.chord_index == 0


def test_settings_change_applies_on_next_step(fake_engine, voices, percussion) -> None:
    holder = _Holder(PlaybackSettings(bpm=60, drums_enabled=False, metronome_enabled=True), [C_MAJOR])
    scheduler = _scheduler(fake_engine, voices, percussion, holder)
    scheduler.start(threaded=False)
    fake_engine.current_time = 1.0
    scheduler.tick()
    before = scheduler.clock.next_event_time
    holder.settings = holder.settings.update(bpm=120)
    fake_engine.current_time = 3.0
    scheduler.tick()
    assert scheduler.clock.next_event_time > before
    times = [time for time, _ in percussion.clicks]
    gaps = [round(b - a, 9) for a, b in zip(times, times[1:])]
    assert gaps[-1] == pytest.approx(0.5)


def test_chord_and_position_publish_at_audio_time(fake_engine, voices, percussion) -> None:
    seen: list[int] = []
    settings = PlaybackSettings(bars_per_chord=1)
    holder = _Holder(settings, [C_MAJOR, G_MAJOR])
    scheduler = Scheduler(
        fake_engine,
        settings=lambda: holder.settings,
        progression=lambda: holder.progression,
        voices=voices,
        percussion=percussion,
        arpeggiator=Arpeggiator(),
        on_chord_change=seen.append,
    )
    scheduler.start(threaded=False)
    _run_steps(scheduler, fake_engine, settings, 20)
    assert scheduler.published_chord_index == -1
    fake_engine.current_time = START_DELAY
    fake_engine.fire_due()
    assert seen == [0]
    assert scheduler.published_position is not None
    assert scheduler.published_position.beat == 0
    fake_engine.current_time = START_DELAY + 17 * settings.step_duration
    fake_engine.fire_due()
    assert seen == [0, 1]
    assert scheduler.published_chord_index == 1


def test_stop_then_start_resets_position(fake_engine, voices, percussion) -> None:
    settings = PlaybackSettings(bars_per_chord=1)
    scheduler = _scheduler(fake_engine, voices, percussion, _Holder(settings, [C_MAJOR, G_MAJOR]))
    scheduler.start(threaded=False)
    _run_steps(scheduler, fake_engine, settings, 20)
    assert scheduler.clock.chord_index == 1
    scheduler.stop()
    assert not scheduler.playing
    assert scheduler.clock.chord_index == 0 and scheduler.clock.step == 0
    assert scheduler.published_chord_index == -1
    assert scheduler.tick() == 0

    fake_engine.current_time = 10.0
    scheduler.start(threaded=False)
    assert scheduler.clock.chord_index == 0
    assert voices.chords[-1][0] == pytest.approx(10.0 + START_DELAY)
    assert voices.chords[-1][1] == C_MAJOR.frequencies


def test_threaded_loop_stops_cleanly(fake_engine, voices, percussion) -> None:
    scheduler = _scheduler(fake_engine, voices, percussion, _Holder(PlaybackSettings(), [C_MAJOR]))
    scheduler.start(threaded=True)
    deadline = time.monotonic() + 2.0
    while not voices.chords and time.monotonic() < deadline:
        time.sleep(0.01)
    scheduler.stop()
    assert not scheduler.playing
    assert len(voices.chords) == 1
