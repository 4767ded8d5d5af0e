"""Lookahead scheduler.

A control loop wakes every ``TICK_PERIOD`` seconds and schedules every step
whose audio-clock time falls within ``LOOKAHEAD`` of the current audio time.
Sound events carry audio-clock timestamps, so jitter in the control loop does
not reach the output as long as it stays below the lookahead.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from .arpeggiator import Arpeggiator
from .config import STEPS_PER_BEAT, PlaybackSettings
from .drums import PercussionSynthesizer
from .harmony import Chord
from .patterns import DRUM_INSTRUMENTS, SYNTH_RHYTHMS, drum_pattern, drum_pattern_length, resolve_rhythm
from .voices import VoiceSynthesizer

if TYPE_CHECKING:
    from .engine import AudioEngine

_LOGGER = logging.getLogger("chordgen.scheduler")

LOOKAHEAD = 0.2
TICK_PERIOD = 0.05
START_DELAY = 0.1


@dataclass
class StepClock:
    """Mutable scheduling position, owned by the scheduler."""

    chord_index: int = 0
    step: int = 0
    next_event_time: float = 0.0

    def reset(self, start_time: float = 0.0) -> None:
        self.chord_index = 0
        self.step = 0
        self.next_event_time = start_time


@dataclass(frozen=True, slots=True)
class TransportPosition:
    """Published snapshot for transport display."""

    chord_index: int
    step: int
    beat: int
    bar: int


class Scheduler:
    def __init__(
        self,
        engine: "AudioEngine",
        *,
        settings: Callable[[], PlaybackSettings],
        progression: Callable[[], Sequence[Chord]],
        voices: VoiceSynthesizer,
        percussion: PercussionSynthesizer,
        arpeggiator: Arpeggiator,
        on_chord_change: Callable[[int], None] | None = None,
        on_position: Callable[[TransportPosition], None] | None = None,
        lookahead: float = LOOKAHEAD,
        tick_period: float = TICK_PERIOD,
    ) -> None:
        self._engine = engine
        self._settings = settings
        self._progression = progression
        self._voices = voices
        self._percussion = percussion
        self.arpeggiator = arpeggiator
        self._on_chord_change = on_chord_change
        self._on_position = on_position
        self.lookahead = lookahead
        self.tick_period = tick_period
        self.clock = StepClock()
        self._lock = threading.RLock()
        self._playing = False
        self._wake = threading.Event()
        self._thread: threading.Thread | None = None
        self.published_chord_index = -1
        self.published_position: TransportPosition | None = None

    @property
    def playing(self) -> bool:
        return self._playing

    def start(self, *, threaded: bool = True) -> None:
        with self._lock:
            if self._playing:
                return
            self.reset(self._engine.current_time + START_DELAY)
            self._playing = True
        _LOGGER.info("Scheduler started at %.3fs", self.clock.next_event_time)
        if threaded:
            self._wake.clear()
            self._thread = threading.Thread(target=self._run, name="chordgen-scheduler", daemon=True)
            self._thread.start()
        else:
            self.tick()

    def stop(self) -> None:
        self._playing = False
        self._wake.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)
        self._thread = None
        with self._lock:
            self.reset(0.0)
        self.published_chord_index = -1
        self.published_position = None
        _LOGGER.info("Scheduler stopped")

    def reset(self, start_time: float | None = None) -> None:
        """Return to chord 0, step 0; keeps the next event time unless given."""
        with self._lock:
            self.clock.reset(self.clock.next_event_time if start_time is None else start_time)
            self.arpeggiator.reset()

    def _run(self) -> None:
        while self._playing:
            self.tick()
            self._wake.wait(self.tick_period)

    def tick(self) -> int:
        """Schedule every step due within the lookahead; returns how many."""
        scheduled = 0
        with self._lock:
            horizon = self._engine.current_time + self.lookahead
            while self._playing and self.clock.next_event_time < horizon:
                settings = self._settings()
                self.schedule_step(self.clock.next_event_time, settings)
                self.clock.next_event_time += settings.step_duration
                scheduled += 1
        return scheduled

    def schedule_step(self, time: float, settings: PlaybackSettings) -> None:
        step = self.clock.step
        steps_per_chord = settings.steps_per_chord

        pattern = drum_pattern(settings.drum_style, settings.meter)
        pattern_step = step % drum_pattern_length(pattern)
        if settings.drums_enabled:
            for instrument in DRUM_INSTRUMENTS:
                if pattern[instrument][pattern_step]:
                    self._percussion.trigger(instrument, time, settings.drum_volume)

        if step % STEPS_PER_BEAT == 0:
            if settings.metronome_enabled:
                self._percussion.metronome(time, accent=step % settings.steps_per_bar == 0)
            self._publish_position(time, step, settings)

        progression = self._progression()
        if self.clock.chord_index >= len(progression):
            self._advance(steps_per_chord, len(progression))
            return
        chord = progression[self.clock.chord_index]

        chord_step = step % steps_per_chord
        if chord_step == 0:
            self.arpeggiator.reset()
            self._publish_chord(time, self.clock.chord_index)

        rhythm_name = resolve_rhythm(settings.rhythm)
        rhythm = SYNTH_RHYTHMS[rhythm_name]
        triggered = rhythm.pattern[step % len(rhythm.pattern)] == 1
        if rhythm_name == "sustained":
            if chord_step == 0:
                self._voices.render_chord(
                    chord.frequencies,
                    time,
                    settings.chord_duration,
                    settings.synth,
                    volume=settings.chord_volume,
                    reverb=settings.reverb_mix,
                )
        elif rhythm.arp_direction is not None:
            if triggered:
                frequency = self.arpeggiator.next(chord.frequencies, rhythm.arp_direction)
                if frequency is not None:
                    self._voices.render(
                        frequency,
                        time,
                        settings.short_note_duration,
                        settings.synth,
                        volume=settings.chord_volume,
                        reverb=settings.reverb_mix,
                    )
        elif triggered:
            self._voices.render_chord(
                chord.frequencies,
                time,
                settings.short_note_duration,
                settings.synth,
                volume=settings.chord_volume,
                reverb=settings.reverb_mix,
            )

        self._advance(steps_per_chord, len(progression))

    def _advance(self, steps_per_chord: int, progression_length: int) -> None:
        self.clock.step += 1
        if self.clock.step >= steps_per_chord:
            self.clock.step = 0
            self.clock.chord_index = (
                (self.clock.chord_index + 1) % progression_length if progression_length else 0
            )
            self.arpeggiator.reset()

    def _publish_chord(self, time: float, chord_index: int) -> None:
        def _publish() -> None:
            self.published_chord_index = chord_index
            if self._on_chord_change is not None:
                self._on_chord_change(chord_index)

        self._engine.call_at(time, _publish)

    def _publish_position(self, time: float, step: int, settings: PlaybackSettings) -> None:
        beat_in_chord = step // STEPS_PER_BEAT
        position = TransportPosition(
            chord_index=self.clock.chord_index,
            step=step,
            beat=beat_in_chord % settings.meter,
            bar=beat_in_chord // settings.meter,
        )

        def _publish() -> None:
            self.published_position = position
            if self._on_position is not None:
                self._on_position(position)

        self._engine.call_at(time, _publish)
