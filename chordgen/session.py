"""Playback session: owns the progression, settings and scheduler lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray
from pydantic import ValidationError

from . import engine as audio_engine
from .arpeggiator import Arpeggiator
from .config import GeneratorConfig, PlaybackSettings
from .drums import PercussionSynthesizer
from .engine import AudioEngine, OfflineOutput
from .errors import InvalidConfigError, PlaybackError
from .harmony import Chord, generate_progression
from .scheduler import TICK_PERIOD, Scheduler, TransportPosition
from .theory import resolve_key
from .voices import VoiceSynthesizer

_LOGGER = logging.getLogger("chordgen.session")

PREVIEW_DURATION = 1.5


@dataclass(frozen=True, slots=True)
class SavedProgression:
    label: str
    key: str
    mode: str
    chords: tuple[Chord, ...]


class PlaybackSession:
    def __init__(
        self,
        config: GeneratorConfig | None = None,
        settings: PlaybackSettings | None = None,
        *,
        live: bool = True,
        rng: np.random.Generator | None = None,
        on_chord_change: Callable[[int], None] | None = None,
        on_position: Callable[[TransportPosition], None] | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.settings = settings or PlaybackSettings()
        self._live = live
        self._rng = rng if rng is not None else np.random.default_rng()
        self._on_chord_change = on_chord_change
        self._on_position = on_position
        self._progression: tuple[Chord, ...] = ()
        self._saved: list[SavedProgression] = []
        self._arpeggiator = Arpeggiator(self._rng)
        self._engine: AudioEngine | None = None
        self._scheduler: Scheduler | None = None

    # -- state -----------------------------------------------------------------

    @property
    def progression(self) -> tuple[Chord, ...]:
        return self._progression

    @property
    def saved(self) -> tuple[SavedProgression, ...]:
        return tuple(self._saved)

    @property
    def is_playing(self) -> bool:
        return self._scheduler is not None and self._scheduler.playing

    @property
    def scheduler(self) -> Scheduler | None:
        return self._scheduler

    @property
    def active_chord_index(self) -> int:
        """Index of the audible chord, or -1 when stopped."""
        if self._scheduler is None:
            return -1
        return self._scheduler.published_chord_index

    @property
    def position(self) -> TransportPosition | None:
        if self._scheduler is None:
            return None
        return self._scheduler.published_position

    def configure(self, **changes: Any) -> GeneratorConfig:
        try:
            self.config = GeneratorConfig.model_validate({**self.config.model_dump(), **changes})
        except ValidationError as exc:
            raise InvalidConfigError(str(exc)) from exc
        return self.config

    def update_settings(self, **changes: Any) -> PlaybackSettings:
        self.settings = self.settings.update(**changes)
        return self.settings

    def commit_tempo(self, raw: str | float) -> int:
        self.settings = self.settings.commit_tempo(raw)
        return self.settings.bpm

    # -- progression -----------------------------------------------------------

    def generate(self) -> tuple[Chord, ...]:
        chords = generate_progression(self.config.key, self.config.mode, self.config.style, self._rng)
        self.replace_progression(chords)
        return self._progression

    def replace_progression(self, chords: Iterable[Chord]) -> None:
        """Swap the active progression; playback restarts from the first chord."""
        self._progression = tuple(chords)
        if self._scheduler is not None:
            self._scheduler.reset()

    def edit_chord(self, index: int, root: str, chord_type: str) -> Chord | None:
        if not 0 <= index < len(self._progression):
            _LOGGER.info("Ignoring edit of chord %d; progression has %d chords", index, len(self._progression))
            return None
        chord = Chord.build(root, chord_type)
        chords = list(self._progression)
        chords[index] = chord
        self._progression = tuple(chords)
        return chord

    def save(self, label: str | None = None) -> SavedProgression | None:
        if not self._progression:
            return None
        key = resolve_key(self.config.key)
        entry = SavedProgression(
            label=label or f"{key} {self.config.mode} - {datetime.now().strftime('%H:%M:%S')}",
            key=key,
            mode=self.config.mode,
            chords=self._progression,
        )
        self._saved.append(entry)
        return entry

    def load(self, saved: SavedProgression | int) -> bool:
        if isinstance(saved, int):
            if not 0 <= saved < len(self._saved):
                _LOGGER.info("Ignoring load of saved progression %d; %d saved", saved, len(self._saved))
                return False
            saved = self._saved[saved]
        self.replace_progression(saved.chords)
        return True

    # -- transport -------------------------------------------------------------

    def _acquire_engine(self) -> AudioEngine:
        if self._engine is None:
            try:
                self._engine = audio_engine.acquire(live=self._live, rng=self._rng)
            except PlaybackError as exc:
                _LOGGER.warning("Audio engine unavailable: %s", exc)
                raise
        return self._engine

    def start(self, *, threaded: bool = True) -> None:
        if self.is_playing:
            return
        engine = self._acquire_engine()
        if not self._progression:
            self.generate()
        self._scheduler = Scheduler(
            engine,
            settings=lambda: self.settings,
            progression=lambda: self._progression,
            voices=VoiceSynthesizer(engine),
            percussion=PercussionSynthesizer(engine, self._rng),
            arpeggiator=self._arpeggiator,
            on_chord_change=self._on_chord_change,
            on_position=self._on_position,
        )
        self._scheduler.start(threaded=threaded)

    def stop(self) -> None:
        if self._scheduler is not None:
            self._scheduler.stop()
        self._scheduler = None
        self._arpeggiator.reset()
        if self._engine is not None:
            self._engine = None
            audio_engine.release()

    def advance(self, seconds: float) -> None:
        """Drive an offline session forward by ``seconds`` of audio."""
        engine = self._acquire_engine()
        output = engine.output
        if not isinstance(output, OfflineOutput):
            raise PlaybackError("advance() is only available for offline sessions")
        remaining = seconds
        while remaining > 1e-9:
            chunk = min(TICK_PERIOD, remaining)
            if self._scheduler is not None:
                self._scheduler.tick()
            output.advance(chunk)
            remaining -= chunk

    def rendered_audio(self) -> NDArray[np.float32]:
        if self._engine is None or not isinstance(self._engine.output, OfflineOutput):
            return np.zeros(0, dtype=np.float32)
        return self._engine.output.samples()

    def preview_chord(self, index: int) -> bool:
        if not 0 <= index < len(self._progression):
            return False
        engine = self._acquire_engine()
        chord = self._progression[index]
        VoiceSynthesizer(engine).render_chord(
            chord.frequencies,
            engine.current_time,
            PREVIEW_DURATION,
            self.settings.synth,
            volume=self.settings.chord_volume,
            reverb=self.settings.reverb_mix,
        )
        return True

    def analysis_levels(self, bins: int = 32) -> NDArray[np.float64]:
        if self._engine is None:
            return np.zeros(bins)
        return self._engine.bus.analysis_levels(bins)


def render_offline(
    seconds: float,
    config: GeneratorConfig | None = None,
    settings: PlaybackSettings | None = None,
    *,
    rng: np.random.Generator | None = None,
    progression: Iterable[Chord] | None = None,
) -> tuple[tuple[Chord, ...], NDArray[np.float32]]:
    """Play a session into memory and return its progression and samples."""
    session = PlaybackSession(config, settings, live=False, rng=rng)
    if progression is not None:
        session.replace_progression(progression)
    session.start(threaded=False)
    try:
        session.advance(seconds)
        return session.progression, session.rendered_audio()
    finally:
        session.stop()
