"""Audio engine: the audio clock, the active-voice registry and output backends.

The engine clock is the number of frames handed to the output divided by the
sample rate. Voices are scheduled against that clock and mixed block by block
by whichever backend pulls audio: a sounddevice callback for live playback or
``OfflineOutput`` for rendering and tests.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
from dataclasses import dataclass
from queue import Queue
from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from .audio import SAMPLE_RATE, FloatArray
from .bus import EffectsBus
from .errors import PlaybackError

_LOGGER = logging.getLogger("chordgen.engine")

BLOCK_SIZE = 512

Dispatch = Callable[[Callable[[], None]], None]


@dataclass(frozen=True, slots=True)
class ScheduledVoice:
    start_frame: int
    dry: FloatArray
    send: FloatArray

    @property
    def end_frame(self) -> int:
        return self.start_frame + len(self.dry)


def _call_inline(callback: Callable[[], None]) -> None:
    callback()


class AudioEngine:
    def __init__(
        self,
        *,
        sample_rate: int = SAMPLE_RATE,
        block_size: int = BLOCK_SIZE,
        rng: np.random.Generator | None = None,
        dispatch: Dispatch | None = None,
    ) -> None:
        self.sample_rate = sample_rate
        self.block_size = block_size
        self.bus = EffectsBus(rng=rng, sr=sample_rate)
        self._dispatch = dispatch or _call_inline
        self._lock = threading.Lock()
        self._voices: list[ScheduledVoice] = []
        self._callbacks: list[tuple[int, int, Callable[[], None]]] = []
        self._sequence = itertools.count()
        self._frames = 0
        self.output: Any = None

    @property
    def frames_rendered(self) -> int:
        return self._frames

    @property
    def current_time(self) -> float:
        return self._frames / self.sample_rate

    @property
    def active_voice_count(self) -> int:
        with self._lock:
            return len(self._voices)

    def schedule(self, start_time: float, dry: FloatArray, send: FloatArray | None = None) -> ScheduledVoice:
        """Register a rendered voice to start at ``start_time`` on the audio clock."""
        wet = send if send is not None and send.size else np.zeros(0)
        voice = ScheduledVoice(int(round(start_time * self.sample_rate)), dry, wet)
        with self._lock:
            self._voices.append(voice)
        return voice

    def call_at(self, time: float, callback: Callable[[], None]) -> None:
        """Run ``callback`` once the rendered audio reaches ``time``."""
        frame = int(round(time * self.sample_rate))
        with self._lock:
            heapq.heappush(self._callbacks, (frame, next(self._sequence), callback))

    def render_block(self, frames: int) -> NDArray[np.float32]:
        start = self._frames
        end = start + frames
        dry = np.zeros(frames)
        send = np.zeros(frames)
        with self._lock:
            remaining: list[ScheduledVoice] = []
            for voice in self._voices:
                if voice.end_frame <= start:
                    continue
                remaining.append(voice)
                if voice.start_frame >= end:
                    continue
                lo = max(voice.start_frame, start)
                hi = min(voice.end_frame, end)
                source = slice(lo - voice.start_frame, hi - voice.start_frame)
                dry[lo - start : hi - start] += voice.dry[source]
                if voice.send.size:
                    send[lo - start : hi - start] += voice.send[source]
            self._voices = remaining
            output = self.bus.process(dry, send)
            self._frames = end
            due: list[Callable[[], None]] = []
            while self._callbacks and self._callbacks[0][0] <= end:
                due.append(heapq.heappop(self._callbacks)[2])
        for callback in due:
            self._dispatch(callback)
        return output.astype(np.float32)

    def stop_all(self) -> int:
        """Drop every active voice and pending callback immediately."""
        with self._lock:
            stopped = len(self._voices)
            self._voices = []
            self._callbacks = []
            self.bus.reset()
        _LOGGER.debug("Stopped %d active voices", stopped)
        return stopped


class OfflineOutput:
    """Pulls audio from the engine on demand and keeps every block."""

    def __init__(self, engine: AudioEngine) -> None:
        self._engine = engine
        self._blocks: list[NDArray[np.float32]] = []

    def advance(self, seconds: float) -> None:
        target = self._engine.frames_rendered + int(round(seconds * self._engine.sample_rate))
        while self._engine.frames_rendered < target:
            frames = min(self._engine.block_size, target - self._engine.frames_rendered)
            self._blocks.append(self._engine.render_block(frames))

    def samples(self) -> NDArray[np.float32]:
        if not self._blocks:
            return np.zeros(0, dtype=np.float32)
        return np.concatenate(self._blocks)

    def close(self) -> None:
        self._blocks = []


class _Dispatcher:
    """Runs engine callbacks on a worker thread, off the audio thread."""

    def __init__(self) -> None:
        self._queue: Queue[Callable[[], None] | None] = Queue()
        self._thread = threading.Thread(target=self._run, name="chordgen-dispatch", daemon=True)
        self._thread.start()

    def submit(self, callback: Callable[[], None]) -> None:
        self._queue.put(callback)

    def _run(self) -> None:
        while True:
            callback = self._queue.get()
            if callback is None:
                return
            try:
                callback()
            except Exception as exc:
                _LOGGER.warning("Observer callback failed: %s", exc, exc_info=True)

    def close(self) -> None:
        self._queue.put(None)
        self._thread.join(timeout=0.5)


class SoundDeviceOutput:
    def __init__(self, engine: AudioEngine, stream: Any, dispatcher: _Dispatcher) -> None:
        self._engine = engine
        self._stream = stream
        self._dispatcher = dispatcher

    def close(self) -> None:
        try:
            self._stream.stop()
            self._stream.close()
        finally:
            self._dispatcher.close()


def _load_sounddevice() -> Any | None:
    try:
        import sounddevice as sd_module  # type: ignore[import]
    except (ImportError, OSError) as exc:
        _LOGGER.info("sounddevice not available: %s", exc, exc_info=True)
        return None
    return sd_module


def _open_live(engine: AudioEngine, dispatcher: _Dispatcher) -> SoundDeviceOutput:
    sd = _load_sounddevice()
    if sd is None:
        raise PlaybackError("Live playback requires sounddevice (and PortAudio). Use offline rendering instead.")

    def _callback(outdata: Any, frames: int, _time_info: Any, status: Any) -> None:
        if status:
            _LOGGER.debug("Output stream status: %s", status)
        outdata[:, 0] = engine.render_block(frames)

    try:
        stream = sd.OutputStream(
            samplerate=engine.sample_rate,
            channels=1,
            dtype="float32",
            blocksize=engine.block_size,
            callback=_callback,
        )
        stream.start()
    except Exception as exc:
        raise PlaybackError(f"Could not open audio output: {exc}") from exc
    return SoundDeviceOutput(engine, stream, dispatcher)


_ENGINE: AudioEngine | None = None
_ENGINE_LOCK = threading.Lock()


def acquire(*, live: bool = True, rng: np.random.Generator | None = None) -> AudioEngine:
    """Return the process-wide engine, creating it (and its output) on first use."""
    global _ENGINE
    with _ENGINE_LOCK:
        if _ENGINE is not None:
            return _ENGINE
        if live:
            dispatcher = _Dispatcher()
            engine = AudioEngine(rng=rng, dispatch=dispatcher.submit)
            try:
                engine.output = _open_live(engine, dispatcher)
            except PlaybackError:
                dispatcher.close()
                raise
        else:
            engine = AudioEngine(rng=rng)
            engine.output = OfflineOutput(engine)
        _ENGINE = engine
        _LOGGER.info("Audio engine acquired (%s)", "live" if live else "offline")
        return engine


def current() -> AudioEngine | None:
    return _ENGINE


def release() -> None:
    """Hard-stop every voice, close the output and drop the engine."""
    global _ENGINE
    with _ENGINE_LOCK:
        engine = _ENGINE
        _ENGINE = None
    if engine is None:
        return
    engine.stop_all()
    if engine.output is not None:
        engine.output.close()
        engine.output = None
    _LOGGER.info("Audio engine released")
