from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import numpy as np
import soundfile as sf  # type: ignore[import]
from numpy.typing import NDArray

from .errors import InvalidConfigError

FloatArray = NDArray[np.float64]
AudioNumbers = NDArray[np.floating[Any]] | Sequence[float]

SAMPLE_RATE = 44_100


def ensure_audio_contract(audio: AudioNumbers, *, check_peak: bool = True) -> NDArray[np.float32]:
    """Flatten to mono float32 and normalize when the peak exceeds full scale."""

    mono: NDArray[np.float32] = np.asarray(audio, dtype=np.float32).reshape(-1)
    if mono.size == 0 or not check_peak:
        return mono
    peak = float(np.max(np.abs(mono)))
    if peak > 1.0:
        mono = mono / peak
    return mono


def write_wav(
    path: str | Path,
    audio: AudioNumbers,
    *,
    sample_rate: int = SAMPLE_RATE,
) -> Path:
    """Write mono samples to a wav file."""

    if isinstance(audio, (str, bytes)):
        raise InvalidConfigError("audio must be a sample array or sequence")
    target = Path(path)
    normalized = ensure_audio_contract(audio)
    sf.write(target, normalized, sample_rate)  # type: ignore[reportUnknownMemberType]
    return target
