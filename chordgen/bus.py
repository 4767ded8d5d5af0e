# pyright: reportUnknownVariableType=false
# pyright: reportUnknownMemberType=false

"""Shared effects bus: reverb send, master gain and the analysis tap."""

from __future__ import annotations

import numpy as np
from scipy.signal import oaconvolve  # type: ignore[import]

from .audio import SAMPLE_RATE, FloatArray

MASTER_GAIN = 0.8
REVERB_SECONDS = 2.0
REVERB_DECAY = 2.0
ANALYSIS_SIZE = 256

# Matches the loudness of a normalized convolution reverb
_IMPULSE_CALIBRATION = 0.00125


def reverb_impulse(
    rng: np.random.Generator,
    *,
    seconds: float = REVERB_SECONDS,
    decay: float = REVERB_DECAY,
    sr: int = SAMPLE_RATE,
) -> FloatArray:
    """Noise impulse response decaying as (1 - i/N) ** decay, RMS-normalized."""
    length = int(sr * seconds)
    position = np.arange(length) / length
    impulse = rng.uniform(-1.0, 1.0, length) * (1.0 - position) ** decay
    rms = float(np.sqrt(np.mean(impulse**2)))
    if rms == 0.0:
        return impulse
    return impulse * (_IMPULSE_CALIBRATION / rms)


class EffectsBus:
    """Mixes the dry and reverb-send streams block by block.

    The reverb is a streaming overlap-add convolution: the part of each block's
    response that spills past the block is carried in ``_tail``.
    """

    def __init__(
        self,
        *,
        rng: np.random.Generator | None = None,
        master_gain: float = MASTER_GAIN,
        sr: int = SAMPLE_RATE,
    ) -> None:
        generator = rng if rng is not None else np.random.default_rng()
        self.master_gain = master_gain
        self.impulse = reverb_impulse(generator, sr=sr)
        self._tail = np.zeros(len(self.impulse) - 1)
        self._analysis = np.zeros(ANALYSIS_SIZE)

    def process(self, dry: FloatArray, send: FloatArray) -> FloatArray:
        output = (dry + self._reverb(send)) * self.master_gain
        self._tap(output)
        return output

    def _reverb(self, send: FloatArray) -> FloatArray:
        n = len(send)
        if np.any(send):
            response = oaconvolve(send, self.impulse)
            response[: len(self._tail)] += self._tail
        else:
            response = np.concatenate((self._tail, np.zeros(n)))
        self._tail = response[n:].copy()
        return response[:n]

    def _tap(self, block: FloatArray) -> None:
        if len(block) >= ANALYSIS_SIZE:
            self._analysis = block[-ANALYSIS_SIZE:].copy()
        else:
            self._analysis = np.concatenate((self._analysis[len(block) :], block))

    def analysis_levels(self, bins: int = 32) -> FloatArray:
        """Spectrum magnitudes of the latest output in [0, 1], one per bin."""
        window = self._analysis * np.hanning(ANALYSIS_SIZE)
        spectrum = np.abs(np.fft.rfft(window))[: ANALYSIS_SIZE // 2]
        decibels = 20 * np.log10(spectrum / (ANALYSIS_SIZE / 2) + 1e-12)
        levels = np.clip((decibels + 100.0) / 70.0, 0.0, 1.0)
        step = max(1, len(levels) // bins)
        return levels[::step][:bins]

    def reset(self) -> None:
        self._tail[:] = 0.0
        self._analysis[:] = 0.0
