from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

from chordgen.audio import ensure_audio_contract, write_wav
from chordgen.errors import InvalidConfigError


def test_write_wav_accepts_sequence(tmp_path: Path) -> None:
    target = tmp_path / "seq.wav"
    samples = [0.0, 0.1, -0.1, 0.0]

    write_wav(target, samples, sample_rate=22_050)

    assert target.exists()
    data, rate = sf.read(str(target))
    assert rate == 22_050
    assert len(data) == 4


def test_write_wav_rejects_text(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError):
        write_wav(tmp_path / "bad.wav", "0.1 0.2")  # type: ignore[arg-type]


def test_ensure_audio_contract_normalizes_peak() -> None:
    out = ensure_audio_contract(np.array([[2.0], [-1.0]]))
    assert out.dtype == np.float32
    assert out.shape == (2,)
    assert np.allclose(out, [1.0, -0.5])


def test_ensure_audio_contract_skip_peak() -> None:
    audio = np.array([2.0, -2.0], dtype=np.float32)
    out = ensure_audio_contract(audio, check_peak=False)
    assert np.allclose(out, audio)


def test_write_wav_rejects_bytes(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError):
        write_wav(tmp_path / "bad.wav", b"\x00\x01")  # type: ignore[arg-type]
    assert not (tmp_path / "bad.wav").exists()
