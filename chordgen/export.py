"""Plain-text formatting of a progression for clipboard and file export."""

from __future__ import annotations

from collections.abc import Sequence

from .config import GeneratorConfig, PlaybackSettings
from .harmony import Chord
from .theory import resolve_key


def progression_text(chords: Sequence[Chord]) -> str:
    return " - ".join(chord.name for chord in chords)


def progression_dump(
    chords: Sequence[Chord],
    config: GeneratorConfig,
    settings: PlaybackSettings,
) -> str:
    lines = [
        "CHORD PROGRESSION EXPORT",
        "========================",
        f"Key: {resolve_key(config.key)} {config.mode}",
        f"Style: {config.style}",
        f"BPM: {settings.bpm}",
        f"Time: {settings.meter}/4",
        "",
        "Progression:",
        " | ".join(chord.name for chord in chords),
        "",
        "Chord Details:",
    ]
    lines.extend(f"{i}. {chord.name} ({chord.chord_type})" for i, chord in enumerate(chords, start=1))
    return "\n".join(lines)


def export_filename(config: GeneratorConfig) -> str:
    return f"progression-{resolve_key(config.key)}-{config.mode}.txt"
