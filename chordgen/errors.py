from __future__ import annotations


class ChordGenError(Exception):
    """Base error for the chordgen library."""


class InvalidConfigError(ChordGenError):
    """Raised when playback settings cannot be parsed or validated."""


class PlaybackError(ChordGenError):
    """Raised when the audio subsystem is unavailable or fails to start."""
