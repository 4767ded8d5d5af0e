from __future__ import annotations

from .arpeggiator import Arpeggiator
from .audio import SAMPLE_RATE, write_wav
from .bus import EffectsBus
from .config import GeneratorConfig, PlaybackSettings, parse_settings
from .drums import PercussionSynthesizer
from .engine import AudioEngine, OfflineOutput, acquire, release
from .errors import ChordGenError, InvalidConfigError, PlaybackError
from .export import progression_dump, progression_text
from .harmony import Chord, Progression, generate_progression
from .logging_utils import configure_logging as _configure_logging
from .patterns import DRUM_STYLES, SYNTH_RHYTHMS
from .progressions import STYLES
from .scheduler import Scheduler, TransportPosition
from .session import PlaybackSession, SavedProgression, render_offline
from .theory import CHORD_TYPES, NOTES, SCALES, chord_frequencies, scale_notes
from .voices import TIMBRES, VoiceSynthesizer

__version__ = "0.1.0"

__all__ = [
    "SAMPLE_RATE",
    "CHORD_TYPES",
    "DRUM_STYLES",
    "NOTES",
    "SCALES",
    "STYLES",
    "SYNTH_RHYTHMS",
    "TIMBRES",
    "Arpeggiator",
    "AudioEngine",
    "Chord",
    "ChordGenError",
    "EffectsBus",
    "GeneratorConfig",
    "InvalidConfigError",
    "OfflineOutput",
    "PercussionSynthesizer",
    "PlaybackError",
    "PlaybackSession",
    "PlaybackSettings",
    "Progression",
    "SavedProgression",
    "Scheduler",
    "TransportPosition",
    "VoiceSynthesizer",
    "acquire",
    "chord_frequencies",
    "generate_progression",
    "parse_settings",
    "progression_dump",
    "progression_text",
    "release",
    "render_offline",
    "scale_notes",
    "write_wav",
]

_configure_logging()
del _configure_logging
