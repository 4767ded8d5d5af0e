from __future__ import annotations

import argparse
import logging
import os
import time
from pathlib import Path
from typing import Any, Sequence

import numpy as np
from rich.console import Console
from rich.table import Table

from .audio import SAMPLE_RATE, write_wav
from .config import GeneratorConfig, PlaybackSettings, parse_settings
from .export import export_filename, progression_dump, progression_text
from .harmony import Chord, generate_progression
from .logging_utils import configure_logging, log_exception
from .patterns import DRUM_STYLES, SYNTH_RHYTHMS
from .progressions import STYLES
from .session import PlaybackSession, render_offline
from .spinner import Spinner, render_error
from .theory import NOTES, SCALES, chord_type_long_name
from .voices import TIMBRES

_LOGGER = logging.getLogger("chordgen.cli")
_CONSOLE = Console()


def _add_generator_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--key", type=str, default="C", help=f"One of {', '.join(NOTES)}.")
    parser.add_argument("--mode", type=str, default="major", choices=sorted(SCALES))
    parser.add_argument("--style", type=str, default="modern", choices=sorted(STYLES))
    parser.add_argument("--seed", type=int, default=None)


def _add_playback_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--bpm", type=float, default=90)
    parser.add_argument("--meter", type=int, default=4, choices=[3, 4, 6])
    parser.add_argument("--bars", type=int, default=2, choices=[1, 2, 4], help="Bars per chord.")
    parser.add_argument("--drums", type=str, default="basic", choices=sorted(DRUM_STYLES))
    parser.add_argument("--no-drums", action="store_true")
    parser.add_argument("--synth", type=str, default="pad", choices=sorted(TIMBRES))
    parser.add_argument("--rhythm", type=str, default="sustained", choices=sorted(SYNTH_RHYTHMS))
    parser.add_argument("--metronome", action="store_true")
    parser.add_argument("--reverb", type=float, default=0.4)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chordgen")
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Print a generated progression.")
    _add_generator_options(generate)

    render = sub.add_parser("render", help="Render a progression loop to a WAV file.")
    _add_generator_options(render)
    _add_playback_options(render)
    render.add_argument("--loops", type=int, default=1, help="Times through the progression.")
    render.add_argument("--seconds", type=float, default=None, help="Overrides --loops.")
    render.add_argument("--output", type=str, default="progression.wav")

    play = sub.add_parser("play", help="Play a progression on the default audio device.")
    _add_generator_options(play)
    _add_playback_options(play)
    play.add_argument("--seconds", type=float, default=None, help="Stop after this long.")

    export = sub.add_parser("export", help="Write a progression summary as text.")
    _add_generator_options(export)
    export.add_argument("--bpm", type=float, default=90)
    export.add_argument("--meter", type=int, default=4, choices=[3, 4, 6])
    export.add_argument("--plain", action="store_true", help="Chord names only.")
    export.add_argument("--output", type=str, default=None, help="File path, or '-' for stdout.")
    return parser


def _generator_config(args: argparse.Namespace) -> GeneratorConfig:
    return GeneratorConfig(key=args.key, mode=args.mode, style=args.style)


def _playback_settings(args: argparse.Namespace) -> PlaybackSettings:
    payload: dict[str, Any] = {"bpm": args.bpm, "meter": args.meter}
    if hasattr(args, "bars"):
        payload.update(
            bars_per_chord=args.bars,
            drums_enabled=not args.no_drums and args.drums != "none",
            drum_style=args.drums,
            metronome_enabled=args.metronome,
            synth=args.synth,
            rhythm=args.rhythm,
            reverb_mix=args.reverb,
        )
    return parse_settings(payload)


def _progression_table(chords: Sequence[Chord]) -> Table:
    table = Table(title=progression_text(chords))
    table.add_column("#", justify="right")
    table.add_column("Chord")
    table.add_column("Quality")
    table.add_column("Frequencies (Hz)")
    for index, chord in enumerate(chords, start=1):
        table.add_row(
            str(index),
            chord.name,
            chord_type_long_name(chord.chord_type),
            ", ".join(f"{freq:.1f}" for freq in chord.frequencies),
        )
    return table


def _play(args: argparse.Namespace, rng: np.random.Generator) -> int:
    session = PlaybackSession(
        _generator_config(args),
        _playback_settings(args),
        rng=rng,
        on_chord_change=lambda index: _CONSOLE.print(f"> {session.progression[index].name}"),
    )
    session.generate()
    _CONSOLE.print(_progression_table(session.progression))
    session.start()
    started = time.monotonic()
    try:
        while args.seconds is None or time.monotonic() - started < args.seconds:
            time.sleep(0.1)
    except KeyboardInterrupt:
        _CONSOLE.print("Stopping")
    finally:
        session.stop()
    return 0


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    try:
        parser = build_parser()
        args = parser.parse_args(argv)
        rng = np.random.default_rng(args.seed)

        if args.command == "generate":
            config = _generator_config(args)
            chords = generate_progression(config.key, config.mode, config.style, rng)
            _CONSOLE.print(_progression_table(chords))
            return 0

        if args.command == "render":
            config = _generator_config(args)
            settings = _playback_settings(args)
            chords = generate_progression(config.key, config.mode, config.style, rng)
            seconds = args.seconds or settings.chord_duration * len(chords) * max(args.loops, 1) + 2.0
            with Spinner("Rendering progression"):
                chords, audio = render_offline(seconds, config, settings, rng=rng, progression=chords)
            path = write_wav(args.output, audio, sample_rate=SAMPLE_RATE)
            _CONSOLE.print(f"Wrote {progression_text(chords)} to {path} ({seconds:.1f}s, sr={SAMPLE_RATE})")
            return 0

        if args.command == "play":
            return _play(args, rng)

        if args.command == "export":
            config = _generator_config(args)
            settings = _playback_settings(args)
            chords = generate_progression(config.key, config.mode, config.style, rng)
            text = progression_text(chords) if args.plain else progression_dump(chords, config, settings)
            if args.output == "-":
                _CONSOLE.print(text, highlight=False, markup=False)
                return 0
            target = Path(args.output or export_filename(config))
            target.write_text(text + "\n", encoding="utf-8")
            _CONSOLE.print(f"Wrote {progression_text(chords)} to {target}")
            return 0

        parser.print_help()
        return 1
    except Exception as exc:
        debug = bool(os.environ.get("CHORDGEN_DEBUG"))
        _LOGGER.warning("chordgen CLI failed: %s", exc, exc_info=debug)
        log_exception("chordgen CLI", exc)
        render_error("chordgen CLI", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
