from __future__ import annotations

import numpy as np

from chordgen.arpeggiator import Arpeggiator


def _indices(arp: Arpeggiator, count: int, direction: str, n: int) -> list[int | None]:
    return [arp.next_index(count, direction) for _ in range(n)]


def test_up_and_down() -> None:
    assert _indices(Arpeggiator(), 3, "up", 7) == [0, 1, 2, 0, 1, 2, 0]
    assert _indices(Arpeggiator(), 3, "down", 7) == [2, 1, 0, 2, 1, 0, 2]


def test_updown_bounces_without_repeating_ends() -> None:
    assert _indices(Arpeggiator(), 3, "updown", 9) == [0, 1, 2, 1, 0, 1, 2, 1, 0]
    assert _indices(Arpeggiator(), 4, "updown", 7) == [0, 1, 2, 3, 2, 1, 0]


def test_updown_single_note_chord() -> None:
    assert _indices(Arpeggiator(), 1, "updown", 3) == [0, 0, 0]


def test_random_stays_in_range_and_does_not_advance() -> None:
    arp = Arpeggiator(np.random.default_rng(0))
    picks = _indices(arp, 4, "random", 50)
    assert all(0 <= pick < 4 for pick in picks)
    assert arp.counter == 0


def test_empty_chord_and_unknown_direction() -> None:
    arp = Arpeggiator()
    assert arp.next_index(0, "up") is None
    assert arp.next([], "up") is None
    assert arp.next_index(3, "sideways") == 0
    assert arp.counter == 0


def test_reset_restarts_from_root() -> None:
    arp = Arpeggiator()
    freqs = [100.0, 200.0, 300.0]
    assert [arp.next(freqs, "up") for _ in range(2)] == [100.0, 200.0]
    arp.reset()
    assert arp.next(freqs, "up") == 100.0
