from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .patterns import ArpDirection


class Arpeggiator:
    """Picks one chord tone per trigger in up, down, up-down or random order.

    The counter is reset at the start of every chord. Random order does not
    advance it.
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()
        self.counter = 0

    def reset(self) -> None:
        self.counter = 0

    def next_index(self, count: int, direction: ArpDirection | str) -> int | None:
        if count <= 0:
            return None
        match direction:
            case "up":
                index = self.counter % count
            case "down":
                index = (count - 1) - (self.counter % count)
            case "updown":
                cycle = count * 2 - 2
                position = self.counter % cycle if cycle > 0 else 0
                index = position if position < count else cycle - position
            case "random":
                return int(self._rng.integers(count))
            case _:
                return 0
        self.counter += 1
        return index

    def next(self, frequencies: Sequence[float], direction: ArpDirection | str) -> float | None:
        index = self.next_index(len(frequencies), direction)
        if index is None:
            return None
        return frequencies[index]
