"""Seeded integer source used by every random draw in the pipeline."""

from __future__ import annotations

import random


class RandomSource:
    """Reproducible stream of bounded integers.

    Wraps a private ``random.Random`` so generation never touches the
    module-level generator shared with the rest of the process. Any object
    with a compatible ``next(bound)`` method can stand in for this class.
    """

    __slots__ = ("seed", "_rng", "draws")

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = random.Random(seed)
        self.draws = 0

    def next(self, bound: int) -> int:
        """Return an integer in ``[0, bound)``."""
        if bound <= 0:
            raise ValueError(f"bound must be positive (got {bound})")
        self.draws += 1
        return self._rng.randrange(bound)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r}, draws={self.draws})"


__all__ = ["RandomSource"]
