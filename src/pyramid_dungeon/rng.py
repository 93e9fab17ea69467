from __future__ import annotations

import logging
import random
import secrets
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class TopologyRNG:
    """
    Deterministic RNG wrapper around random.Random.

    Generation code only ever talks to this object, never to the global
    ``random`` module, so one seed always reproduces one topology. Exposes the
    three primitives the path walks need: a uniform integer, a 1-in-N roll and
    a weighted pick.
    """

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.seed is None:
            self.seed = secrets.randbits(31)
            logger.info("No seed provided; generated random seed: %d", self.seed)
        self._rng = random.Random(self.seed)

    def next_int(self, upper: int) -> int:
        """Return a random integer N such that 0 <= N < upper."""
        if upper < 1:
            raise ValueError(f"upper must be >= 1, got {upper}")
        return self._rng.randrange(upper)

    def one_in(self, denominator: int) -> bool:
        """Return True with probability 1/denominator.

        A denominator of 1 always succeeds.
        """
        if denominator < 1:
            raise ValueError(f"denominator must be >= 1, got {denominator}")
        return self._rng.randrange(denominator) == 0

    def weighted_choice(self, options: Sequence[Tuple[T, float]]) -> T:
        """Pick one item from (item, weight) pairs proportionally to weight."""
        if not options:
            raise IndexError("Cannot choose from an empty sequence")
        total = 0.0
        for _item, weight in options:
            if weight <= 0:
                raise ValueError(f"weights must be positive, got {weight}")
            total += weight
        roll = self._rng.random() * total
        for item, weight in options:
            if roll < weight:
                return item
            roll -= weight
        # Float drift can leave a sliver past the last bucket
        return options[-1][0]

    def state(self):
        """Return the internal PRNG state for debugging."""
        return self._rng.getstate()

    def set_state(self, state) -> None:
        """Restore the internal PRNG state."""
        self._rng.setstate(state)
