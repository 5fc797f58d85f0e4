"""Randomized telegraph durations.

The enemy's wind-up length is redrawn before every attack so the player
cannot settle into a rhythm. Only anticipation is randomized; the attack
itself always lands after a fixed duration.
"""

from typing import Optional

import numpy as np


DEFAULT_TELEGRAPH_MIN = 0.5
DEFAULT_TELEGRAPH_MAX = 1.5


class TelegraphDurationProvider:
    """Draws telegraph durations uniformly from a closed interval."""

    def __init__(
        self,
        minimum: float = DEFAULT_TELEGRAPH_MIN,
        maximum: float = DEFAULT_TELEGRAPH_MAX,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        if minimum > maximum:
            raise ValueError(
                f"Telegraph minimum {minimum} is greater than maximum {maximum}"
            )
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        # Generator.uniform excludes its upper bound; step one ulp past it
        self._upper = np.nextafter(self.maximum, np.inf)

    def next_telegraph_duration(self) -> float:
        """Draw one duration from ``[minimum, maximum]``."""
        return float(self.sample(1)[0])

    def sample(self, count: int) -> np.ndarray:
        """Draw ``count`` independent durations as an array.

        Values are clipped to the interval so the one-ulp widening above can
        never leak a value past ``maximum``.
        """
        draws = self._rng.uniform(self.minimum, self._upper, size=count)
        return np.clip(draws, self.minimum, self.maximum)
