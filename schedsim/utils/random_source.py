"""Random draws used by the simulator, behind one injectable object."""

from typing import Optional
import numpy as np


class RandomSource:
    """Thin wrapper over a numpy Generator.

    Every random value the engine needs (priorities, burst times, colors,
    utilization noise) goes through this class, so tests can substitute a
    scripted subclass and assert exact outcomes.
    """

    def __init__(self, seed: Optional[int] = None):
        """Initialize random source.

        Args:
            seed: Seed for reproducible runs, None for OS entropy
        """
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def randint(self, low: int, high: int) -> int:
        """Integer in [low, high)."""
        return int(self._rng.integers(low, high))

    def uniform(self, low: float, high: float) -> float:
        """Float in [low, high)."""
        return float(self._rng.uniform(low, high))

    def hue(self) -> float:
        """Hue angle in [0, 360)."""
        return self.uniform(0.0, 360.0)
