from typing import List, Optional
import numpy as np

class DRNG:
    """Random number generator wrapper.

    ``seed=None`` draws fresh OS entropy; a fixed seed makes a run reproducible.
    """

    def __init__(self, seed: Optional[int] = None):
        self.g = np.random.Generator(np.random.PCG64(seed))

    def permutation(self, n: int) -> List[int]:
        """Return a shuffled ordering of range(n)."""
        return [int(i) for i in self.g.permutation(n)]

    def d6(self) -> int:
        """Roll one six-sided die."""
        return int(self.g.integers(1, 7))

    def integers(self, low: int, high: int) -> int:
        """Return an integer in [low, high)."""
        return int(self.g.integers(low, high))

    def unit_id(self) -> int:
        """Return a 16-bit unit id in [0, 65000). Collisions are not checked."""
        return int(self.g.integers(0, 65_000))

    def match_id(self) -> str:
        """Return a random 128-bit id as 32 lowercase hex characters."""
        return self.g.bytes(16).hex()
