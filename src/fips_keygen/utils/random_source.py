import logging
import random
import time
from typing import Callable, Optional

from fips_keygen.core import RandomSourceError

logger = logging.getLogger(__name__)


class RandomSource:
    """
    Seeded stream of uniformly random bits.

    Each instance owns its own generator, so two sources never interfere and a
    fixed seed always reproduces the same stream. Seeds must be non-negative:
    random.Random seeds from the absolute value, so -s and s would collide.
    The source may be re-seeded once, before anything has been drawn from it.

    Attributes:
        seed (int): The effective seed, kept so a run can be reproduced.
        draws (int): Number of draw_bits calls served so far.
    """

    def __init__(self, seed: Optional[int] = None, clock: Callable[[], float] = time.time):
        if seed is None:
            seed = int(clock())
            logger.warning(
                "Seeding from the current time (%d). Time-based seeds are not suitable "
                "for production keys.", seed
            )
        _check_seed(seed)
        self.seed = seed
        self.draws = 0
        self._reseeded = False
        self._generator = random.Random(seed)

    def reseed(self, seed: int) -> None:
        """
        Replaces the seed of a fresh source.

        Raises:
            ValueError: If the seed is negative.
            RandomSourceError: If the source was already re-seeded or has been drawn from.
        """
        _check_seed(seed)
        if self._reseeded:
            raise RandomSourceError("Random source can only be re-seeded once.")
        if self.draws:
            raise RandomSourceError("Random source cannot be re-seeded after drawing from it.")
        self._generator.seed(seed)
        self.seed = seed
        self._reseeded = True

    def draw_bits(self, n: int) -> int:
        """
        Draws a uniformly random integer in [0, 2^n).

        Args:
            n (int): Number of random bits.

        Returns:
            int: The random value (0 when n == 0).
        """
        if n < 0:
            raise ValueError("Number of bits cannot be negative.")
        self.draws += 1
        if n == 0:
            return 0
        return self._generator.getrandbits(n)

    def spawn(self, index: int) -> 'RandomSource':
        """
        Derives an independent source for a parallel worker.

        The child seed depends only on this source's seed and 'index', so a
        parallel run is as reproducible as a sequential one.
        """
        if index < 0:
            raise ValueError("Worker index cannot be negative.")
        return RandomSource(seed=(self.seed << 32) ^ (index + 1))

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed}, draws={self.draws})"


def _check_seed(seed: int) -> None:
    if seed < 0:
        raise ValueError("Seed cannot be negative.")
