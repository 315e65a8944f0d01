import logging
from typing import Optional

from fips_keygen.core import RetryExhaustedError
from fips_keygen.utils.random_source import RandomSource

logger = logging.getLogger(__name__)


class ExponentSelector:
    """
    Produces the public exponent e.

    A random exponent is odd and lies in [lower_bound, 2^bits], i.e.
    [65536, 2^256] with the default FIPS 186-3 parameters.
    """

    def __init__(self, random_source: RandomSource, bits: int = 256, lower_bound: int = 65536):
        if bits < 2:
            raise ValueError("Exponent size must be at least 2 bits.")
        if not 0 < lower_bound < (1 << bits):
            raise ValueError("Exponent lower bound must be positive and below 2^bits.")
        self.random_source = random_source
        self.bits = bits
        self.lower_bound = lower_bound
        self.upper_bound = 1 << bits

    def select_exponent(self, explicit: Optional[int] = None, max_draws: Optional[int] = None) -> int:
        """
        Returns the explicit exponent unchanged, or draws a random one.

        The random draw is plain rejection sampling and is unbounded unless
        'max_draws' is given; about two draws are needed on average.

        Args:
            explicit (int, optional): Caller-supplied exponent. Its range is not checked here.
            max_draws (int, optional): Give up after this many draws. Defaults to None (no cap).

        Returns:
            int: The public exponent.

        Raises:
            RetryExhaustedError: If max_draws is set and no draw was acceptable.
        """
        if explicit is not None:
            logger.info("Using caller-supplied public exponent e=%d", explicit)
            return explicit

        draws = 0
        while max_draws is None or draws < max_draws:
            e = self.random_source.draw_bits(self.bits)
            draws += 1
            # if even, try again
            if e % 2 == 0:
                continue
            if self.lower_bound <= e <= self.upper_bound:
                logger.info("Selected random public exponent after %d draw(s)", draws)
                return e

        raise RetryExhaustedError(self.bits, draws, what="public exponent")
