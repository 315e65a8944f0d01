import logging
from dataclasses import dataclass, asdict
from typing import Optional

from fips_keygen.core import BigIntegerBackend, PrimeCandidate, RetryExhaustedError
from fips_keygen.core.models import min_prime_distance
from fips_keygen.utils.random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class GenerationStats:
    """Candidates drawn, and rejected ones counted by the filter that rejected them."""
    draws: int = 0
    distance: int = 0
    size: int = 0
    gcd: int = 0
    composite: int = 0

    @property
    def rejected(self) -> int:
        return self.distance + self.size + self.gcd + self.composite

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


class PrimeCandidateGenerator:
    """
    Rejection sampler for the probable primes of a key (FIPS 186-3, B.3.3).

    Each attempt draws a candidate with its top bit set, makes it odd and runs
    it through the cheap numeric filters before the primality test:

    1. distance to the companion prime (second prime only),
    2. n^2 >= 2^(2*bit_length - 1), so that p*q reaches the full key length,
    3. gcd(n - 1, e) == 1, so that d can be computed later,
    4. the backend's probabilistic primality test.

    Only candidates that reach step 3 count as attempts toward the
    retry_factor * bit_length ceiling. Draws rejected by steps 1 and 2 are
    bounded separately by DRAWS_PER_ATTEMPT times that ceiling, which ends
    the search when the filters cannot be met (e.g. 2 bits primes, where 3
    is the only candidate).

    Attributes:
        stats (GenerationStats): Draws and rejections of the last generate call.
    """

    DRAWS_PER_ATTEMPT = 16

    def __init__(self, random_source: RandomSource, backend: BigIntegerBackend, retry_factor: int = 5):
        if retry_factor < 1:
            raise ValueError("Retry factor must be at least 1.")
        self.random_source = random_source
        self.backend = backend
        self.retry_factor = retry_factor
        self.stats = GenerationStats()

    def generate(
            self,
            bit_length: int,
            e: int,
            companion: Optional[int] = None,
            num_tests: int = 50
    ) -> PrimeCandidate:
        """
        Generates a probable prime of exactly 'bit_length' bits.

        Args:
            bit_length (int): The desired bit length (half of the key length).
            e (int): The public exponent; the prime satisfies gcd(prime - 1, e) == 1.
            companion (int, optional): The first prime of the pair, when generating the second one.
            num_tests (int): Rounds of the primality test. Defaults to 50.

        Returns:
            PrimeCandidate: The accepted prime and the number of attempts it took.

        Raises:
            ValueError: If the arguments are out of range.
            RetryExhaustedError: If no candidate is accepted within retry_factor * bit_length attempts,
                or the draw limit is reached first.
        """
        if bit_length < 2:
            raise ValueError("Bit length must be at least 2.")
        if num_tests < 1:
            raise ValueError("Number of primality test rounds must be at least 1.")
        if e < 1:
            raise ValueError("Public exponent (e) must be positive.")

        self.stats = GenerationStats()
        max_attempts = self.retry_factor * bit_length
        max_draws = self.DRAWS_PER_ATTEMPT * max_attempts
        top_bit = 1 << (bit_length - 1)
        min_square = 1 << (2 * bit_length - 1)
        min_distance = min_prime_distance(bit_length)

        # Only candidates that pass the distance and size filters count as attempts
        attempts = 0
        while attempts < max_attempts:
            if self.stats.draws >= max_draws:
                logger.error(
                    "Giving up on a %d bits prime after %d draws (rejections: %s)",
                    bit_length, self.stats.draws, self.stats.as_dict()
                )
                raise RetryExhaustedError(bit_length, attempts, draws=self.stats.draws)

            n = self.random_source.draw_bits(bit_length - 1) + top_bit
            self.stats.draws += 1
            if n % 2 == 0:
                n += 1

            if companion is not None and abs(n - companion) <= min_distance:
                self.stats.distance += 1
                logger.debug("Draw %d: candidate too close to the companion prime", self.stats.draws)
                continue

            if n * n < min_square:
                self.stats.size += 1
                logger.debug("Draw %d: candidate square below 2^%d", self.stats.draws, 2 * bit_length - 1)
                continue

            attempts += 1
            if self.backend.gcd(n - 1, e) != 1:
                self.stats.gcd += 1
                logger.debug("Attempt %d: gcd(n - 1, e) != 1", attempts)
                continue

            if self.backend.probable_prime(n, num_tests).accepted:
                logger.info(
                    "Found a %d bits prime after %d attempts (rejections: %s)",
                    bit_length, attempts, self.stats.as_dict()
                )
                return PrimeCandidate(value=n, bit_length=bit_length, attempts=attempts)
            self.stats.composite += 1

        logger.error("Giving up on a %d bits prime after %d attempts", bit_length, max_attempts)
        raise RetryExhaustedError(bit_length, max_attempts, draws=self.stats.draws)
