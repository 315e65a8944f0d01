import logging
import time
from dataclasses import dataclass
from typing import Optional

from fips_keygen.backends import get_backend
from fips_keygen.core import BigIntegerBackend, GenerationConfig, KeyLengthSpec, KeyPair, PrimePair
from fips_keygen.utils.exponent_deriver import ExponentDeriver
from fips_keygen.utils.exponent_selector import ExponentSelector
from fips_keygen.utils.prime_generator import PrimeCandidateGenerator
from fips_keygen.utils.random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """
    A generated key together with how it was obtained.

    Attributes:
        key (KeyPair): The generated key material.
        seed (int): Seed of the random source, enough to reproduce the run.
        p_attempts (int): Candidates drawn for the first prime.
        q_attempts (int): Candidates drawn for the second prime.
        elapsed (float): Wall-clock duration of the run, in seconds.
    """
    key: KeyPair
    seed: int
    p_attempts: int
    q_attempts: int
    elapsed: float


class RSAKeyGenerator:
    """
    Runs the whole pipeline: exponent selection, first prime, second prime
    (checked against the first), private exponent.
    """

    def __init__(self, config: Optional[GenerationConfig] = None, backend: Optional[BigIntegerBackend] = None):
        self.config = config or GenerationConfig()
        self.backend = backend or get_backend(self.config.backend)

    def run(
            self,
            key_length: int,
            public_exponent: Optional[int] = None,
            random_source: Optional[RandomSource] = None
    ) -> GenerationResult:
        """
        Generates a key of 'key_length' bits.

        Args:
            key_length (int): Desired bit length of the modulus (even, e.g., 2048).
            public_exponent (int, optional): Explicit e. Defaults to None, which draws a random one.
            random_source (RandomSource, optional): Source of randomness. Defaults to a time-seeded one.

        Returns:
            GenerationResult: The key and the statistics of the run.

        Raises:
            ValueError: If key_length or public_exponent is invalid.
            RetryExhaustedError: If a prime could not be found.
            NotInvertibleError: If e is not invertible modulo φ(n).
        """
        spec = KeyLengthSpec(key_length)
        if public_exponent is not None and public_exponent <= 0:
            raise ValueError("Public exponent (e) must be positive.")
        if random_source is None:
            random_source = RandomSource()

        start_time = time.perf_counter()
        logger.info(
            "Generating a %d bits key (seed=%d, backend=%s, rounds=%d)",
            spec.nlen, random_source.seed, self.backend.name, self.config.num_tests
        )

        selector = ExponentSelector(
            random_source, bits=self.config.exponent_bits, lower_bound=self.config.exponent_min
        )
        e = selector.select_exponent(public_exponent)

        generator = PrimeCandidateGenerator(random_source, self.backend, self.config.retry_factor)
        p = generator.generate(spec.half_len, e, num_tests=self.config.num_tests)
        q = generator.generate(spec.half_len, e, companion=p.value, num_tests=self.config.num_tests)
        pair = PrimePair(p.value, q.value)

        d = ExponentDeriver(self.backend).derive(pair.p, pair.q, e, spec.half_len)
        key = KeyPair(e=e, p=pair.p, q=pair.q, d=d.d)

        elapsed = time.perf_counter() - start_time
        logger.info("Generated a %d bits key in %.3fs", key.bit_length, elapsed)
        return GenerationResult(
            key=key,
            seed=random_source.seed,
            p_attempts=p.attempts,
            q_attempts=q.attempts,
            elapsed=elapsed,
        )

    @classmethod
    def generate_keypair(
            cls,
            key_length: int,
            public_exponent: Optional[int] = None,
            seed: Optional[int] = None,
            config: Optional[GenerationConfig] = None,
            backend: Optional[BigIntegerBackend] = None
    ) -> KeyPair:
        """
        Generate a new key pair with the specified bit length.

        Args:
            key_length (int): Desired bit length of the modulus (e.g., 2048).
            public_exponent (int, optional): The public exponent (e). Defaults to a random one.
            seed (int, optional): random seed for forcing reproducibility.
            config (GenerationConfig, optional): Generation parameters.
            backend (BigIntegerBackend, optional): Arithmetic backend. Defaults to the configured one.

        Returns:
            KeyPair: The generated key components.
        """
        generator = cls(config=config, backend=backend)
        return generator.run(key_length, public_exponent, RandomSource(seed)).key
