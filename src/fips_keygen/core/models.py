import math
from dataclasses import dataclass
from enum import IntEnum


def min_prime_distance(half_len: int) -> int:
    """Returns the bound 2^max(0, half_len - 100) that |p - q| must exceed."""
    return 1 << max(0, half_len - 100)


class Primality(IntEnum):
    """
    Outcome of a probabilistic primality test.

    The integer values follow the usual convention of big-number libraries:
    0 for composite, 1 for probably prime, 2 for certainly prime.
    """
    COMPOSITE = 0
    PROBABLY_PRIME = 1
    PRIME = 2

    @property
    def accepted(self) -> bool:
        return self is not Primality.COMPOSITE


@dataclass(frozen=True, slots=True)
class KeyLengthSpec:
    """
    Total modulus bit length of the key to produce.

    Attributes:
        nlen (int): Bit length of the modulus n = p*q (e.g., 2048).

    Raises:
        ValueError: If nlen is not a positive even number.
    """
    nlen: int

    def __post_init__(self):
        if self.nlen <= 0:
            raise ValueError("Key length (nlen) must be positive.")
        if self.nlen % 2 != 0:
            raise ValueError("Key length (nlen) must be even.")

    @property
    def half_len(self) -> int:
        """Target bit length of each prime."""
        return self.nlen // 2


@dataclass(frozen=True, slots=True)
class PrimeCandidate:
    """
    A probable prime accepted by the candidate generator.

    Attributes:
        value (int): The probable prime.
        bit_length (int): The requested bit length.
        attempts (int): Number of candidates drawn before this one was accepted (inclusive).

    Raises:
        ValueError: If the value does not have the structure of an accepted candidate.
    """
    value: int
    bit_length: int
    attempts: int

    def __post_init__(self):
        if self.value % 2 == 0:
            raise ValueError("Prime candidate must be odd.")
        if not (1 << (self.bit_length - 1)) <= self.value < (1 << self.bit_length):
            raise ValueError(f"Prime candidate must have exactly {self.bit_length} bits.")
        if self.attempts < 1:
            raise ValueError("Attempts must be at least 1.")


@dataclass(frozen=True, slots=True)
class PrimePair:
    """
    The two primes of a key, with their joint constraints.

    Attributes:
        p (int): First prime.
        q (int): Second prime, generated against p.

    Raises:
        ValueError: If the primes differ in size, are too close, or their product is too short.
    """
    p: int
    q: int

    def __post_init__(self):
        if self.p.bit_length() != self.q.bit_length():
            raise ValueError("Primes (p, q) must have the same bit length.")
        if abs(self.p - self.q) <= min_prime_distance(self.half_len):
            raise ValueError("Primes (p, q) are too close to each other.")
        if self.modulus < (1 << (2 * self.half_len - 1)):
            raise ValueError("Modulus (p*q) does not reach the full key length.")

    @property
    def half_len(self) -> int:
        return self.p.bit_length()

    @property
    def modulus(self) -> int:
        return self.p * self.q

    @property
    def phi(self) -> int:
        return (self.p - 1) * (self.q - 1)


@dataclass(frozen=True, slots=True)
class PrivateExponent:
    """
    Private exponent d together with the size floor it is checked against.

    Attributes:
        d (int): The private exponent.
        half_len (int): Half of the modulus bit length; d should be at least 2^half_len.
    """
    d: int
    half_len: int

    def __post_init__(self):
        if self.d <= 0:
            raise ValueError("Private exponent (d) must be positive.")

    @property
    def is_small(self) -> bool:
        """True when d < 2^half_len (FIPS 186-3 asks for a larger d)."""
        return self.d < (1 << self.half_len)


@dataclass(frozen=True, slots=True)
class KeyPair:
    """
    Represents the complete output of a key generation run.

    Attributes:
        e (int): The public exponent.
        p (int): First prime factor.
        q (int): Second prime factor.
        d (int): The private exponent (multiplicative inverse of e mod φ(n)).

    Raises:
        ValueError: If the components are inconsistent.
    """
    e: int
    p: int
    q: int
    d: int

    def __post_init__(self):
        if self.p == self.q:
            raise ValueError(
                "First prime factor (p) must be different than second prime factor (q)."
            )
        if math.gcd(self.phi, self.e) != 1:
            raise ValueError("φ(n) is not coprime to e.")
        if (self.d * self.e) % self.phi != 1:
            raise ValueError(
                "Private exponent (d) is not the multiplicative inverse of e mod φ(n)."
            )

    @property
    def n(self) -> int:
        return self.p * self.q

    @property
    def phi(self) -> int:
        return (self.p - 1) * (self.q - 1)

    @property
    def bit_length(self) -> int:
        return self.n.bit_length()

    def render(self, base: int = 10) -> dict[str, str]:
        """
        Renders e, p, q and d as strings in base 10 or base 2.

        Args:
            base (int): 10 for decimal, 2 for binary.

        Returns:
            dict[str, str]: The rendered components keyed by name.
        """
        if base == 10:
            fmt = "d"
        elif base == 2:
            fmt = "b"
        else:
            raise ValueError("Only base 10 and base 2 are supported.")
        return {name: format(getattr(self, name), fmt) for name in ("e", "p", "q", "d")}
