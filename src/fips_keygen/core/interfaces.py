from abc import ABC, abstractmethod
from typing import Optional

from .models import Primality


class BigIntegerBackend(ABC):
    """
    Abstract interface for the arbitrary-precision arithmetic used during key generation.

    Plain additions, multiplications and comparisons are done on Python ints by
    the callers. A backend only provides the number-theoretic primitives that
    can be delegated to a specialised library.
    """

    name: str = "abstract"

    @abstractmethod
    def gcd(self, a: int, b: int) -> int:
        """
        Greatest common divisor.

        Args:
            a (int): First operand.
            b (int): Second operand.

        Returns:
            int: gcd(a, b), always non-negative.
        """
        pass

    @abstractmethod
    def invert(self, a: int, modulus: int) -> Optional[int]:
        """
        Modular inverse.

        Args:
            a (int): The value to invert.
            modulus (int): The modulus (must be positive).

        Returns:
            Optional[int]: x in [0, modulus) with a*x ≡ 1 (mod modulus), or None if no inverse exists.
        """
        pass

    @abstractmethod
    def probable_prime(self, n: int, rounds: int) -> Primality:
        """
        Probabilistic primality test.

        Args:
            n (int): The number to test.
            rounds (int): Number of test rounds (higher = more confidence).

        Returns:
            Primality: COMPOSITE, PROBABLY_PRIME or PRIME.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
