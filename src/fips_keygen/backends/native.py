import math
import random
from typing import Optional

from fips_keygen.core import BigIntegerBackend, Primality

# Small primes for quick sieving before Miller-Rabin
_SMALL_PRIMES = (
    3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47,
    53, 59, 61, 67, 71, 73, 79, 83, 89, 97, 101, 103, 107, 109, 113
)


class NativeBackend(BigIntegerBackend):
    """
    Backend built on Python's arbitrary-precision ints.

    The primality test is trial division by small primes followed by
    Miller-Rabin. Witnesses come from a generator seeded with the candidate
    itself: the answer for a given n never changes between runs, and the
    key's random source is left untouched.
    """

    name = "native"

    def gcd(self, a: int, b: int) -> int:
        return math.gcd(a, b)

    def invert(self, a: int, modulus: int) -> Optional[int]:
        try:
            return pow(a, -1, modulus)
        except ValueError:
            return None

    def probable_prime(self, n: int, rounds: int) -> Primality:
        # Handle trivial cases
        if n < 2:
            return Primality.COMPOSITE
        if n == 2:
            return Primality.PRIME
        if n % 2 == 0:
            return Primality.COMPOSITE

        for p in _SMALL_PRIMES:
            if n == p:
                return Primality.PRIME
            if n % p == 0:
                return Primality.COMPOSITE

        # Every composite below 127^2 has a factor in _SMALL_PRIMES
        if n < 127 * 127:
            return Primality.PRIME

        if _miller_rabin(n, rounds):
            return Primality.PROBABLY_PRIME
        return Primality.COMPOSITE


def _miller_rabin(n: int, rounds: int) -> bool:
    """
    Miller-Rabin probabilistic primality test on an odd n > 3.

    Args:
        n (int): The number to test.
        rounds (int): Number of witnesses to try.

    Returns:
        bool: True if n is probably prime, False if n is definitely composite.
    """
    # Write n-1 as d * 2^r where d is odd
    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    witnesses = random.Random(n)
    for _ in range(rounds):
        a = witnesses.randrange(2, n - 1)
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue

        # Square x repeatedly r-1 times
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            # If we never found x == n-1, n is composite
            return False
    return True
