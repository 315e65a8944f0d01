import logging
from typing import Optional

from sympy import gcd, isprime, mod_inverse

from fips_keygen.core import BigIntegerBackend, Primality

logger = logging.getLogger(__name__)

# sympy.isprime is a proof below this bound and a BPSW test above it
_DETERMINISTIC_LIMIT = 1 << 64


class SympyBackend(BigIntegerBackend):
    """
    Backend delegating number theory to sympy.

    The 'rounds' parameter of the primality test is ignored: sympy runs a
    fixed Baillie-PSW test, which has no known counterexample.
    """

    name = "sympy"

    def gcd(self, a: int, b: int) -> int:
        return int(gcd(a, b))

    def invert(self, a: int, modulus: int) -> Optional[int]:
        try:
            return int(mod_inverse(a, modulus))
        except ValueError:
            logger.debug("No inverse of %d modulo %d", a, modulus)
            return None

    def probable_prime(self, n: int, rounds: int) -> Primality:
        if not isprime(n):
            return Primality.COMPOSITE
        if n < _DETERMINISTIC_LIMIT:
            return Primality.PRIME
        return Primality.PROBABLY_PRIME
