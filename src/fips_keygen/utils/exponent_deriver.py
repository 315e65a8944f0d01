import logging
import warnings

from fips_keygen.core import BigIntegerBackend, NotInvertibleError, PrivateExponent, SmallExponentWarning

logger = logging.getLogger(__name__)


class ExponentDeriver:
    """
    Computes the private exponent d = e^(-1) mod (p-1)(q-1).
    """

    def __init__(self, backend: BigIntegerBackend):
        self.backend = backend

    def derive(self, p: int, q: int, e: int, half_len: int) -> PrivateExponent:
        """
        Derives d and checks it against the FIPS 186-3 size floor 2^half_len.

        A d below the floor only triggers a SmallExponentWarning; the value is
        returned unchanged.

        Args:
            p (int): First prime.
            q (int): Second prime (p == q is accepted).
            e (int): The public exponent.
            half_len (int): Half of the modulus bit length.

        Returns:
            PrivateExponent: The private exponent.

        Raises:
            NotInvertibleError: If e shares a factor with φ, or φ <= 1.
        """
        # (p - 1) * (q - 1) = p*q - p - q + 1
        phi = p * q - p - q + 1

        # No usable inverse exists modulo φ <= 1
        d = self.backend.invert(e, phi) if phi > 1 else None
        if d is None:
            logger.error("Exponent e=%d not relatively prime to φ(n)", e)
            raise NotInvertibleError(e, phi)

        exponent = PrivateExponent(d=d, half_len=half_len)
        if exponent.is_small:
            message = f"Private exponent (d) is smaller than 2^{half_len}."
            logger.warning(message)
            warnings.warn(message, SmallExponentWarning, stacklevel=2)
        return exponent
