from typing import Optional


class KeyGenerationError(Exception):
    """Base class for every fatal error raised while producing key material."""


class RetryExhaustedError(KeyGenerationError, RuntimeError):
    """
    Raised when a rejection-sampling loop runs out of attempts.

    Attributes:
        bit_length (int): The bit length that was being searched for.
        attempts (int): The number of attempts spent before giving up.
        draws (int, optional): The number of candidates drawn, when it differs from attempts.
    """

    def __init__(self, bit_length: int, attempts: int, what: str = "prime", draws: Optional[int] = None):
        self.bit_length = bit_length
        self.attempts = attempts
        self.draws = draws
        message = f"Unable to generate a {bit_length} bits {what} after {attempts} attempts"
        if draws is not None:
            message += f" ({draws} candidates drawn)"
        super().__init__(message + ".")


class NotInvertibleError(KeyGenerationError, ValueError):
    """
    Raised when the public exponent has no inverse modulo φ = (p-1)(q-1).

    Attributes:
        e (int): The public exponent.
        phi (int): The modulus the inverse was requested for.
    """

    def __init__(self, e: int, phi: int):
        self.e = e
        self.phi = phi
        super().__init__("Public exponent (e) is not relatively prime to φ(n).")


class RandomSourceError(KeyGenerationError):
    """Raised when a random source is re-seeded illegally."""


class SmallExponentWarning(UserWarning):
    """Emitted when the private exponent d is below 2^(nlen/2)."""
