from .config import GenerationConfig
from .exceptions import (
    KeyGenerationError,
    NotInvertibleError,
    RandomSourceError,
    RetryExhaustedError,
    SmallExponentWarning,
)
from .interfaces import BigIntegerBackend

from .models import (
    KeyLengthSpec,
    KeyPair,
    Primality,
    PrimeCandidate,
    PrimePair,
    PrivateExponent,
)

__all__ = [
    "BigIntegerBackend",
    "GenerationConfig",
    "KeyGenerationError",
    "KeyLengthSpec",
    "KeyPair",
    "NotInvertibleError",
    "Primality",
    "PrimeCandidate",
    "PrimePair",
    "PrivateExponent",
    "RandomSourceError",
    "RetryExhaustedError",
    "SmallExponentWarning",
]
