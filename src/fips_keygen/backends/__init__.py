from fips_keygen.core import BigIntegerBackend

from .native import NativeBackend
from .sympy_backend import SympyBackend

AVAILABLE_BACKENDS = {
    NativeBackend.name: NativeBackend,
    SympyBackend.name: SympyBackend,
}


def get_backend(name: str = NativeBackend.name) -> BigIntegerBackend:
    """
    Instantiates a backend by name.

    Raises:
        ValueError: If no backend is registered under 'name'.
    """
    try:
        return AVAILABLE_BACKENDS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown backend '{name}'. Available backends: {sorted(AVAILABLE_BACKENDS)}"
        ) from None


__all__ = [
    "AVAILABLE_BACKENDS",
    "NativeBackend",
    "SympyBackend",
    "get_backend",
]
