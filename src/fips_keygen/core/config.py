import json
from dataclasses import dataclass, fields, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class GenerationConfig:
    """
    Tunable parameters of a key generation run.

    Attributes:
        num_tests (int): Rounds of the probabilistic primality test. Defaults to 50.
        retry_factor (int): A prime search gives up after retry_factor * bit_length attempts. Defaults to 5.
        exponent_bits (int): Size of a randomly drawn public exponent. Defaults to 256.
        exponent_min (int): Lower bound of a randomly drawn public exponent. Defaults to 65536.
        min_key_length (int): Smallest modulus length accepted by the command line. Defaults to 512.
        backend (str): Name of the big-integer backend. Defaults to "native".

    Raises:
        ValueError: If a parameter is out of range.
    """
    num_tests: int = 50
    retry_factor: int = 5
    exponent_bits: int = 256
    exponent_min: int = 65536
    min_key_length: int = 512
    backend: str = "native"

    def __post_init__(self):
        if self.num_tests < 1:
            raise ValueError("Number of primality test rounds must be at least 1.")
        if self.retry_factor < 1:
            raise ValueError("Retry factor must be at least 1.")
        if self.exponent_bits < 2:
            raise ValueError("Exponent size must be at least 2 bits.")
        if not 0 < self.exponent_min < (1 << self.exponent_bits):
            raise ValueError("Exponent lower bound must be positive and below 2^exponent_bits.")
        if self.min_key_length <= 0 or self.min_key_length % 2 != 0:
            raise ValueError("Minimum key length must be a positive even number.")

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> 'GenerationConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**values)

    @classmethod
    def from_json(cls, path: str) -> 'GenerationConfig':
        """Loads a configuration from a JSON object stored in 'path'."""
        with open(path, "r") as config_file:
            values = json.load(config_file)
        if not isinstance(values, dict):
            raise ValueError(f"Configuration file '{path}' must contain a JSON object.")
        return cls.from_dict(values)

    def with_overrides(self, **overrides: Any) -> 'GenerationConfig':
        """Returns a copy where every non-None override replaces the stored value."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
