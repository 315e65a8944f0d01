import pytest
from fips_keygen.backends import AVAILABLE_BACKENDS, NativeBackend, SympyBackend, get_backend
from fips_keygen.core import BigIntegerBackend, Primality

MERSENNE_61 = (1 << 61) - 1
MERSENNE_127 = (1 << 127) - 1


@pytest.mark.parametrize("backend_class", list(AVAILABLE_BACKENDS.values()))
class TestAllBackends:
    """
    Conformance tests run on every registered BigIntegerBackend.
    """

    @pytest.fixture
    def backend(self, backend_class) -> BigIntegerBackend:
        return backend_class()

    @pytest.mark.parametrize("prime_number", [
        2, 3, 5, 7, 11, 13, 17, 19, 8191, 65537, MERSENNE_61, MERSENNE_127
    ])
    def test_known_primes_are_accepted(self, backend, prime_number):
        assert backend.probable_prime(prime_number, 20).accepted is True

    @pytest.mark.parametrize("composite_number", [
        -7, 0, 1, 4, 9, 15, 21, 100,
        561,                    # Carmichael number
        3215031751,             # strong pseudoprime to bases 2, 3, 5 and 7
        MERSENNE_61 * MERSENNE_127,
    ])
    def test_composites_are_rejected(self, backend, composite_number):
        assert backend.probable_prime(composite_number, 20) is Primality.COMPOSITE

    def test_gcd(self, backend):
        assert backend.gcd(12, 18) == 6
        assert backend.gcd(65536, 65537) == 1

    def test_invert(self, backend):
        assert backend.invert(7, 120) == 103

    def test_invert_without_inverse(self, backend):
        assert backend.invert(3, 120) is None

    def test_small_primes_are_certain(self, backend):
        assert backend.probable_prime(13, 1) is Primality.PRIME


class TestNativeBackend:

    def test_large_prime_is_only_probable(self):
        assert NativeBackend().probable_prime(MERSENNE_127, 10) is Primality.PROBABLY_PRIME

    def test_result_is_reproducible(self):
        """Witnesses depend on the candidate only, so repeated tests agree."""
        backend = NativeBackend()
        results = {backend.probable_prime(MERSENNE_61 * 3 + 2, 5) for _ in range(5)}
        assert len(results) == 1


class TestSympyBackend:

    def test_prime_below_64_bits_is_certain(self):
        assert SympyBackend().probable_prime(MERSENNE_61, 1) is Primality.PRIME

    def test_prime_above_64_bits_is_probable(self):
        assert SympyBackend().probable_prime(MERSENNE_127, 1) is Primality.PROBABLY_PRIME


class TestGetBackend:

    @pytest.mark.parametrize("name, backend_class", [("native", NativeBackend), ("sympy", SympyBackend)])
    def test_lookup_by_name(self, name, backend_class):
        assert isinstance(get_backend(name), backend_class)

    def test_default_backend(self):
        assert isinstance(get_backend(), NativeBackend)

    def test_unknown_backend_raises_error(self):
        with pytest.raises(ValueError, match="Unknown backend 'gmp'"):
            get_backend("gmp")
