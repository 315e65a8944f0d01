import pytest
from fips_keygen.core import RetryExhaustedError
from fips_keygen.utils.exponent_selector import ExponentSelector
from fips_keygen.utils.random_source import RandomSource


class ScriptedSource(RandomSource):
    """Random source replaying a fixed list of values, then repeating the last one."""

    def __init__(self, values):
        super().__init__(seed=0)
        self.values = list(values)

    def draw_bits(self, n: int) -> int:
        self.draws += 1
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


class TestExponentSelector:
    """
    Tests for public exponent selection.
    """

    @pytest.mark.parametrize("explicit", [3, 17, 65537, 65536])
    def test_explicit_exponent_is_returned_unchanged(self, explicit):
        source = RandomSource(seed=1)
        assert ExponentSelector(source).select_exponent(explicit) == explicit
        assert source.draws == 0

    @pytest.mark.parametrize("seed", range(20))
    def test_random_exponent_range_and_parity(self, seed):
        e = ExponentSelector(RandomSource(seed=seed)).select_exponent()
        assert 65536 <= e <= 1 << 256
        assert e % 2 == 1

    def test_random_exponent_is_deterministic_with_seed(self):
        e1 = ExponentSelector(RandomSource(seed=99)).select_exponent()
        e2 = ExponentSelector(RandomSource(seed=99)).select_exponent()
        assert e1 == e2

    def test_rejects_even_and_small_draws(self):
        source = ScriptedSource([4, 3, 65535, 65537])
        assert ExponentSelector(source).select_exponent() == 65537
        assert source.draws == 4

    def test_unbounded_by_default(self):
        """Many bad draws in a row are tolerated when no cap is given."""
        source = ScriptedSource([2] * 1000 + [70001])
        assert ExponentSelector(source).select_exponent() == 70001
        assert source.draws == 1001

    def test_max_draws_raises_error(self):
        source = ScriptedSource([2])
        with pytest.raises(RetryExhaustedError) as exc_info:
            ExponentSelector(source).select_exponent(max_draws=5)
        assert exc_info.value.attempts == 5
        assert source.draws == 5

    def test_custom_bounds(self):
        selector = ExponentSelector(RandomSource(seed=3), bits=20, lower_bound=3)
        for _ in range(50):
            e = selector.select_exponent()
            assert 3 <= e <= 1 << 20
            assert e % 2 == 1

    @pytest.mark.parametrize("bits, lower_bound", [(1, 1), (16, 0), (16, 1 << 16)])
    def test_invalid_bounds_raise_error(self, bits, lower_bound):
        with pytest.raises(ValueError):
            ExponentSelector(RandomSource(seed=1), bits=bits, lower_bound=lower_bound)
