import pandas as pd
import pytest
from run_benchmark import BenchmarkRunner, TrialConfig, _generate_worker
from fips_keygen.core import GenerationConfig


class TestBenchmark:
    """
    Tests for the benchmark helpers, without a process pool.
    """

    def test_trials_have_independent_reproducible_seeds(self):
        trials = BenchmarkRunner._generate_trials([64, 128], num_keys=3, initial_seed=42)

        assert [t.trial_id for t in trials[:3]] == ["ks64_key00", "ks64_key01", "ks64_key02"]
        assert [t.key_size for t in trials] == [64] * 3 + [128] * 3
        assert len({t.seed for t in trials}) == 6
        assert trials == BenchmarkRunner._generate_trials([64, 128], num_keys=3, initial_seed=42)

    def test_worker_reports_success(self):
        result = _generate_worker((TrialConfig("ks64_key00", 64, 1), GenerationConfig()))

        assert result.success is True
        assert result.error is None
        assert result.p_attempts >= 1
        assert result.q_attempts >= 1
        assert result.backend == "native"

    def test_worker_reports_failure(self):
        """The only odd 2 bits candidate is 3, so the second prime can never differ from the first."""
        result = _generate_worker((TrialConfig("ks4_key00", 4, 1), GenerationConfig()))

        assert result.success is False
        assert result.error == "Unable to generate a 2 bits prime after 0 attempts (160 candidates drawn)."

    def test_summary_groups_by_key_size(self):
        df = pd.DataFrame([
            {'trial_id': "a", 'key_size': 64, 'success': True, 'generation_time': 0.1,
             'p_attempts': 3, 'q_attempts': 5},
            {'trial_id': "b", 'key_size': 64, 'success': True, 'generation_time': 0.3,
             'p_attempts': 1, 'q_attempts': 3},
            {'trial_id': "c", 'key_size': 128, 'success': False, 'generation_time': 0.0,
             'p_attempts': 0, 'q_attempts': 0},
        ])
        summary = BenchmarkRunner.summarize(df)

        assert list(summary.index) == [64, 128]
        assert summary.loc[64, 'keys'] == 2
        assert summary.loc[64, 'avg_time'] == pytest.approx(0.2)
        assert summary.loc[64, 'avg_attempts'] == pytest.approx(6.0)
        assert summary.loc[64, 'max_attempts'] == 8
        assert summary.loc[128, 'success_rate'] == 0.0
