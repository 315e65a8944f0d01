import os
import argparse
import multiprocessing
import pandas as pd
from datetime import datetime
from typing import List, Optional, Tuple
from dataclasses import dataclass, asdict

from fips_keygen.backends import AVAILABLE_BACKENDS
from fips_keygen.core import GenerationConfig, KeyGenerationError
from fips_keygen.utils.logging_setup import setup_logging
from fips_keygen.utils.random_source import RandomSource
from fips_keygen.utils.rsa_key_generator import RSAKeyGenerator


# --- 1. Data Structures for the Benchmark ---
@dataclass
class TrialConfig:
    """Configuration for a single key generation trial."""
    trial_id: str
    key_size: int
    seed: int


@dataclass
class TrialResult:
    """Statistics of a single key generation trial. Holds no key material."""
    trial_id: str
    backend: str
    key_size: int
    seed: int
    success: bool
    p_attempts: int
    q_attempts: int
    generation_time: float
    error: Optional[str] = None


# --- 2. Worker Function for Multiprocessing (must be top-level) ---
def _generate_worker(task: Tuple[TrialConfig, GenerationConfig]) -> TrialResult:
    """Generates one key with its own random source."""
    trial, config = task
    generator = RSAKeyGenerator(config)
    try:
        result = generator.run(trial.key_size, public_exponent=65537, random_source=RandomSource(trial.seed))
    except KeyGenerationError as e:
        return TrialResult(trial.trial_id, config.backend, trial.key_size, trial.seed,
                           success=False, p_attempts=0, q_attempts=0, generation_time=0.0, error=str(e))
    return TrialResult(
        trial_id=trial.trial_id,
        backend=config.backend,
        key_size=trial.key_size,
        seed=trial.seed,
        success=True,
        p_attempts=result.p_attempts,
        q_attempts=result.q_attempts,
        generation_time=result.elapsed,
    )


# --- 3. Main Benchmark Orchestrator ---
class BenchmarkRunner:
    """Generates many keys in parallel and summarizes the cost of the prime search."""

    def __init__(self, config: GenerationConfig, output_root: str = "results"):
        self.config = config
        self.benchmark_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.output_dir = os.path.join(output_root, f"benchmark_{self.benchmark_id}")
        os.makedirs(self.output_dir, exist_ok=True)

    def run(self, key_sizes: List[int], num_keys: int, seed: int, processes: Optional[int] = None) -> pd.DataFrame:
        print("Starting key generation benchmark")
        print("=" * 50)
        print(f"Benchmark ID: {self.benchmark_id}")
        print(f"Results will be saved in: {self.output_dir}")
        print("-" * 50)
        print("Parameters:")
        print(f"  - Backend: {self.config.backend}")
        print(f"  - Key Sizes: {key_sizes} bits")
        print(f"  - Keys per Size: {num_keys}")
        print(f"  - Primality Test Rounds: {self.config.num_tests}")
        print(f"  - Initial Random Seed: {seed}")
        print("=" * 50)

        trials = self._generate_trials(key_sizes, num_keys, seed)
        with multiprocessing.Pool(processes) as pool:
            results = pool.map(_generate_worker, [(trial, self.config) for trial in trials])

        df = pd.DataFrame([asdict(r) for r in results])
        detailed_filename = os.path.join(self.output_dir, "detailed_results.csv")
        df.to_csv(detailed_filename, index=False)
        print(f"\n    -> Detailed results saved to {detailed_filename}")

        self._print_summary_report(df)
        print("\nBenchmark finished successfully.")
        return df

    @staticmethod
    def _generate_trials(key_sizes: List[int], num_keys: int, initial_seed: int) -> List[TrialConfig]:
        # One independent random source per trial, derived from the initial seed
        parent = RandomSource(initial_seed)
        trials = []
        for key_size in key_sizes:
            for key_id in range(num_keys):
                trials.append(TrialConfig(
                    trial_id=f"ks{key_size}_key{key_id:02d}",
                    key_size=key_size,
                    seed=parent.spawn(len(trials)).seed,
                ))
        return trials

    @staticmethod
    def summarize(df: pd.DataFrame) -> pd.DataFrame:
        """Aggregates per-key statistics by key size."""
        df = df.assign(attempts=df['p_attempts'] + df['q_attempts'])
        return df.groupby('key_size').agg(
            keys=('trial_id', 'count'),
            success_rate=('success', 'mean'),
            avg_time=('generation_time', 'mean'),
            max_time=('generation_time', 'max'),
            avg_attempts=('attempts', 'mean'),
            max_attempts=('attempts', 'max'),
        )

    def _print_summary_report(self, df: pd.DataFrame):
        summary = self.summarize(df)
        print("\n" + "=" * 80)
        print("BENCHMARK SUMMARY")
        print("=" * 80)
        print(summary.to_string(formatters={
            'success_rate': '{:.0%}'.format,
            'avg_time': '{:.3f}s'.format,
            'max_time': '{:.3f}s'.format,
            'avg_attempts': '{:.1f}'.format,
        }))
        print("-" * 80)


# --- 4. Script Entry Point and Argument Parsing ---
def main():
    parser = argparse.ArgumentParser(description="Benchmark FIPS 186-3 probable prime key generation.")
    parser.add_argument('--key-sizes', type=int, nargs='+', default=[1024, 2048], help="List of key sizes to test.")
    parser.add_argument('--num-keys', type=int, default=10, help="Number of keys to generate per size.")
    parser.add_argument('--seed', type=int, default=42, help="Initial random seed for reproducibility.")
    parser.add_argument('--backend', choices=sorted(AVAILABLE_BACKENDS), default="native")
    parser.add_argument('--num-tests', type=int, default=50, help="Rounds of the primality test.")
    parser.add_argument('--processes', type=int, help="Worker processes. Defaults to the CPU count.")
    parser.add_argument('--log-level', default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    setup_logging(args.log_level)
    config = GenerationConfig(num_tests=args.num_tests, backend=args.backend)
    runner = BenchmarkRunner(config)
    runner.run(key_sizes=args.key_sizes, num_keys=args.num_keys, seed=args.seed, processes=args.processes)


if __name__ == '__main__':
    main()
