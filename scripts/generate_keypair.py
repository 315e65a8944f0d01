import argparse
import logging
import secrets
import sys
from typing import List, Optional

from fips_keygen.backends import AVAILABLE_BACKENDS
from fips_keygen.core import GenerationConfig, KeyGenerationError
from fips_keygen.utils.logging_setup import setup_logging
from fips_keygen.utils.random_source import RandomSource
from fips_keygen.utils.rsa_key_generator import RSAKeyGenerator

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

logger = logging.getLogger("fips_keygen.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate two FIPS 186-3 probable primes and the matching RSA exponents."
    )
    parser.add_argument('--key-length', type=int, default=2048,
                        help="Even modulus bit length (nlen). 2048 or 3072 are recommended.")
    seed_group = parser.add_mutually_exclusive_group()
    seed_group.add_argument('--seed', type=int, help="Non-negative seed of the random generator. Defaults to the current time.")
    seed_group.add_argument('--system-entropy', action='store_true',
                            help="Draw the seed from the operating system entropy pool.")
    parser.add_argument('--exponent', type=int, help="Public exponent e (often 3, 5, 17, 257, 65537). "
                                                     "Defaults to a random odd e in [2^16, 2^256].")
    parser.add_argument('--num-tests', type=int, help="Rounds of the primality test (default 50).")
    parser.add_argument('--backend', choices=sorted(AVAILABLE_BACKENDS), help="Big-integer backend.")
    parser.add_argument('--config', help="JSON file with generation parameters.")
    parser.add_argument('--binary', action='store_true', help="Also print the primes in binary.")
    parser.add_argument('--allow-short-keys', action='store_true',
                        help="Accept key lengths below the configured minimum (testing only).")
    parser.add_argument('--log-level', default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument('--log-file', help="Also write logs to this rotating file.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        config = GenerationConfig.from_json(args.config) if args.config else GenerationConfig()
        config = config.with_overrides(num_tests=args.num_tests, backend=args.backend)
        generator = RSAKeyGenerator(config)
    except (OSError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return EXIT_USAGE

    if args.key_length <= 0 or args.key_length % 2 != 0:
        logger.error("Key length must be a positive even number, got %d.", args.key_length)
        return EXIT_USAGE
    if args.key_length < config.min_key_length and not args.allow_short_keys:
        logger.error("Key length %d is below the minimum of %d bits.", args.key_length, config.min_key_length)
        return EXIT_USAGE
    if args.exponent is not None and args.exponent <= 0:
        logger.error("Public exponent must be positive, got %d.", args.exponent)
        return EXIT_USAGE
    if args.seed is not None and args.seed < 0:
        logger.error("Seed must be non-negative, got %d.", args.seed)
        return EXIT_USAGE

    seed = secrets.randbits(64) if args.system_entropy else args.seed
    try:
        result = generator.run(args.key_length, args.exponent, RandomSource(seed))
    except KeyGenerationError as e:
        logger.error("FAILURE: %s", e)
        return EXIT_FAILURE

    key = result.key
    decimal = key.render(10)
    print(f"  The exponent e is:           {decimal['e']}")
    print(f"  The first pseudo-prime is:   {decimal['p']}")
    if args.binary:
        print(f"  In binary it is:             {key.render(2)['p']}")
    print(f"  The second pseudo-prime is:  {decimal['q']}")
    if args.binary:
        print(f"  In binary it is:             {key.render(2)['q']}")
    print(f"  The exponent d is:           {decimal['d']}")
    print(f"  Random seed:                 {result.seed}")
    return EXIT_SUCCESS


if __name__ == '__main__':
    sys.exit(main())
