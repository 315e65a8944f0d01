import json
import logging

import pytest
import generate_keypair
from generate_keypair import EXIT_FAILURE, EXIT_SUCCESS, EXIT_USAGE, main
from fips_keygen.utils.logging_setup import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_logging():
    """main() attaches handlers to the package logger; detach them after each test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestGenerateKeypairCLI:
    """
    Tests for the command line wrapper and its exit codes.
    """

    def test_success_prints_key(self, capsys):
        code = main(["--key-length", "128", "--allow-short-keys", "--seed", "5", "--exponent", "65537"])
        out = capsys.readouterr().out

        assert code == EXIT_SUCCESS
        assert "The exponent e is:           65537" in out
        assert "The first pseudo-prime is:" in out
        assert "The second pseudo-prime is:" in out
        assert "The exponent d is:" in out
        assert "Random seed:                 5" in out

    def test_output_is_reproducible(self, capsys):
        args = ["--key-length", "128", "--allow-short-keys", "--seed", "5"]
        main(args)
        first = capsys.readouterr().out
        main(args)
        assert capsys.readouterr().out == first

    def test_binary_output(self, capsys):
        main(["--key-length", "64", "--allow-short-keys", "--seed", "5", "--binary"])
        out = capsys.readouterr().out
        assert out.count("In binary it is:") == 2

    def test_short_key_is_refused(self):
        assert main(["--key-length", "128", "--seed", "5"]) == EXIT_USAGE

    @pytest.mark.parametrize("key_length", ["0", "2047"])
    def test_invalid_key_length(self, key_length):
        assert main(["--key-length", key_length, "--seed", "5"]) == EXIT_USAGE

    def test_non_positive_exponent(self):
        assert main(["--key-length", "512", "--exponent", "0", "--seed", "5"]) == EXIT_USAGE

    def test_negative_seed(self):
        assert main(["--key-length", "512", "--seed", "-5"]) == EXIT_USAGE

    def test_generation_failure_exit_code(self):
        """An even exponent makes every candidate fail the gcd filter."""
        args = ["--key-length", "64", "--allow-short-keys", "--seed", "5", "--exponent", "65536"]
        assert main(args) == EXIT_FAILURE

    def test_config_file(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'min_key_length': 64, 'num_tests': 10}))
        assert main(["--key-length", "64", "--seed", "5", "--config", str(path)]) == EXIT_SUCCESS

    def test_invalid_config_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'unknown': 1}))
        assert main(["--key-length", "512", "--config", str(path)]) == EXIT_USAGE

    def test_unknown_backend_in_config_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'backend': "gmp"}))
        assert main(["--key-length", "512", "--config", str(path)]) == EXIT_USAGE

    def test_missing_config_file(self, tmp_path):
        assert main(["--key-length", "512", "--config", str(tmp_path / "missing.json")]) == EXIT_USAGE

    def test_system_entropy_seed(self, monkeypatch, capsys):
        monkeypatch.setattr(generate_keypair.secrets, "randbits", lambda bits: 31337)
        assert main(["--key-length", "64", "--allow-short-keys", "--system-entropy"]) == EXIT_SUCCESS
        assert "Random seed:                 31337" in capsys.readouterr().out

    def test_seed_and_system_entropy_are_exclusive(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--seed", "1", "--system-entropy"])
        assert exc_info.value.code == EXIT_USAGE
