"""
Test Config Module

Tests for environment-driven configuration and logging setup.
"""

import os
import sys
import logging
from pathlib import Path
from unittest.mock import patch

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_program_config_defaults():
    """ProgramConfig defaults to the mainnet deployments"""
    from lock_adapter.config import ProgramConfig
    from lock_adapter.protocols.raydium_lock import constants

    print("Testing ProgramConfig defaults...")

    with patch.dict(os.environ, {}, clear=True):
        programs = ProgramConfig().to_program_ids()

    assert str(programs.lock_program) == constants.LOCK_PROGRAM_ID
    assert str(programs.cp_swap_program) == constants.CP_SWAP_PROGRAM_ID
    assert str(programs.clmm_program) == constants.CLMM_PROGRAM_ID
    assert str(programs.token_program) == constants.TOKEN_PROGRAM_ID
    assert str(programs.memo_program) == constants.MEMO_PROGRAM_ID
    assert str(programs.rent_sysvar) == constants.RENT_SYSVAR_ID

    print("  ProgramConfig defaults: PASSED")


def test_program_config_env_override():
    """Each program id can be overridden from the environment"""
    from solders.pubkey import Pubkey
    from lock_adapter.config import ProgramConfig

    print("Testing ProgramConfig env override...")

    devnet_lock = str(Pubkey.new_unique())
    with patch.dict(os.environ, {"LOCK_PROGRAM_ID": devnet_lock}):
        programs = ProgramConfig().to_program_ids()

    assert str(programs.lock_program) == devnet_lock

    print("  ProgramConfig env override: PASSED")


def test_program_config_invalid():
    """Malformed or empty program ids are configuration errors"""
    from lock_adapter.config import ProgramConfig
    from lock_adapter.errors import ConfigurationError, ErrorCode

    print("Testing ProgramConfig invalid values...")

    try:
        ProgramConfig(lock_program="not-a-pubkey").to_program_ids()
        assert False, "Should raise for invalid pubkey"
    except ConfigurationError as e:
        assert e.code == ErrorCode.CONFIG_INVALID
        assert "lock_program" in str(e)

    try:
        ProgramConfig(memo_program="").to_program_ids()
        assert False, "Should raise for empty program id"
    except ConfigurationError as e:
        assert e.code == ErrorCode.CONFIG_MISSING

    print("  ProgramConfig invalid values: PASSED")


def test_rpc_config_env():
    """RpcConfig reads URL, timeout and commitment from the environment"""
    from lock_adapter.config import RpcConfig

    print("Testing RpcConfig env...")

    env = {
        "SOLANA_RPC_URL": "https://rpc.example.com",
        "RPC_TIMEOUT_SECONDS": "12.5",
        "RPC_COMMITMENT": "finalized",
    }
    with patch.dict(os.environ, env):
        rpc = RpcConfig()

    assert rpc.url == "https://rpc.example.com"
    assert rpc.timeout_seconds == 12.5
    assert rpc.commitment == "finalized"

    # Bad float falls back to the default
    with patch.dict(os.environ, {"RPC_TIMEOUT_SECONDS": "soon"}):
        rpc = RpcConfig()
    assert rpc.timeout_seconds == 30.0

    print("  RpcConfig env: PASSED")


def test_logging_config_level():
    """LoggingConfig.level maps names to logging levels"""
    from lock_adapter.config import LoggingConfig

    print("Testing LoggingConfig level...")

    assert LoggingConfig(log_level="debug").level == logging.DEBUG
    assert LoggingConfig(log_level="WARNING").level == logging.WARNING
    assert LoggingConfig(log_level="nonsense").level == logging.INFO

    print("  LoggingConfig level: PASSED")


def test_setup_logging():
    """setup_logging attaches file and console handlers"""
    import tempfile
    from lock_adapter.config import LoggingConfig, setup_logging

    print("Testing setup_logging...")

    with tempfile.TemporaryDirectory() as tmp:
        log_file = os.path.join(tmp, "logs", "lock.log")
        log_config = LoggingConfig(
            log_file=log_file,
            log_level="DEBUG",
            console_output=True,
        )
        logger = setup_logging(log_config, logger_name="lock_adapter_test")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        assert os.path.isdir(os.path.dirname(log_file))

        logger.info("hello")

        # Close handlers so the temp directory can be removed
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    print("  setup_logging: PASSED")


def main():
    """Run all config tests"""
    print("=" * 60)
    print("Config Tests")
    print("=" * 60)

    tests = [
        test_program_config_defaults,
        test_program_config_env_override,
        test_program_config_invalid,
        test_rpc_config_env,
        test_logging_config_level,
        test_setup_logging,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            failed += 1

    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
