"""
Configuration for Lock Adapter

Settings come from the process environment, seeded from a .env file at the
project root when one exists. Each section is a dataclass whose defaults are
read when the section is constructed, so Config.reload() picks up changes.
"""

import os
import logging
from dataclasses import dataclass, field, fields
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, List, Optional

from dotenv import load_dotenv
from solders.pubkey import Pubkey

from .errors import ConfigurationError
from .types.programs import ProgramIds
from .protocols.raydium_lock import constants as lock_constants

ENV_FILE = Path(__file__).resolve().parent.parent / ".env"

_TRUTHY = {"1", "true", "yes", "on"}


def _load_env_file(path: Path = ENV_FILE) -> bool:
    """Seed os.environ from a .env file; existing variables win"""
    if not path.is_file():
        return False
    return load_dotenv(path)


_load_env_file()


def _env(key: str, default: Any, cast: Callable[[str], Any] = str) -> Any:
    """
    Read one environment variable.

    Unset variables give the default. A value that cast rejects is logged and
    also falls back to the default, so a typo never stops the process.
    """
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Ignoring {key}={raw!r}: not a valid {cast.__name__}, using {default!r}"
        )
        return default


def _flag(raw: str) -> bool:
    return raw.strip().lower() in _TRUTHY


def _setting(key: str, default: Any, cast: Callable[[str], Any] = str):
    return field(default_factory=lambda: _env(key, default, cast))


def _program(name: str):
    # Env var is the field name upper-cased with "_ID", e.g. lock_program -> LOCK_PROGRAM_ID
    env_key = f"{name.upper()}_ID"
    return _setting(env_key, getattr(lock_constants, env_key))


@dataclass
class RpcConfig:
    """
    Chain reader settings

    SOLANA_RPC_URL, RPC_TIMEOUT_SECONDS (30), RPC_COMMITMENT (confirmed)
    """
    url: str = _setting("SOLANA_RPC_URL", "")
    timeout_seconds: float = _setting("RPC_TIMEOUT_SECONDS", 30.0, float)
    commitment: str = _setting("RPC_COMMITMENT", "confirmed")


@dataclass
class SignerConfig:
    """Wallet keypair location (SOLANA_KEYPAIR_PATH)"""
    keypair_path: str = _setting("SOLANA_KEYPAIR_PATH", "")


@dataclass
class ProgramConfig:
    """
    Program identifiers used by the lock instruction builders

    Defaults are the mainnet deployments. Every field can be overridden
    through <FIELD>_ID, e.g. LOCK_PROGRAM_ID or RENT_SYSVAR_ID for devnet.
    """
    lock_program: str = _program("lock_program")
    cp_swap_program: str = _program("cp_swap_program")
    clmm_program: str = _program("clmm_program")
    token_program: str = _program("token_program")
    token_2022_program: str = _program("token_2022_program")
    associated_token_program: str = _program("associated_token_program")
    metadata_program: str = _program("metadata_program")
    memo_program: str = _program("memo_program")
    system_program: str = _program("system_program")
    rent_sysvar: str = _program("rent_sysvar")

    def to_program_ids(self) -> ProgramIds:
        """
        Resolve every identifier into a ProgramIds bundle

        Raises:
            ConfigurationError: If an identifier is empty or not a base58 pubkey
        """
        resolved = {}
        for program in fields(ProgramIds):
            value = getattr(self, program.name)
            if not value:
                raise ConfigurationError.missing(program.name)
            try:
                resolved[program.name] = Pubkey.from_string(value)
            except ValueError as e:
                raise ConfigurationError.invalid(program.name, f"not a valid pubkey ({e})") from e
        return ProgramIds(**resolved)


@dataclass
class LoggingConfig:
    """
    Logging settings

    LOG_FILE          rotating log file; empty disables file output
    LOG_LEVEL         level name (INFO)
    LOG_FORMAT        logging.Formatter pattern
    LOG_CONSOLE       also log to stderr (true)
    LOG_MAX_BYTES     rotate after this many bytes (10 MiB)
    LOG_BACKUP_COUNT  rotated files kept (5)
    """
    log_file: str = _setting("LOG_FILE", "")
    log_level: str = _setting("LOG_LEVEL", "INFO")
    log_format: str = _setting("LOG_FORMAT", "%(asctime)s %(levelname)-8s %(name)s: %(message)s")
    console_output: bool = _setting("LOG_CONSOLE", True, _flag)
    max_bytes: int = _setting("LOG_MAX_BYTES", 10 * 1024 * 1024, int)
    backup_count: int = _setting("LOG_BACKUP_COUNT", 5, int)

    @property
    def level(self) -> int:
        """Numeric level; unknown names map to INFO"""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


@dataclass
class Config:
    """
    All configuration sections

    Usage:
        from lock_adapter.config import config

        endpoint = config.rpc.url
        programs = config.programs.to_program_ids()
    """
    rpc: RpcConfig = field(default_factory=RpcConfig)
    signer: SignerConfig = field(default_factory=SignerConfig)
    programs: ProgramConfig = field(default_factory=ProgramConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def reload(cls) -> "Config":
        """Re-read the .env file and environment"""
        _load_env_file()
        return cls()


config = Config()


def get_config() -> Config:
    return config


def reload_config() -> Config:
    """Replace the module-level config with a fresh read of the environment"""
    global config
    config = Config.reload()
    return config


def _build_handlers(log_config: LoggingConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []

    if log_config.log_file:
        path = Path(log_config.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path,
                maxBytes=log_config.max_bytes,
                backupCount=log_config.backup_count,
                encoding="utf-8",
            )
        )

    if log_config.console_output:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(log_config.log_format)
    for handler in handlers:
        handler.setLevel(log_config.level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "lock_adapter",
) -> logging.Logger:
    """
    Configure the package logger.

    Replaces any handlers a previous call installed, then attaches a rotating
    file handler (when LOG_FILE is set) and a console handler (when enabled).

    Args:
        log_config: Logging settings (global config when omitted)
        logger_name: Logger to configure

    Returns:
        The configured logger
    """
    log_config = log_config or config.logging

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    for handler in _build_handlers(log_config):
        logger.addHandler(handler)

    if log_config.log_file:
        logger.debug(f"Logging to {log_config.log_file} at {log_config.log_level}")

    return logger
