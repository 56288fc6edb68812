"""
regraph-dex configuration

Every setting can come from the process environment or a .env file next to the
package. Call setup_logging() once at startup; log records carry the correlation id
of the wallet operation that produced them.
"""

import os
import logging
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Dict, List, Optional, TypeVar

from dotenv import load_dotenv

T = TypeVar("T")

ENV_FILE = Path(__file__).parent.parent / ".env"


def _load_env_file():
    if ENV_FILE.exists():
        load_dotenv(ENV_FILE)


_load_env_file()


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    value = os.getenv(key)
    return default if value is None else value


def _get_env_typed(key: str, default: T, cast: Callable[[str], T]) -> T:
    """Parse an env var with ``cast``; unparseable values log a warning and keep the default"""
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"{key}={raw!r} is not a valid {cast.__name__}, keeping {default}"
        )
        return default


def _get_env_float(key: str, default: float) -> float:
    return _get_env_typed(key, default, float)


def _get_env_int(key: str, default: int) -> int:
    return _get_env_typed(key, default, int)


def _get_env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Quote function per chain (relative to QuoteConfig.base_url)
DEFAULT_QUOTE_FUNCTIONS: Dict[str, str] = {
    "base": "get-swap-quote",
    "ethereum": "get-swap-quote",
    "arbitrum": "get-swap-quote",
    "polygon": "get-swap-quote",
    "optimism": "get-swap-quote",
    "bsc": "get-pancakeswap-quote",
    "avalanche": "get-traderjoe-quote",
    "tron": "get-sunswap-quote",
    "neo": "get-neo-quote",
}


@dataclass
class QuoteConfig:
    """Quote / price service configuration"""
    base_url: str = field(default_factory=lambda: _get_env("QUOTE_BASE_URL", ""))
    api_key: Optional[str] = field(default_factory=lambda: _get_env("QUOTE_API_KEY", None))
    timeout: float = field(default_factory=lambda: _get_env_float("QUOTE_TIMEOUT", 15.0))
    # Price tables are cached per chain; individual quotes never are
    price_ttl_seconds: float = field(default_factory=lambda: _get_env_float("QUOTE_PRICE_TTL_SECONDS", 30.0))
    functions: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_QUOTE_FUNCTIONS))

    def endpoint_for(self, chain_key: str) -> str:
        """Full endpoint URL for a chain's quote function"""
        function = self.functions.get(chain_key, DEFAULT_QUOTE_FUNCTIONS["base"])
        if not self.base_url:
            return function
        return f"{self.base_url.rstrip('/')}/{function}"


@dataclass
class TxConfig:
    """Transaction submission and receipt polling configuration"""
    poll_interval: float = field(default_factory=lambda: _get_env_float("TX_POLL_INTERVAL", 2.0))
    # Mobile wallets get a bounded poll; desktop polls until a receipt arrives
    mobile_max_attempts: int = field(default_factory=lambda: _get_env_int("TX_MOBILE_MAX_ATTEMPTS", 60))
    mobile_deadline_seconds: float = field(default_factory=lambda: _get_env_float("TX_MOBILE_DEADLINE_SECONDS", 120.0))
    approval_max_attempts: int = field(default_factory=lambda: _get_env_int("TX_APPROVAL_MAX_ATTEMPTS", 30))
    fee_transfer_max_attempts: int = field(default_factory=lambda: _get_env_int("TX_FEE_MAX_ATTEMPTS", 15))
    swap_deadline_seconds: int = field(default_factory=lambda: _get_env_int("TX_SWAP_DEADLINE_SECONDS", 1200))
    long_deadline_seconds: int = field(default_factory=lambda: _get_env_int("TX_LONG_DEADLINE_SECONDS", 1800))


@dataclass
class FeeConfig:
    """Protocol fee configuration (0.3% withheld from every swap input)"""
    wallet_address: str = field(default_factory=lambda: _get_env(
        "PROTOCOL_FEE_WALLET", "0x320b6a1080d6c2abbbff1a6e1d105812e4fb2716"
    ))
    tron_wallet_address: str = field(default_factory=lambda: _get_env("PROTOCOL_FEE_WALLET_TRON", ""))
    neo_wallet_address: str = field(default_factory=lambda: _get_env("PROTOCOL_FEE_WALLET_NEO", ""))
    numerator: int = 3
    denominator: int = 1000


@dataclass
class TradingConfig:
    """Slippage and Liquidity Book defaults"""
    default_slippage_bps: int = field(default_factory=lambda: _get_env_int("DEFAULT_SLIPPAGE_BPS", 50))
    default_lp_slippage_bps: int = field(default_factory=lambda: _get_env_int("DEFAULT_LP_SLIPPAGE_BPS", 50))
    default_bin_step: int = field(default_factory=lambda: _get_env_int("DEFAULT_BIN_STEP", 15))
    default_bin_range: int = field(default_factory=lambda: _get_env_int("DEFAULT_BIN_RANGE", 10))


@dataclass
class RefreshConfig:
    """Background refresh intervals (suppressed while a wallet action is pending)"""
    prices_interval: float = field(default_factory=lambda: _get_env_float("REFRESH_PRICES_SECONDS", 30.0))
    balances_interval: float = field(default_factory=lambda: _get_env_float("REFRESH_BALANCES_SECONDS", 15.0))


@dataclass
class TronConfig:
    """TRON fee limits in sun"""
    approve_fee_limit: int = field(default_factory=lambda: _get_env_int("TRON_APPROVE_FEE_LIMIT", 100_000_000))
    swap_fee_limit: int = field(default_factory=lambda: _get_env_int("TRON_SWAP_FEE_LIMIT", 150_000_000))
    transfer_fee_limit: int = field(default_factory=lambda: _get_env_int("TRON_TRANSFER_FEE_LIMIT", 100_000_000))
    mint_fee_limit: int = field(default_factory=lambda: _get_env_int("TRON_MINT_FEE_LIMIT", 500_000_000))
    modify_fee_limit: int = field(default_factory=lambda: _get_env_int("TRON_MODIFY_FEE_LIMIT", 300_000_000))
    collect_fee_limit: int = field(default_factory=lambda: _get_env_int("TRON_COLLECT_FEE_LIMIT", 200_000_000))


@dataclass
class EVMConfig:
    """EVM settings for the local web3 provider"""
    # Optional per-chain RPC override, e.g. RPC_URL_BASE=https://...
    rpc_overrides: Dict[str, str] = field(default_factory=lambda: {
        key[len("RPC_URL_"):].lower(): value
        for key, value in os.environ.items()
        if key.startswith("RPC_URL_") and value
    })
    rpc_timeout: float = field(default_factory=lambda: _get_env_float("EVM_RPC_TIMEOUT", 30.0))
    gas_limit_multiplier: float = field(default_factory=lambda: _get_env_float("EVM_GAS_LIMIT_MULTIPLIER", 1.2))


DEFAULT_LOG_FORMAT = "%(asctime)s [%(correlation_id)s] %(name)s %(levelname)s: %(message)s"


@dataclass
class LoggingConfig:
    """
    Log output settings

    Nothing is written to disk unless LOG_FILE is set or enable_file_logging() is called.

    Environment variables:
        LOG_FILE: Rotating log file path
        LOG_LEVEL: Level name (default INFO)
        LOG_FORMAT: Format string; ``%(correlation_id)s`` is always available
        LOG_CONSOLE: Also log to stderr (default true)
        LOG_MAX_BYTES: Rotation size (default 10MB)
        LOG_BACKUP_COUNT: Rotated files kept (default 5)
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", ""))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _get_env("LOG_FORMAT", DEFAULT_LOG_FORMAT))
    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))
    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 10 * 1024 * 1024))
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 5))

    @property
    def level(self) -> int:
        """Numeric level; unknown names fall back to INFO"""
        value = logging.getLevelName(self.log_level.upper())
        return value if isinstance(value, int) else logging.INFO


@dataclass
class Config:
    """
    All regraph-dex settings

    Usage:
        from regraph_dex.config import config

        print(config.quote.endpoint_for("bsc"))
        print(config.tx.poll_interval)
    """
    quote: QuoteConfig = field(default_factory=QuoteConfig)
    tx: TxConfig = field(default_factory=TxConfig)
    fee: FeeConfig = field(default_factory=FeeConfig)
    trading: TradingConfig = field(default_factory=TradingConfig)
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    tron: TronConfig = field(default_factory=TronConfig)
    evm: EVMConfig = field(default_factory=EVMConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def reload(cls) -> "Config":
        """Re-read .env and the environment"""
        _load_env_file()
        return cls()


config = Config()


def get_config() -> Config:
    return config


def reload_config() -> Config:
    """Replace the module-level config with a freshly loaded one"""
    global config
    config = Config.reload()
    return config


class CorrelationIdFilter(logging.Filter):
    """Stamps each record with the active operation's correlation id ("-" outside one)"""

    def filter(self, record: logging.LogRecord) -> bool:
        # infra.retry imports this module
        from .infra.retry import get_correlation_id

        if getattr(record, "correlation_id", None) is None:
            record.correlation_id = get_correlation_id() or "-"
        return True


def _build_handler(handler: logging.Handler, log_config: LoggingConfig) -> logging.Handler:
    handler.setLevel(log_config.level)
    handler.setFormatter(logging.Formatter(log_config.log_format))
    handler.addFilter(CorrelationIdFilter())
    return handler


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "regraph_dex",
) -> logging.Logger:
    """
    Configure the package logger

    Existing handlers on ``logger_name`` are closed and replaced, so calling this
    again (e.g. after reload_config()) never duplicates output.

    Args:
        log_config: Settings to apply, config.logging when omitted
        logger_name: Logger to configure

    Returns:
        The configured logger
    """
    log_config = log_config or config.logging

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)
    for old in list(logger.handlers):
        old.close()
        logger.removeHandler(old)

    handlers: List[logging.Handler] = []
    if log_config.log_file:
        Path(log_config.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding="utf-8",
        ))
    if log_config.console_output:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        logger.addHandler(_build_handler(handler, log_config))

    if log_config.log_file:
        logger.info(f"Logging to {log_config.log_file} at {log_config.log_level.upper()}")
    return logger


def _default_log_path() -> str:
    """regraph_dex/log/regraph_dex_<utc timestamp>.log"""
    from datetime import datetime, timezone

    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return str(Path(__file__).parent / "log" / f"regraph_dex_{stamp}.log")


def enable_file_logging(
    log_file: Optional[str] = None,
    level: str = "INFO",
    console: bool = True,
) -> logging.Logger:
    """
    Shortcut: log to a file (and optionally the console) at ``level``

    Example:
        from regraph_dex.config import enable_file_logging
        enable_file_logging(level="DEBUG", console=False)
    """
    return setup_logging(LoggingConfig(
        log_file=log_file or config.logging.log_file or _default_log_path(),
        log_level=level,
        console_output=console,
    ))
