"""Configuration management for Confirmator."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_IDLE_DELAY_S = 60
DEFAULT_ACCEPT_DELAY_S = 15


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    """Read an integer from the environment, falling back on bad input."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(value, minimum)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("true", "1", "yes", "on")


@dataclass
class SchedulerConfig:
    """Polling and pacing parameters."""

    idle_delay_seconds: int = DEFAULT_IDLE_DELAY_S
    accept_retry_delay_seconds: int = DEFAULT_ACCEPT_DELAY_S
    transport_error_threshold: int = 0  # 0 = transport errors are fatal
    show_progress: bool = True


@dataclass
class SessionConfig:
    """Account session backend selection."""

    dry_run: bool = False
    backend: str = ""  # "package.module:factory"
    dry_run_confirmations: int = 0


@dataclass
class LoggingConfig:
    """Logging output configuration."""

    level: int = logging.INFO
    log_to_file: bool = False
    log_dir: Path = Path("logs")


@dataclass
class Config:
    """Main configuration container."""

    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env_path: Path | None = None) -> "Config":
        """Load configuration from environment variables.

        Args:
            env_path: Path to .env file (optional)

        Returns:
            Config instance populated from environment
        """
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        scheduler = SchedulerConfig(
            idle_delay_seconds=_env_int("CONFIRMATOR_IDLE_DELAY", DEFAULT_IDLE_DELAY_S),
            accept_retry_delay_seconds=_env_int("CONFIRMATOR_ACCEPT_DELAY", DEFAULT_ACCEPT_DELAY_S),
            transport_error_threshold=_env_int("CONFIRMATOR_TRANSPORT_ERROR_THRESHOLD", 0),
            show_progress=_env_bool("CONFIRMATOR_PROGRESS", True),
        )

        session = SessionConfig(
            dry_run=_env_bool("DRY_RUN", False),
            backend=os.getenv("CONFIRMATOR_SESSION_BACKEND", "").strip(),
            dry_run_confirmations=_env_int("DRY_RUN_CONFIRMATIONS", 0),
        )

        level_name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.INFO

        log_config = LoggingConfig(
            level=level,
            log_to_file=_env_bool("LOG_TO_FILE", False),
            log_dir=Path(os.getenv("LOG_DIR", "").strip() or "logs"),
        )

        return cls(scheduler=scheduler, session=session, logging=log_config)
