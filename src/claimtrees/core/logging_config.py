"""Centralized logging configuration for claimtrees."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from logging.handlers import RotatingFileHandler


# Third-party loggers that are excessively noisy at INFO level.
# Raised to WARNING so per-request HTTP chatter stays out of the console.
_NOISY_LOGGERS: tuple[str, ...] = (
    "httpx",
    "httpcore",
)


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "INFO"
    file_enabled: bool = True
    file_path: str = "~/.claimtrees/logs/claimtrees.log"
    file_max_bytes: int = 10485760  # 10MB
    file_backup_count: int = 5
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    use_rich_console: bool = True
    quiet_third_party: bool = True
    access_log_ignore: list[str] = field(
        default_factory=lambda: ["/health"],
    )


class _AccessLogFilter(logging.Filter):
    """Drop uvicorn access-log records for specific path prefixes."""

    def __init__(self, ignored_paths: list[str]) -> None:
        super().__init__()
        self._ignored = tuple(ignored_paths)

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        for path in self._ignored:
            if f" {path} " in msg or f'"{path} ' in msg or f" {path}?" in msg:
                return False
        return True


def _install_access_log_filter(ignored_paths: list[str]) -> None:
    """Attach *_AccessLogFilter* to the ``uvicorn.access`` logger."""
    access_logger = logging.getLogger("uvicorn.access")
    access_logger.addFilter(_AccessLogFilter(ignored_paths))


def setup_logging(config: LogConfig) -> None:
    """
    Configure logging with file rotation and optional Rich console output.

    Args:
        config: Logging configuration
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.level.upper()))

    root_logger.handlers.clear()

    formatter = logging.Formatter(config.format)

    if config.file_enabled:
        log_path = Path(config.file_path).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.file_max_bytes,
            backupCount=config.file_backup_count,
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if config.use_rich_console:
        from rich.logging import RichHandler

        console_handler: logging.Handler = RichHandler(rich_tracebacks=True)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)

    if config.quiet_third_party:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    # Health probes poll frequently; keep them out of the access log.
    if config.access_log_ignore:
        _install_access_log_filter(config.access_log_ignore)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
