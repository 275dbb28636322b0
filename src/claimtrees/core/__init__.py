"""Process-wide plumbing shared by the API and CLI."""
from claimtrees.core.logging_config import LogConfig, get_logger, setup_logging

__all__ = ["LogConfig", "setup_logging", "get_logger"]
