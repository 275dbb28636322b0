"""
Configuration management with environment variable and .env support.

Configuration precedence (highest to lowest):
1. Environment variables (CLAIMTREES_*)
2. User config file (~/.claimtrees/config/settings.toml)
3. Hardcoded constants (constants.py)
"""

from __future__ import annotations

import os
from typing import overload
from dataclasses import dataclass
from pathlib import Path
import tomli
from dotenv import load_dotenv

from ..core.logging_config import LogConfig
from .constants import (
    DEFAULT_DATA_DIR,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_STORE_FILE,
    SETTINGS_FILE,
    ENV_FILE,
    # Defaults
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_CORS_ORIGINS,
    DEFAULT_GIT_BINARY,
    DEFAULT_GIT_TIMEOUT_SECONDS,
    # Environment variable names
    ENV_DATA_DIR,
    ENV_STORE_PATH,
    ENV_GIT_BINARY,
    ENV_GIT_TIMEOUT,
    ENV_HOST,
    ENV_PORT,
    ENV_CORS_ORIGINS,
    ERROR_NO_CONFIG,
)


# Load .env file at module import time
# Search order: ./.env, ~/.claimtrees/.env, ~/.claimtrees/config/.env
def _load_env_files():
    """Load .env files from standard locations."""
    env_locations = [
        Path.cwd() / ENV_FILE,  # Project root
        DEFAULT_DATA_DIR / ENV_FILE,  # Data directory
        DEFAULT_DATA_DIR / DEFAULT_CONFIG_SUBDIR / ENV_FILE,  # Config directory
    ]

    for env_path in env_locations:
        if env_path.exists():
            load_dotenv(env_path, override=False)  # Don't override already-set vars


_load_env_files()


@overload
def _get_env_str(key: str, default: str) -> str: ...


@overload
def _get_env_str(key: str, default: None = None) -> str | None: ...


def _get_env_str(key: str, default: str | None = None) -> str | None:
    """Get string value from environment variable. Empty strings are treated as missing."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_env_float(key: str, default: float) -> float:
    """Get float value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _base_data_dir() -> Path:
    return Path(_get_env_str(ENV_DATA_DIR, str(DEFAULT_DATA_DIR))).expanduser()


@dataclass
class PathsConfig:
    data_dir: str
    store_file: str

    @classmethod
    def from_dict(cls, data: dict) -> "PathsConfig":
        """Create PathsConfig from dict with environment variable overrides."""
        data_dir = _get_env_str(
            ENV_DATA_DIR,
            data.get("data_dir", str(DEFAULT_DATA_DIR))
        ) or str(DEFAULT_DATA_DIR)
        store_file = _get_env_str(
            ENV_STORE_PATH,
            data.get("store_file", str(Path(data_dir) / DEFAULT_STORE_FILE))
        ) or str(Path(data_dir) / DEFAULT_STORE_FILE)
        return cls(data_dir=data_dir, store_file=store_file)

    @property
    def store_path(self) -> Path:
        return Path(self.store_file).expanduser()


@dataclass
class GitConfig:
    binary: str
    timeout_seconds: float

    @classmethod
    def from_dict(cls, data: dict) -> "GitConfig":
        return cls(
            binary=_get_env_str(
                ENV_GIT_BINARY,
                data.get("binary", DEFAULT_GIT_BINARY)
            ) or DEFAULT_GIT_BINARY,
            timeout_seconds=_get_env_float(
                ENV_GIT_TIMEOUT,
                float(data.get("timeout_seconds", DEFAULT_GIT_TIMEOUT_SECONDS))
            ),
        )


@dataclass
class ServerConfig:
    host: str
    port: int
    cors_origins: list[str]

    @classmethod
    def from_dict(cls, data: dict) -> "ServerConfig":
        env_origins = _get_env_str(ENV_CORS_ORIGINS, None)
        if env_origins:
            origins = [o.strip() for o in env_origins.split(",") if o.strip()]
        else:
            origins = data.get("cors_origins", list(DEFAULT_CORS_ORIGINS))
        return cls(
            host=_get_env_str(ENV_HOST, data.get("host", DEFAULT_HOST)) or DEFAULT_HOST,
            port=_get_env_int(ENV_PORT, int(data.get("port", DEFAULT_PORT))),
            cors_origins=origins,
        )


@dataclass
class Config:
    paths: PathsConfig
    git: GitConfig
    server: ServerConfig
    logging: LogConfig

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """
        Load configuration with proper precedence.

        Precedence (highest to lowest):
        1. Environment variables (CLAIMTREES_*)
        2. User config (~/.claimtrees/config/settings.toml)
        3. Hardcoded constants

        Args:
            config_path: Optional explicit config file path

        Returns:
            Loaded Config object

        Raises:
            FileNotFoundError: If an explicit config_path does not exist
        """
        if config_path is not None:
            config_file = Path(config_path)
        else:
            config_file = _base_data_dir() / DEFAULT_CONFIG_SUBDIR / SETTINGS_FILE

        data = None
        if config_file.exists():
            with open(config_file, "rb") as f:
                data = tomli.load(f)

        if data is None:
            # Only raise error if an explicit config path was provided
            if config_path is not None:
                raise FileNotFoundError(
                    ERROR_NO_CONFIG.format(
                        path=config_path,
                        config_dir=DEFAULT_DATA_DIR / DEFAULT_CONFIG_SUBDIR,
                        settings_file=SETTINGS_FILE,
                    )
                )
            # Otherwise, use empty dict and rely on constants.py
            data = {}

        return cls(
            paths=PathsConfig.from_dict(data.get("paths", {})),
            git=GitConfig.from_dict(data.get("git", {})),
            server=ServerConfig.from_dict(data.get("server", {})),
            logging=LogConfig(**data.get("logging", {})),
        )
