"""
Constants and default values for claimtrees.

Centralizes magic numbers and strings to improve maintainability.
"""

from pathlib import Path

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "claimtrees"
APP_VERSION = "0.1.0"
CONFIG_DIR_NAME = ".claimtrees"

# ============================================================================
# Path Defaults
# ============================================================================

DEFAULT_DATA_DIR = Path.home() / CONFIG_DIR_NAME
DEFAULT_CONFIG_SUBDIR = "config"
DEFAULT_LOGS_SUBDIR = "logs"
DEFAULT_STORE_FILE = "graph.json"

# Config file names
SETTINGS_FILE = "settings.toml"
ENV_FILE = ".env"

# ============================================================================
# Web Server Defaults
# ============================================================================

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_CORS_ORIGINS = (
    "http://localhost:8080",
    "http://127.0.0.1:8080",
)

# Used by the CLI client
DEFAULT_SERVER_URL = "http://localhost:8080"
DEFAULT_CLIENT_TIMEOUT_SECONDS = 60.0

# ============================================================================
# Git Defaults
# ============================================================================

DEFAULT_GIT_BINARY = "git"
DEFAULT_GIT_TIMEOUT_SECONDS = 10.0

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_DATA_DIR = "CLAIMTREES_DATA_DIR"
ENV_STORE_PATH = "CLAIMTREES_STORE_PATH"

ENV_GIT_BINARY = "CLAIMTREES_GIT_BINARY"
ENV_GIT_TIMEOUT = "CLAIMTREES_GIT_TIMEOUT"

ENV_PORT = "CLAIMTREES_PORT"
ENV_HOST = "CLAIMTREES_HOST"
ENV_CORS_ORIGINS = "CLAIMTREES_CORS_ORIGINS"

ENV_SERVER_URL = "CLAIMTREES_URL"

# ============================================================================
# Error Messages
# ============================================================================

ERROR_NO_CONFIG = """
Configuration file not found: {path}

Create one at {config_dir}/{settings_file}, or unset the explicit path to
fall back to environment variables and built-in defaults.
"""

ERROR_INVALID_PORT = """
Invalid port number: {port}

Port must be between 1 and 65535.
"""
