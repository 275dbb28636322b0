"""Configuration management."""
from claimtrees.config.settings import Config
from claimtrees.config.constants import *

__all__ = [
    "Config",
]
