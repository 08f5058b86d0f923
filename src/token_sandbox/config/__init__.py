"""Configuration system."""

from token_sandbox.config.loader import load_config
from token_sandbox.config.schema import AppConfig

__all__ = ["AppConfig", "load_config"]
