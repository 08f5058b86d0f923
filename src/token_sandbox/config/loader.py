"""Config loader — reads YAML, applies SANDBOX_* env var overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from token_sandbox.config.schema import AppConfig


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from a YAML file, then apply env var overrides.

    If *path* is None or the file doesn't exist, returns defaults.

    Environment variable overrides:
        SANDBOX_LOG_LEVEL        -> logging.level
        SANDBOX_LOG_FORMAT       -> logging.format
        SANDBOX_SEED             -> sandbox.seed
        SANDBOX_INITIAL_BALANCE  -> sandbox.initial_balance
        SANDBOX_API_PORT         -> api.port
    """
    data: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}

    log_level = os.environ.get("SANDBOX_LOG_LEVEL")
    if log_level:
        data.setdefault("logging", {})["level"] = log_level

    log_format = os.environ.get("SANDBOX_LOG_FORMAT")
    if log_format:
        data.setdefault("logging", {})["format"] = log_format

    seed = os.environ.get("SANDBOX_SEED")
    if seed:
        data.setdefault("sandbox", {})["seed"] = seed

    initial_balance = os.environ.get("SANDBOX_INITIAL_BALANCE")
    if initial_balance:
        data.setdefault("sandbox", {})["initial_balance"] = initial_balance

    api_port = os.environ.get("SANDBOX_API_PORT")
    if api_port:
        data.setdefault("api", {})["port"] = api_port

    return AppConfig.model_validate(data)
