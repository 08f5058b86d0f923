"""FastAPI server runner."""

from __future__ import annotations

import uvicorn
import structlog

from token_sandbox.api.app import create_app
from token_sandbox.config.loader import load_config
from token_sandbox.logging.setup import configure_from
from token_sandbox.sandbox import Sandbox

logger = structlog.get_logger("api_runner")


def main(config_path: str | None = None) -> None:
    """Build the sandbox from config and serve it."""
    config = load_config(config_path)
    configure_from(config.logging)

    sandbox = Sandbox.from_config(config)
    app = create_app(sandbox)

    logger.info("starting_api_server", host=config.api.host, port=config.api.port)
    try:
        uvicorn.run(
            app,
            host=config.api.host,
            port=config.api.port,
            log_config=None,  # Use our structlog setup
        )
    except Exception as e:
        logger.error("api_server_failed", error=str(e))
        raise
