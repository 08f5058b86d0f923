"""HTTP boundary — thin FastAPI mapping onto a Sandbox instance."""

from token_sandbox.api.app import create_app

__all__ = ["create_app"]
