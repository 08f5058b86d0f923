"""Allow running the API as: python -m token_sandbox.api [--config path]."""

import argparse

from token_sandbox.api.runner import main

parser = argparse.ArgumentParser(description="Token sandbox API server")
parser.add_argument("--config", default=None, help="Path to config.yaml")
args = parser.parse_args()
main(config_path=args.config)
