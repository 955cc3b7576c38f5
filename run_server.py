"""Serve the live scheduler API with uvicorn."""

import argparse
import sys

import uvicorn

from configs import load_default_config
from schedsim.api.server import create_app
from schedsim.utils.logger import setup_logger


def parse_args():
    parser = argparse.ArgumentParser(description="Run the schedsim API server")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML file overriding the bundled defaults")
    parser.add_argument("--host", type=str, default=None, help="Bind address")
    parser.add_argument("--port", type=int, default=None, help="Bind port")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args()


def main():
    args = parse_args()
    logger = setup_logger("schedsim", verbose=args.verbose)

    config = load_default_config(args.config)
    server_config = config.get('server', {})
    host = args.host or server_config.get('host', '0.0.0.0')
    port = args.port or server_config.get('port', 8000)

    logger.info(f"Serving schedsim API on {host}:{port}")
    uvicorn.run(create_app(config), host=host, port=port,
                log_level=server_config.get('log_level', 'info'))
    return 0


if __name__ == "__main__":
    sys.exit(main())
