# ============================================================================
# CRYPTO PLATFORM SERVICES - MAIN ENTRY POINT
# ============================================================================
# STATUS: Core - Process entry point
# PURPOSE: Start one platform service
# CREATED: 18 OCT 2026
# ============================================================================
"""
Platform Services Main Entry Point

Starts one service process:
    telegram-bot    Bot gateway (PostgreSQL, Redis, Telegram)
    trading-engine  API gateway (PostgreSQL, Redis, Ethereum, Solana)
    web-app         Front end

Usage:
    python main.py trading-engine
    SERVICE_NAME=telegram-bot python main.py

Exit codes:
    0  clean shutdown after SIGTERM/SIGINT
    1  a critical dependency was unavailable at startup
"""

import argparse
import importlib
import os
import sys

from core.config import get_settings
from core.logging import configure_logging, get_logger
from services import SERVICE_MODULES
from services.runner import run_service
from __version__ import __version__, BUILD_DATE

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
)
logger = get_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a crypto platform service")
    parser.add_argument(
        "service",
        nargs="?",
        default=os.environ.get("SERVICE_NAME"),
        choices=sorted(SERVICE_MODULES),
        help="Service to run (default: $SERVICE_NAME)",
    )
    parser.add_argument("--host", default=None, help="Override HOST")
    parser.add_argument("--port", type=int, default=None, help="Override PORT")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if not args.service:
        logger.error("No service given. Pass one of: " + ", ".join(sorted(SERVICE_MODULES)))
        return 2

    if args.host:
        os.environ["HOST"] = args.host
    if args.port:
        os.environ["PORT"] = str(args.port)

    settings = get_settings(args.service)
    module = importlib.import_module(SERVICE_MODULES[args.service])
    app = module.create_app(settings)

    logger.info(
        f"Starting {args.service} v{__version__} (build {BUILD_DATE}) "
        f"on {settings.service.host}:{settings.service.port}"
    )
    return run_service(app, settings.service)


if __name__ == "__main__":
    sys.exit(main())
