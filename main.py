"""Development entrypoint for the Stellar Nexus HTTP API."""

from __future__ import annotations

import argparse
import logging

import uvicorn

from stellar_nexus.config import get_settings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Stellar Nexus API server")
    parser.add_argument("--host", default="127.0.0.1", help="Host interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="TCP port to listen on")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable autoreload (dev mode)",
    )
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    args = parser.parse_args()

    configure_logging(args.log_level or get_settings().log_level)

    if args.reload:
        uvicorn.run(
            "stellar_nexus.api.app:app",
            host=args.host,
            port=args.port,
            reload=True,
            factory=False,
        )
    else:
        from stellar_nexus.api.app import app

        uvicorn.run(app, host=args.host, port=args.port, reload=False, factory=False)


if __name__ == "__main__":
    main()
