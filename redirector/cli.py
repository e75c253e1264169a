from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

import uvicorn
from pydantic import ValidationError

from redirector.config import settings
from redirector.exceptions import ConfigError
from redirector.main import create_app
from redirector.models import ServerOptions

logger = logging.getLogger(__name__)

USAGE = """
A url-shortening web server

This uses a simple csv file of short,long urls as a database.

Run with the -d/--development flag to run in development mode, providing
live template reloads. In development mode, the urls are also checked at
startup.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="redirector",
        description=USAGE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-i", "--ip-address", default=settings.HOST, help="ip address")
    parser.add_argument("-p", "--port", default=str(settings.PORT), help="port")
    parser.add_argument(
        "-d",
        "--development",
        action="store_true",
        default=settings.DEVELOPMENT,
        help="run in development mode",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=settings.CHECK_TIMEOUT_S,
        help="http client timeout in seconds",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=settings.CHECK_WORKERS,
        help="http client workers",
    )
    return parser


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )


def parse_options(argv: Sequence[str] | None = None) -> ServerOptions:
    args = build_parser().parse_args(argv)
    try:
        return ServerOptions(
            ip_address=args.ip_address,
            port=args.port,
            development=args.development,
            timeout_s=args.timeout,
            workers=args.workers,
        )
    except ValidationError as exc:
        raise ConfigError(_describe(exc)) from exc


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        options = parse_options(argv)
    except ConfigError as exc:
        logger.error("invalid options: %s", exc)
        return 1

    try:
        app = create_app(
            development=options.development,
            check_timeout_s=options.timeout_s,
            check_workers=options.workers,
        )
    except (OSError, ValueError) as exc:
        logger.error("server setup error %s", exc)
        return 1

    host = str(options.ip_address)
    logger.info("Running server on %s:%d", host, options.port)
    uvicorn.run(app, host=host, port=options.port)
    return 0


def run() -> None:
    sys.exit(main())
