# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Main FastAPI application entry point.

This module creates and configures the FastAPI application and provides the
``passhash-server`` command.

Assumptions:
- FastAPI instance includes OpenAPI documentation
- The listen address comes from --addr, falling back to settings
- Transport timeouts are fixed, not configurable
"""
import argparse
from typing import Any, Optional, Sequence, Tuple

import uvicorn
from fastapi import FastAPI

from passhash import __version__
from passhash.api.hashing import create_router
from passhash.config import TRANSPORT_TIMEOUT_SECONDS, Settings, settings as default_settings
from passhash.logging_config import configure_logging, get_logger
from passhash.logging_utils import log_application_event


def create_app(settings: Optional[Settings] = None, logger: Any = None) -> FastAPI:
    """Create and configure the FastAPI application.
    
    Args:
        settings: Application settings; module defaults when omitted
        logger: Request logger handed to the endpoints; a structlog logger
            named "passhash.http" when omitted
        
    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or default_settings
    logger = logger or get_logger("passhash.http")
    
    app = FastAPI(
        title="passhash",
        description="bcrypt password hashing over HTTP",
        version=__version__,
    )
    app.include_router(create_router(settings, logger))
    return app


def parse_listen_addr(addr: str) -> Tuple[str, int]:
    """Split a HOST:PORT listen address.
    
    An empty host (":8080") listens on all interfaces. IPv6 literals are
    written in brackets ("[::1]:8080").
    
    Raises:
        ValueError: If the address has no port or the port is invalid
    """
    host, sep, port_text = addr.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address {addr!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not port_text.isdigit() or not 0 <= int(port_text) <= 65535:
        raise ValueError(f"invalid port in address {addr!r}")
    return host or "0.0.0.0", int(port_text)


def _listen_addr_arg(value: str) -> str:
    try:
        parse_listen_addr(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="passhash-server",
        description="Serve bcrypt hash and verify endpoints over HTTP",
    )
    parser.add_argument(
        "--addr",
        type=_listen_addr_arg,
        default=default_settings.listen_addr,
        help=f"http server address (default: {default_settings.listen_addr})"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: $LOG_LEVEL or INFO)"
    )
    return parser


def cli(argv: Optional[Sequence[str]] = None) -> None:
    """Command-line entry point: parse flags and serve until stopped.
    
    Exits non-zero when the address cannot be bound.
    """
    args = build_parser().parse_args(argv)
    configure_logging(log_level=args.log_level)
    
    host, port = parse_listen_addr(args.addr)
    log_application_event("server_starting", addr=args.addr, max_cost=default_settings.max_cost)
    uvicorn.run(
        create_app(),
        host=host,
        port=port,
        timeout_keep_alive=TRANSPORT_TIMEOUT_SECONDS,
        access_log=False,
        log_config=None,
    )


app = create_app()
