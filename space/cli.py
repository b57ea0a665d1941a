# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Tuple

import uvicorn

from space.infra.config import Settings
from space.main import create_app

logger = logging.getLogger(__name__)


def parse_addr(addr: str) -> Tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise argparse.ArgumentTypeError(f"invalid http address: {addr!r} (expected host:port)")
    return host or "0.0.0.0", int(port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="space", description="space API server")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="start the web server")
    serve.add_argument("--http", default=None, help="TCP address to listen on, e.g. 127.0.0.1:8090")
    serve.add_argument("--publicDir", dest="public_dir", default=None, help="directory to serve static files")
    serve.add_argument(
        "--indexFallback",
        dest="index_fallback",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="fallback the request to index.html on missing static path (SPA)",
    )
    serve.add_argument("--debug", action="store_true", default=None, help="enable diagnostic logs")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.http is not None:
        overrides["HTTP_ADDR"] = args.http
    if args.public_dir is not None:
        overrides["PUBLIC_DIR"] = args.public_dir
    if args.index_fallback is not None:
        overrides["INDEX_FALLBACK"] = args.index_fallback
    if args.debug:
        overrides["DEBUG"] = True
    return Settings(**overrides)


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    settings = settings_from_args(args)
    host, port = parse_addr(settings.HTTP_ADDR)

    app = create_app(settings)
    logger.info("Server started at http://%s:%d (debug=%s)", host, port, settings.DEBUG)
    uvicorn.run(app, host=host, port=port, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
