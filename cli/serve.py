"""Serve command: launch the web service."""

from __future__ import annotations

import argparse

import config


def add_serve_subparser(subparsers: argparse._SubParsersAction) -> None:
    serve_parser = subparsers.add_parser(
        "serve",
        help=f"Launch the OCR web service (port {config.WEB_PORT})",
    )
    serve_parser.add_argument("--host", default=config.WEB_HOST, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=config.WEB_PORT, help="Port")
    serve_parser.set_defaults(_cmd=cmd_serve)


def cmd_serve(args: argparse.Namespace) -> int:
    """Launch the web server (logging is already configured by the caller)."""
    from web import create_app

    app = create_app()
    app.run(host=args.host, port=args.port, debug=False)
    return 0
