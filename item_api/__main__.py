"""
Command line entry point for the item service.
  python -m item_api serve     # run the HTTP API under uvicorn
  python -m item_api migrate   # apply database migrations (alembic upgrade head)
"""

import argparse
import logging
from pathlib import Path

import uvicorn
from alembic import command
from alembic.config import Config

from item_api.config import get_settings

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def serve(args: argparse.Namespace) -> None:
    settings = get_settings()
    uvicorn.run(
        "item_api.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
    )


def migrate(args: argparse.Namespace) -> None:
    config = Config(str(ALEMBIC_INI), ini_section="items")
    command.upgrade(config, args.revision)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="item_api", description="Item service")
    sub = parser.add_subparsers(dest="command", required=True)

    serve_parser = sub.add_parser("serve", help="Start the HTTP server")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)
    serve_parser.set_defaults(func=serve)

    migrate_parser = sub.add_parser("migrate", help="Apply database migrations")
    migrate_parser.add_argument("revision", nargs="?", default="head")
    migrate_parser.set_defaults(func=migrate)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
