"""Main CLI entry-point."""
from __future__ import annotations

import argparse
import asyncio
import sys

from core.errors import BrawlStarsError
from core.logging.config import bootstrap_logging, shutdown_logging
from core.logging.logger import get_logger
from config import settings


def build_parser() -> argparse.ArgumentParser:
    from presentation.cli import add_keys_parser, add_lookup_parser

    parser = argparse.ArgumentParser(
        prog="bsclient",
        description="Brawl Stars API client with automatic key provisioning",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    add_lookup_parser(sub)
    add_keys_parser(sub)
    return parser


async def _run(args: argparse.Namespace) -> int:
    # Lazy imports keep `--help` free of httpx start-up cost
    from application.services.token import TokenManager
    from infrastructure.api import BrawlStarsClient, PortalSessionClient, PublicIPResolver
    from presentation.cli import KeysCommand, LookupCommand

    portal = PortalSessionClient(settings.BS_EMAIL, settings.BS_PASSWORD)
    manager = TokenManager(portal, PublicIPResolver())
    api_client = BrawlStarsClient(manager)
    try:
        if args.command == "lookup":
            return await LookupCommand(api_client).run(args)
        return await KeysCommand(portal, manager).run(args)
    finally:
        await portal.logout()
        await api_client.aclose()
        await portal.aclose()


def main(argv: list[str]) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings.validate()
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    settings.create_directories()
    bootstrap_logging(
        service="bsclient",
        level=settings.LOG_LEVEL,
        log_dir=settings.LOG_DIR,
        log_file_name="bsclient.jsonl",
    )
    log = get_logger(__name__, service="cli")
    try:
        return asyncio.run(_run(args))
    except BrawlStarsError as exc:
        log.error(lambda: "command-failed", extra={"command": args.command, "error": str(exc)})
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        shutdown_logging()


def cli() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(cli())
