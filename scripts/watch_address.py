"""Keep a valid key for a machine whose public address changes (home lines, CI runners)."""
from __future__ import annotations

import argparse
import asyncio

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
from core.errors import BrawlStarsError
from core.logging.config import bootstrap_logging, shutdown_logging
from core.logging.logger import get_logger
from config import settings
from application.services.token import TokenManager, TokenStatus
from infrastructure.api import PortalSessionClient, PublicIPResolver


async def watch(manager: TokenManager, interval_s: float, rounds: int | None = None) -> None:
    log = get_logger(__name__, service="watch")
    done = 0
    while rounds is None or done < rounds:
        try:
            if await manager.check_address():
                await manager.get_token()
                log.success(lambda: "key-rotated", extra={"address": manager.state.address})
            elif manager.status is TokenStatus.EMPTY:
                await manager.get_token()
        except BrawlStarsError as exc:
            log.error(lambda: "watch-round-failed", extra={"error": str(exc)})
        done += 1
        await asyncio.sleep(interval_s)


async def _run(interval_s: float) -> None:
    async with PortalSessionClient(settings.BS_EMAIL, settings.BS_PASSWORD) as portal:
        manager = TokenManager(portal, PublicIPResolver())
        try:
            await watch(manager, interval_s)
        finally:
            await portal.logout()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--interval", type=float, default=300.0, help="seconds between address checks")
    args = parser.parse_args()
    settings.validate()
    bootstrap_logging(service="watch", level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR, log_file_name="watch.jsonl")
    try:
        asyncio.run(_run(args.interval))
        return 0
    except KeyboardInterrupt:
        return 0
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
