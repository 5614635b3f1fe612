"""Text based driver that populates an asset store and reports on it."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

from rts_assets import AssetSession, load_config
from rts_assets.diagnostics import log_asset_dump, log_status

LOGGER = logging.getLogger("main")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the RTS asset store and print a report")
    parser.add_argument("--config", type=Path, default=Path("settings.json"), help="JSON settings file")
    parser.add_argument("--assets", type=Path, default=None, help="Override the custom art directory")
    parser.add_argument("--no-sprites", action="store_true", help="Skip procedural sprite synthesis")
    parser.add_argument("--verbose", action="store_true", help="Dump every asset with its size")
    return parser.parse_args(argv)


async def run_demo(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    if args.assets is not None:
        config = replace(config, asset_root=args.assets)
    session = AssetSession(config)
    if args.no_sprites:
        session.toggle_graphics_mode(False)
    outcome = await session.bootstrap()
    LOGGER.info("Loaded %d custom assets, %d missing", outcome.loaded, outcome.failed)
    log_status(session.store)
    if args.verbose:
        log_asset_dump(session.store)
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    return asyncio.run(run_demo(parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
