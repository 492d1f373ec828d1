#!/usr/bin/env python3
"""
appmanifest command line driver.

Usage:
    appmanifest [options] /path/to/some.pkg
    appmanifest -url https://example.com/pkgs/some.pkg -md5size 1048576 some.pkg > some.plist
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, NoReturn, Optional

from rich.console import Console
from rich.markup import escape

from appmanifest import GIT_HASH, VERSION
from appmanifest.config_utils import Settings, load_config, resolve_settings
from appmanifest.errors import AppManifestError
from appmanifest.manifest import write_app_manifest
from appmanifest.plist_writer import FORMATS

console = Console(stderr=True)
logger = logging.getLogger(__name__)

USAGE = "appmanifest [options] /path/to/some.pkg"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appmanifest",
        usage=USAGE,
        description="Create an app manifest plist (chunked MD5s) for a pkg",
        allow_abbrev=False,
    )
    parser.add_argument("path", nargs="?", help="Path to the pkg to describe")
    parser.add_argument("-version", "--version", action="store_true", help="prints the version")
    parser.add_argument(
        "-url",
        "--url",
        default=None,
        help="url of the pkg as it will be on the server (default: empty)",
    )
    parser.add_argument(
        "-md5size",
        "--md5size",
        type=int,
        default=None,
        help="md5 hash size in bytes (default: 10485760)",
    )
    parser.add_argument(
        "--format",
        default=None,
        choices=sorted(FORMATS),
        help="plist output format (default: xml)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the manifest to this file instead of stdout",
    )
    parser.add_argument("--config", default=None, help="Optional YAML config file")
    parser.add_argument("--log-level", default=None, help="Logging level (default: WARNING)")
    return parser


def setup_logging(level: str) -> None:
    numeric = logging.getLevelName(level)
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(level=numeric, format="%(asctime)s - %(levelname)s - %(message)s")
    logging.getLogger().setLevel(numeric)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise SystemExit(1)


def run(path: str, settings: Settings, output: Optional[str] = None) -> None:
    """Build the manifest for `path` and write it to `output` (stdout if None)."""
    sink = output if output else sys.stdout.buffer
    manifest = write_app_manifest(
        path,
        url=settings.url,
        sink=sink,
        md5_size=settings.md5size,
        fmt=settings.format,
    )
    asset = manifest.items[0].assets[0]
    logger.info(f"Manifest for {path}: {len(asset.md5s)} chunk(s) of {asset.md5_size} bytes")


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"appmanifest - {VERSION}")
        print(f"git revision - {GIT_HASH}")
        return

    try:
        config = load_config(args.config) if args.config else {}
        settings = resolve_settings(
            config=config,
            env=os.environ,
            overrides={
                "url": args.url,
                "md5size": args.md5size,
                "format": args.format,
                "log_level": args.log_level,
            },
        )
    except (OSError, ValueError) as e:
        setup_logging("WARNING")
        _fail(str(e))

    setup_logging(settings.log_level)

    if not args.path:
        logger.error("must specify a path to a pkg")
        print(USAGE)
        raise SystemExit(1)

    try:
        run(args.path, settings, output=args.output)
    except AppManifestError as e:
        _fail(str(e))


if __name__ == "__main__":
    main()
