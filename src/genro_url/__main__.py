# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
genro-url CLI entry point.

Usage:
    genro-url parse "https://example.com/a?x=1"          # Components as JSON
    genro-url parse "../item" --base "https://h/a/b"     # Resolve against a base
    genro-url parse "docs/x" --no-resolve                # Keep it relative
    genro-url clean "https://h/p?id=1&utm_source=feed"   # Drop UTM parameters

Defaults for --location, resolve and strict come from genro-url.toml
([url] table) and GENRO_URL_* environment variables.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

import orjson

from .config import ConfigError, UrlSettings
from .exceptions import InvalidURL
from .location import CwdLocation, use_location
from .url import Url, parse_url, remove_utm_params


def url_to_dict(url: Url) -> dict[str, Any]:
    """Components of ``url`` as a JSON-serializable dict."""
    return {
        "href": url.to_string(),
        "protocol": url.protocol,
        "user": url.user,
        "password": url.password,
        "host": url.host,
        "port": url.port,
        "path": url.path,
        "paths": url.paths(),
        "query": dict(url.query),
        "hash": url.hash,
        "absolute": url.is_absolute(),
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="genro-url", description="Parse and rewrite URLs")
    parser.add_argument("--version", "-v", action="store_true", help="Show version")
    parser.add_argument("--config", help="TOML configuration file")
    parser.add_argument("--location", help="Current location used for relative references")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command")

    cmd_parse = commands.add_parser("parse", help="Print URL components as JSON")
    cmd_parse.add_argument("url", nargs="?", default="", help="URL (default: current location)")
    cmd_parse.add_argument("--base", help="Base for relative references")
    cmd_parse.add_argument("--no-resolve", action="store_true", help="Do not resolve relative references")
    cmd_parse.add_argument("--strict", action="store_true", help="Reject malformed URLs")

    cmd_clean = commands.add_parser("clean", help="Remove utm_* parameters")
    cmd_clean.add_argument("url", help="Absolute URL")
    return parser


def cmd_parse(args: argparse.Namespace, settings: UrlSettings) -> int:
    """Print the components of a URL."""
    url = parse_url(
        args.url,
        base=args.base,
        resolve=settings.resolve and not args.no_resolve,
        strict=settings.strict or args.strict,
    )
    print(orjson.dumps(url_to_dict(url), option=orjson.OPT_INDENT_2).decode())
    return 0


def cmd_clean(args: argparse.Namespace, settings: UrlSettings) -> int:
    """Print a URL without UTM parameters."""
    print(remove_utm_params(args.url))
    return 0


COMMANDS = {"parse": cmd_parse, "clean": cmd_clean}


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__

        print(f"genro-url {__version__}")
        return 0

    if args.command is None:
        parser.print_help()
        return 1

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    try:
        settings = UrlSettings(location=args.location, config=args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        with use_location(settings.location or CwdLocation()):
            return COMMANDS[args.command](args, settings)
    except InvalidURL as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
