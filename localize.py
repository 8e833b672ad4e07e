"""Command-line tool for checking translation files.

Resolves strings from a directory's translations.json exactly as a consuming module would, with a
fixed language. Useful for translators verifying their files and for debugging fallbacks.

This is a console-only application; no log file is created unless the configuration asks for one.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final, NoReturn

from config.loader import ConfigLoader, ConfigLoaderError
from core.bootstrap import create_engine
from models.config_models import Config
from models.translation_models import DEFAULT_LANGUAGE, NamespaceHandle
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Sequence

    from core.engine import LocalizeEngine
    from models.translation_models import StoreSummary

EXIT_OK: Final[int] = 0
EXIT_USAGE: Final[int] = 2
DEFAULT_FALLBACK: Final[str] = "<fallback>"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(EXIT_USAGE)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        description="Resolve strings from a translations.json file",
        epilog="Example: python localize.py --lang ru ./my_mod object greeting --fallback Hello",
    )
    parser.add_argument("--config", dest="config", metavar="INI", help="Configuration file to load")
    parser.add_argument("--lang", dest="lang", default=DEFAULT_LANGUAGE, help="Active language code (default: en)")
    parser.add_argument("--debug", dest="debug", action="store_true", help="Trace loading and lookups")
    parser.add_argument("directory", help="Directory containing the translation file")

    commands = parser.add_subparsers(dest="command", required=True, parser_class=_ArgumentParser)

    object_cmd = commands.add_parser("object", help="Resolve an object key")
    object_cmd.add_argument("key")
    object_cmd.add_argument("--fallback", default=DEFAULT_FALLBACK)

    random_cmd = commands.add_parser("random", help="Resolve random entries of an array key")
    random_cmd.add_argument("key")
    random_cmd.add_argument("--fallback", default=DEFAULT_FALLBACK)
    random_cmd.add_argument("--count", type=int, default=1, help="Number of draws")

    index_cmd = commands.add_parser("index", help="Resolve one entry of an array key")
    index_cmd.add_argument("key")
    index_cmd.add_argument("index", type=int)
    index_cmd.add_argument("--fallback", default=DEFAULT_FALLBACK)

    commands.add_parser("summary", help="Print the loaded keys as JSON")
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file if one was given, otherwise use defaults.

    Raises:
        ConfigLoaderError: If the configuration file cannot be loaded.
    """
    if args.config:
        return ConfigLoader(config_filename=args.config, debug=args.debug).config
    config = Config()
    config.GENERAL.DEBUG = args.debug
    return config


def run_command(engine: LocalizeEngine, handle: NamespaceHandle, args: argparse.Namespace) -> list[str]:
    """Execute the selected sub-command and return the lines to print."""
    if args.command == "object":
        return [engine.get_from_object(handle, args.key, args.fallback)]
    if args.command == "random":
        return [engine.get_random_from_array(handle, args.key, args.fallback) for _ in range(max(args.count, 0))]
    if args.command == "index":
        return [engine.get_from_array_index(handle, args.key, args.index, args.fallback)]

    summary: StoreSummary | None = engine.summary(handle)
    return [summary.to_json(ensure_ascii=False, indent=2)] if summary is not None else []


def main(argv: Sequence[str] | None = None) -> int:
    args: argparse.Namespace = build_parser().parse_args(argv)

    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print("\nError: Failed to load configuration file.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        return EXIT_USAGE

    directory = Path(args.directory)
    if not directory.is_dir():
        print(f"\nError: Not a directory: {directory}", file=sys.stderr)
        return EXIT_USAGE

    lang: str = args.lang
    engine: LocalizeEngine = create_engine(config, lambda: lang)
    LoggerUtils().capture_warnings()
    handle: NamespaceHandle = NamespaceHandle.for_directory(directory.resolve().name, directory)

    for line in run_command(engine, handle, args):
        print(line)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
