import argparse
import logging
import sys
from typing import List, Optional

from module_generator.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_highlight,
)
from module_generator.config import load_config
from module_generator.constants import Locations
from module_generator.exceptions import ModuleGeneratorError
from module_generator.generator import ModuleGenerator


logger = get_colored_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="module-generator",
        description="Generate or delete a module of a client/server monorepo from templates.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to a YAML configuration file.",
    )
    parser.add_argument(
        "--base-path",
        dest="base_path",
        help="Root of the monorepo. Overrides the config file setting.",
    )
    parser.add_argument(
        "--templates-path",
        dest="templates_path",
        help="Directory with one template tree per location.",
    )
    parser.add_argument(
        "--old",
        action="store_true",
        default=None,
        help="Use the legacy layout (packages/<location>/src/modules).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    for command, help_text in (
        ("addmodule", "Create a new module from the templates."),
        ("deletemodule", "Delete an existing module."),
    ):
        subparser = subparsers.add_parser(command, help=help_text)
        subparser.add_argument("module_name", help="Name of the module, e.g. 'billing'.")
        subparser.add_argument(
            "location",
            nargs="?",
            default=Locations.BOTH,
            help="client, server, both, or a suffixed tag such as server-ts (default: both).",
        )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_colored_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        use_colors=not args.no_color,
    )
    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    try:
        settings = load_config(args.config, args)
        generator = ModuleGenerator(settings)

        if args.command == "addmodule":
            result = generator.add_module(args.module_name, args.location)
        else:
            result = generator.delete_module(args.module_name, args.location)

        for path in result.patched_files:
            log_highlight(logger, f"Patched {path}")
        logger.debug(f"{result.touched} paths touched")
        return 0

    except ModuleGeneratorError as e:
        logger.error(str(e), exc_info=args.verbose)
        return 1
    except OSError as e:
        logger.error(f"Filesystem error: {e}", exc_info=args.verbose)
        return 1


if __name__ == "__main__":
    sys.exit(main())
