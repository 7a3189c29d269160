# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the ACP builder command-line interface."""

import argparse
import logging
import re
import sys
from pathlib import Path

from acpbuilder.errors import ACPError, format_error_chain
from acpbuilder.workspace.config import BUILD_CONFIG_NAME, BuildConfig, default_config_text, load_build_config

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the ACP builder CLI."""
    parser = argparse.ArgumentParser(
        prog="acpbuilder",
        description="ACP builder: generates Arduino libraries from component-based projects",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print debug messages of the compiler",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Create a build configuration",
        description=f"Write a starter {BUILD_CONFIG_NAME} into a project directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Project directory (default: current directory)",
    )
    init_parser.add_argument(
        "--library-name",
        help="Name of the generated library (default: derived from the directory name)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Validate a project without generating anything",
        description="Load the project, resolve its modules, and validate all components.",
    )
    check_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help=f"Directory containing {BUILD_CONFIG_NAME} (default: current directory)",
    )

    # build subcommand
    build_parser = subparsers.add_parser(
        "build",
        help="Generate the Arduino library",
        description="Compile the project into an Arduino library.",
    )
    build_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help=f"Directory containing {BUILD_CONFIG_NAME} (default: current directory)",
    )
    build_parser.add_argument("--debug", action="store_true", help="Enable the debug mode of the generated code")
    build_parser.add_argument(
        "--merge-sources",
        action="store_true",
        help="Flatten module sources into a single directory",
    )
    build_parser.add_argument("--output", help="Output directory (overrides the build configuration)")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_DEFAULT_LIBRARY_NAME = "ACPProject"


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "build":
        return _cmd_build(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / BUILD_CONFIG_NAME
    if config_file.exists():
        print(f"Error: build configuration already exists at '{config_file}'.", file=sys.stderr)
        return 1

    library_name = args.library_name or re.sub(r"[^A-Za-z0-9]", "", directory.name) or _DEFAULT_LIBRARY_NAME
    config_file.write_text(default_config_text(library_name), encoding="utf-8")
    print(f"Initialized build configuration at '{config_file}'.")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    from acpbuilder.compiler.build import load_context
    from acpbuilder.compiler.resolver import directory_module_loader

    config = _load_config(Path(args.directory))
    if config is None:
        return 1

    try:
        context = load_context(config.to_settings(), directory_module_loader(config.modules_dir))
    except ACPError as exc:
        _print_error(exc)
        return 1

    print(
        f"Project '{config.project_file.name}' is valid: "
        f"{len(context.project.components)} component(s), {len(context.modules)} module(s)."
    )
    return 0


def _cmd_build(args: argparse.Namespace) -> int:
    """Handle the build subcommand."""
    from acpbuilder.compiler.build import compile_project

    config = _load_config(Path(args.directory))
    if config is None:
        return 1

    if args.debug:
        config.debug = True
    if args.merge_sources:
        config.merge_sources = True
    if args.output:
        config.output_dir = Path(args.output).resolve()

    try:
        settings = config.to_settings()
        compile_project(settings, config.modules_dir)
    except ACPError as exc:
        _print_error(exc)
        return 1

    print(f"Generated library '{settings.library_name}' in '{settings.library_dir}'.")
    return 0


def _load_config(directory: Path) -> BuildConfig | None:
    directory = directory.resolve()
    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return None

    config_file = directory / BUILD_CONFIG_NAME
    if not config_file.exists():
        print(
            f"Error: no {BUILD_CONFIG_NAME} found at '{directory}'. Run 'acpbuilder init' to create one.",
            file=sys.stderr,
        )
        return None

    try:
        return load_build_config(config_file)
    except ACPError as exc:
        _print_error(exc)
        return None


def _print_error(exc: BaseException) -> None:
    print(f"Error: {format_error_chain(exc)}", file=sys.stderr)
