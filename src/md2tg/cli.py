#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/cli.py
"""Command line interface for md2tg.

Commands
--------
render
    Print the ``formattedText`` JSON of a Markdown file.
compose
    Compose a document (JSON or YAML) into budgeted pages.
caption
    Compose the caption of a released episode (JSON or YAML).

Exit codes are 0 on success and 1 on any input, configuration or
validation error.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

import yaml

from md2tg import __version__
from md2tg.compose import AnimeDocument, ReleaseUpdate, compose_release_caption
from md2tg.compose.composer import PageComposer
from md2tg.config import load_config_with_priority, options_from_config
from md2tg.constants import CONFIG_ENV_VAR
from md2tg.exceptions import Md2TgError
from md2tg.logging_utils import configure_logging
from md2tg.options.compose import ComposeOptions
from md2tg.renderers.base import BaseRenderer
from md2tg.renderers.entities import to_formatted_text

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help=f"Configuration file (default: ${CONFIG_ENV_VAR} or auto-discovery)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("-o", "--output", help="Write the result to this file instead of stdout")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="md2tg",
        description="Convert Markdown to Telegram formatted text and compose size-limited pages.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render Markdown to formattedText JSON")
    render.add_argument("input", nargs="?", default="-", help="Markdown file, or - for stdin (default)")
    _add_common_arguments(render)

    compose = subparsers.add_parser("compose", help="Compose a document into budgeted pages")
    compose.add_argument("input", help="Document file (JSON or YAML), or - for stdin")
    compose.add_argument("--primary-budget", type=int, help="Rendered length limit of the primary page")
    compose.add_argument("--overflow-budget", type=int, help="Rendered length limit of overflow pages")
    compose.add_argument(
        "--render", action="store_true", help="Print the formattedText JSON of each page instead of its Markdown"
    )
    _add_common_arguments(compose)

    caption = subparsers.add_parser("caption", help="Compose the caption of a released episode")
    caption.add_argument("input", help="Release file (JSON or YAML), or - for stdin")
    caption.add_argument("--primary-budget", type=int, help="Rendered length limit of the caption")
    caption.add_argument("--render", action="store_true", help="Print formattedText JSON instead of Markdown")
    _add_common_arguments(caption)

    return parser


def _setup_logging(parsed_args: argparse.Namespace) -> None:
    log_level = logging.DEBUG if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _read_data(path: str) -> Any:
    """Read a JSON or YAML document; YAML also accepts JSON."""
    text = _read_text(path)
    if path.lower().endswith(".json"):
        return json.loads(text)
    return yaml.safe_load(text)


def _load_options(parsed_args: argparse.Namespace) -> ComposeOptions:
    config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
    return options_from_config(
        config,
        primary_budget=getattr(parsed_args, "primary_budget", None),
        overflow_budget=getattr(parsed_args, "overflow_budget", None),
    )


def _emit(text: str, output: Optional[str]) -> None:
    if output:
        BaseRenderer.write_text_output(text + "\n", output)
    else:
        print(text)


def _run_render(parsed_args: argparse.Namespace, options: ComposeOptions) -> str:
    formatted = to_formatted_text(_read_text(parsed_args.input), options.render_options)
    return json.dumps(formatted.to_dict(), ensure_ascii=False, indent=2)


def _run_compose(parsed_args: argparse.Namespace, options: ComposeOptions) -> str:
    doc = AnimeDocument.from_dict(_read_data(parsed_args.input))
    pages = PageComposer(options).compose(doc)
    if parsed_args.render:
        payload: list[Any] = [to_formatted_text(page, options.render_options).to_dict() for page in pages]
    else:
        payload = pages
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _run_caption(parsed_args: argparse.Namespace, options: ComposeOptions) -> str:
    update = ReleaseUpdate.from_dict(_read_data(parsed_args.input))
    caption = compose_release_caption(update, options)
    if parsed_args.render:
        return json.dumps(to_formatted_text(caption, options.render_options).to_dict(), ensure_ascii=False, indent=2)
    return caption


_COMMANDS = {"render": _run_render, "compose": _run_compose, "caption": _run_caption}


def main(args: list[str] | None = None) -> int:
    """Execute the md2tg command line."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging(parsed_args)

    try:
        options = _load_options(parsed_args)
        result = _COMMANDS[parsed_args.command](parsed_args, options)
        _emit(result, parsed_args.output)
    except Md2TgError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
