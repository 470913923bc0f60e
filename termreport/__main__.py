#!/usr/bin/env python3
"""termreport - terminal environment diagnostics.

Prints a best-effort report of the process and terminal environment:
platform, process and user identity, terminal variables, TTY detection,
terminal size, controlling TTY, descriptor names and display widths of
a few sample characters.

Usage:
    # Full environment report (default)
    python -m termreport

    # Display-width demo only
    python -m termreport widths

    # Machine-readable output
    python -m termreport --json
"""

import argparse
import logging
import os
import sys
from typing import Dict, List, Mapping, Optional

from dotenv import dotenv_values

from .console_encoding import configure_utf8_output
from .display_width import ambiguous_width, inspect_samples
from .report import (
    collect_env_report,
    render_json,
    render_text,
    render_widths,
    render_widths_json,
)


logger = logging.getLogger(__name__)

SETTINGS_PREFIX = "TERMREPORT_"


def load_settings(
    env_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Collect TERMREPORT_* options from an optional .env file and the environment.

    The file is read with dotenv_values and never loaded into os.environ,
    so it cannot change the environment the report describes. Only
    TERMREPORT_* keys are taken from it; process variables win.
    """
    env = os.environ if environ is None else environ
    settings: Dict[str, str] = {}
    if env_file and os.path.isfile(env_file):
        for key, value in dotenv_values(env_file).items():
            if key.startswith(SETTINGS_PREFIX) and value is not None:
                settings[key] = value
    settings.update(
        (key, value) for key, value in env.items() if key.startswith(SETTINGS_PREFIX)
    )
    return settings


def _configure_logging(verbose: bool, settings: Mapping[str, str]) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        level_name = settings.get("TERMREPORT_LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, level_name, None)
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termreport",
        description="Report on the terminal environment of the calling process",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full environment/TTY report
  termreport

  # Unicode display-width demo
  termreport widths

  # Treat East Asian Ambiguous characters as wide
  TERMREPORT_AMBIGUOUS_WIDTH=2 termreport widths
        """,
    )
    parser.add_argument(
        "mode",
        nargs="?",
        choices=("env", "widths"),
        default="env",
        help="Report to print (default: env)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    parser.add_argument(
        "--env-file",
        metavar="PATH",
        help="Read TERMREPORT_* settings from this .env file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging on stderr",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings(args.env_file)

    _configure_logging(args.verbose, settings)
    if args.env_file and not os.path.isfile(args.env_file):
        logger.warning("Settings file %s not found, ignoring", args.env_file)
    configure_utf8_output()

    logger.debug("Running %s report", args.mode)

    if args.mode == "widths":
        rows = inspect_samples(ambiguous=ambiguous_width(settings))
        output = render_widths_json(rows) if args.json else "\n".join(render_widths(rows))
    else:
        report = collect_env_report(settings=settings)
        output = render_json(report) if args.json else "\n".join(render_text(report))

    try:
        print(output)
        sys.stdout.flush()
    except BrokenPipeError:
        # Reader went away (e.g. `| head`); keep the interpreter from
        # complaining again at shutdown.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
