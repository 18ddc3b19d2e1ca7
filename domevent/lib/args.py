import argparse
import logging
from pathlib import Path

from domevent.constants import DEFAULT_EVENT_TYPE, DEFAULT_LOG_LEVEL, LOG_LEVELS

logger = logging.getLogger(__name__)


def log_level_type(input):
    """Accept a level name (DEBUG, info, ...) or its integer value"""
    if isinstance(input, int):
        return input
    name = str(input).strip().upper()
    if name in LOG_LEVELS:
        return LOG_LEVELS[name]
    try:
        return int(name)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Log level must be one of {', '.join(LOG_LEVELS)} or an integer, but got '{input}'"
        )


class ArgsNamespace(argparse.Namespace):
    """Provides typehints to the input args"""

    config: Path
    target: str | None
    event: str
    no_bubbles: bool
    cancelable: bool
    stop_at: str | None
    stop_immediate_at: str | None
    prevent_at: str | None
    log_level: int
    log_dir: Path | None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="domevent",
        description="Dispatch an event through a chain of targets described in an INI file "
        "and print the order in which listeners and handlers run.",
    )

    parser.add_argument(
        "-c",
        "--config",
        help="INI file describing the target chain, one [target:<name>] section per target",
        type=Path,
        required=True,
    )
    parser.add_argument(
        "-t",
        "--target",
        help="Name of the target to dispatch on. (default: the deepest target)",
        default=None,
        required=False,
    )
    parser.add_argument(
        "-e",
        "--event",
        help=f"Event type to dispatch. (default: {DEFAULT_EVENT_TYPE})",
        default=DEFAULT_EVENT_TYPE,
        required=False,
    )
    parser.add_argument(
        "--no-bubbles",
        action="store_true",
        help="Create a non-bubbling event. Only the dispatch target's listeners run.",
        required=False,
    )
    parser.add_argument(
        "--cancelable",
        action="store_true",
        help="Create a cancelable event, so that --prevent-at changes the result.",
        required=False,
    )
    parser.add_argument(
        "--stop-at",
        help="Call stop_propagation() from the listeners of this target",
        default=None,
        required=False,
    )
    parser.add_argument(
        "--stop-immediate-at",
        help="Call stop_immediate_propagation() from the listeners of this target",
        default=None,
        required=False,
    )
    parser.add_argument(
        "--prevent-at",
        help="Call prevent_default() from the listeners of this target",
        default=None,
        required=False,
    )
    parser.add_argument(
        "-l",
        "--log-level",
        help=f"Logging level name or int value (DEBUG: 10, INFO: 20, WARNING: 30, ERROR: 40, CRITICAL: 50). (default: {logging.getLevelName(DEFAULT_LOG_LEVEL)})",
        default=DEFAULT_LOG_LEVEL,
        type=log_level_type,
        required=False,
    )
    parser.add_argument(
        "--log-dir",
        help="Also write log files to this directory",
        default=None,
        type=Path,
        required=False,
    )
    return parser


def parse_args(argv: list[str] | None = None) -> ArgsNamespace:
    args = build_parser().parse_args(argv, namespace=ArgsNamespace())
    logger.debug(f"{args=}")
    return args
