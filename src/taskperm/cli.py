"""
Command line entry point.

Usage:
    taskperm TEXT DEPTH [show] [--executor thread|process] [--max-workers N]
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
import time
from typing import Iterable

from taskperm import __version__
from taskperm.config import EXECUTOR_KINDS, RunConfig
from taskperm.errors import PermutationError
from taskperm.logging_config import setup_logging
from taskperm.permuter import TaskPermuteResult, task_permute
from taskperm.sequential import permute

logger = logging.getLogger(__name__)


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"must be an integer, got {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {value}")
    return value


def _positive_int(text: str) -> int:
    value = _non_negative_int(text)
    if value == 0:
        raise argparse.ArgumentTypeError("must be greater than 0")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskperm",
        description=(
            "Generate every permutation of a string, spawning concurrent subtasks "
            "for the first DEPTH recursion levels."
        ),
        epilog=(
            "Subtask count grows as len * (len-1) * ... per level; keep DEPTH well "
            "below the string length."
        ),
    )
    parser.add_argument("text", help="String to permute.")
    parser.add_argument(
        "depth",
        type=_non_negative_int,
        help="Levels of subtasks to spawn (0 runs sequentially).",
    )
    parser.add_argument(
        "flag",
        nargs="?",
        choices=["show"],
        help="Optional trailing 'show': same as --show.",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print every permutation.",
    )
    parser.add_argument(
        "--executor",
        choices=EXECUTOR_KINDS,
        help="Pool for the sequential leaves (default: TASKPERM_EXECUTOR or thread).",
    )
    parser.add_argument(
        "--max-workers",
        dest="max_workers",
        type=_positive_int,
        help="Pool size (default: TASKPERM_MAX_WORKERS or the pool's own default).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING).",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        help="Write logs to this path instead of stderr.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"taskperm {__version__}",
    )
    return parser


def main(argv: Iterable[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        config = _resolve_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    print(f"Permuting {args.text}\n")

    start = time.perf_counter()
    try:
        result = _run(args.text, args.depth, config)
    except PermutationError as exc:
        logger.debug("Run failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception as exc:
        logger.debug("Run failed", exc_info=True)
        print(f"error: {type(exc).__name__}: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed_ms = (time.perf_counter() - start) * 1000

    if args.show or args.flag == "show":
        for permutation in result.permutations:
            print(permutation)

    if result.task_count > 0:
        print(f"{result.task_count} tasks created.")
    print(
        f"{len(result.permutations)} permutations generated in "
        f"{elapsed_ms:.0f} milliseconds"
    )


def _resolve_config(args: argparse.Namespace) -> RunConfig:
    config = RunConfig.from_env()
    overrides = {}
    if args.executor is not None:
        overrides["executor"] = args.executor
    if args.max_workers is not None:
        overrides["max_workers"] = args.max_workers
    return dataclasses.replace(config, **overrides)


def _run(text: str, depth: int, config: RunConfig) -> TaskPermuteResult:
    if depth == 0:
        return TaskPermuteResult(permute(text), 0)
    with config.create_executor() as executor:
        return asyncio.run(
            task_permute(
                text,
                depth,
                executor=executor,
                task_warning_threshold=config.task_warning_threshold,
            )
        )
