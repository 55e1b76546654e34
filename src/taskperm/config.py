"""Run configuration for the permuter and its CLI."""

from __future__ import annotations

import os
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Mapping

from .permuter import DEFAULT_TASK_WARNING_THRESHOLD

EXECUTOR_KINDS = ("thread", "process")


@dataclass
class RunConfig:
    """Configuration for a permutation run.

    Attributes:
        executor: Pool running the sequential leaves, "thread" or "process"
        max_workers: Pool size; None lets concurrent.futures decide
        task_warning_threshold: Warn when a run would spawn more subtasks
    """

    executor: str = "thread"
    max_workers: int | None = None
    task_warning_threshold: int = DEFAULT_TASK_WARNING_THRESHOLD

    def __post_init__(self) -> None:
        if self.executor not in EXECUTOR_KINDS:
            raise ValueError(
                f"executor must be one of {', '.join(EXECUTOR_KINDS)}, got {self.executor!r}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
        if self.task_warning_threshold < 0:
            raise ValueError(
                f"task_warning_threshold must be non-negative, got {self.task_warning_threshold}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RunConfig:
        """
        Build a config from TASKPERM_* environment variables.

        TASKPERM_EXECUTOR, TASKPERM_MAX_WORKERS and TASKPERM_TASK_WARNING
        override the defaults when set and non-empty.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}
        if env.get("TASKPERM_EXECUTOR"):
            kwargs["executor"] = env["TASKPERM_EXECUTOR"].strip().lower()
        if env.get("TASKPERM_MAX_WORKERS"):
            kwargs["max_workers"] = _parse_int("TASKPERM_MAX_WORKERS", env["TASKPERM_MAX_WORKERS"])
        if env.get("TASKPERM_TASK_WARNING"):
            kwargs["task_warning_threshold"] = _parse_int(
                "TASKPERM_TASK_WARNING", env["TASKPERM_TASK_WARNING"]
            )
        return cls(**kwargs)

    def create_executor(self) -> Executor:
        """Return a new executor of the configured kind. Caller shuts it down."""
        if self.executor == "process":
            return ProcessPoolExecutor(max_workers=self.max_workers)
        return ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="taskperm"
        )


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
