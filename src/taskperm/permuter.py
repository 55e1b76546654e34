"""
Depth-bounded concurrent permutation with fork-join task spawning.

For the first `depth` recursion levels every remaining character position
becomes its own subtask; below that the sequential algorithm runs on an
executor. Interior nodes are asyncio tasks, so only leaves occupy pool
workers and nested joins cannot starve a bounded pool.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Executor
from dataclasses import dataclass
from math import perm
from typing import NamedTuple

from . import sequential
from .errors import InvalidDepthError, PermutationError, SubtaskFailure

logger = logging.getLogger(__name__)

DEFAULT_TASK_WARNING_THRESHOLD = 10_000


@dataclass(frozen=True)
class WorkItem:
    """Fixed prefix, characters left to permute, spawn levels left."""
    head: str
    tail: str
    depth: int

    def split(self) -> list[WorkItem]:
        """One child per position of tail, that character becoming the new head."""
        return [
            WorkItem(self.tail[i], self.tail[:i] + self.tail[i + 1:], self.depth - 1)
            for i in range(len(self.tail))
        ]


class TaskCounter:
    """
    Count of joined subtasks for one run.

    Safe to increment from several threads. No reset: create a new
    counter per top-level call.
    """

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> None:
        with self._lock:
            self._value += 1

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class TaskPermuteResult(NamedTuple):
    permutations: list[str]
    task_count: int


class TaskPermuter:
    """
    Recursive task-spawning permuter.

    Each call with depth > 0 dispatches a full level of sibling tasks,
    then blocks at a barrier until all of them are done before merging.
    A failing child does not cancel its siblings; the failure is raised
    once the whole level has finished.

    Example:
        counter = TaskCounter()
        permuter = TaskPermuter(counter=counter)
        results = await permuter.permute(WorkItem("", "abcd", 2))
        assert len(results) == 24 and counter.value == 16
    """

    def __init__(
        self,
        executor: Executor | None = None,
        counter: TaskCounter | None = None,
    ):
        """
        Args:
            executor: Runs the sequential leaves. None uses the event
                      loop's default thread pool.
            counter: Incremented once per joined subtask.
        """
        self._executor = executor
        self.counter = counter if counter is not None else TaskCounter()

    async def permute(self, item: WorkItem) -> list[str]:
        """Return every permutation of item.tail, each prefixed by item.head."""
        if item.depth <= 0:
            loop = asyncio.get_running_loop()
            tails = await loop.run_in_executor(
                self._executor, sequential.permute, item.tail
            )
            return [item.head + tail for tail in tails]

        # Same as the base case applied to an empty tail.
        if not item.tail:
            return [item.head]

        children = item.split()
        tasks = [asyncio.create_task(self.permute(child)) for child in children]
        logger.debug(
            "Spawned %d subtasks under head=%r depth=%d",
            len(tasks), item.head, item.depth,
        )
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        for child, outcome in zip(children, outcomes):
            if isinstance(outcome, SubtaskFailure):
                raise outcome
            if isinstance(outcome, BaseException):
                raise SubtaskFailure(child) from outcome

        permutations: list[str] = []
        for outcome in outcomes:
            self.counter.increment()
            permutations.extend(item.head + result for result in outcome)
        return permutations


def count_tasks(length: int, depth: int) -> int:
    """
    Number of subtasks a run over `length` characters joins.

    Level l spawns length * (length-1) * ... * (length-l+1) tasks; levels
    past `length` spawn nothing because the tail is empty.
    """
    return sum(perm(length, level) for level in range(1, min(depth, length) + 1))


async def task_permute(
    text: str,
    depth: int,
    *,
    executor: Executor | None = None,
    task_warning_threshold: int = DEFAULT_TASK_WARNING_THRESHOLD,
) -> TaskPermuteResult:
    """
    Permute text, spawning subtasks for the first `depth` levels.

    Args:
        text: String to permute.
        depth: Spawn levels. 0 runs the sequential algorithm directly.
        executor: Runs the sequential leaves. None uses the default pool.
        task_warning_threshold: Log a warning above this many subtasks.

    Returns:
        The permutations and the number of subtasks joined by this call.

    Raises:
        InvalidDepthError: depth is negative or not an int.
        SubtaskFailure: a subtask raised; no partial result is returned.
    """
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 0:
        raise InvalidDepthError(depth)

    if depth == 0:
        return TaskPermuteResult(sequential.permute(text), 0)

    expected = count_tasks(len(text), depth)
    if expected > task_warning_threshold:
        logger.warning(
            "depth=%d over %d characters spawns %d subtasks; "
            "keep depth well below the string length",
            depth, len(text), expected,
        )

    counter = TaskCounter()
    permuter = TaskPermuter(executor=executor, counter=counter)
    logger.info("Permuting %d characters with depth=%d", len(text), depth)
    try:
        permutations = await permuter.permute(WorkItem("", text, depth))
    except PermutationError:
        logger.error("Permutation of %r failed", text)
        raise
    logger.info(
        "Generated %d permutations with %d subtasks",
        len(permutations), counter.value,
    )
    return TaskPermuteResult(permutations, counter.value)
