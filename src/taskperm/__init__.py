"""
Taskperm: depth-bounded concurrent string permutation.

Generates every permutation of a string either sequentially or by
spawning one concurrent subtask per character position for the first
few recursion levels, joining each level before merging.

Usage:
    from taskperm import permute, task_permute

    # Sequential
    permutations = permute("abcd")

    # Two levels of subtasks, 4 + 4*3 of them
    permutations, task_count = await task_permute("abcd", 2)
"""

from .errors import InvalidDepthError, PermutationError, SubtaskFailure
from .permuter import (
    TaskCounter,
    TaskPermuter,
    TaskPermuteResult,
    WorkItem,
    count_tasks,
    task_permute,
)
from .sequential import permutation_count, permute

__version__ = "0.1.0"
__all__ = [
    # Sequential
    "permute",
    "permutation_count",
    # Concurrent
    "task_permute",
    "count_tasks",
    "TaskPermuter",
    "TaskCounter",
    "TaskPermuteResult",
    "WorkItem",
    # Errors
    "PermutationError",
    "InvalidDepthError",
    "SubtaskFailure",
]
