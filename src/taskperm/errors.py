"""Exceptions raised by taskperm."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .permuter import WorkItem


class PermutationError(Exception):
    """Base class for taskperm errors."""


class InvalidDepthError(PermutationError, ValueError):
    """Spawn depth is not a non-negative integer."""

    def __init__(self, depth: object):
        super().__init__(f"depth must be a non-negative integer, got {depth!r}")
        self.depth = depth


class SubtaskFailure(PermutationError):
    """
    A spawned subtask raised.

    The failing work item is kept on .item; the original exception is
    chained as __cause__.
    """

    def __init__(self, item: WorkItem):
        super().__init__(
            f"subtask failed: head={item.head!r} tail={item.tail!r} depth={item.depth}"
        )
        self.item = item
