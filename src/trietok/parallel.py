"""Parallel processing helpers shared by batch encoding and vocabulary building."""

import os
from enum import Enum
from math import ceil
from typing import Literal

from .errors import ParallelModeError

ParallelStrategy = Literal["auto", "batch", "off"]


class ParallelMode(str, Enum):
    """Named parallelization modes for batch encoding."""

    AUTO = "auto"
    BATCH = "batch"
    OFF = "off"

    @classmethod
    def get(cls, name: "str | ParallelMode") -> "ParallelMode":
        """Get parallel mode by name (case-insensitive)."""
        if isinstance(name, ParallelMode):
            return name
        try:
            return cls[name.upper()]
        except KeyError:
            raise ParallelModeError(
                "unknown mode",
                invalid_name=name,
                available_modes=[mode.value for mode in cls],
            )


def list_parallel_modes() -> list[str]:
    """Return available parallel mode names."""
    return [mode.value for mode in ParallelMode]


def resolve_workers(num_workers: int | None) -> int:
    """Return the effective worker count: every CPU for ``None``, at least 1 otherwise."""
    if num_workers is None:
        return os.cpu_count() or 1
    # "0" interpreted as 1 worker
    return max(1, num_workers)


def group_items[I](items: list[I], workers: int) -> list[list[I]]:
    """
    Split ``items`` into contiguous groups, at most ``2 * workers`` of them.

    Contiguous groups keep results in input order once flattened.
    """
    if not items:
        return []
    target_tasks = min(len(items), workers * 2)
    group_size = max(1, ceil(len(items) / target_tasks))
    return [items[idx : idx + group_size] for idx in range(0, len(items), group_size)]


__all__ = [
    "ParallelStrategy",
    "ParallelMode",
    "list_parallel_modes",
    "resolve_workers",
    "group_items",
]
