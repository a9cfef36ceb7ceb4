"""Small set-construction helper for checkpoint ids."""

from __future__ import annotations

from collections.abc import Iterable


def checkpoint_set(*ids: int) -> frozenset[int]:
    """Return the immutable set of checkpoint ``ids``.

    ``checkpoint_set()`` is the empty set; duplicates collapse.
    """
    return frozenset(ids)


def merge_checkpoints(target: set[int], ids: Iterable[int]) -> None:
    """Accumulate ``ids`` into a mutable aggregate set in place."""
    target.update(ids)


__all__ = ["checkpoint_set", "merge_checkpoints"]
