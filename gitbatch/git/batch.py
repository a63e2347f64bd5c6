"""Group accepted resources by repository root."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from gitbatch.core.resource import Resource
from gitbatch.git.classify import Accepted

__all__ = ["Batches", "batch"]

Batches = dict[Path, list[Resource]]


def batch(accepted: Iterable[Accepted]) -> Batches:
    """Group resources by repository root.

    Input order is kept within each batch and duplicates are kept as-is.
    A key only exists once a resource has been added under it.
    """
    batches: Batches = {}
    for entry in accepted:
        batches.setdefault(entry.repo_root, []).append(entry.resource)
    return batches
