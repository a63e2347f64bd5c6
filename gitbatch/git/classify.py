"""Classify resources by owning repository.

Each resource either gets a repository root to be batched under, or a
reason it cannot be handed to git. Checks run in a fixed order and stop at
the first match:

1. no owning repository        -> MISSING_REPO
2. no containing workspace     -> MISSING_REPO (same bucket as 1)
3. workspace scheme not "file" -> NON_LOCAL
4. otherwise                   -> Accepted(repo root)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gitbatch.core.resource import Resource
from gitbatch.git.lookup import RepositoryLookup, WorkspaceLookup

__all__ = [
    "Accepted",
    "Classification",
    "RejectReason",
    "Rejected",
    "classify",
]


class RejectReason(Enum):
    MISSING_REPO = "missing-repository"
    OUT_OF_WORKSPACE = "out-of-workspace"
    NON_LOCAL = "non-local-scheme"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Accepted:
    resource: Resource
    repo_root: Path


@dataclass(frozen=True, slots=True)
class Rejected:
    resource: Resource
    reason: RejectReason


Classification = Accepted | Rejected


def classify(
    resource: Resource,
    repos: RepositoryLookup,
    workspaces: WorkspaceLookup,
) -> Classification:
    """Classify one resource. Never raises for an unclassifiable resource."""
    repo = repos.get_repository(resource)
    if repo is None:
        return Rejected(resource, RejectReason.MISSING_REPO)

    # Outside every workspace folder is reported as a missing repository.
    folder = workspaces.get_workspace_folder(resource)
    if folder is None:
        return Rejected(resource, RejectReason.MISSING_REPO)

    if not folder.uri.is_local:
        return Rejected(resource, RejectReason.NON_LOCAL)

    return Accepted(resource, repo.root)
