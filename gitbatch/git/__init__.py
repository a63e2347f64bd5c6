"""Git batching.

This module groups resources by the repository that owns them and runs
one git command per repository:
- lookup: repository and workspace folder collaborators
- classify / batch: partition resources by repository root
- multi: concurrent fan-out and the resulting RunReport

Usage:
    from gitbatch.git import find_git, open_repositories, run_batched_sync

    git = find_git()
    result = run_batched_sync(
        git.command("add", "--"),
        resources,
        repos=open_repositories(git),
        workspaces=WorkspaceFolders.from_strings([str(Path.cwd())]),
    )
"""

from gitbatch.git.batch import Batches, batch
from gitbatch.git.classify import Accepted, Classification, RejectReason, Rejected, classify
from gitbatch.git.locator import GitExecutable, find_git, open_repositories
from gitbatch.git.lookup import (
    GitRepository,
    GitRepositoryLookup,
    RepositoryLookup,
    WorkspaceFolder,
    WorkspaceFolders,
    WorkspaceLookup,
)
from gitbatch.git.multi import RunReport, run_batched, run_batched_sync

__all__ = [
    # Lookup
    "GitRepository",
    "GitRepositoryLookup",
    "RepositoryLookup",
    "WorkspaceFolder",
    "WorkspaceFolders",
    "WorkspaceLookup",
    # Locator
    "GitExecutable",
    "find_git",
    "open_repositories",
    # Classify / batch
    "Accepted",
    "Batches",
    "Classification",
    "RejectReason",
    "Rejected",
    "batch",
    "classify",
    # Multi
    "RunReport",
    "run_batched",
    "run_batched_sync",
]
