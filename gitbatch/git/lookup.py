"""Repository and workspace lookups.

The batch runner asks two collaborators about every resource: which git
repository owns it, and which workspace folder contains it. Both are
protocols so tests (and other front-ends) can supply their own.

Usage:
    repos = GitRepositoryLookup()
    workspaces = WorkspaceFolders.from_strings(["~/src/app"])

    repo = repos.get_repository(Resource.file("~/src/app/main.py"))
    if repo is not None:
        print(repo.root)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from gitbatch.core.resource import Resource, parse_resource

__all__ = [
    "GitRepository",
    "GitRepositoryLookup",
    "RepositoryLookup",
    "WorkspaceFolder",
    "WorkspaceFolders",
    "WorkspaceLookup",
    "is_repository_root",
]


@dataclass(frozen=True, slots=True)
class GitRepository:
    """A git working tree.

    Attributes:
        root: Absolute path to the top of the working tree
    """

    root: Path


@dataclass(frozen=True, slots=True)
class WorkspaceFolder:
    """A top-level folder opened for editing.

    Attributes:
        uri: Folder location, with its scheme
        name: Display name
    """

    uri: Resource
    name: str = ""

    @classmethod
    def parse(cls, text: str) -> WorkspaceFolder:
        uri = parse_resource(text)
        return cls(uri=uri, name=uri.fs_path.name or str(uri))


class RepositoryLookup(Protocol):
    def get_repository(self, resource: Resource) -> GitRepository | None:
        """Return the repository owning resource, or None."""
        ...


class WorkspaceLookup(Protocol):
    def get_workspace_folder(self, resource: Resource) -> WorkspaceFolder | None:
        """Return the workspace folder containing resource, or None."""
        ...


def is_repository_root(path: Path) -> bool:
    """Check for a .git directory, or a .git file (worktrees, submodules)."""
    git = path / ".git"
    return git.is_dir() or git.is_file()


class GitRepositoryLookup:
    """Find owning repositories by searching upward for `.git`.

    The resource's path is searched on the local disk whatever its scheme;
    whether the resource may be handed to git is decided separately from
    its workspace folder. Results are cached per directory.
    """

    def __init__(self) -> None:
        self._cache: dict[Path, Path | None] = {}

    def get_repository(self, resource: Resource) -> GitRepository | None:
        # A path the OS refuses to stat (too long, unreadable parent) has no repository.
        try:
            start = resource.fs_path
            if not start.is_dir():
                start = start.parent
            root = self._find_root(start)
        except OSError:
            return None
        return GitRepository(root=root) if root is not None else None

    def _find_root(self, start: Path) -> Path | None:
        visited: list[Path] = []
        found: Path | None = None
        for parent in (start, *start.parents):
            if parent in self._cache:
                found = self._cache[parent]
                break
            visited.append(parent)
            if is_repository_root(parent):
                found = parent
                break
        for path in visited:
            self._cache[path] = found
        return found


class WorkspaceFolders:
    """Workspace lookup over a fixed list of folders.

    When folders nest, the innermost folder containing a resource wins.
    """

    def __init__(self, folders: Iterable[WorkspaceFolder]) -> None:
        self._folders = list(folders)

    @classmethod
    def from_strings(cls, folders: Iterable[str]) -> WorkspaceFolders:
        return cls(WorkspaceFolder.parse(f) for f in folders)

    @property
    def folders(self) -> list[WorkspaceFolder]:
        return list(self._folders)

    def get_workspace_folder(self, resource: Resource) -> WorkspaceFolder | None:
        matches = [f for f in self._folders if f.uri.contains(resource)]
        if not matches:
            return None
        return max(matches, key=lambda f: len(f.uri.path))
