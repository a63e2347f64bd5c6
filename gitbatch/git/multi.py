"""Run one git command per repository, concurrently.

`run_batched` is the entry point: it classifies every resource, groups the
accepted ones by repository root, starts one git process per root on the
event loop and joins them all. Nothing is printed here; the caller renders
the returned `RunReport`.

Usage:
    git = find_git()
    report = run_batched_sync(
        git.command("add", "--"),
        [Resource.file("a.txt"), Resource.file("../other/b.txt")],
        repos=open_repositories(git),
        workspaces=WorkspaceFolders.from_strings(["~/src"]),
    )
    match report:
        case Ok(r):
            print(f"{len(r.succeeded)} ok, {len(r.failed)} failed")
        case Err(e):
            print(e)
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from gitbatch.core.errors import CollaboratorUnavailable, SpawnFailure
from gitbatch.core.resource import Resource
from gitbatch.core.result import Err, Ok, Result
from gitbatch.git.batch import batch
from gitbatch.git.classify import Accepted, RejectReason, Rejected, classify
from gitbatch.git.lookup import RepositoryLookup, WorkspaceLookup
from gitbatch.platform.process import ProcessOutcome, build_command, run_async

__all__ = [
    "RunReport",
    "run_batched",
    "run_batched_sync",
]


def _resources() -> list[Resource]:
    return []


def _outcomes() -> list[ProcessOutcome]:
    return []


@dataclass
class RunReport:
    """Everything that happened to one batched run.

    Attributes:
        affected: Resources the caller considers affected (filled by caller)
        missing_repo: Resources with no repository or no workspace folder
        out_of_workspace: Resources outside every workspace folder
        non_local: Resources whose workspace folder is not on the local disk
        succeeded: Processes that exited with status 0
        failed: Processes that exited non-zero or never started
    """

    affected: list[Resource] = field(default_factory=_resources)
    missing_repo: list[Resource] = field(default_factory=_resources)
    out_of_workspace: list[Resource] = field(default_factory=_resources)
    non_local: list[Resource] = field(default_factory=_resources)
    succeeded: list[ProcessOutcome] = field(default_factory=_outcomes)
    failed: list[ProcessOutcome] = field(default_factory=_outcomes)

    @property
    def ok(self) -> bool:
        """True if no process failed."""
        return not self.failed

    @property
    def rejected(self) -> list[Resource]:
        return [*self.missing_repo, *self.out_of_workspace, *self.non_local]

    def reject(self, rejection: Rejected) -> None:
        match rejection.reason:
            case RejectReason.MISSING_REPO:
                self.missing_repo.append(rejection.resource)
            case RejectReason.OUT_OF_WORKSPACE:
                self.out_of_workspace.append(rejection.resource)
            case RejectReason.NON_LOCAL:
                self.non_local.append(rejection.resource)

    def summary(self) -> dict[str, int]:
        """Counts per bucket."""
        return {
            "affected": len(self.affected),
            "missing_repo": len(self.missing_repo),
            "out_of_workspace": len(self.out_of_workspace),
            "non_local": len(self.non_local),
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
        }


async def run_batched(
    template: Sequence[str],
    resources: Sequence[Resource],
    *,
    repos: RepositoryLookup | None,
    workspaces: WorkspaceLookup,
    env: Mapping[str, str] | None = None,
) -> Result[RunReport, CollaboratorUnavailable]:
    """Run template once per repository owning some of resources.

    Args:
        template: Executable and arguments; resource paths are appended.
        resources: Resources to operate on, in order.
        repos: Repository lookup, None if git is unavailable.
        workspaces: Workspace folder lookup.
        env: Environment forwarded to every process (current env if None).

    Returns:
        Ok(RunReport) once every process has settled.
        Err(CollaboratorUnavailable) if repos is None; nothing is spawned.

    Any exception other than a recognised spawn failure propagates.
    """
    if repos is None:
        return Err(CollaboratorUnavailable())

    report = RunReport()
    accepted: list[Accepted] = []
    for resource in resources:
        match classify(resource, repos, workspaces):
            case Accepted() as entry:
                accepted.append(entry)
            case Rejected() as rejection:
                report.reject(rejection)

    batches = batch(accepted)
    results = await asyncio.gather(
        *(
            run_async(build_command(template, paths), cwd=root, env=env, paths=paths)
            for root, paths in batches.items()
        ),
        return_exceptions=True,
    )

    for result in results:
        match result:
            case Ok(outcome) if outcome.succeeded:
                report.succeeded.append(outcome)
            case Ok(outcome):
                report.failed.append(outcome)
            case Err(SpawnFailure(outcome=outcome)):
                report.failed.append(outcome)
            case BaseException() as exc:
                raise exc
            case _:
                raise TypeError(f"unexpected process result: {result!r}")

    return Ok(report)


def run_batched_sync(
    template: Sequence[str],
    resources: Sequence[Resource],
    *,
    repos: RepositoryLookup | None,
    workspaces: WorkspaceLookup,
    env: Mapping[str, str] | None = None,
) -> Result[RunReport, CollaboratorUnavailable]:
    """Blocking wrapper around run_batched for non-async callers."""
    return asyncio.run(
        run_batched(template, resources, repos=repos, workspaces=workspaces, env=env)
    )
