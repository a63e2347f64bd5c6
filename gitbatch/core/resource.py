"""Resource references.

A resource is what the user asks git to operate on: usually a local file,
but it may also name something behind another scheme (sftp, a remote
workspace). Only `file` resources can be handed to a local git process.

Usage:
    res = parse_resource("src/app.py")          # file scheme, absolute
    remote = parse_resource("sftp://host/home/me/app.py")
    assert res.is_local and not remote.is_local
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlsplit

__all__ = [
    "FILE_SCHEME",
    "Resource",
    "parse_resource",
]

FILE_SCHEME = "file"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]+://")


@dataclass(frozen=True, slots=True)
class Resource:
    """An immutable reference to a file or folder.

    Attributes:
        scheme: Resource scheme ("file" for the local filesystem)
        path: Absolute path component (POSIX separators for non-file schemes)
        authority: Host part of the URI, empty for local files
    """

    scheme: str
    path: str
    authority: str = ""

    @classmethod
    def file(cls, path: Path | str) -> Resource:
        """Build a local file resource from a filesystem path."""
        p = Path(path).expanduser()
        if not p.is_absolute():
            p = Path.cwd() / p
        return cls(scheme=FILE_SCHEME, path=str(p.resolve()))

    @property
    def is_local(self) -> bool:
        return self.scheme == FILE_SCHEME and not self.authority

    @property
    def fs_path(self) -> Path:
        """The path component as a filesystem path."""
        return Path(self.path)

    def contains(self, other: Resource) -> bool:
        """True if other is this resource or lives below it."""
        if self.scheme != other.scheme or self.authority != other.authority:
            return False
        if self.is_local:
            return other.fs_path == self.fs_path or self.fs_path in other.fs_path.parents
        mine = PurePosixPath(self.path)
        theirs = PurePosixPath(other.path)
        return theirs == mine or mine in theirs.parents

    def __str__(self) -> str:
        if self.is_local:
            return self.path
        return f"{self.scheme}://{self.authority}{self.path}"


def parse_resource(text: str) -> Resource:
    """Parse a user-supplied path or URI.

    Plain paths (including Windows drive paths) become file resources.
    `file://` URIs are decoded to local paths, unless they name a host
    other than localhost (a UNC share): those keep their authority and are
    not local. Any other scheme is kept as-is with its percent-decoded path.
    """
    if not _SCHEME_RE.match(text):
        return Resource.file(text)

    parts = urlsplit(text)
    path = unquote(parts.path) or "/"
    if parts.scheme == FILE_SCHEME and parts.netloc in ("", "localhost"):
        return Resource.file(path)
    return Resource(scheme=parts.scheme, path=path, authority=parts.netloc)
