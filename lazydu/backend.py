"""Local filesystem storage backend.

Listing feeds the background scanner; delete and purge are the destructive
primitives the confirmation workflow calls after the user confirms.
"""

from __future__ import annotations

import logging
import os
import posixpath
import shutil
from pathlib import Path

from send2trash import send2trash

from .errors import BackendError
from .scan.types import Entry, EntryKind

logger = logging.getLogger(__name__)


def join_root_path(root: str, remote: str) -> str:
    """Join a backend display name and a relative path for display."""
    if not remote:
        return root
    if root.endswith("/"):
        return f"{root}{remote}"
    return f"{root}/{remote}"


class LocalBackend:
    """Backend rooted at one local directory.

    With ``trash=True`` deletes go through the platform trash instead of
    unlinking, so they can be undone outside the UI.
    """

    def __init__(self, root: Path, trash: bool = False) -> None:
        self.root = root.resolve()
        self.trash = trash
        self.name = self.root.as_posix()

    def local_path(self, remote: str) -> Path:
        if not remote:
            return self.root
        return self.root.joinpath(*remote.split("/"))

    def list_dir(self, remote: str) -> list[Entry]:
        """List direct children of ``remote`` without following symlinks."""
        directory = self.local_path(remote)
        entries: list[Entry] = []
        try:
            with os.scandir(directory) as it:
                for item in it:
                    child_remote = posixpath.join(remote, item.name) if remote else item.name
                    try:
                        is_dir = item.is_dir(follow_symlinks=False)
                    except OSError:
                        is_dir = False
                    if is_dir:
                        entries.append(Entry(child_remote, EntryKind.DIRECTORY))
                        continue
                    try:
                        size = int(item.stat(follow_symlinks=False).st_size)
                    except OSError:
                        size = -1
                    entries.append(Entry(child_remote, EntryKind.LEAF, size))
        except OSError as exc:
            raise BackendError(remote, f"failed to list {directory}: {exc.strerror or exc}") from exc
        return entries

    def delete_leaf(self, entry: Entry) -> None:
        """Delete one file (or symlink) entry."""
        target = self.local_path(entry.remote)
        logger.info("deleting file %s", target)
        try:
            if self.trash:
                send2trash(str(target))
            else:
                os.remove(target)
        except OSError as exc:
            raise BackendError(entry.remote, f"failed to delete {entry.remote}: {exc.strerror or exc}") from exc

    def purge_directory(self, remote: str) -> None:
        """Recursively delete the directory ``remote`` and everything below it."""
        if not remote:
            raise BackendError(remote, "refusing to purge the backend root")
        target = self.local_path(remote)
        logger.info("purging directory %s", target)
        try:
            if self.trash:
                send2trash(str(target))
            else:
                shutil.rmtree(target)
        except OSError as exc:
            raise BackendError(remote, f"failed to purge {remote}: {exc.strerror or exc}") from exc
