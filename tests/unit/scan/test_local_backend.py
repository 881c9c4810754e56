from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydu.backend import LocalBackend, join_root_path
from lazydu.errors import BackendError
from lazydu.scan.types import Entry, EntryKind


class JoinRootPathTests(unittest.TestCase):
    def test_join(self) -> None:
        self.assertEqual(join_root_path("/data", ""), "/data")
        self.assertEqual(join_root_path("/data", "a/b"), "/data/a/b")
        self.assertEqual(join_root_path("/", "a"), "/a")


class LocalBackendTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name).resolve()
        (self.root / "file.txt").write_bytes(b"12345")
        (self.root / "dir").mkdir()
        (self.root / "dir" / "inner.txt").write_bytes(b"abc")
        self.backend = LocalBackend(self.root)

    def test_list_dir_reports_kinds_and_sizes(self) -> None:
        entries = {entry.remote: entry for entry in self.backend.list_dir("")}
        self.assertEqual(entries["file.txt"], Entry("file.txt", EntryKind.LEAF, 5))
        self.assertEqual(entries["dir"].kind, EntryKind.DIRECTORY)
        inner = self.backend.list_dir("dir")
        self.assertEqual(inner, [Entry("dir/inner.txt", EntryKind.LEAF, 3)])
        self.assertEqual(self.backend.name, self.root.as_posix())

    def test_symlinked_directory_is_not_followed(self) -> None:
        os.symlink(self.root / "dir", self.root / "link")
        entries = {entry.remote: entry for entry in self.backend.list_dir("")}
        self.assertEqual(entries["link"].kind, EntryKind.LEAF)

    def test_list_missing_directory_raises_backend_error(self) -> None:
        with self.assertRaises(BackendError) as ctx:
            self.backend.list_dir("missing")
        self.assertEqual(ctx.exception.remote, "missing")

    def test_delete_leaf_and_purge_directory(self) -> None:
        self.backend.delete_leaf(Entry("file.txt", EntryKind.LEAF, 5))
        self.assertFalse((self.root / "file.txt").exists())
        self.backend.purge_directory("dir")
        self.assertFalse((self.root / "dir").exists())

    def test_delete_failures_become_backend_errors(self) -> None:
        with self.assertRaises(BackendError):
            self.backend.delete_leaf(Entry("nope", EntryKind.LEAF, 1))
        with self.assertRaises(BackendError):
            self.backend.purge_directory("nope")

    def test_refuses_to_purge_root(self) -> None:
        with self.assertRaises(BackendError):
            self.backend.purge_directory("")
        self.assertTrue(self.root.exists())

    def test_trash_mode_uses_send2trash(self) -> None:
        backend = LocalBackend(self.root, trash=True)
        with mock.patch("lazydu.backend.send2trash") as trash:
            backend.delete_leaf(Entry("file.txt", EntryKind.LEAF, 5))
            backend.purge_directory("dir")
        self.assertEqual(
            [call.args[0] for call in trash.call_args_list],
            [str(self.root / "file.txt"), str(self.root / "dir")],
        )
        self.assertTrue((self.root / "file.txt").exists())


if __name__ == "__main__":
    unittest.main()
