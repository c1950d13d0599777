from __future__ import annotations

import os
import sys
import tempfile

import pytest
from result import Ok

from reclaim.models.scan import ReclaimReport, ScanIssueCode
from reclaim.scan import ThreadedWalker
from reclaim.services.reclaim import compute_reclaimable


def _write(path: str, size: int) -> None:
    with open(path, "wb") as f:
        f.write(b"x" * size)


def _report(path: str) -> ReclaimReport:
    result = compute_reclaimable(path)
    assert isinstance(result, Ok)
    return result.unwrap()


def _dir_size(path: str) -> int:
    return os.lstat(path).st_size


def test_real_tree_with_symlink() -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        root = os.path.realpath(tmpdir)
        os.makedirs(os.path.join(root, "sub"))
        _write(os.path.join(root, "a.txt"), 100)
        _write(os.path.join(root, "sub", "b.txt"), 200)
        os.symlink("sub/b.txt", os.path.join(root, "link"))

        report = _report(root)

        assert report.sizes[os.path.join(root, "a.txt")] == 100
        assert report.sizes[os.path.join(root, "sub", "b.txt")] == 200
        assert report.sizes[os.path.join(root, "link")] == len("sub/b.txt")
        assert report.total == 300 + len("sub/b.txt") + _dir_size(os.path.join(root, "sub"))
        assert root not in report.sizes


def test_real_hard_links_inside_and_outside() -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        base = os.path.realpath(tmpdir)
        tree = os.path.join(base, "tree")
        outside = os.path.join(base, "outside")
        os.makedirs(tree)
        os.makedirs(outside)

        _write(os.path.join(tree, "inner"), 100)
        os.link(os.path.join(tree, "inner"), os.path.join(tree, "inner-alias"))
        _write(os.path.join(outside, "shared"), 1000)
        os.link(os.path.join(outside, "shared"), os.path.join(tree, "shared-alias"))

        report = _report(tree)

        assert report.sizes[os.path.join(tree, "inner")] == 100
        assert report.sizes[os.path.join(tree, "inner-alias")] == 100
        assert report.sizes[os.path.join(tree, "shared-alias")] == 1000
        assert report.total == 100

        whole = _report(base)
        assert whole.total == 1100 + _dir_size(tree) + _dir_size(outside)


def test_real_threaded_walk_matches() -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        root = os.path.realpath(tmpdir)
        for idx in range(5):
            os.makedirs(os.path.join(root, f"d{idx}", "nested"))
            _write(os.path.join(root, f"d{idx}", "nested", "f.bin"), idx * 7)
        os.link(os.path.join(root, "d0", "nested", "f.bin"), os.path.join(root, "d4", "alias.bin"))

        sequential = _report(root)
        threaded = compute_reclaimable(root, walker=ThreadedWalker(workers=4)).unwrap()

        assert threaded.sizes == sequential.sizes
        assert threaded.total == sequential.total


@pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
def test_real_permission_denied_subtree() -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        root = os.path.realpath(tmpdir)
        readable = os.path.join(root, "readable")
        protected = os.path.join(root, "protected")
        os.makedirs(readable)
        os.makedirs(protected)
        _write(os.path.join(readable, "file1.txt"), 20)
        _write(os.path.join(readable, "file2.txt"), 10)
        _write(os.path.join(protected, "secret.txt"), 12)
        os.chmod(protected, 0o000)
        try:
            report = _report(root)
        finally:
            os.chmod(protected, 0o700)

        assert set(report.sizes) == {
            readable,
            os.path.join(readable, "file1.txt"),
            os.path.join(readable, "file2.txt"),
            protected,
        }
        assert report.total == 30 + _dir_size(readable) + _dir_size(protected)
        assert [(i.code, i.path) for i in report.issues] == [(ScanIssueCode.LISTING_FAILED, protected)]
