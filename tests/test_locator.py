from __future__ import annotations

import os
from pathlib import Path

import pytest

from servertiming.locator import PathListLocator, is_writable_file


def test_is_writable_file_accepts_regular_file(tmp_path: Path):
    p = tmp_path / "ok.log"
    p.touch()
    assert is_writable_file(str(p)) is True


def test_is_writable_file_rejects_missing_and_directory(tmp_path: Path):
    assert is_writable_file(str(tmp_path / "missing.log")) is False
    assert is_writable_file(str(tmp_path)) is False


@pytest.mark.skipif(os.geteuid() == 0, reason="root can write read-only files")
def test_is_writable_file_rejects_read_only(tmp_path: Path):
    p = tmp_path / "ro.log"
    p.touch()
    p.chmod(0o444)
    assert is_writable_file(str(p)) is False


@pytest.mark.skipif(os.geteuid() == 0, reason="root can write read-only files")
def test_locator_skips_read_only_candidate(tmp_path: Path):
    ro = tmp_path / "ro.log"
    ok = tmp_path / "ok.log"
    ro.touch()
    ok.touch()
    ro.chmod(0o444)
    assert PathListLocator([str(ro), str(ok)]).locate() == str(ok)
