"""Unit tests for the FileIdentifier class."""

import os

import pytest

from twocode.file_system_tree.file_identifier import FileIdentifier


def test_file_identifier_equality_and_hash():
    assert FileIdentifier(1, 2) == FileIdentifier(1, 2)
    assert FileIdentifier(1, 2) != FileIdentifier(1, 3)
    assert len({FileIdentifier(1, 2), FileIdentifier(1, 2), FileIdentifier(2, 2)}) == 2


def test_file_identifier_of_existing_path(tmp_path):
    stat_info = os.stat(tmp_path)
    assert FileIdentifier.of(tmp_path) == FileIdentifier(stat_info.st_dev, stat_info.st_ino)


def test_file_identifier_of_missing_path(tmp_path):
    assert FileIdentifier.of(tmp_path / "missing") is None


def test_file_identifier_follows_symlinks(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    link = tmp_path / "link"
    try:
        os.symlink(target, link)
    except (OSError, NotImplementedError):
        pytest.skip("Symlink creation not supported on this platform/environment")
    assert FileIdentifier.of(link) == FileIdentifier.of(target)
