"""Unit tests for the content logger.

Tests both normal operation and error handling scenarios.
"""

import builtins
import os
import re
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from twocode.content_logger import ContentLogger, log_file_contents, output_file_name
from twocode.exceptions import OutputDirectoryError, OutputFileError
from twocode.exclusion_rules.name_rules import NameExclusionRules
from twocode.file_system_tree.file_system_tree import FileSystemTree
from twocode.file_system_tree.permission_action import PermissionAction

MOMENT = datetime(2024, 3, 9, 7, 5, 1)


def _blocks(content: bytes) -> list:
    return re.findall(rb"^File: (.+)$", content, flags=re.MULTILINE)


class TestOutputFileName:
    """Test naming of log files."""

    def test_format(self):
        assert output_file_name(MOMENT) == "contents__2024-03-09__07-05-01.txt"

    def test_suffix_for_later_attempts(self):
        assert output_file_name(MOMENT, attempt=3) == "contents__2024-03-09__07-05-01__3.txt"

    def test_defaults_to_now(self):
        assert re.fullmatch(r"contents__\d{4}-\d{2}-\d{2}__\d{2}-\d{2}-\d{2}\.txt", output_file_name())


class TestLogFileContents:
    """Test the log_file_contents entry point."""

    def test_single_file_exact_output(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        (root / "a.cpp").write_text("x")

        output_path = log_file_contents(root, root / "contents", now=MOMENT)

        assert output_path == root / "contents" / "contents__2024-03-09__07-05-01.txt"
        assert output_path.read_bytes() == b"File: a.cpp\nx\n\n"

    def test_one_block_per_allowed_file(self, source_tree):
        output_path = log_file_contents(source_tree, source_tree / "contents", now=MOMENT)
        content = output_path.read_bytes()

        assert sorted(_blocks(content)) == [b"main.cpp", b"util.h"]
        assert b"File: main.cpp\nint main() { return 0; }\n\n\n" in content
        assert b"File: util.h\n#pragma once\n\n\n" in content
        for hidden in [b"generated", b"hook", b"old", b"not source"]:
            assert hidden not in content

    def test_header_uses_base_name(self, tmp_path):
        (tmp_path / "src" / "deep").mkdir(parents=True)
        (tmp_path / "src" / "deep" / "impl.h").write_text("// impl\n")

        output_path = log_file_contents(tmp_path, tmp_path / "contents", now=MOMENT)

        assert output_path.read_bytes() == b"File: impl.h\n// impl\n\n\n"

    def test_contents_are_copied_verbatim(self, tmp_path):
        raw = b"\xef\xbb\xbfint x;\r\n\xff\x00// end"
        (tmp_path / "raw.cpp").write_bytes(raw)

        output_path = log_file_contents(tmp_path, tmp_path / "contents", now=MOMENT)

        assert output_path.read_bytes() == b"File: raw.cpp\n" + raw + b"\n\n"

    def test_large_file_is_copied_completely(self, tmp_path):
        raw = b"// line of source\n" * 20000
        (tmp_path / "big.cpp").write_bytes(raw)

        output_path = log_file_contents(tmp_path, tmp_path / "contents", now=MOMENT)

        assert output_path.read_bytes() == b"File: big.cpp\n" + raw + b"\n\n"

    def test_empty_root_produces_empty_log(self, tmp_path):
        output_path = log_file_contents(tmp_path, tmp_path / "contents", now=MOMENT)
        assert output_path.exists()
        assert output_path.read_bytes() == b""

    def test_output_folder_is_created(self, tmp_path):
        output_folder = tmp_path / "nested" / "logs"
        output_path = log_file_contents(tmp_path, output_folder, now=MOMENT)
        assert output_folder.is_dir()
        assert output_path.parent == output_folder

    def test_logs_are_not_reingested(self, tmp_path):
        (tmp_path / "a.cpp").write_text("x")
        first = log_file_contents(tmp_path, tmp_path / "contents", now=MOMENT)
        second = log_file_contents(tmp_path, tmp_path / "contents", now=datetime(2024, 3, 9, 7, 5, 3))

        assert first != second
        assert first.read_bytes() == second.read_bytes() == b"File: a.cpp\nx\n\n"

    def test_same_second_does_not_overwrite(self, tmp_path):
        (tmp_path / "a.cpp").write_text("first")
        first = log_file_contents(tmp_path, tmp_path / "contents", now=MOMENT)
        (tmp_path / "a.cpp").write_text("second")
        second = log_file_contents(tmp_path, tmp_path / "contents", now=MOMENT)

        assert first.name == "contents__2024-03-09__07-05-01.txt"
        assert second.name == "contents__2024-03-09__07-05-01__2.txt"
        assert first.read_bytes() == b"File: a.cpp\nfirst\n\n"
        assert second.read_bytes() == b"File: a.cpp\nsecond\n\n"

    def test_source_files_are_not_modified(self, source_tree):
        before = {path: path.read_bytes() for path in source_tree.rglob("*") if path.is_file()}
        log_file_contents(source_tree, source_tree / "contents", now=MOMENT)
        after = {path: path.read_bytes() for path in before}
        assert before == after

    def test_missing_root(self, tmp_path):
        output_folder = tmp_path / "contents"
        with pytest.raises(FileNotFoundError):
            log_file_contents(tmp_path / "missing", output_folder, now=MOMENT)

        assert list(output_folder.iterdir()) == []

    def test_failed_run_does_not_take_the_name(self, tmp_path):
        root = tmp_path / "root"
        output_folder = tmp_path / "contents"
        with pytest.raises(FileNotFoundError):
            log_file_contents(root, output_folder, now=MOMENT)

        root.mkdir()
        (root / "a.cpp").write_text("x")
        output_path = log_file_contents(root, output_folder, now=MOMENT)

        assert output_path.name == "contents__2024-03-09__07-05-01.txt"

    def test_directory_symlink_is_logged_once(self, tmp_path):
        (tmp_path / "include").mkdir()
        (tmp_path / "include" / "util.h").write_text("#pragma once\n")
        try:
            os.symlink(tmp_path / "include", tmp_path / "alias")
        except (OSError, NotImplementedError):
            pytest.skip("Symlink creation not supported on this platform/environment")

        output_path = log_file_contents(tmp_path, tmp_path / "contents", now=MOMENT)

        assert output_path.read_bytes() == b"File: util.h\n#pragma once\n\n\n"


class TestErrorHandling:
    """Test failures while preparing or writing the log."""

    def test_output_folder_cannot_be_created(self, tmp_path):
        blocker = tmp_path / "contents"
        blocker.write_text("a file where the folder should be")

        with pytest.raises(OutputDirectoryError) as excinfo:
            log_file_contents(tmp_path, blocker / "logs", now=MOMENT)

        assert excinfo.value.path == str(blocker / "logs")

    def test_output_folder_is_a_file(self, tmp_path):
        blocker = tmp_path / "contents"
        blocker.write_text("not a folder")

        with pytest.raises(OutputDirectoryError):
            log_file_contents(tmp_path, blocker, now=MOMENT)

    def test_output_file_cannot_be_opened(self, tmp_path):
        real_open = builtins.open
        target = tmp_path / "contents" / "contents__2024-03-09__07-05-01.txt"

        def fake_open(file, mode="r", *args, **kwargs):
            if os.fspath(file) == str(target):
                raise PermissionError(13, "Permission denied", str(target))
            return real_open(file, mode, *args, **kwargs)

        with patch("twocode.content_logger.open", side_effect=fake_open, create=True):
            with pytest.raises(OutputFileError) as excinfo:
                log_file_contents(tmp_path, tmp_path / "contents", now=MOMENT)

        assert excinfo.value.path == str(target)
        assert excinfo.value.reason == "Permission denied"
        assert not target.exists()

    def test_permission_error_in_raise_mode_leaves_no_log(self, source_tree):
        output_folder = source_tree / "contents"
        before = set(output_folder.iterdir())
        locked = str(source_tree / "include")
        real_scandir = os.scandir

        def scandir(path):
            if os.fspath(path) == locked:
                raise PermissionError(13, "Permission denied", locked)
            return real_scandir(path)

        with patch("twocode.file_system_tree.file_system_tree.os.scandir", side_effect=scandir):
            with pytest.raises(PermissionError, match="Access denied to"):
                log_file_contents(source_tree, output_folder, now=MOMENT, permission_action=PermissionAction.RAISE)

        assert set(output_folder.iterdir()) == before

    def test_read_failure_removes_partial_log(self, tmp_path):
        (tmp_path / "a.cpp").write_text("x")
        source = str(tmp_path / "a.cpp")
        real_open = builtins.open
        failing = MagicMock()
        failing.__enter__.return_value = failing
        failing.__exit__.return_value = False
        failing.read.side_effect = OSError("Input/output error")

        def fake_open(file, mode="r", *args, **kwargs):
            if os.fspath(file) == source:
                return failing
            return real_open(file, mode, *args, **kwargs)

        with patch("twocode.content_logger.open", side_effect=fake_open, create=True):
            with pytest.raises(OSError, match="Failed to read 'a.cpp'"):
                log_file_contents(tmp_path, tmp_path / "contents", now=MOMENT)

        assert list((tmp_path / "contents").iterdir()) == []

    def test_unreadable_file_is_skipped_with_warning(self, tmp_path, capsys):
        (tmp_path / "good.cpp").write_text("ok")
        (tmp_path / "secret.h").write_text("hidden")
        real_open = builtins.open
        locked = tmp_path / "secret.h"

        def fake_open(file, mode="r", *args, **kwargs):
            if os.fspath(file) == str(locked):
                raise PermissionError(13, "Permission denied", str(locked))
            return real_open(file, mode, *args, **kwargs)

        with patch("twocode.content_logger.open", side_effect=fake_open, create=True):
            output_path = log_file_contents(tmp_path, tmp_path / "contents", now=MOMENT)

        assert output_path.read_bytes() == b"File: good.cpp\nok\n\n"
        assert f"Warning: Skipping unreadable file '{locked}': Permission denied" in capsys.readouterr().err


class TestContentLogger:
    """Test the ContentLogger class directly."""

    def test_yield_file_contents_counts_files(self, source_tree):
        logger = ContentLogger(FileSystemTree(source_tree, NameExclusionRules()))

        body = b"".join(logger.yield_file_contents())

        assert logger.file_count == 2
        assert sorted(_blocks(body)) == [b"main.cpp", b"util.h"]

    def test_uses_tree_order(self, tmp_path):
        for name in ["one.cpp", "two.cpp"]:
            (tmp_path / name).write_text(name)
        tree = MagicMock(spec=FileSystemTree)
        tree.iterate_files.return_value = iter(
            [(str(tmp_path / "two.cpp"), "two.cpp"), (str(tmp_path / "one.cpp"), "one.cpp")]
        )

        body = b"".join(ContentLogger(tree).yield_file_contents())

        assert body == b"File: two.cpp\ntwo.cpp\n\nFile: one.cpp\none.cpp\n\n"

    def test_read_failure_midway_adds_context(self, tmp_path):
        (tmp_path / "a.cpp").write_text("x")
        tree = FileSystemTree(tmp_path, NameExclusionRules())
        failing = MagicMock()
        failing.__enter__.return_value = failing
        failing.__exit__.return_value = False
        failing.read.side_effect = OSError("Input/output error")

        with patch("twocode.content_logger.open", return_value=failing, create=True):
            chunks = ContentLogger(tree).yield_file_contents()
            assert next(chunks) == b"File: a.cpp\n"
            with pytest.raises(OSError, match="Failed to read 'a.cpp'"):
                next(chunks)

    def test_minimum_chunk_size(self, tmp_path):
        with pytest.raises(ValueError, match="chunk_size must be at least 4096 bytes"):
            ContentLogger(FileSystemTree(tmp_path), chunk_size=10)

    def test_write_log_returns_path(self, tmp_path):
        (tmp_path / "a.h").write_text("y")
        logger = ContentLogger(FileSystemTree(tmp_path, NameExclusionRules()))

        output_path = logger.write_log(tmp_path / "out", now=MOMENT)

        assert isinstance(output_path, Path)
        assert output_path.read_bytes() == b"File: a.h\ny\n\n"
