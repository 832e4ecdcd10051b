"""Test configuration and fixtures for twocode."""

import pytest

from twocode.cli.signal_handler import signal_handler


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def source_tree(tmp_path):
    """Create a small C++ project with entries that must be filtered out.

    Layout::

        main.cpp            kept
        notes.txt           wrong extension
        CMakeCXXCompilerId.cpp  ignored file name
        include/util.h      kept
        build/gen.cpp       inside ignored directory
        .git/hooks/a.cpp    inside ignored directory
        contents/old.cpp    inside ignored directory
    """
    (tmp_path / "main.cpp").write_text("int main() { return 0; }\n")
    (tmp_path / "notes.txt").write_text("not source\n")
    (tmp_path / "CMakeCXXCompilerId.cpp").write_text("/* generated */\n")
    (tmp_path / "include").mkdir()
    (tmp_path / "include" / "util.h").write_text("#pragma once\n")
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "gen.cpp").write_text("// generated\n")
    (tmp_path / ".git" / "hooks").mkdir(parents=True)
    (tmp_path / ".git" / "hooks" / "a.cpp").write_text("// hook\n")
    (tmp_path / "contents").mkdir()
    (tmp_path / "contents" / "old.cpp").write_text("// old\n")
    return tmp_path


@pytest.fixture(autouse=True)
def clean_signal_handler():
    """Make sure no test sees a signal recorded by another one."""
    signal_handler.reset()
    yield
    signal_handler.reset()
