"""Content logger with streaming support.

This module concatenates the raw contents of every file kept by a filtered
traversal into one timestamped log file. Files are copied in fixed-size chunks,
byte for byte, so memory use stays constant however large the sources are.

Each logged file becomes one block of the form::

    File: <base name>
    <raw contents>
    <blank line>
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Tuple

from .exceptions import OutputDirectoryError, OutputFileError
from .exclusion_rules.base_rules import BaseExclusionRules
from .exclusion_rules.name_rules import NameExclusionRules
from .file_system_tree.file_system_tree import FileSystemTree
from .file_system_tree.permission_action import PermissionAction
from .io.chunked_file_reader import ChunkedFileReader
from .types import PathType

OUTPUT_NAME_FORMAT = "contents__%Y-%m-%d__%H-%M-%S"
OUTPUT_EXTENSION = ".txt"
HEADER_PREFIX = b"File: "
BLOCK_SEPARATOR = b"\n\n"


def output_file_name(now: Optional[datetime] = None, attempt: int = 1) -> str:
    """Build the log file name for a moment in local time.

    Args:
        now: The moment to embed. Defaults to the current local time.
        attempt: 1 for the plain name; higher values add a numeric suffix used when
            an earlier log already took the plain name within the same second.

    Returns:
        The file name, without any directory part.

    Example:
        >>> output_file_name(datetime(2024, 3, 9, 7, 5, 1))
        'contents__2024-03-09__07-05-01.txt'
        >>> output_file_name(datetime(2024, 3, 9, 7, 5, 1), attempt=2)
        'contents__2024-03-09__07-05-01__2.txt'
    """
    stamp = (now if now is not None else datetime.now()).strftime(OUTPUT_NAME_FORMAT)
    if attempt > 1:
        stamp = f"{stamp}__{attempt}"
    return stamp + OUTPUT_EXTENSION


class ContentLogger:
    """Streams the contents of a filtered tree's files into a log.

    Files are taken from ``FileSystemTree.iterate_files`` and so follow the same
    depth-first, enumeration-ordered traversal as the tree listing. A file that
    cannot be opened for reading produces no block; a warning naming it is printed
    to stderr and logging continues with the next file.

    Attributes:
        fs_tree (FileSystemTree): The filtered tree whose files are logged.
        chunk_size (int): Number of bytes copied at a time.
        file_count (int): Number of files written by the last streaming pass.

    Example:
        >>> tree = FileSystemTree("src", NameExclusionRules())  # doctest: +SKIP
        >>> logger = ContentLogger(tree)  # doctest: +SKIP
        >>> logger.write_log("contents")  # doctest: +SKIP
        PosixPath('contents/contents__2024-03-09__07-05-01.txt')
    """

    def __init__(self, fs_tree: FileSystemTree, chunk_size: int = 65536) -> None:
        if chunk_size < ChunkedFileReader.MINIMUM_CHUNK_SIZE:
            raise ValueError(
                f"chunk_size must be at least {ChunkedFileReader.MINIMUM_CHUNK_SIZE} bytes, got {chunk_size}"
            )
        self.fs_tree = fs_tree
        self.chunk_size = chunk_size
        self.file_count = 0

    def _open_source(self, file_path: str) -> Optional[BinaryIO]:
        try:
            return open(file_path, "rb")
        except OSError as e:
            print(f"Warning: Skipping unreadable file '{file_path}': {e.strerror or e}", file=sys.stderr)
            return None

    def yield_file_contents(self) -> Iterator[bytes]:
        """Stream the log body as raw byte chunks.

        Yields:
            bytes: Headers, content chunks and separators in output order.

        Raises:
            OSError: If a file fails while it is being read, or the tree cannot be traversed.
            PermissionError: If a directory cannot be listed and the tree's
                permission_action is RAISE.
        """
        self.file_count = 0
        for file_path, relative_path in self.fs_tree.iterate_files():
            source = self._open_source(file_path)
            if source is None:
                continue

            with source:
                yield HEADER_PREFIX + os.fsencode(os.path.basename(file_path)) + b"\n"
                try:
                    yield from ChunkedFileReader(source, self.chunk_size)
                except OSError as e:
                    raise OSError(f"Failed to read '{relative_path}': {str(e)}") from e
                yield BLOCK_SEPARATOR
            self.file_count += 1

    def _create_output_file(self, output_folder: Path, now: Optional[datetime]) -> Tuple[Path, BinaryIO]:
        moment = now if now is not None else datetime.now()
        attempt = 1
        while True:
            output_path = output_folder / output_file_name(moment, attempt)
            try:
                return output_path, open(output_path, "xb")
            except FileExistsError:
                attempt += 1
            except OSError as e:
                raise OutputFileError(str(output_path), e.strerror or str(e)) from e

    def write_log(self, output_folder: PathType, now: Optional[datetime] = None) -> Path:
        """Write a complete log into ``output_folder`` and return its path.

        The folder is created, including missing parents, if it does not exist. The
        log is created exclusively, so an existing log is never overwritten, and it is
        only created once the tree has been traversed. A run that fails midway
        removes its partial log.

        Args:
            output_folder: Folder receiving the log file.
            now: Timestamp to embed in the file name. Defaults to the current local time.

        Returns:
            Path: The path of the log that was written.

        Raises:
            OutputDirectoryError: If the output folder cannot be created.
            OutputFileError: If the log file cannot be opened for writing.
            OSError: If reading a source file or writing the log fails midway.
        """
        folder = Path(output_folder)
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(str(folder), e.strerror or str(e)) from e

        # Traversal errors must surface before a log name is claimed
        self.fs_tree.get_tree()

        output_path, output = self._create_output_file(folder, now)
        try:
            with output:
                for chunk in self.yield_file_contents():
                    output.write(chunk)
        except BaseException:
            output_path.unlink(missing_ok=True)
            raise
        return output_path


def log_file_contents(
    path: PathType,
    output_folder: PathType,
    *,
    now: Optional[datetime] = None,
    exclusion_rules: Optional[BaseExclusionRules] = None,
    permission_action: PermissionAction = PermissionAction.RAISE,
) -> Path:
    """Log the contents of every allowed file below ``path`` into ``output_folder``.

    Args:
        path: Root directory to traverse.
        output_folder: Folder receiving the timestamped log.
        now: Timestamp to embed in the file name. Defaults to the current local time.
        exclusion_rules: Filters to apply. Defaults to the built-in source filters.
        permission_action: How to handle directories that cannot be listed.

    Returns:
        Path: The path of the log that was written.

    Raises:
        OutputDirectoryError: If the output folder cannot be created.
        OutputFileError: If the log file cannot be opened for writing.
        FileNotFoundError: If ``path`` doesn't exist.
        NotADirectoryError: If ``path`` isn't a directory.
        OSError: If reading a source file or writing the log fails midway.
    """
    rules = exclusion_rules if exclusion_rules is not None else NameExclusionRules()
    tree = FileSystemTree(path, rules, permission_action=permission_action, follow_symlinks=False)
    return ContentLogger(tree).write_log(output_folder, now=now)
