"""
Local filesystem backend.

Provides a disk-based implementation of the file system interface, the one
used by the CLI and by the tests.
"""

from __future__ import annotations

import os
import re
import shutil
from pathlib import Path

from ..core.exceptions import FileSystemError
from .interface import AbstractFileSystem

_URL_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


class LocalFileSystem(AbstractFileSystem):
    """Local filesystem backend."""

    def mkdir(self, path: str) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(
                message="Unable to create directory",
                operation="mkdir",
                path=path,
                cause=e,
            ) from e

    def clear_dir(self, path: str) -> None:
        """Remove the content of a directory.

        Args:
            path: Directory to empty. Missing directories are left alone.
        """
        directory = Path(path)
        if not directory.is_dir():
            return

        try:
            for entry in directory.iterdir():
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
        except OSError as e:
            raise FileSystemError(
                message="Unable to clear directory",
                operation="clear_dir",
                path=path,
                cause=e,
            ) from e

    def read_file(self, path: str) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileSystemError(
                message="Unable to read file",
                operation="read_file",
                path=path,
                cause=e,
            ) from e

    def write_file(self, path: str, content: str) -> None:
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileSystemError(
                message="Unable to write file",
                operation="write_file",
                path=path,
                cause=e,
            ) from e

    def copy_file(self, source: str, destination: str) -> None:
        # Copying a file onto itself is a no-op rather than an error
        if os.path.abspath(source) == os.path.abspath(destination):
            return

        try:
            Path(destination).parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination)
        except OSError as e:
            raise FileSystemError(
                message=f"Unable to copy {source}",
                operation="copy_file",
                path=destination,
                cause=e,
            ) from e

    def file_exists(self, path: str) -> bool:
        return Path(path).is_file()

    def dir_exists(self, path: str) -> bool:
        return Path(path).is_dir()

    def read_dir(self, path: str, extension: str = "") -> list[str]:
        directory = Path(path)
        if not directory.is_dir():
            return []

        suffix = extension.lower()
        files = [
            self.normalize_separator(str(entry))
            for entry in directory.iterdir()
            if entry.is_file() and (not suffix or entry.name.lower().endswith(suffix))
        ]
        return sorted(files)

    def is_absolute(self, path: str) -> bool:
        return bool(_URL_PATTERN.match(path)) or os.path.isabs(path)

    def make_absolute(self, path: str, base_dir: str) -> str:
        if self.is_absolute(path):
            return path
        return self.normalize_separator(os.path.normpath(os.path.join(base_dir, path)))

    def make_relative(self, path: str, base_dir: str) -> str:
        if _URL_PATTERN.match(path):
            return path
        return self.normalize_separator(os.path.relpath(path, base_dir))

    def dir_name_from(self, path: str) -> str:
        return self.normalize_separator(os.path.dirname(path))

    def file_name_from(self, path: str) -> str:
        return os.path.basename(self.normalize_separator(path))
