"""
File system interface.

Defines the abstract interface the exporter uses for every read, write and
copy, enabling pluggable backends (local disk, in-memory, remote).
All operations are synchronous; failures raise FileSystemError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractFileSystem(ABC):
    """Abstract file system interface."""

    @abstractmethod
    def mkdir(self, path: str) -> None:
        """Create a directory and its parents (no-op if it exists).

        Args:
            path: Directory to create.

        Raises:
            FileSystemError: If the directory cannot be created.
        """
        ...

    @abstractmethod
    def clear_dir(self, path: str) -> None:
        """Remove every file and directory inside a directory.

        Args:
            path: Directory to empty. The directory itself is kept.

        Raises:
            FileSystemError: If an entry cannot be removed.
        """
        ...

    @abstractmethod
    def read_file(self, path: str) -> str:
        """Read a text file.

        Args:
            path: File to read.

        Returns:
            The file content decoded as UTF-8.

        Raises:
            FileSystemError: If the file cannot be read.
        """
        ...

    @abstractmethod
    def write_file(self, path: str, content: str) -> None:
        """Write a text file, creating parent directories as needed.

        Args:
            path: Destination file.
            content: Text to write (UTF-8).

        Raises:
            FileSystemError: If the file cannot be written.
        """
        ...

    @abstractmethod
    def copy_file(self, source: str, destination: str) -> None:
        """Copy a file, creating parent directories of the destination.

        Raises:
            FileSystemError: If the copy fails.
        """
        ...

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """Check if a regular file exists."""
        ...

    @abstractmethod
    def dir_exists(self, path: str) -> bool:
        """Check if a directory exists."""
        ...

    @abstractmethod
    def read_dir(self, path: str, extension: str = "") -> list[str]:
        """List the files directly inside a directory.

        Args:
            path: Directory to scan.
            extension: Optional extension filter (case-insensitive, e.g. ".ttf").

        Returns:
            Sorted list of absolute file paths.
        """
        ...

    @abstractmethod
    def is_absolute(self, path: str) -> bool:
        """Check if a path (or URL) is absolute."""
        ...

    @abstractmethod
    def make_absolute(self, path: str, base_dir: str) -> str:
        """Resolve a path against a base directory (absolute paths unchanged)."""
        ...

    @abstractmethod
    def make_relative(self, path: str, base_dir: str) -> str:
        """Express a path relative to a base directory, with '/' separators."""
        ...

    @abstractmethod
    def dir_name_from(self, path: str) -> str:
        """Get the directory part of a path."""
        ...

    @abstractmethod
    def file_name_from(self, path: str) -> str:
        """Get the file name part of a path."""
        ...

    @staticmethod
    def normalize_separator(path: str) -> str:
        """Use forward slashes only."""
        return path.replace("\\", "/")
