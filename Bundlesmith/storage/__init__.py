"""File system abstraction for Bundlesmith."""

from .interface import AbstractFileSystem
from .local import LocalFileSystem

__all__ = ["AbstractFileSystem", "LocalFileSystem"]
