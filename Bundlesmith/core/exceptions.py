"""
Custom exception hierarchy for Bundlesmith.

All exceptions inherit from BundlesmithError to enable consistent error handling
across the generators and the export pipeline. Each exception type includes
context for debugging and logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BundlesmithError(Exception):
    """Base exception for all Bundlesmith errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class ValidationError(BundlesmithError):
    """Raised when input validation fails."""

    field_name: str | None = None
    expected_type: str | None = None
    actual_value: Any = None

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_name:
            return f"Validation failed for '{self.field_name}': {base}"
        return f"Validation failed: {base}"


@dataclass
class FileSystemError(BundlesmithError):
    """Raised when a file system primitive fails."""

    operation: str = ""
    path: str = ""

    def __str__(self) -> str:
        return f"[fs.{self.operation}] {self.message} ({self.path})"


@dataclass
class TemplateError(BundlesmithError):
    """Raised when a target template cannot be read or completed."""

    template_path: str = ""
    target: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"[template:{self.target}] {base}"


@dataclass
class CodegenError(BundlesmithError):
    """Raised when code generation cannot produce any output at all."""

    behavior_name: str = ""


@dataclass
class ExportError(BundlesmithError):
    """Raised when the export orchestration fails."""

    stage: str = ""
    export_id: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"Export error at stage '{self.stage}' (export: {self.export_id}): {base}"
