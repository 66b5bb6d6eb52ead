"""Core infrastructure components for Bundlesmith."""

from .config import Config, get_config
from .exceptions import (
    BundlesmithError,
    CodegenError,
    ExportError,
    FileSystemError,
    TemplateError,
    ValidationError,
)
from .logging import get_logger, log_context, setup_logging
from .types import StageResult, StageStatus

__all__ = [
    "Config",
    "get_config",
    "BundlesmithError",
    "CodegenError",
    "ExportError",
    "FileSystemError",
    "TemplateError",
    "ValidationError",
    "get_logger",
    "log_context",
    "setup_logging",
    "StageResult",
    "StageStatus",
]
