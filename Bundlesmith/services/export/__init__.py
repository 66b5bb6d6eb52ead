"""Export orchestration service."""

from .service import ExportService, strip_project_for_export

__all__ = ["ExportService", "strip_project_for_export"]
