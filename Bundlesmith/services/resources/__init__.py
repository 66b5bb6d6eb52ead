"""Project resources export."""

from .service import ResourcesExporter

__all__ = ["ResourcesExporter"]
