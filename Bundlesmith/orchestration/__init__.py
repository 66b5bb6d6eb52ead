"""Orchestration module for Bundlesmith."""

from .pipeline import (
    ExportPipeline,
    identity_method_mangled_names,
    load_method_mangled_names,
    load_project,
    run_export,
)

__all__ = [
    "ExportPipeline",
    "identity_method_mangled_names",
    "load_method_mangled_names",
    "load_project",
    "run_export",
]
