"""Data models for Bundlesmith."""

from .behavior import (
    BehaviorInstance,
    EventsBasedBehavior,
    EventsFunction,
    EventsFunctionsExtension,
    PropertyDescriptor,
    PropertyType,
)
from .codegen import CodeDiagnostic, DiagnosticKind, GeneratedCode, PropertyLiteral
from .includes import IncludeList
from .export import (
    ExportContext,
    ExportOptions,
    ExportResult,
    ExportTarget,
    RendererBackend,
    RuntimeGameOptions,
    ScriptFile,
)
from .project import (
    Effect,
    ExternalEvents,
    ExternalLayout,
    GameObject,
    Layer,
    Layout,
    LoadingScreen,
    ObjectGroup,
    Project,
    Resource,
    ResourceKind,
    SourceFile,
)

__all__ = [
    # Behaviors
    "BehaviorInstance",
    "EventsBasedBehavior",
    "EventsFunction",
    "EventsFunctionsExtension",
    "PropertyDescriptor",
    "PropertyType",
    # Code generation
    "CodeDiagnostic",
    "DiagnosticKind",
    "GeneratedCode",
    "PropertyLiteral",
    # Includes
    "IncludeList",
    # Export
    "ExportContext",
    "ExportOptions",
    "ExportResult",
    "ExportTarget",
    "RendererBackend",
    "RuntimeGameOptions",
    "ScriptFile",
    # Project
    "Effect",
    "ExternalEvents",
    "ExternalLayout",
    "GameObject",
    "Layer",
    "Layout",
    "LoadingScreen",
    "ObjectGroup",
    "Project",
    "Resource",
    "ResourceKind",
    "SourceFile",
]
