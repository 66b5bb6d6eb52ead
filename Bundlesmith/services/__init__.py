"""Services package for Bundlesmith."""

from .behavior_codegen import BehaviorCodeGenerator
from .events import BasicEventsCodeGenerator, EventsCodeGenerator
from .includes import IncludeResolver
from .resources import ResourcesExporter
from .templaters import TargetFileTemplater, get_templater
from .export import ExportService

__all__ = [
    "BehaviorCodeGenerator",
    "BasicEventsCodeGenerator",
    "EventsCodeGenerator",
    "IncludeResolver",
    "ResourcesExporter",
    "TargetFileTemplater",
    "get_templater",
    "ExportService",
]
