"""Events code generation interface and default implementation."""

from .interface import EventsCodeGenerator
from .basic import BasicEventsCodeGenerator

__all__ = ["BasicEventsCodeGenerator", "EventsCodeGenerator"]
