"""Runtime include resolution."""

from .service import (
    COMMON_INCLUDES,
    DEBUGGER_CLIENT_INCLUDES,
    EVENTS_TOOLS_INCLUDES,
    RENDERER_INCLUDES,
    IncludeList,
    IncludeResolver,
)

__all__ = [
    "COMMON_INCLUDES",
    "DEBUGGER_CLIENT_INCLUDES",
    "EVENTS_TOOLS_INCLUDES",
    "RENDERER_INCLUDES",
    "IncludeList",
    "IncludeResolver",
]
