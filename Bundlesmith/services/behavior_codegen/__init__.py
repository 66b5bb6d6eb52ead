"""Behavior code generation service."""

from .service import (
    DESTROY_HOOK,
    DEPRECATED_DESTROY_HOOK,
    UNKNOWN_FUNCTION_NAME,
    BehaviorCodeGenerator,
    generate_property_value_code,
)

__all__ = [
    "DESTROY_HOOK",
    "DEPRECATED_DESTROY_HOOK",
    "UNKNOWN_FUNCTION_NAME",
    "BehaviorCodeGenerator",
    "generate_property_value_code",
]
