"""
Code generation data models.

These models carry generated runtime text together with the include files it
requires and the diagnostics raised while generating it. Malformed inputs never
abort generation: they degrade into sentinel code plus a diagnostic.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class DiagnosticKind(str, Enum):
    """Kinds of recoverable code generation problems."""

    UNRECOGNIZED_PROPERTY_TYPE = "unrecognized_property_type"
    MISSING_METHOD_MAPPING = "missing_method_mapping"


class CodeDiagnostic(BaseModel):
    """A problem that degraded generated code without stopping generation."""

    kind: DiagnosticKind
    behavior: str = Field(default="", description="'Extension::Behavior' being generated")
    subject: str = Field(description="Property or method name at fault")
    message: str = Field(description="Human-readable explanation and fix hint")


class GeneratedCode(BaseModel):
    """Generated code and everything needed to load it."""

    code: str = Field(default="")
    include_files: list[str] = Field(
        default_factory=list, description="Additional runtime includes, in load order"
    )
    diagnostics: list[CodeDiagnostic] = Field(default_factory=list)

    @property
    def clean(self) -> bool:
        """Whether the code was generated without any diagnostic."""
        return not self.diagnostics

    def absorb(self, other: GeneratedCode) -> str:
        """Merge the includes and diagnostics of another result.

        Returns:
            The other result's code, for the caller to place.
        """
        for include in other.include_files:
            if include not in self.include_files:
                self.include_files.append(include)
        self.diagnostics.extend(other.diagnostics)
        return other.code


class PropertyLiteral(BaseModel):
    """A property default value encoded as a JavaScript expression."""

    code: str
    diagnostic: CodeDiagnostic | None = None
