"""
Events-based behavior data models.

These models describe a behavior authored in the editor: its typed properties
and the methods (events functions) whose bodies are compiled from visual
events elsewhere. They are read-only inputs of the behavior code generator.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class SerializedModel(BaseModel):
    """Base for models serialized in the project file (camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PropertyType(str, Enum):
    """Property types understood by the generated runtime code."""

    STRING = "String"
    CHOICE = "Choice"
    NUMBER = "Number"
    BOOLEAN = "Boolean"


class PropertyDescriptor(SerializedModel):
    """A declared, typed and defaulted field of a behavior."""

    name: str = Field(description="Identifier-safe property name")
    type: str = Field(default="String", description="Declared type, see PropertyType")
    value: str = Field(default="", description="Default value, always stored as text")
    hidden: bool = Field(default=False, description="Never editable, never read from instance data")
    label: str = Field(default="")
    description: str = Field(default="")
    extra_information: list[str] = Field(
        default_factory=list, description="Choices for Choice properties"
    )

    @property
    def known_type(self) -> PropertyType | None:
        """Get the declared type if it is one of the supported ones.

        Returns:
            The matching PropertyType, or None for unrecognized types.
        """
        try:
            return PropertyType(self.type)
        except ValueError:
            return None


class EventsFunction(SerializedModel):
    """A behavior method whose body is compiled from events."""

    name: str = Field(description="Declared method name")
    full_name: str = Field(default="")
    description: str = Field(default="")
    parameters: list[str] = Field(default_factory=list, description="Parameter names")
    events_code: str = Field(
        default="", description="Compiled method body text, opaque to the generators"
    )
    include_files: list[str] = Field(
        default_factory=list, description="Runtime includes required by the compiled body"
    )


class EventsBasedBehavior(SerializedModel):
    """A named bundle of properties and methods attachable to objects."""

    name: str = Field(description="Behavior name, used as the runtime class name")
    full_name: str = Field(default="", description="Human-readable name")
    description: str = Field(default="")
    property_descriptors: list[PropertyDescriptor] = Field(default_factory=list)
    events_functions: list[EventsFunction] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_names(self) -> EventsBasedBehavior:
        for label, names in (
            ("property", [p.name for p in self.property_descriptors]),
            ("method", [f.name for f in self.events_functions]),
        ):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            if duplicates:
                raise ValueError(
                    f"Behavior '{self.name}' declares duplicate {label} names: {', '.join(duplicates)}"
                )
        return self

    def get_property(self, name: str) -> PropertyDescriptor | None:
        """Get a property descriptor by name."""
        for prop in self.property_descriptors:
            if prop.name == name:
                return prop
        return None


class EventsFunctionsExtension(SerializedModel):
    """An extension grouping events-based behaviors."""

    name: str = Field(description="Extension name")
    full_name: str = Field(default="")
    events_based_behaviors: list[EventsBasedBehavior] = Field(default_factory=list)

    def get_behavior(self, name: str) -> EventsBasedBehavior | None:
        """Get an events-based behavior by name."""
        for behavior in self.events_based_behaviors:
            if behavior.name == name:
                return behavior
        return None


class BehaviorInstance(SerializedModel):
    """A behavior attached to an object, with its per-object data."""

    name: str = Field(description="Name of the behavior on the object")
    type: str = Field(description="Behavior type, 'Extension::Behavior'")
    data: dict[str, Any] = Field(default_factory=dict, description="Stored property values")

    @property
    def extension_name(self) -> str:
        """Extension part of the behavior type."""
        return self.type.split("::", 1)[0] if "::" in self.type else ""

    @property
    def behavior_name(self) -> str:
        """Behavior part of the behavior type."""
        return self.type.split("::", 1)[1] if "::" in self.type else self.type
