"""
Game project data models.

In-memory representation of a fully-authored game project: layouts (scenes),
resources, source files, platform-specific assets and the extensions holding
events-based behaviors. Loaded from the project JSON file and serialized back
into the exported data file.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from .behavior import BehaviorInstance, EventsBasedBehavior, EventsFunctionsExtension, SerializedModel


class ResourceKind(str, Enum):
    """Kinds of resources a project can reference."""

    IMAGE = "image"
    AUDIO = "audio"
    FONT = "font"
    JSON = "json"
    VIDEO = "video"


class Resource(SerializedModel):
    """A file referenced by the project."""

    name: str = Field(description="Resource name, unique in the project")
    kind: ResourceKind = Field(default=ResourceKind.IMAGE)
    file: str = Field(default="", description="File path, relative to the project file")
    user_added: bool = Field(default=True)


class SourceFile(SerializedModel):
    """An external source file shipped with the game."""

    file_name: str = Field(description="Path, relative to the project file")
    language: str = Field(default="Javascript")


class Effect(SerializedModel):
    """An effect (shader/filter) applied to a layer."""

    name: str
    effect_type: str = Field(description="Effect type identifier")
    include_files: list[str] = Field(
        default_factory=list, description="Runtime include files the effect needs"
    )


class Layer(SerializedModel):
    """A layer of a layout."""

    name: str = Field(default="")
    visibility: bool = Field(default=True)
    effects: list[Effect] = Field(default_factory=list)


class GameObject(SerializedModel):
    """An object declared in a layout, with its attached behaviors."""

    name: str
    type: str = Field(default="Sprite")
    behaviors: list[BehaviorInstance] = Field(default_factory=list)


class ObjectGroup(SerializedModel):
    """A group of objects, an editor aid resolved at code generation."""

    name: str
    objects: list[str] = Field(default_factory=list)


class Layout(SerializedModel):
    """A scene of the game."""

    name: str
    events_code: str = Field(default="", description="Compiled scene events, opaque text")
    include_files: list[str] = Field(
        default_factory=list, description="Runtime includes required by the compiled events"
    )
    objects: list[GameObject] = Field(default_factory=list)
    object_groups: list[ObjectGroup] = Field(default_factory=list)
    layers: list[Layer] = Field(default_factory=lambda: [Layer()])

    def behavior_types(self) -> list[str]:
        """Get the behavior types used by the layout objects, in order of first use."""
        types: list[str] = []
        for obj in self.objects:
            for behavior in obj.behaviors:
                if behavior.type not in types:
                    types.append(behavior.type)
        return types


class ExternalLayout(SerializedModel):
    """Instances that can be injected into a layout at runtime."""

    name: str
    associated_layout: str = Field(default="")
    instances: list[dict[str, Any]] = Field(default_factory=list)


class ExternalEvents(SerializedModel):
    """Events shared between layouts, editor-only once compiled."""

    name: str
    associated_layout: str = Field(default="")
    events_code: str = Field(default="")


class LoadingScreen(SerializedModel):
    """Loading screen settings."""

    show_splash: bool = Field(default=True)


class Project(SerializedModel):
    """A complete game project."""

    name: str = Field(default="Project")
    author: str = Field(default="")
    version: str = Field(default="1.0.0")
    package_name: str = Field(default="com.example.gamename")
    orientation: str = Field(default="landscape")
    ad_mob_app_id: str = Field(default="")
    game_resolution_width: int = Field(default=800, ge=1)
    game_resolution_height: int = Field(default=600, ge=1)
    project_file: str = Field(default="", description="Path of the project file on disk")
    first_layout: str = Field(default="")

    loading_screen: LoadingScreen = Field(default_factory=LoadingScreen)
    layouts: list[Layout] = Field(default_factory=list)
    external_layouts: list[ExternalLayout] = Field(default_factory=list)
    external_events: list[ExternalEvents] = Field(default_factory=list)
    resources: list[Resource] = Field(default_factory=list)
    source_files: list[SourceFile] = Field(default_factory=list)
    platform_specific_assets: dict[str, dict[str, str]] = Field(
        default_factory=dict, description="platform -> asset name -> resource name"
    )
    extensions: list[EventsFunctionsExtension] = Field(default_factory=list)

    # Editor-only data, stripped before export
    editor_settings: dict[str, Any] = Field(default_factory=dict)
    ui_settings: dict[str, Any] = Field(default_factory=dict)

    def get_layout(self, name: str) -> Layout | None:
        """Get a layout by name."""
        for layout in self.layouts:
            if layout.name == name:
                return layout
        return None

    def get_resource(self, name: str) -> Resource | None:
        """Get a resource by name."""
        for resource in self.resources:
            if resource.name == name:
                return resource
        return None

    def add_resource(self, resource: Resource) -> bool:
        """Add a resource unless one with the same name exists.

        Returns:
            True if the resource was added.
        """
        if self.get_resource(resource.name) is not None:
            return False
        self.resources.append(resource)
        return True

    def get_extension(self, name: str) -> EventsFunctionsExtension | None:
        """Get an extension by name."""
        for extension in self.extensions:
            if extension.name == name:
                return extension
        return None

    def get_events_based_behavior(self, behavior_type: str) -> EventsBasedBehavior | None:
        """Resolve an 'Extension::Behavior' type to its events-based behavior."""
        if "::" not in behavior_type:
            return None
        extension_name, behavior_name = behavior_type.split("::", 1)
        extension = self.get_extension(extension_name)
        return extension.get_behavior(behavior_name) if extension else None

    def get_platform_asset_file(self, platform: str, asset_name: str) -> str:
        """Get the file of a platform-specific asset (icons...), empty if unset."""
        resource_name = self.platform_specific_assets.get(platform, {}).get(asset_name, "")
        resource = self.get_resource(resource_name) if resource_name else None
        return resource.file if resource else ""
