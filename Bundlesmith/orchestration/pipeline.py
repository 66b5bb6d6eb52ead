"""
Export pipeline entry points.

Wires the configuration, the local file system and the services together for
programmatic use and for the CLI.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core.config import Config, get_config
from ..core.exceptions import CodegenError, ValidationError
from ..core.logging import get_logger
from ..models.codegen import GeneratedCode
from ..models.export import ExportOptions, ExportResult, ExportTarget
from ..models.project import Project
from ..services.behavior_codegen import BehaviorCodeGenerator
from ..services.events import BasicEventsCodeGenerator
from ..services.export import ExportService
from ..storage import AbstractFileSystem, LocalFileSystem

logger = get_logger(__name__)

MethodMangledNames = dict[str, dict[str, str]]


def load_project(path: str | Path) -> Project:
    """Load a project from its JSON file.

    Raises:
        ValidationError: If the file is unreadable or not a valid project.
    """
    path = Path(path)
    try:
        project = Project.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ValidationError(message=f"Unable to read project file {path}", cause=e) from e
    except PydanticValidationError as e:
        raise ValidationError(
            message=f"Invalid project file {path}",
            context={"errors": e.error_count()},
            cause=e,
        ) from e

    # Resources are resolved relative to the project file
    if not project.project_file:
        project.project_file = str(path.resolve())

    logger.info("Project loaded", path=str(path), layouts=len(project.layouts))
    return project


def load_method_mangled_names(path: str | Path) -> MethodMangledNames:
    """Load a method name mapping: 'Extension::Behavior' -> declared -> implementation.

    Raises:
        ValidationError: If the file is unreadable or not a mapping of mappings.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValidationError(message=f"Unable to read method names file {path}", cause=e) from e

    if not isinstance(data, dict) or not all(
        isinstance(names, dict) and all(isinstance(v, str) for v in names.values())
        for names in data.values()
    ):
        raise ValidationError(
            message=f"Method names file {path} must map behavior types to name mappings",
            field_name="method_mangled_names",
            expected_type="dict[str, dict[str, str]]",
        )
    return data


def identity_method_mangled_names(project: Project) -> MethodMangledNames:
    """Map every method of every events-based behavior to its own name.

    For callers without a method names file; the pipeline never applies it
    on its own.
    """
    return {
        f"{extension.name}::{behavior.name}": {
            function.name: function.name for function in behavior.events_functions
        }
        for extension in project.extensions
        for behavior in extension.events_based_behaviors
    }


class ExportPipeline:
    """High-level export interface for programmatic use."""

    def __init__(self, config: Config | None = None, fs: AbstractFileSystem | None = None) -> None:
        self.config = config or get_config()
        self.fs = fs or LocalFileSystem()

    def export(
        self,
        project: Project,
        target: ExportTarget | str | None = None,
        export_path: str | Path = "./export",
        layout_name: str = "",
        external_layout_name: str = "",
        method_mangled_names: MethodMangledNames | None = None,
        runtime_root: str | Path | None = None,
        **options: Any,
    ) -> ExportResult:
        """Export a project.

        Args:
            project: Project to export.
            target: Export target, the configured default if None.
            export_path: Output directory.
            layout_name: Layout to start with (preview).
            external_layout_name: External layout to inject (preview).
            method_mangled_names: Method names per behavior type. Methods missing
                from it are generated with a placeholder name and a diagnostic.
            runtime_root: Runtime directory, the configured one if None.
            **options: Other ExportOptions fields.

        Returns:
            ExportResult of the export
        """
        target = ExportTarget(target or self.config.export.default_target)
        options.setdefault("websocket_debugger_client", self.config.export.debugger_client)

        service = ExportService(
            self.fs,
            runtime_root=str(runtime_root or self.config.runtime.runtime_root),
            code_output_dir=str(self.config.runtime.code_output_dir),
            namespace_prefix=self.config.export.code_namespace_prefix,
            clear_output_dir=self.config.export.clear_output_dir,
        )
        return service.export(
            ExportOptions(
                project=project,
                target=target,
                export_path=str(export_path),
                layout_name=layout_name,
                external_layout_name=external_layout_name,
                method_mangled_names=method_mangled_names or {},
                **options,
            )
        )

    def generate_behavior(
        self,
        project: Project,
        extension_name: str,
        behavior_name: str,
        code_namespace: str | None = None,
        method_mangled_names: MethodMangledNames | None = None,
    ) -> GeneratedCode:
        """Generate the code of one events-based behavior.

        Raises:
            CodegenError: If the extension or the behavior does not exist.
        """
        extension = project.get_extension(extension_name)
        behavior = extension.get_behavior(behavior_name) if extension else None
        if behavior is None:
            raise CodegenError(
                message=f"Unknown behavior {extension_name}::{behavior_name}",
                behavior_name=behavior_name,
            )

        names = method_mangled_names or {}
        events_generator = BasicEventsCodeGenerator(names, self.config.export.code_namespace_prefix)
        return BehaviorCodeGenerator(events_generator).generate_runtime_behavior_complete_code(
            extension_name,
            behavior,
            code_namespace or events_generator.get_behavior_code_namespace(extension_name, behavior_name),
            names.get(f"{extension_name}::{behavior_name}", {}),
        )


def run_export(
    project_path: str | Path,
    target: ExportTarget | str | None = None,
    export_path: str | Path = "./export",
    **kwargs: Any,
) -> ExportResult:
    """Convenience function to export a project file.

    Args:
        project_path: Path to the project JSON file
        target: Export target
        export_path: Output directory
        **kwargs: Additional ExportPipeline.export options

    Returns:
        ExportResult of the export
    """
    pipeline = ExportPipeline()
    return pipeline.export(load_project(project_path), target, export_path, **kwargs)
