"""
Export Service.

Assembles a deployable bundle of a project for one target: resources,
runtime includes, generated events code, serialized project data and the
target's manifest/bootstrap files.
"""

from __future__ import annotations

import os
import posixpath
import time
import uuid
from collections.abc import Callable
from datetime import datetime

from ...core.exceptions import BundlesmithError
from ...core.logging import get_logger, log_context
from ...core.template import to_json
from ...core.types import StageResult, StageStatus
from ...models.export import (
    ExportContext,
    ExportOptions,
    ExportResult,
    ExportTarget,
    RendererBackend,
    RuntimeGameOptions,
    ScriptFile,
)
from ...models.project import Project
from ...storage import AbstractFileSystem
from ..events import BasicEventsCodeGenerator, EventsCodeGenerator
from ..includes import IncludeResolver
from ..resources import ResourcesExporter
from ..templaters import get_templater

logger = get_logger(__name__)

ExportStep = Callable[[ExportContext], bool]

PROJECT_DATA_FILE = "data.js"


def strip_project_for_export(project: Project) -> None:
    """Remove the data only the editor and the code generators use.

    Must run after events code generation, which still needs events and
    object groups.
    """
    for layout in project.layouts:
        layout.events_code = ""
        layout.object_groups = []

    for extension in project.extensions:
        for behavior in extension.events_based_behaviors:
            for function in behavior.events_functions:
                function.events_code = ""

    project.external_events = []
    project.editor_settings = {}
    project.ui_settings = {}


class ExportService:
    """Service exporting projects to deployable bundles.

    Every step returns True on success. The first failing step ends the
    export: its message is kept in ``last_error`` and nothing already written
    is removed.
    """

    def __init__(
        self,
        fs: AbstractFileSystem,
        runtime_root: str,
        code_output_dir: str,
        events_generator: EventsCodeGenerator | None = None,
        namespace_prefix: str = "gdjs.evtsExt",
        clear_output_dir: bool = True,
    ) -> None:
        """Initialize the export service.

        Args:
            fs: File system used for every read, write and copy.
            runtime_root: Directory holding runtime include files and templates.
            code_output_dir: Scratch directory for generated code.
            events_generator: Events compiler. Defaults to a
                BasicEventsCodeGenerator using each export's method names.
            namespace_prefix: Prefix of generated behavior namespaces.
            clear_output_dir: Empty the export directory before exporting.
        """
        self.fs = fs
        self.runtime_root = fs.normalize_separator(runtime_root)
        # Generated files are told apart from runtime includes by being absolute
        self.code_output_dir = fs.make_absolute(fs.normalize_separator(code_output_dir), os.getcwd())
        self.events_generator = events_generator
        self.namespace_prefix = namespace_prefix
        self.clear_output_dir = clear_output_dir
        self.resources_exporter = ResourcesExporter(fs)
        self.last_error = ""

    def export(self, options: ExportOptions) -> ExportResult:
        """Export a project for the target of the options.

        Never raises: failures are reported in the result and ``last_error``.

        Args:
            options: What to export, where and for which target.

        Returns:
            ExportResult with the final include list, stages and errors.
        """
        export_id = str(uuid.uuid4())[:8]
        started_at = datetime.utcnow()
        start_time = time.perf_counter()

        context = self.create_context(options, export_id)

        with log_context(export_id=export_id, target=options.target.value):
            logger.info("Starting export", export_path=options.export_path, project=options.project.name)
            success = self.run_steps(context, self.steps_for(options.target))

            duration_ms = (time.perf_counter() - start_time) * 1000
            if success:
                logger.info(
                    "Export completed",
                    includes=len(context.includes),
                    warnings=len(context.warnings),
                    diagnostics=len(context.diagnostics),
                    duration_ms=duration_ms,
                )
            else:
                logger.error("Export failed", error=context.last_error, duration_ms=duration_ms)

        self.last_error = context.last_error
        failed = next((s for s in context.stages if s.status == StageStatus.FAILED), None)

        return ExportResult(
            export_id=export_id,
            target=options.target,
            success=success,
            export_path=options.export_path,
            started_at=started_at,
            completed_at=datetime.utcnow(),
            include_files=context.includes.to_list(),
            stages=context.stages,
            warnings=context.warnings,
            diagnostics=context.diagnostics,
            error=context.last_error or None,
            failed_stage=failed.stage_name if failed else None,
        )

    def create_context(self, options: ExportOptions, export_id: str = "") -> ExportContext:
        """Create the context of one export.

        The project is deep-copied: resources and stripping modify the copy only.
        """
        export_dir = self.fs.normalize_separator(options.export_path)
        if options.target is ExportTarget.CORDOVA:
            export_dir = posixpath.join(export_dir, "www")

        return ExportContext(
            export_id=export_id or str(uuid.uuid4())[:8],
            options=options,
            project=options.project.model_copy(deep=True),
            export_dir=export_dir,
            code_output_dir=self.code_output_dir,
        )

    def steps_for(self, target: ExportTarget) -> list[tuple[str, ExportStep]]:
        """Get the ordered steps exporting for a target."""
        return [
            ("prepare_output_directory", self.prepare_output_directory),
            ("export_resources", self.export_resources),
            ("migrate_deprecated_fonts", self.migrate_deprecated_fonts),
            ("add_libs_include", self.add_libs_include),
            ("export_effect_includes", self.export_effect_includes),
            ("export_events_code", self.export_events_code),
            ("export_external_source_files", self.export_external_source_files),
            ("strip_project", self.strip_project),
            ("remove_unused_backend_includes", self.remove_unused_backend_includes),
            ("export_project_data", self.export_project_data),
            ("export_includes_and_libs", self.export_includes_and_libs),
            ("write_target_files", self.write_target_files),
        ]

    def run_steps(self, context: ExportContext, steps: list[tuple[str, ExportStep]]) -> bool:
        """Run steps in order, stopping at the first failure."""
        for name, step in steps:
            stage = StageResult(stage_name=name, status=StageStatus.RUNNING)
            context.stages.append(stage)

            try:
                succeeded = step(context)
            except BundlesmithError as e:
                succeeded = context.fail(str(e))
            except Exception as e:
                logger.exception("Unexpected error during export", stage=name)
                succeeded = context.fail(f"Unexpected error during {name}: {e}")

            if not succeeded:
                stage.mark_failed(context.last_error or f"{name} failed")
                logger.error("Export stage failed", stage=name, error=context.last_error)
                return False

            stage.mark_completed()
            logger.debug("Export stage completed", stage=name)

        return True

    @staticmethod
    def backend_for(target: ExportTarget) -> RendererBackend:
        return RendererBackend.COCOS if target is ExportTarget.COCOS2D else RendererBackend.PIXI

    def prepare_output_directory(self, context: ExportContext) -> bool:
        self.fs.mkdir(context.export_dir)
        if self.clear_output_dir:
            self.fs.clear_dir(context.export_dir)
        return True

    def export_resources(self, context: ExportContext) -> bool:
        """Copy resources, before events code generation as file names can change."""
        for warning in self.resources_exporter.copy_all_resources_to(context.project, context.export_dir):
            context.warnings.append(warning)
        return True

    def migrate_deprecated_fonts(self, context: ExportContext) -> bool:
        # Text objects of old projects declare fonts as bare file names
        self.resources_exporter.add_deprecated_font_files_to_font_resources(
            context.project, context.export_dir
        )
        return True

    def add_libs_include(self, context: ExportContext) -> bool:
        IncludeResolver(context.includes).add_libs_include(
            self.backend_for(context.target),
            websocket_debugger_client=context.target.is_preview
            and context.options.websocket_debugger_client,
        )
        return True

    def export_effect_includes(self, context: ExportContext) -> bool:
        IncludeResolver(context.includes).add_effect_includes(context.project)
        return True

    def export_events_code(self, context: ExportContext) -> bool:
        """Generate one code file per layout and register it as an include."""
        self.fs.mkdir(context.code_output_dir)
        generator = self.events_generator or BasicEventsCodeGenerator(
            context.options.method_mangled_names, self.namespace_prefix
        )
        compilation_for_runtime = not context.target.is_preview

        for index, layout in enumerate(context.project.layouts):
            generated = generator.generate_layout_code(context.project, layout, compilation_for_runtime)
            context.diagnostics.extend(generated.diagnostics)

            filename = posixpath.join(context.code_output_dir, f"code{index}.js")
            try:
                self.fs.write_file(filename, generated.code)
            except BundlesmithError:
                return context.fail(f"Unable to write {filename}")

            context.includes.extend(generated.include_files)
            context.includes.add(filename)

        logger.info("Events code exported", layouts=len(context.project.layouts))
        return True

    def export_external_source_files(self, context: ExportContext) -> bool:
        """Copy the project's JavaScript source files, named after their position."""
        project_dir = self.resources_exporter.project_directory(context.project)

        for index, source_file in enumerate(context.project.source_files):
            if source_file.language != "Javascript":
                continue

            source = self.fs.make_absolute(source_file.file_name, project_dir)
            destination = posixpath.join(context.code_output_dir, f"ext-code{index}.js")
            try:
                self.fs.copy_file(source, destination)
            except BundlesmithError:
                context.warn(f"Could not copy external file {source}", file=source)
                continue

            context.includes.add(destination)

        return True

    def strip_project(self, context: ExportContext) -> bool:
        strip_project_for_export(context.project)

        if context.target.is_preview:
            context.project.loading_screen.show_splash = False
            if context.options.layout_name:
                context.project.first_layout = context.options.layout_name
        return True

    def remove_unused_backend_includes(self, context: ExportContext) -> bool:
        """Drop files of the other backend, before they reach the runtime options."""
        used = self.backend_for(context.target)
        IncludeResolver(context.includes).remove_includes(
            backend for backend in RendererBackend if backend is not used
        )
        return True

    def export_project_data(self, context: ExportContext) -> bool:
        """Write data.js with the project and the runtime options."""
        if context.target.is_preview:
            hashes = context.options.include_file_hashes
            context.runtime_options = RuntimeGameOptions(
                is_preview=True,
                inject_external_layout=context.options.external_layout_name or None,
                # Listed for hot-reloading
                script_files=[
                    ScriptFile(path=include, hash=hashes.get(include, 0)) for include in context.includes
                ],
            )

        filename = posixpath.join(context.code_output_dir, PROJECT_DATA_FILE)
        project_data = context.project.model_dump(mode="json", by_alias=True)
        output = (
            f"gdjs.projectData = {to_json(project_data)};\n"
            f"gdjs.runtimeGameOptions = {to_json(context.runtime_options.to_payload())};\n"
        )

        try:
            self.fs.mkdir(self.fs.dir_name_from(filename))
            self.fs.write_file(filename, output)
        except BundlesmithError:
            return context.fail(f"Unable to write {filename}")

        context.includes.add(filename)
        return True

    def export_includes_and_libs(self, context: ExportContext) -> bool:
        """Copy every include into the bundle and make its path bundle-relative.

        Runtime includes keep their path relative to the runtime root; other
        absolute files (generated code) are copied at the bundle root.
        Missing files are skipped with a warning; missing absolute files are
        also dropped from the include list.
        """
        destination_root = context.export_dir
        if context.target is ExportTarget.COCOS2D:
            destination_root = posixpath.join(destination_root, "src")

        for include in context.includes:
            if not self.fs.is_absolute(include):
                source = posixpath.join(self.runtime_root, include)
                if not self.fs.file_exists(source):
                    context.warn(f"Could not find runtime include file {include}", include=include)
                    continue
                self.fs.copy_file(source, posixpath.join(destination_root, include))
            else:
                if not self.fs.file_exists(include):
                    context.warn(f"Could not find include file {include}", include=include)
                    context.includes.remove(include)
                    continue
                file_name = self.fs.file_name_from(include)
                self.fs.copy_file(include, posixpath.join(destination_root, file_name))
                context.includes.replace(include, file_name)

        return True

    def write_target_files(self, context: ExportContext) -> bool:
        templater = get_templater(context.target, self.fs, self.runtime_root)
        return templater.write_files(context)
