"""
Export data models.

Describe what an export is asked to produce (targets, options) and what it
produced (result, runtime options written next to the project data).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..core.exceptions import ExportError
from ..core.logging import get_logger
from ..core.types import StageResult
from .codegen import CodeDiagnostic
from .includes import IncludeList
from .project import Project

logger = get_logger(__name__)


class ExportTarget(str, Enum):
    """Deployment targets."""

    PREVIEW = "preview"
    WEB = "web"
    CORDOVA = "cordova"
    ELECTRON = "electron"
    FACEBOOK_INSTANT_GAMES = "facebook_instant_games"
    COCOS2D = "cocos2d"

    @property
    def is_preview(self) -> bool:
        return self is ExportTarget.PREVIEW


class RendererBackend(str, Enum):
    """Rendering backends of the runtime. A bundle carries exactly one."""

    PIXI = "pixi"
    COCOS = "cocos"


class ScriptFile(BaseModel):
    """A bundled script and the hash of its content, used by hot-reloading."""

    path: str
    hash: int = 0


class RuntimeGameOptions(BaseModel):
    """Options passed to the runtime game by the bootstrap page."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_preview: bool = False
    inject_external_layout: str | None = None
    script_files: list[ScriptFile] = Field(default_factory=list)

    def to_payload(self) -> dict:
        """Serialize with the runtime's key names, omitting unset options."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ExportOptions(BaseModel):
    """Options of one export invocation."""

    project: Project
    target: ExportTarget = ExportTarget.PREVIEW
    export_path: str = Field(description="Output directory of the bundle")
    layout_name: str = Field(default="", description="Layout to start with (preview)")
    external_layout_name: str = Field(default="", description="External layout to inject (preview)")
    include_file_hashes: dict[str, int] = Field(
        default_factory=dict, description="Include path -> content hash (preview hot-reload)"
    )
    websocket_debugger_client: bool = Field(default=True, description="Bundle the debugger (preview)")
    debug_mode: bool = Field(default=False, description="Show debug information such as FPS (cocos2d)")
    method_mangled_names: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        description="'Extension::Behavior' -> declared method name -> implementation name",
    )


class ExportResult(BaseModel):
    """Result of one export invocation."""

    export_id: str
    target: ExportTarget
    success: bool
    export_path: str
    started_at: datetime
    completed_at: datetime

    include_files: list[str] = Field(default_factory=list)
    stages: list[StageResult] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    diagnostics: list[CodeDiagnostic] = Field(default_factory=list)

    error: str | None = None
    failed_stage: str | None = None

    @property
    def duration_seconds(self) -> float:
        return (self.completed_at - self.started_at).total_seconds()

    def raise_for_error(self) -> None:
        """Raise ExportError if the export failed."""
        if not self.success:
            raise ExportError(
                message=self.error or "Export failed",
                stage=self.failed_stage or "",
                export_id=self.export_id,
            )


@dataclass
class ExportContext:
    """State of one export invocation.

    Created when the export starts, dropped when it returns, never shared
    between exports.
    """

    export_id: str
    options: ExportOptions
    project: Project
    export_dir: str
    code_output_dir: str
    includes: IncludeList = field(default_factory=IncludeList)
    runtime_options: RuntimeGameOptions = field(default_factory=RuntimeGameOptions)
    last_error: str = ""
    warnings: list[str] = field(default_factory=list)
    diagnostics: list[CodeDiagnostic] = field(default_factory=list)
    stages: list[StageResult] = field(default_factory=list)

    @property
    def target(self) -> ExportTarget:
        return self.options.target

    @property
    def export_path(self) -> str:
        """Root of the output tree (export_dir can be a sub-directory of it)."""
        return self.options.export_path

    def fail(self, message: str) -> bool:
        """Record the error ending the export.

        Returns:
            False, for steps to ``return context.fail(...)``.
        """
        self.last_error = message
        return False

    def warn(self, message: str, **log_context: object) -> None:
        """Record a non-fatal problem."""
        logger.warning(message, **log_context)
        self.warnings.append(message)
