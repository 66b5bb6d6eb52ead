"""
Configuration management for Bundlesmith.

Provides centralized, type-safe configuration with environment variable overrides
and sensible defaults for the code generators and the export pipeline.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()

ExportTargetName = Literal[
    "preview", "web", "cordova", "electron", "facebook_instant_games", "cocos2d"
]


class RuntimeConfig(BaseModel):
    """Location of the game runtime files."""

    runtime_root: Path = Field(
        default=Path("./Runtime"),
        description="Directory holding runtime include files and target templates",
    )
    code_output_dir: Path = Field(
        default_factory=lambda: Path(os.environ.get("TMPDIR", "/tmp")) / "bundlesmith-code",
        description="Scratch directory where generated code is written before copy",
    )


class ExportSettings(BaseModel):
    """Export pipeline configuration."""

    default_target: ExportTargetName = Field(
        default="preview", description="Target used when none is given"
    )
    debugger_client: bool = Field(
        default=True, description="Bundle the websocket debugger client in previews"
    )
    clear_output_dir: bool = Field(
        default=True, description="Empty the output directory before exporting"
    )
    code_namespace_prefix: str = Field(
        default="gdjs.evtsExt", description="Prefix of generated behavior namespaces"
    )


class Config(BaseModel):
    """Root configuration for Bundlesmith."""

    project_name: str = Field(default="Bundlesmith", description="Project identifier")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    export: ExportSettings = Field(default_factory=ExportSettings)

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables."""
        runtime = RuntimeConfig(
            runtime_root=Path(os.environ.get("BUNDLESMITH_RUNTIME_ROOT", "./Runtime")),
        )
        if os.environ.get("BUNDLESMITH_CODE_OUTPUT_DIR"):
            runtime.code_output_dir = Path(os.environ["BUNDLESMITH_CODE_OUTPUT_DIR"])

        return cls(
            log_level=os.environ.get("BUNDLESMITH_LOG_LEVEL", "INFO"),  # type: ignore
            runtime=runtime,
            export=ExportSettings(
                default_target=os.environ.get("BUNDLESMITH_DEFAULT_TARGET", "preview"),  # type: ignore
                debugger_client=os.environ.get("BUNDLESMITH_DEBUGGER_CLIENT", "true").lower() == "true",
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
