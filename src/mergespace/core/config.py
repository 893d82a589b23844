"""Application state and configuration."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import platformdirs
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from mergespace.core.base import BaseConfig, BaseState
from mergespace.core.log import Logger
from mergespace.core.yaml_settings import (
    CONFIG_FILE_NAME,
    YamlWithIncludesSettingsSource,
)

# ============================================================
# TEMPLATE SUBSTITUTION NAMESPACE
# ============================================================

# Modules available for template substitution in YAML files
# Usage: {platformdirs.user_data_dir}, {os.getcwd}, {Path.cwd}
TEMPLATE_NAMESPACE = {
    'os': os,
    'platformdirs': platformdirs,
    'Path': Path,
}

# ============================================================
# CONFIG MODELS (loaded from YAML/env/CLI)
# ============================================================

class AnalysisConfig(BaseConfig):
    """Where projects live and how merges are analyzed."""

    project_dir: Path = Field(
        default=Path("."),
        description=(
            "Directory holding one clone per listed project "
            "(the clone command writes here)"
        ),
    )
    output_dir: Path = Field(
        default=Path("reports"),
        description="Directory for per-project JSON reports",
    )
    exhaustive_limit: int = Field(
        default=10_000,
        ge=0,
        description=(
            "Largest resolution space that is also searched "
            "exhaustively to count candidates equal to the actual "
            "resolution (0 disables the search)"
        ),
    )
    timeout: int = Field(
        default=600,
        description="Timeout for a single git command in seconds",
    )


class Config(BaseConfig):
    """Application configuration loaded from YAML/env/CLI."""

    logger: Logger = Field(
        default=None,
        description="Logger configuration and runtime instance"
    )
    analysis: AnalysisConfig = Field(
        default_factory=AnalysisConfig,
        description="Analysis settings"
    )
    run_name: str = Field(
        default="analysis",
        description="Name of this run, used for log directories",
    )
    log_level: str = Field(
        default="info",
        alias="log-level",
        description=(
            "Console log level: 'spew', 'trace', 'debug', 'info', "
            "'warn', 'error', 'fatal'"
        ),
    )
    log_root: Path = Field(
        default_factory=(
            lambda: Path(platformdirs.user_state_dir()) / "mergespace"
        ),
        description=(
            "Root directory for all log files "
            "(supports {platformdirs.*} templates)"
        ),
    )
    commands: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        description=(
            "Command templates organized by category (git, ...)"
        ),
    )

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode='after')
    def _setup_logger(self) -> 'Config':
        """Initialize the global logger singleton once config loads."""
        from mergespace.core.log import setup_logger

        if self.logger is None:
            self.logger = Logger(level=self.log_level)

        setup_logger(
            log_root=self.log_root,
            run_name=self.run_name,
            console=self.logger.console,
            file=self.logger.file,
            level=self.logger.level,
        )
        return self

    def close(self):
        """Close config and the global logger singleton."""
        from mergespace.core.log import logger
        if logger is not None:
            logger.close()

        super().close()


# ============================================================
# RUNTIME STATE MODELS (mutable during workflow execution)
# ============================================================

class AnalysisState(BaseState):
    """Analysis workflow runtime state (mutates during execution)."""

    projects: list = Field(
        default_factory=list,
        description="Projects still waiting to be analyzed",
    )
    current_project: Any = Field(
        default=None,
        description="Project being analyzed",
    )
    repository: Any = Field(
        default=None,
        description="Repository accessor for the current project",
    )
    merger: Any = Field(
        default=None,
        description="Three-way merger for the current project",
    )
    pending_commits: list = Field(
        default_factory=list,
        description="Merge commits of the current project still to analyze",
    )
    merge_commit_count: int = Field(
        default=0,
        description="Merge commits found in the current project",
    )
    merge_reports: list = Field(
        default_factory=list,
        description="Reports of conflicting merges in the current project",
    )
    project_reports: list = Field(
        default_factory=list,
        description="Finished project reports",
    )
    status: str = Field(
        default="pending",
        description="Workflow status: pending, running, complete",
    )

    model_config = ConfigDict(arbitrary_types_allowed=True)


class Runtime(BaseModel):
    """All runtime state organized by workflow."""

    analysis: AnalysisState = Field(
        default_factory=AnalysisState,
        description="Analysis workflow runtime state"
    )


# ============================================================
# STATE (config + runtime combined)
# ============================================================

class State(BaseSettings):
    """Complete application state - configuration and runtime.

    This is the state object that flows through the workflow
    graph. Being a BaseSettings, it loads from YAML files,
    environment variables and CLI arguments, and validates all
    of them on load.
    """

    config: Config = Field(
        default_factory=Config,
        description="Application configuration (from YAML/env/CLI)",
    )
    runtime: Runtime = Field(
        default_factory=Runtime,
        description="Runtime state (mutates during workflow execution)",
    )
    include: list[str] | None = Field(
        default=None,
        description=(
            "Additional YAML files to include and merge. "
            "Use --include on CLI or include: in YAML files."
        ),
    )

    model_config = SettingsConfigDict(
        yaml_file=CONFIG_FILE_NAME,
        env_file=".env",
        env_prefix="MERGESPACE_",
        env_nested_delimiter="__",
        cli_parse_args=True,
        cli_implicit_flags=True,
        cli_use_class_docs_for_groups=True,
        arbitrary_types_allowed=True,
        extra='ignore'
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority: init > YAML (with includes) > .env > env > secrets."""
        return (
            init_settings,
            YamlWithIncludesSettingsSource(settings_cls),
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )

    @model_validator(mode="after")
    def substitute_templates(self) -> "State":
        """Replace {config.*} and {platformdirs.*} style templates.

        Walks the whole state and rewrites strings, Paths, dict
        values and list items in place.
        """
        self._substitute_recursive(self)
        return self

    def _substitute_recursive(self, obj: Any) -> None:
        if isinstance(obj, BaseModel):
            for field_name in obj.__class__.model_fields:
                value = getattr(obj, field_name)
                new_value = self._substitute_value(value)
                if new_value is not value:
                    setattr(obj, field_name, new_value)
        elif isinstance(obj, dict):
            for key in obj:
                obj[key] = self._substitute_value(obj[key])
        elif isinstance(obj, list):
            for i in range(len(obj)):
                obj[i] = self._substitute_value(obj[i])

    def _substitute_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._substitute_string(value)
        elif isinstance(value, Path):
            substituted = self._substitute_string(str(value))
            return value if substituted == str(value) else Path(substituted)
        elif isinstance(value, (BaseModel, dict, list)):
            self._substitute_recursive(value)
            return value
        else:
            return value

    def _substitute_string(self, value: str) -> str:
        """Replace {field.path} templates with actual field values.

        Examples:
            "{config.log_root}/reports" → "/home/user/.local/state/mergespace/reports"
            "{platformdirs.user_data_dir}" → "/home/user/.local/share/mergespace"

        Command templates such as "{commit}:{path}" are not valid
        references and are left unchanged.
        """
        def replace_template(match):
            parts = match.group(1).split(".")

            if parts[0] in TEMPLATE_NAMESPACE:
                module = parts[0]
                obj = TEMPLATE_NAMESPACE[module]
                parts = parts[1:]
            else:
                module = None
                obj = self

            try:
                for part in parts:
                    obj = getattr(obj, part)

                if callable(obj):
                    if module == 'platformdirs':
                        obj = obj('mergespace', appauthor=False)
                    else:
                        obj = obj()

                return str(obj)
            except (AttributeError, TypeError):
                return match.group(0)

        return re.sub(r'\{([A-Za-z_]+\.[A-Za-z._]+)\}', replace_template, value)


__all__ = [
    "State",
    "Config",
    "AnalysisConfig",
    "AnalysisState",
    "BaseConfig",
    "BaseState",
]
