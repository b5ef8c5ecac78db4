"""Configuration model and loader.

Configuration is optional: without a ``clique.yaml`` in the workspace root
every setting takes its default. The file only steers the file glue and CLI
(where status documents live, what to skip while searching); the parsers and
updaters themselves take no configuration.

Example clique.yaml:
    workflow_status_candidates:
      - docs/bmm-workflow-status.yaml
    sprint_status_filename: sprint-status.yaml
    excluded_dirs: [node_modules, .git, .venv, "packages/*/dist"]
    respect_gitignore: false
    enforce_workspace: true
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from clique.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_WORKFLOW_STATUS_CANDIDATES",
    "DEFAULT_EXCLUDED_DIRS",
    "CliqueConfig",
    "load_config",
]

CONFIG_FILENAME = "clique.yaml"

DEFAULT_WORKFLOW_STATUS_CANDIDATES: tuple[str, ...] = (
    "_bmad-output/planning-artifacts/bmm-workflow-status.yaml",
    "_bmad-output/bmm-workflow-status.yaml",
    "docs/bmm-workflow-status.yaml",
    "bmm-workflow-status.yaml",
)
DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = ("node_modules", ".git")


class CliqueConfig(BaseModel):
    """Settings for locating and guarding status documents.

    Attributes:
        workflow_status_candidates: Workspace-relative paths probed in order
            for the workflow status document; the first existing one wins.
        sprint_status_filename: File name of sprint status documents, searched
            for recursively under the workspace.
        excluded_dirs: Gitignore-style patterns for directories skipped during
            the recursive search (a bare name matches at any depth).
        respect_gitignore: Also skip whatever the workspace root .gitignore
            ignores.
        enforce_workspace: Refuse to read or write documents outside the
            workspace root.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    workflow_status_candidates: list[str] = Field(
        default_factory=lambda: list(DEFAULT_WORKFLOW_STATUS_CANDIDATES),
        description="Workspace-relative workflow status paths, probed in order",
    )
    sprint_status_filename: str = Field(
        default="sprint-status.yaml",
        min_length=1,
        description="File name of sprint status documents",
    )
    excluded_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS),
        description="Gitignore-style directory patterns skipped while searching",
    )
    respect_gitignore: bool = Field(
        default=False,
        description="Also skip paths ignored by the workspace root .gitignore",
    )
    enforce_workspace: bool = Field(
        default=True,
        description="Reject document paths outside the workspace root",
    )

    @field_validator("workflow_status_candidates", mode="before")
    @classmethod
    def default_candidates_when_empty(cls, v: Any) -> Any:
        """YAML parses an empty key (all items commented out) as None."""
        if v is None:
            return list(DEFAULT_WORKFLOW_STATUS_CANDIDATES)
        return v

    @field_validator("excluded_dirs", mode="before")
    @classmethod
    def coerce_none_to_empty_list(cls, v: Any) -> Any:
        if v is None:
            return []
        return v

    @field_validator("workflow_status_candidates")
    @classmethod
    def validate_relative_candidates(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("workflow_status_candidates must not be empty")
        for candidate in v:
            if not candidate or Path(candidate).is_absolute():
                raise ValueError(
                    f"workflow_status_candidates entries must be relative paths, got {candidate!r}"
                )
        return v

    @field_validator("sprint_status_filename")
    @classmethod
    def validate_bare_filename(cls, v: str) -> str:
        if "/" in v or "\\" in v:
            raise ValueError(f"sprint_status_filename must be a file name, got {v!r}")
        return v


def load_config(config_path: Path | None = None) -> CliqueConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the config file. None, or a path that does not
            exist, yields the defaults.

    Returns:
        Validated CliqueConfig.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, is not a
            mapping, or fails validation.

    """
    if config_path is None or not config_path.exists():
        return CliqueConfig()

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        line_info = ""
        if hasattr(e, "problem_mark") and e.problem_mark is not None:
            mark = e.problem_mark
            line_info = f" (line {mark.line + 1}, column {mark.column + 1})"
        raise ConfigError(f"Invalid YAML in {config_path}{line_info}: {e}") from e

    if data is None:
        logger.debug("Config file %s is empty, using defaults", config_path)
        return CliqueConfig()
    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid configuration in {config_path}: root element must be a mapping, "
            f"got {type(data).__name__}"
        )

    try:
        config = CliqueConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}:\n{e}") from e

    logger.debug("Loaded config from %s", config_path)
    return config
