"""Configuration models using Pydantic."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from lunchy.config.paths import (
    DEFAULT_HOMEBREW_CELLAR,
    PLIST_EXTENSION,
    PROFILE_FILENAME,
)


class ConfigError(Exception):
    """Configuration error."""

    pass


class LunchyConfig(BaseModel):
    """Root configuration model.

    Built once at startup and passed to every component. Frozen so
    nothing can change the agents directory halfway through a command.
    """

    model_config = ConfigDict(frozen=True)

    agents_path: Path
    homebrew_cellar: Path = DEFAULT_HOMEBREW_CELLAR
    editor: str | None = None
    launchctl: str = "launchctl"
    profile_name: str = PROFILE_FILENAME

    @field_validator("editor")
    @classmethod
    def _blank_editor_is_unset(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("profile_name")
    @classmethod
    def _profile_name_is_a_filename(cls, v: str) -> str:
        if not v or "/" in v:
            raise ValueError(f"invalid profile file name: {v!r}")
        return v

    def plist_path(self, name: str) -> Path:
        """Path of the descriptor for a logical service name."""
        return self.agents_path / f"{name}{PLIST_EXTENSION}"

    def require_editor(self) -> str:
        """Get the configured editor command.

        Raises:
            ConfigError: If EDITOR is not set.
        """
        if self.editor is None:
            raise ConfigError("EDITOR environment variable is not set")
        return self.editor
