"""Configuration loading from environment variables."""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from lunchy.config.models import ConfigError, LunchyConfig
from lunchy.config.paths import (
    AGENTS_ENV_VAR,
    CELLAR_ENV_VAR,
    get_launch_agents_path,
)


def _get_home(environ: Mapping[str, str]) -> Path:
    if home := environ.get("HOME"):
        return Path(home).expanduser()
    try:
        return Path.home()
    except RuntimeError as e:
        raise ConfigError("unable to determine home directory") from e


def load_config(environ: Mapping[str, str] | None = None) -> LunchyConfig:
    """Load configuration from the environment.

    Args:
        environ: Environment mapping to read. Defaults to os.environ.

    Returns:
        Validated LunchyConfig instance.

    Raises:
        ConfigError: If the environment yields an invalid configuration.
    """
    if environ is None:
        environ = os.environ

    raw: dict[str, object] = {"editor": environ.get("EDITOR")}

    if agents_path := environ.get(AGENTS_ENV_VAR):
        raw["agents_path"] = Path(agents_path).expanduser()
    else:
        raw["agents_path"] = get_launch_agents_path(_get_home(environ))

    if cellar := environ.get(CELLAR_ENV_VAR):
        raw["homebrew_cellar"] = Path(cellar).expanduser()

    try:
        return LunchyConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e
