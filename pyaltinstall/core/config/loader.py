"""
Configuration loader — reads pyaltinstall.yml into an InstallerConfig.

The file is optional. Without one the built-in catalog, package list and
build flags are used. Lookup order:

    --config PATH  >  PYALT_CONFIG env var  >  upward search from cwd
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pyaltinstall.core.data.catalog import (
    BUILD_PACKAGES,
    CONFIGURE_FLAGS,
    DEFAULT_PREFIX,
    DEFAULT_VERSIONS,
    DEFAULT_WORKSPACE_ROOT,
    SOURCE_URL_TEMPLATE,
)
from pyaltinstall.core.errors import CatalogError, ConfigError
from pyaltinstall.core.models.catalog import VersionCatalog

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "pyaltinstall.yml"
CONFIG_ENV_VAR = "PYALT_CONFIG"


class InstallerConfig(BaseModel):
    """Effective installer settings."""

    model_config = ConfigDict(extra="forbid")

    prefix: str = DEFAULT_PREFIX
    workspace_root: str = DEFAULT_WORKSPACE_ROOT
    source_url_template: str = SOURCE_URL_TEMPLATE
    configure_flags: list[str] = Field(default_factory=lambda: list(CONFIGURE_FLAGS))
    build_packages: list[str] = Field(default_factory=lambda: list(BUILD_PACKAGES))
    jobs: int | None = Field(default=None, ge=1)
    versions: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_VERSIONS))

    @field_validator("source_url_template")
    @classmethod
    def _check_url_template(cls, value: str) -> str:
        try:
            first = value.format(full_version="0.0.0")
            second = value.format(full_version="9.9.9")
        except (AttributeError, KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"source_url_template may only use the {{full_version}} placeholder ({e!r})"
            ) from e
        if first == second:
            raise ValueError("source_url_template must contain {full_version}")
        return value

    def catalog(self) -> VersionCatalog:
        """The version catalog built from ``versions``."""
        return VersionCatalog.from_mapping(self.versions)

    def source_url(self, full_version: str) -> str:
        return self.source_url_template.format(full_version=full_version)

    def effective_jobs(self) -> int:
        return self.jobs or os.cpu_count() or 1

    @property
    def bin_dir(self) -> str:
        return f"{self.prefix.rstrip('/')}/bin"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for pyaltinstall.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def resolve_config_path(explicit: Path | None = None) -> Path | None:
    """Apply the lookup order and return the config path, if any."""
    if explicit is not None:
        return explicit
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return find_config_file()


def load_config(path: Path | None = None) -> InstallerConfig:
    """Load and validate installer configuration.

    Args:
        path: Explicit config path. None means "use the lookup order";
            no file found then means defaults.

    Returns:
        Validated InstallerConfig.

    Raises:
        ConfigError: If the file is missing (when explicit) or invalid.
    """
    explicit = path is not None or bool(os.environ.get(CONFIG_ENV_VAR))
    path = resolve_config_path(path)

    if path is None:
        logger.debug("No %s found — using built-in defaults", CONFIG_FILE)
        return InstallerConfig()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return InstallerConfig()

    logger.debug("Loading installer config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # YAML reads 3.10 as the float 3.1 — labels must be quoted
    versions = data.get("versions")
    if isinstance(versions, dict):
        for key in versions:
            if not isinstance(key, str):
                raise ConfigError(
                    f"Version labels must be quoted strings in {path} (got {key!r})"
                )

    try:
        config = InstallerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid installer configuration: {e}") from e

    try:
        config.catalog()
    except CatalogError as e:
        raise ConfigError(str(e)) from e

    logger.info("Loaded config from %s (%d versions)", path, len(config.versions))
    return config
