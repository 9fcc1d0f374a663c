"""Settings loader for the advisor.

Reads settings from a JSON file and validates it against
``schemas/settings.schema.json``. Every key is optional::

    {
      "registry": "https://registry.npmjs.org",
      "timeout": 30,
      "sections": {"dependencies": {"mustBePinned": true}},
      "ignore": ["left-pad"]
    }

When ``sections`` is given, only the listed manifest sections are checked.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from .parsers.package_json import SECTIONS
from .registry import DEFAULT_REGISTRY_URL
from .validators.settings import validate_settings

CONFIG_FILENAME = ".npm-advisor.json"
CONFIG_PATH_ENV_VAR = "NPM_ADVISOR_CONFIG"
REGISTRY_ENV_VAR = "NPM_ADVISOR_REGISTRY"
DEFAULT_TIMEOUT = 30.0


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class SectionConfig:
    """Configuration for one dependency section of package.json."""

    name: str
    must_be_pinned: bool = False


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    registry: str = DEFAULT_REGISTRY_URL
    timeout: float = DEFAULT_TIMEOUT
    sections: tuple[SectionConfig, ...] = field(
        default_factory=lambda: tuple(SectionConfig(name) for name in SECTIONS)
    )
    ignore: frozenset[str] = frozenset()

    @property
    def section_names(self) -> list[str]:
        return [section.name for section in self.sections]

    def must_be_pinned(self, section: str) -> bool:
        """Return whether dependencies in ``section`` must use exact versions."""
        for config in self.sections:
            if config.name == section:
                return config.must_be_pinned
        return False

    def is_ignored(self, name: str) -> bool:
        return name in self.ignore

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a schema-valid document, applying defaults."""
        sections_data = data.get("sections")
        if sections_data is None:
            sections = tuple(SectionConfig(name) for name in SECTIONS)
        else:
            # Keep manifest section order regardless of document order.
            sections = tuple(
                SectionConfig(name, bool(sections_data[name].get("mustBePinned", False)))
                for name in SECTIONS
                if name in sections_data
            )

        return cls(
            registry=data.get("registry", DEFAULT_REGISTRY_URL),
            timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
            sections=sections,
            ignore=frozenset(data.get("ignore", [])),
        )


def _resolve_config_path(path: Path | str | None = None, root: Path | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. NPM_ADVISOR_CONFIG environment variable
    3. .npm-advisor.json in the scanned root, when present
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    if root is not None:
        candidate = root / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

    return None


def _apply_env_overrides(settings: Settings) -> Settings:
    registry = os.environ.get(REGISTRY_ENV_VAR, "").strip()
    if not registry:
        return settings
    return replace(settings, registry=registry)


def load_settings(path: Path | str | None = None, root: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Optional path to the config file. If not provided, uses the
            NPM_ADVISOR_CONFIG env var, then .npm-advisor.json under ``root``.
        root: Repository root searched for a default config file.

    Returns:
        Settings; built-in defaults when no config file is found. The
        NPM_ADVISOR_REGISTRY env var overrides the registry URL.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path, root)
    if config_path is None:
        return _apply_env_overrides(Settings())

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    try:
        validate_settings(data)
    except ValueError as exc:
        raise ConfigError(f"Configuration file {config_path} is invalid:{exc}") from exc

    return _apply_env_overrides(Settings.from_dict(data))
