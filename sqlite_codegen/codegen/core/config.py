"""
Generator configuration.

Settings are layered: per-language defaults, then an optional JSON file,
then explicit overrides (usually from the command line). Keys that are not
:class:`GeneratorConfig` fields end up in ``language_config``.
"""

import copy
import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


NAME_COLLISION_POLICIES = {"warn", "error"}

LANGUAGE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "python": {
        "dataclass_slots": True,
        "dataclass_frozen": False,
        "unknown_type": "Any",
        # Generated modules import UNSET and the SQL builders from here
        "runtime_module": "sqlite_codegen.runtime",
    },
    "typescript": {
        "db_import": "bun:sqlite",
        "int_type": "number | bigint",
        "unknown_type": "any",
    },
}


@dataclass
class GeneratorConfig:
    """Settings shared by every language generator."""

    # Doc comments in generated code
    add_comments: bool = True

    # Emit the manifest unit that re-exports every table
    generate_manifest: bool = True

    # Declared base type (e.g. "JSONB") -> target type, checked before the type map
    type_overrides: Dict[str, str] = field(default_factory=dict)

    # Two tables with the same type or file name: "warn" or "error"
    on_name_collision: str = "warn"

    # Settings only one language understands
    language_config: Dict[str, Any] = field(default_factory=dict)


ConfigSource = Union[str, Path]


class ConfigManager:
    """Builds GeneratorConfig objects from defaults, files and overrides."""

    def __init__(self, defaults: Optional[Dict[str, Dict[str, Any]]] = None):
        self._defaults = copy.deepcopy(LANGUAGE_DEFAULTS if defaults is None else defaults)

    def get_config(
        self,
        language: Optional[str] = None,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[ConfigSource] = None,
    ) -> GeneratorConfig:
        """
        Merge the layers for ``language`` into one configuration.

        Args:
            language: Primary language name; unknown names get no defaults
            custom_config: Overrides applied last
            config_file: JSON file applied over the defaults

        Raises:
            ConfigError: If the file is missing or not a JSON object.
        """
        settings: Dict[str, Any] = {
            "language_config": copy.deepcopy(self._defaults.get((language or "").lower(), {}))
        }

        for layer in (self.read_file(config_file) if config_file else None, custom_config):
            if layer:
                self._apply(settings, layer)

        return GeneratorConfig(**settings)

    @staticmethod
    def _apply(settings: Dict[str, Any], layer: Dict[str, Any]):
        """Apply one layer; unknown keys and nested dicts merge into their targets."""
        known = {f.name for f in fields(GeneratorConfig)}

        for key, value in layer.items():
            if key not in known:
                settings["language_config"][key] = value
            elif isinstance(value, dict) and isinstance(settings.get(key), dict):
                settings[key] = {**settings[key], **value}
            else:
                settings[key] = copy.deepcopy(value)

    @staticmethod
    def read_file(config_path: ConfigSource) -> Dict[str, Any]:
        """Read a JSON configuration file."""
        path = Path(config_path)

        if not path.is_file():
            raise ConfigError(f"Configuration file not found: {path}")
        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")
        return data

    def list_languages(self) -> List[str]:
        """Languages that have defaults."""
        return list(self._defaults)

    def validate_config(self, config: GeneratorConfig, language: str) -> List[str]:
        """
        Check a configuration for ``language``.

        Returns:
            One message per problem; empty when the configuration is usable.
        """
        problems = []

        if config.on_name_collision not in NAME_COLLISION_POLICIES:
            problems.append(
                f"Invalid on_name_collision '{config.on_name_collision}'; "
                f"expected one of {sorted(NAME_COLLISION_POLICIES)}"
            )

        for storage_type, target_type in config.type_overrides.items():
            if not isinstance(target_type, str) or not target_type.strip():
                problems.append(f"Invalid type override for {storage_type}: {target_type!r}")

        if language == "python":
            runtime_module = config.language_config.get("runtime_module", "")
            if not all(part.isidentifier() for part in str(runtime_module).split(".")):
                problems.append(f"Invalid runtime_module: {runtime_module!r}")

        return problems


_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """The process-wide configuration manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: Optional[str] = None,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[ConfigSource] = None,
) -> GeneratorConfig:
    """Merged configuration for ``language`` from the global manager."""
    return get_config_manager().get_config(language, custom_config, config_file)
