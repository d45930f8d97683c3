"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
import keyword
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import ConfigError
from .naming import NamingConvention, NamingSuffixes
from .types import parse_type_identifier

# Bumped whenever generated output changes for identical input
GENERATOR_VERSION = "1"


@dataclass
class CodegenConfig:
    """Settings consumed by the build controller."""

    # Input / output
    schema_path: Optional[Path] = None
    output_dir: Optional[Path] = None
    namespace: Optional[str] = None

    # Incremental build
    skip_if_up_to_date: bool = True

    # Type handling
    scalar_mappings: Dict[str, str] = field(default_factory=dict)

    # Naming
    naming: NamingSuffixes = field(default_factory=NamingSuffixes)

    # Additional metadata
    add_comments: bool = True

    def __post_init__(self):
        if self.schema_path is not None:
            self.schema_path = Path(self.schema_path)
        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir)
        if isinstance(self.naming, dict):
            self.naming = _naming_from_dict(self.naming)

    @property
    def naming_convention(self) -> NamingConvention:
        return NamingConvention(self.naming)

    def validate(self) -> None:
        """
        Fail fast on settings the controller cannot work with.

        Raises:
            ConfigError: If a required setting is absent or malformed
        """
        if self.schema_path is None:
            raise ConfigError("schema_path is required")
        if self.output_dir is None:
            raise ConfigError("output_dir is required")
        if not self.namespace or not self.namespace.strip():
            raise ConfigError("namespace must not be empty")
        if not is_valid_namespace(self.namespace):
            raise ConfigError(f"Invalid namespace: {self.namespace!r}")
        if not isinstance(self.naming, NamingSuffixes):
            raise ConfigError("naming must be a NamingSuffixes bundle")

        for scalar_name, identifier in self.scalar_mappings.items():
            try:
                parse_type_identifier(identifier)
            except ValueError as e:
                raise ConfigError(f"Scalar mapping for '{scalar_name}': {e}") from e

    def fingerprint(self) -> str:
        """
        Stable text of every setting that affects generated output.

        Paths are excluded: moving a checkout must not force regeneration.
        """
        payload = {
            "generator_version": GENERATOR_VERSION,
            "namespace": self.namespace,
            "scalar_mappings": dict(sorted(self.scalar_mappings.items())),
            "naming": self.naming.to_dict(),
            "add_comments": self.add_comments,
        }
        return json.dumps(payload, sort_keys=True, separators=(",", ":"))


def is_valid_namespace(namespace: str) -> bool:
    """True for a dotted path of non-keyword identifiers."""
    parts = namespace.split(".")
    return all(part.isidentifier() and not keyword.iskeyword(part) for part in parts)


def _naming_from_dict(data: Dict[str, str]) -> NamingSuffixes:
    try:
        return NamingSuffixes.from_dict(data)
    except ValueError as e:
        raise ConfigError(str(e)) from e


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        self._defaults: Dict[str, Any] = {
            "skip_if_up_to_date": True,
            "scalar_mappings": {},
            "add_comments": True,
        }

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> CodegenConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = dict(self._defaults)

        if config_file:
            file_config = self._load_config_file(config_file)
            # Relative paths in a config file are relative to the file
            base_dir = Path(config_file).parent
            for key in ("schema_path", "output_dir"):
                if key in file_config and not Path(file_config[key]).is_absolute():
                    file_config[key] = str(base_dir / file_config[key])
            base_config.update(file_config)

        if custom_config:
            base_config.update(
                {key: value for key, value in custom_config.items() if value is not None}
            )

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> CodegenConfig:
        """Convert dictionary to CodegenConfig instance."""
        known_fields = {f.name for f in fields(CodegenConfig)}
        unknown = sorted(set(config_dict) - known_fields)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        scalar_mappings = config_dict.get("scalar_mappings", {})
        if not isinstance(scalar_mappings, dict):
            raise ConfigError("scalar_mappings must be an object")

        return CodegenConfig(**config_dict)

    def save_config(self, config: CodegenConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = {
            "schema_path": str(config.schema_path) if config.schema_path else None,
            "output_dir": str(config.output_dir) if config.output_dir else None,
            "namespace": config.namespace,
            "skip_if_up_to_date": config.skip_if_up_to_date,
            "scalar_mappings": dict(config.scalar_mappings),
            "naming": config.naming.to_dict(),
            "add_comments": config.add_comments,
        }

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> CodegenConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return ConfigManager().get_config(custom_config, config_file)

