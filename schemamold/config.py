"""
Configuration management for SchemaMold.

Handles loading and validating configuration from INI files. Command line
options override anything set here.

Configuration file priority:
1. SCHEMAMOLD_CONFIG environment variable path
2. XDG config directory: ~/.config/schemamold/schemamold.ini
3. Home directory: ~/.schemamold.ini
4. Current directory: ./schemamold.ini
"""

import logging
import os
from configparser import ConfigParser
from configparser import Error as ConfigParserError
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from .console import console
from .schema.config_schema import CONFIG_DEFAULTS, CONFIG_SCHEMA
from .schema.core import EnumField, NumberField, ObjectField
from .schema.validation import ErrorsByPath, format_errors, validate_field
from .shared.errors import ConfigError

logger = logging.getLogger(__name__)


def _generate_config_template_from_schema() -> str:
    """Generate configuration template directly from schema."""
    lines = [
        "# SchemaMold Configuration File",
        "# Command line options override these settings",
        "",
    ]

    for section_name in CONFIG_SCHEMA.ordered_keys():
        section = CONFIG_SCHEMA.properties[section_name]
        if not isinstance(section, ObjectField):
            continue
        lines.append(f"[{section_name}]")

        for field_name in section.ordered_keys():
            field = section.properties[field_name]
            comment_parts = [part for part in (field.label, field.note) if part]
            if isinstance(field, EnumField):
                comment_parts.append(f"Options: {', '.join(field.values())}")
            if comment_parts:
                lines.append(f"# {' | '.join(comment_parts)}")

            default_value = CONFIG_DEFAULTS.get(section_name, {}).get(field_name, "")
            lines.append(f"{field_name} = {default_value}")
            lines.append("")

        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def _coerce(field: Any, raw: str) -> Any:
    """Turn INI text into the JSON value the field expects; unparsable text stays a string."""
    if isinstance(field, NumberField):
        for convert in (int, float):
            try:
                return convert(raw)
            except ValueError:
                continue
    return raw


class Config:
    """Configuration manager for SchemaMold."""

    def __init__(self):
        # values are literal text; "%" has no special meaning
        self.config = ConfigParser(interpolation=None)
        self.config_path: Path | None = None
        self._load_defaults()

    def _load_defaults(self):
        """Load default configuration values from schema."""
        self.config.read_string(_generate_config_template_from_schema())

    def get_config_paths(self) -> list[Path]:
        """Return configuration file paths in priority order."""
        paths = []

        env_config = os.environ.get("SCHEMAMOLD_CONFIG")
        if env_config:
            paths.append(Path(env_config))

        paths.append(Path(user_config_dir("schemamold", "schemamold")) / "schemamold.ini")
        paths.append(Path.home() / ".schemamold.ini")
        paths.append(Path("./schemamold.ini"))

        return paths

    def find_config_file(self) -> Path | None:
        """Find the first existing configuration file."""
        for path in self.get_config_paths():
            if path.exists() and path.is_file():
                return path
        return None

    def load_config(self, verbose: bool = False) -> bool:
        """
        Load configuration from file.

        Returns:
            bool: True if config file was found and loaded, False otherwise.
        """
        config_path = self.find_config_file()
        if not config_path:
            if verbose:
                console.print("[dim]No configuration file found, using defaults[/dim]")
            return False

        try:
            self.config.read(config_path, encoding="utf-8")
        except ConfigParserError as e:
            raise ConfigError(f"cannot read {config_path}: {e}", {"path": str(config_path)}) from e

        self.config_path = config_path
        logger.info("Loaded configuration from %s", config_path)
        if verbose:
            console.print(f"[dim]Loaded configuration from: {config_path}[/dim]")
        return True

    def to_document(self) -> dict[str, dict[str, Any]]:
        """Configuration as a JSON document shaped like ``CONFIG_SCHEMA``."""
        document: dict[str, dict[str, Any]] = {}
        for section_name in self.config.sections():
            section = CONFIG_SCHEMA.get_property(section_name)
            document[section_name] = {}
            for key, raw in self.config[section_name].items():
                field = section.get_property(key) if isinstance(section, ObjectField) else None
                document[section_name][key] = _coerce(field, raw) if raw != "" else None
        return document

    def validate_config(self) -> ErrorsByPath:
        """Validate configuration values against ``CONFIG_SCHEMA``."""
        return validate_field(CONFIG_SCHEMA, self.to_document())

    def get_default_config_path(self) -> Path:
        """Get the default configuration file path (XDG config directory)."""
        return Path(user_config_dir("schemamold", "schemamold")) / "schemamold.ini"

    def create_default_config(self, path: Path | None = None) -> Path:
        """
        Create a default configuration file.

        Args:
            path: Path to create config file. If None, uses default location.

        Returns:
            Path: The path where the config file was created.
        """
        if path is None:
            path = self.get_default_config_path()

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(_generate_config_template_from_schema())

        return path

    def get_field_value(self, section_name: str, field_name: str) -> Any:
        """Get a coerced configuration value, falling back to the schema default."""
        section = CONFIG_SCHEMA.get_property(section_name)
        if not isinstance(section, ObjectField) or section.get_property(field_name) is None:
            raise ConfigError(f"unknown setting {section_name}.{field_name}")

        value = self.to_document().get(section_name, {}).get(field_name)
        if value is None:
            return CONFIG_DEFAULTS.get(section_name, {}).get(field_name)
        return value


def load_config(verbose: bool = False) -> Config:
    """
    Load configuration from file system.

    Raises:
        ConfigError: If the configuration file is malformed or has invalid values
    """
    config = Config()
    config.load_config(verbose=verbose)

    errors = config.validate_config()
    if errors:
        raise ConfigError(
            "validation failed:\n" + "\n".join(f"  - {line}" for line in format_errors(errors)),
            {"errors": errors},
        )

    return config
