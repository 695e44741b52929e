"""Configuration management for varorder."""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .constants import DEFAULT_NAME_PATTERN, DEFAULT_REFERENCE_PATTERN

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")


def parse_bool(value: object, key: str) -> bool:
    """
    Interpret a boolean setting coming from YAML or the environment.

    Args:
        value: A bool, or a string such as "true", "no", "1"
        key: Setting name, used in error messages

    Returns:
        The boolean value

    Raises:
        ValueError: If the value cannot be read as a boolean
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    raise ValueError(f"Invalid boolean for {key}: {value!r}")


@dataclass
class ResolverConfig:
    """
    Settings of the dependency extractor.

    Controls what a valid variable name looks like, how a reference to
    another variable is written, and whether errors are reported one by one.
    """

    name_pattern: str = DEFAULT_NAME_PATTERN
    reference_pattern: str = DEFAULT_REFERENCE_PATTERN
    collect_all_errors: bool = False  # Report every name/reference error at once

    def __post_init__(self) -> None:
        self.collect_all_errors = parse_bool(self.collect_all_errors, "collect_all_errors")
        for key in ("name_pattern", "reference_pattern"):
            try:
                re.compile(getattr(self, key))
            except re.error as e:
                raise ValueError(f"Invalid regular expression for {key}: {e}") from e


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "console"  # "console" or "json"
    file: Path | None = None


@dataclass
class VarOrderConfig:
    """
    Complete configuration for varorder.

    This combines all configuration sections.
    """

    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> "VarOrderConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file

        Returns:
            VarOrderConfig instance
        """
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}") from e

        # An empty file is a valid, all-defaults configuration
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid configuration file structure in {config_path}: "
                f"expected dictionary, got {type(data).__name__}"
            )

        try:
            resolver = ResolverConfig(**(data.get("resolver") or {}))
        except TypeError as e:
            raise ValueError(f"Invalid resolver settings in {config_path}: {e}") from e

        logging_data = dict(data.get("logging") or {})
        # Convert file path string to Path if present
        if logging_data.get("file"):
            logging_data["file"] = Path(logging_data["file"])
        try:
            logging = LoggingConfig(**logging_data)
        except TypeError as e:
            raise ValueError(f"Invalid logging settings in {config_path}: {e}") from e

        return cls(resolver=resolver, logging=logging)

    def to_file(self, config_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config_path: Path to save config file
        """
        data = {
            "resolver": dict(self.resolver.__dict__),
            "logging": {
                k: str(v) if isinstance(v, Path) else v
                for k, v in self.logging.__dict__.items()
                if v is not None
            },
        }

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_env(cls) -> "VarOrderConfig":
        """
        Create configuration from environment variables.

        Environment variables:
            VARORDER_NAME_PATTERN: Variable naming pattern
            VARORDER_REFERENCE_PATTERN: Variable reference pattern
            VARORDER_COLLECT_ALL_ERRORS: Report all errors at once (default: false)
            LOG_LEVEL: Logging level (default: INFO)
            LOG_FORMAT: "console" or "json" (default: console)

        Returns:
            VarOrderConfig instance
        """
        resolver = ResolverConfig(
            name_pattern=os.environ.get("VARORDER_NAME_PATTERN", DEFAULT_NAME_PATTERN),
            reference_pattern=os.environ.get(
                "VARORDER_REFERENCE_PATTERN", DEFAULT_REFERENCE_PATTERN
            ),
            collect_all_errors=parse_bool(
                os.environ.get("VARORDER_COLLECT_ALL_ERRORS", "false"), "VARORDER_COLLECT_ALL_ERRORS"
            ),
        )

        logging_config = LoggingConfig(
            level=os.environ.get("LOG_LEVEL", "INFO"),
            format=os.environ.get("LOG_FORMAT", "console"),
        )

        return cls(resolver=resolver, logging=logging_config)


def load_config(config_file: Path | None = None) -> VarOrderConfig:
    """
    Load configuration from file or environment variables.

    Args:
        config_file: Optional path to YAML config file

    Returns:
        VarOrderConfig instance

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        return VarOrderConfig.from_file(config_file)
    return VarOrderConfig.from_env()
