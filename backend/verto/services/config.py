"""Configuration loading and validation service.

Configuration lives in a YAML file (default: config.yaml in the backend
directory). Every key is optional; a missing file means all defaults. Unknown
keys, wrong types and out-of-range values are rejected at startup.
"""

import os
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ConfigValidationError:
    """Represents a configuration validation error."""
    path: str
    message: str


class ConfigValidationException(Exception):
    """Raised when config validation fails."""

    def __init__(self, errors: List[ConfigValidationError]):
        self.errors = errors
        messages = [f"{e.path}: {e.message}" for e in errors]
        super().__init__("Configuration validation failed:\n" + "\n".join(messages))


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Configuration schema definition
CONFIG_SCHEMA = {
    "server": {
        "type": "dict",
        "properties": {
            "host": {"type": "str"},
            "port": {"type": "int", "min": 1, "max": 65535},
            "debug": {"type": "bool"},
        }
    },
    "database": {
        "type": "dict",
        "properties": {
            "url": {"type": "str"},
        }
    },
    "market_data": {
        "type": "dict",
        "properties": {
            "base_url": {"type": "str"},
            "vs_currency": {"type": "str"},
            "page_size": {"type": "int", "min": 1, "max": 250},
            "near_end_threshold": {"type": "int", "min": 0},
            "timeout_seconds": {"type": "float", "min": 0},
        }
    },
    "logging": {
        "type": "dict",
        "properties": {
            "level": {"type": "str", "options": LOG_LEVELS},
            "format": {"type": "str"},
            "file": {"type": "str"},
        }
    },
}

_TYPE_MAP = {
    "str": str,
    "int": int,
    "float": (int, float),
    "bool": bool,
    "list": list,
    "dict": dict,
}


class ConfigService:
    """Service for loading and validating configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize config service.

        Args:
            config_path: Path to config file. If None, uses the VERTO_CONFIG
                environment variable or config.yaml in the backend directory.
        """
        if config_path is None:
            backend_dir = Path(__file__).parent.parent.parent
            config_path = os.environ.get("VERTO_CONFIG", str(backend_dir / "config.yaml"))

        self.config_path = config_path
        self._config: Dict[str, Any] = {}

    def load_and_validate(self) -> Dict[str, Any]:
        """Load and validate the configuration file.

        Returns:
            Validated configuration dictionary (empty if no file exists).

        Raises:
            ConfigValidationException: If the file is not valid YAML or
                does not match the schema.
        """
        if not os.path.exists(self.config_path):
            logger.warning(f"Config file not found at {self.config_path}, using defaults")
            self._config = {}
            return self._config

        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationException([
                ConfigValidationError(path="", message=f"Invalid YAML syntax: {e}")
            ])

        config = self.validate(config)
        self._config = config
        logger.info(f"Configuration loaded and validated from {self.config_path}")
        return config

    def validate(self, config: Any) -> Dict[str, Any]:
        """Validate an already-parsed configuration mapping.

        Raises:
            ConfigValidationException: If validation fails.
        """
        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigValidationException([
                ConfigValidationError(
                    path="",
                    message=f"Config must be a dictionary, got {type(config).__name__}",
                )
            ])

        errors = self._validate_dict(config, CONFIG_SCHEMA, "")
        if errors:
            raise ConfigValidationException(errors)
        return config

    def _validate_dict(
        self,
        data: Dict[str, Any],
        schema: Dict[str, Any],
        path: str
    ) -> List[ConfigValidationError]:
        errors = []

        for key, value in data.items():
            current_path = f"{path}.{key}" if path else key
            if key not in schema:
                errors.append(ConfigValidationError(
                    path=current_path,
                    message=f"Unknown configuration key '{key}'"
                ))
                continue
            errors.extend(self._validate_value(value, schema[key], current_path))

        for key, prop_schema in schema.items():
            if prop_schema.get("required", False) and key not in data:
                errors.append(ConfigValidationError(
                    path=f"{path}.{key}" if path else key,
                    message="Required field missing"
                ))

        return errors

    def _validate_value(
        self,
        value: Any,
        schema: Dict[str, Any],
        path: str
    ) -> List[ConfigValidationError]:
        expected_type = schema["type"]
        expected = _TYPE_MAP[expected_type]

        # bool is an int subclass; never accept it for numeric fields
        if not isinstance(value, expected) or (
            isinstance(value, bool) and expected_type in ("int", "float")
        ):
            return [ConfigValidationError(
                path=path,
                message=f"Expected {expected_type}, got {type(value).__name__}"
            )]

        if expected_type == "dict":
            return self._validate_dict(value, schema.get("properties", {}), path)

        errors = []
        if "min" in schema and value < schema["min"]:
            errors.append(ConfigValidationError(
                path=path,
                message=f"Value {value} is below minimum {schema['min']}"
            ))
        if "max" in schema and value > schema["max"]:
            errors.append(ConfigValidationError(
                path=path,
                message=f"Value {value} is above maximum {schema['max']}"
            ))
        if "options" in schema and value not in schema["options"]:
            errors.append(ConfigValidationError(
                path=path,
                message=f"Value '{value}' not in allowed options: {schema['options']}"
            ))
        return errors

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value.

        Args:
            key: Dot-notation key (e.g., "market_data.page_size")
            default: Default value if not found

        Returns:
            Configuration value
        """
        value = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value


# Global config service instance
config_service = ConfigService()
