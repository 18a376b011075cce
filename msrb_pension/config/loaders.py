# msrb_pension/config/loaders.py
"""
Loading and validation of the YAML data files shipped with the engine:
the statutory tables and the reference fixtures used by the validation harness.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from cerberus import Validator
from pydantic import ValidationError

from msrb_pension.config.models import StatutoryTables

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_TABLES_PATH = DATA_DIR / "statutory_tables.yaml"
DEFAULT_FIXTURES_PATH = DATA_DIR / "reference_fixtures.yaml"


class ConfigLoadError(Exception):
    """Custom exception for errors during config loading."""

    pass


_AGE_FACTOR_SCHEMA = {
    "type": "dict",
    "keysrules": {"type": "integer", "min": 1, "max": 4},
    "valuesrules": {
        "type": "dict",
        "keysrules": {"type": "integer", "min": 0, "max": 120},
        "valuesrules": {"type": "number"},
    },
}

TABLES_SCHEMA = {
    "version": {"type": "string", "required": True},
    "max_benefit_fraction": {"type": "number", "required": True},
    "post_2012_full_schedule_years": {"type": "number", "required": True},
    "benefit_factors": {
        "type": "dict",
        "required": True,
        "schema": {
            "default": dict(_AGE_FACTOR_SCHEMA, required=True),
            "post_2012_under_30": dict(_AGE_FACTOR_SCHEMA, required=True),
        },
    },
    "eligibility": {"type": "dict", "required": True},
    "projection_max_ages": {
        "type": "dict",
        "required": True,
        "keysrules": {"type": "integer"},
        "valuesrules": {"type": "integer"},
    },
    "option_b": {
        "type": "list",
        "required": True,
        "schema": {
            "type": "dict",
            "schema": {
                "min_age": {"type": "integer", "required": True},
                "rate": {"type": "number", "required": True},
            },
        },
    },
    "option_c": {
        "type": "dict",
        "required": True,
        "schema": {
            "survivor_numerator": {"type": "integer"},
            "survivor_denominator": {"type": "integer"},
            "default": {"type": "number", "nullable": True},
            "factors": {
                "type": "dict",
                "keysrules": {"type": "string", "regex": r"^\d+-\d+$"},
                "valuesrules": {"type": "number"},
            },
        },
    },
}

FIXTURES_SCHEMA = {
    "fixtures": {
        "type": "list",
        "required": True,
        "schema": {
            "type": "dict",
            "schema": {
                "name": {"type": "string", "required": True},
                "source": {"type": "string", "required": False},
                "tolerance": {"type": "number", "required": False, "min": 0},
                "input": {"type": "dict", "required": True},
                "transcribed": {"type": "dict", "required": False},
                "expected": {
                    "type": "dict",
                    "required": True,
                    "valuesrules": {"type": ["number", "boolean"]},
                },
            },
        },
    },
}


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Loads configuration data from a YAML file.

    Args:
        config_path: Path object pointing to the YAML configuration file.

    Returns:
        A dictionary containing the loaded configuration.

    Raises:
        ConfigLoadError: If the file cannot be found or parsed.
    """
    if not isinstance(config_path, Path):
        config_path = Path(config_path)

    logger.debug(f"Attempting to load configuration from: {config_path}")

    if not config_path.is_file():
        logger.error(f"Configuration file not found at path: {config_path}")
        raise ConfigLoadError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.exception(f"Error parsing YAML configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Error parsing YAML file {config_path}") from e
    except OSError as e:
        logger.exception(f"Could not read configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Could not read {config_path}") from e

    if not isinstance(config_data, dict):
        logger.error(f"Configuration file {config_path} did not parse into a dictionary.")
        raise ConfigLoadError(
            f"Invalid configuration format in {config_path}: Expected a dictionary."
        )

    logger.debug(f"Successfully loaded configuration from {config_path}")
    return config_data


def _validate_schema(data: Dict[str, Any], schema: Dict[str, Any], path: Path) -> None:
    v = Validator(schema, allow_unknown=False)
    if not v.validate(data):
        raise ConfigLoadError(f"Schema validation failed for {path}: {v.errors}")


def load_statutory_tables(path: Optional[Union[str, Path]] = None) -> StatutoryTables:
    """
    Load, schema-check and model-validate a statutory tables file.

    Raises ConfigLoadError when the file is missing, malformed, or fails validation.
    """
    path = Path(path) if path is not None else DEFAULT_TABLES_PATH
    raw = load_yaml_config(path)
    _validate_schema(raw, TABLES_SCHEMA, path)
    try:
        tables = StatutoryTables.model_validate(raw)
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid statutory tables in {path}: {e}") from e
    logger.info(
        f"Loaded statutory tables version {tables.version} "
        f"({len(tables.option_c.factors)} Option C age pairs) from {path}"
    )
    return tables


@lru_cache(maxsize=None)
def get_statutory_tables() -> StatutoryTables:
    """Process-wide statutory tables, loaded once from the packaged data file."""
    return load_statutory_tables(DEFAULT_TABLES_PATH)


def load_fixture_file(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load and schema-check a reference fixtures file. Returns the raw mapping."""
    path = Path(path) if path is not None else DEFAULT_FIXTURES_PATH
    raw = load_yaml_config(path)
    _validate_schema(raw, FIXTURES_SCHEMA, path)
    logger.debug(f"Loaded {len(raw['fixtures'])} fixtures from {path}")
    return raw
