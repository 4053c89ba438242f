"""YAML configuration for the console shell."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml
from jsonschema import ValidationError, validate

from .exceptions import ConfigError
from .loader import DATA_FILE, REPORT_FILE

DEFAULT_CONFIG_FILE = "fleetguard.yaml"


@dataclass
class Config:
    """Settings for the console shell. Command-line options override these."""

    data_file: str = DATA_FILE
    report_file: str = REPORT_FILE
    color: bool = True
    log_level: str = "WARNING"


def load_schema() -> dict:
    """Load the JSON schema from config_schema.yaml."""
    schema_path = Path(__file__).parent / "config_schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def load_config(filename: Optional[Union[str, Path]] = None) -> Config:
    """
    Load and validate a YAML config file.

    With no filename, fleetguard.yaml in the current directory is used if it
    exists; otherwise the defaults apply. An explicitly named file must exist.
    """
    if filename is None:
        path = Path(DEFAULT_CONFIG_FILE)
        if not path.exists():
            return Config()
    else:
        path = Path(filename)

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error in {path}: {e}") from e

    try:
        validate(instance=data, schema=load_schema())
    except ValidationError as e:
        location = ".".join(str(p) for p in e.path)
        suffix = f" (at {location})" if location else ""
        raise ConfigError(f"Invalid config {path}: {e.message}{suffix}") from e

    defaults = Config()
    return Config(
        data_file=data.get("dataFile", defaults.data_file),
        report_file=data.get("reportFile", defaults.report_file),
        color=data.get("color", defaults.color),
        log_level=data.get("logLevel", defaults.log_level),
    )
