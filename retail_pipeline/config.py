"""
Pipeline settings.

Loaded from an optional YAML file, then overridden by environment
variables (RETAIL_DATE_FORMAT, LOG_LEVEL, LOG_FORMAT).
"""

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from retail_pipeline.core import aggregator


class PipelineSettings(BaseModel):
    """
    Attributes:
        date_format: strptime format of invoice dates; detected when None
        product_limit: Size of the top products list
        country_limit: Size of the country list
        month_limit: Size of the month list
        customer_limit: Size of the top customers list
        rules_path: YAML cleaning rules; the built-in rules when None.
            A relative path in a settings file is resolved against that
            file's directory
        log_level: Log level name
        log_format: "json" or "text"
    """

    date_format: str | None = None
    product_limit: int = Field(aggregator.DEFAULT_PRODUCT_LIMIT, ge=1)
    country_limit: int = Field(aggregator.DEFAULT_COUNTRY_LIMIT, ge=1)
    month_limit: int = Field(aggregator.DEFAULT_MONTH_LIMIT, ge=1)
    customer_limit: int = Field(aggregator.DEFAULT_CUSTOMER_LIMIT, ge=1)
    rules_path: str | None = None
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"


ENV_OVERRIDES = {
    "RETAIL_DATE_FORMAT": "date_format",
    "LOG_LEVEL": "log_level",
    "LOG_FORMAT": "log_format",
}


def load_settings(config_path: str | Path | None = None) -> PipelineSettings:
    """
    Load settings from YAML and the environment.

    Args:
        config_path: YAML file with a top-level "pipeline" mapping (optional)

    Raises:
        FileNotFoundError: If config_path is given but does not exist
        ValueError: If the file has no "pipeline" section
    """
    values: dict = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {config_path}")
        with open(path) as f:
            config = yaml.safe_load(f)
        if not config or "pipeline" not in config:
            raise ValueError("Settings file must contain 'pipeline' section")
        values.update(config["pipeline"] or {})

        # Relative rule files live next to the settings file
        rules_path = values.get("rules_path")
        if rules_path and not Path(rules_path).is_absolute():
            values["rules_path"] = str(path.parent / rules_path)

    for env_var, field_name in ENV_OVERRIDES.items():
        if os.getenv(env_var):
            values[field_name] = os.environ[env_var]

    return PipelineSettings(**values)
