"""YAML + Pydantic config loading."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from durfmt.formatting import validate_template

CONFIG_FILENAME = "durfmt.yaml"


def _default_templates() -> dict[str, str]:
    return {
        "clock": "%H:%M:%S",
        "hours": "%T:%M:%S",
        "precise": "%H:%M:%S.%x'%y'%z",
        "verbose": "%Yy %Dd %Hh %Mm %Ss",
    }


class FormatConfig(BaseModel):
    # None renders the compact display style
    template: str | None = None

    @field_validator("template")
    @classmethod
    def _check_template(cls, value: str | None) -> str | None:
        if value is not None:
            validate_template(value)
        return value


class InputConfig(BaseModel):
    unit: Literal["s", "ms", "us", "ns"] = "s"


class DurfmtConfig(BaseModel):
    format: FormatConfig = Field(default_factory=FormatConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    templates: dict[str, str] = Field(default_factory=_default_templates)

    @field_validator("templates")
    @classmethod
    def _check_templates(cls, value: dict[str, str]) -> dict[str, str]:
        for template in value.values():
            validate_template(template)
        return value


def find_config_file() -> Path | None:
    """Search for durfmt.yaml in cwd and parent dirs."""
    current = Path.cwd()
    for directory in [current, *current.parents]:
        candidate = directory / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return None


def load_config(config_path: str | Path | None = None) -> DurfmtConfig:
    """Load config from YAML file, falling back to defaults."""
    if config_path is None:
        found = find_config_file()
        if found is None:
            return DurfmtConfig()
        config_path = found

    config_path = Path(config_path)
    if not config_path.exists():
        return DurfmtConfig()

    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return DurfmtConfig(**raw)
