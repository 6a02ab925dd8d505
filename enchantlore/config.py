"""Display configuration.

The ``display:`` section of ``config.yml`` is validated into frozen pydantic
models, so one render call always works from a single consistent snapshot.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, ValidationError

CONFIG_ENV_VAR = "ENCHANTLORE_CONFIG"


class ConfigError(Exception):
    pass


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class CollapseConfig(_Section):
    enabled: bool = True
    threshold: int = 9
    per_line: PositiveInt = Field(2, alias="per-line")
    delimiter: str = ", "


class DescriptionConfig(_Section):
    enabled: bool = True
    threshold: int = 5
    word_wrap: PositiveInt = Field(40, alias="word-wrap")
    format: str = "&8"


class NumeralsConfig(_Section):
    enabled: bool = True
    threshold: int = 10


class NotMetConfig(_Section):
    format: str = "&m"


class DisplayConfig(_Section):
    collapse: CollapseConfig = Field(default_factory=CollapseConfig)
    descriptions: DescriptionConfig = Field(default_factory=DescriptionConfig)
    numerals: NumeralsConfig = Field(default_factory=NumeralsConfig)
    not_met: NotMetConfig = Field(default_factory=NotMetConfig, alias="not-met")
    require_enchantable: bool = Field(True, alias="require-enchantable")
    prefix: str = ""


def _format_errors(e: ValidationError) -> str:
    lines = []
    errors = e.errors(include_url=False)
    for err in errors[:5]:
        loc = ".".join(str(p) for p in err["loc"])
        lines.append(f"- display.{loc or '?'}: {err['msg']}")
    more = "" if len(errors) <= 5 else f" (+{len(errors) - 5} more)"
    return "\n".join(lines) + more


def parse_config(data: Any) -> DisplayConfig:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("config must contain a mapping at the top level")
    section = data.get("display") or {}
    try:
        return DisplayConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError("Invalid display config:\n" + _format_errors(e)) from e


def load_config(path: str | Path | None = None) -> DisplayConfig:
    """Load ``config.yml``; explicit path, then ``$ENCHANTLORE_CONFIG``, then defaults."""
    if path is None:
        path = os.getenv(CONFIG_ENV_VAR) or None
    if path is None:
        return DisplayConfig()
    p = Path(path)
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"config file not found: {p}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"config file is not valid YAML: {p}\n{e}") from e
    return parse_config(data)


__all__ = [
    "CONFIG_ENV_VAR",
    "CollapseConfig",
    "ConfigError",
    "DescriptionConfig",
    "DisplayConfig",
    "NotMetConfig",
    "NumeralsConfig",
    "load_config",
    "parse_config",
]
