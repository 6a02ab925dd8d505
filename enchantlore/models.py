"""Pydantic models for the YAML files the CLI and host loaders read."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class _FileModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TypeFile(_FileModel):
    format: str = "&7"


class PlaceholderFile(_FileModel):
    base: float = 0.0
    per_level: float = Field(1.0, alias="per-level")


class ConditionFile(_FileModel):
    type: Literal["permission", "min-level", "world"]
    value: str | int
    not_met_lines: List[str] = Field(default_factory=list, alias="not-met-lines")
    show_not_met: bool = Field(False, alias="show-not-met")


class EnchantFile(_FileModel):
    name: str = Field(min_length=1)
    type: Optional[str] = None
    max_level: PositiveInt = Field(1, alias="max-level")
    kind: Literal["basic", "extended"] = "basic"
    description: List[str] = Field(default_factory=list)
    placeholders: Dict[str, PlaceholderFile] = Field(default_factory=dict)
    conditions: List[ConditionFile] = Field(default_factory=list)


class RegistryFile(_FileModel):
    types: Dict[str, TypeFile] = Field(default_factory=lambda: {"normal": TypeFile()})
    default_type: str = Field("normal", alias="default-type")
    targets: Dict[str, List[str]] = Field(default_factory=dict)
    enchants: Dict[str, EnchantFile] = Field(default_factory=dict)


class ItemFile(_FileModel):
    material: str = Field(min_length=1)
    lore: List[str] = Field(default_factory=list)
    flags: List[str] = Field(default_factory=list)
    enchants: Dict[str, PositiveInt] = Field(default_factory=dict)
    stored_enchants: Dict[str, PositiveInt] = Field(default_factory=dict, alias="stored-enchants")
    data: Dict[str, int | List[str]] = Field(default_factory=dict)
    stored_enchants_shown: bool = Field(True, alias="stored-enchants-shown")


class ViewerFile(_FileModel):
    name: str = Field(min_length=1)
    permissions: List[str] = Field(default_factory=list)
    level: int = 0
    world: str = "world"
    sees_descriptions: bool = Field(True, alias="sees-descriptions")


__all__ = [
    "ConditionFile",
    "EnchantFile",
    "ItemFile",
    "PlaceholderFile",
    "RegistryFile",
    "TypeFile",
    "ViewerFile",
]
