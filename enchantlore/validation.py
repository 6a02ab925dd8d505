from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List
import json

import yaml
from jsonschema import Draft202012Validator
from pydantic import BaseModel, ValidationError

from .config import ConfigError, DisplayConfig
from .enchants import Condition, EnchantRegistry, EnchantType, Enchantment, FormatSettings, Placeholder
from .item import ITEM_FLAGS, Item, PersistentData
from .markup import TagMarkup
from .models import ItemFile, RegistryFile, ViewerFile
from .viewer import Viewer


SCHEMA_DIR = Path(__file__).resolve().parent / "schema"

_def_schemas = {
    "item": SCHEMA_DIR / "item.schema.json",
    "enchants": SCHEMA_DIR / "enchants.schema.json",
    "viewer": SCHEMA_DIR / "viewer.schema.json",
}


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _read_yaml(path: Path) -> Any:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"{path} is not valid YAML:\n{e}") from e
    return {} if data is None else data


def _validate_jsonschema(obj: Any, schema_path: Path) -> None:
    schema = _read_json(schema_path)
    v = Draft202012Validator(schema)
    errors = sorted(v.iter_errors(obj), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = []
        for e in errors[:5]:
            ptr = "/" + "/".join([str(p) for p in e.path])
            lines.append(f"- {ptr}: {e.message}")
        more = "" if len(errors) <= 5 else f" (+{len(errors)-5} more)"
        raise ConfigError("JSON Schema validation failed:\n" + "\n".join(lines) + more)


def _load(path: Path, kind: str, model: type[BaseModel]) -> Any:
    data = _read_yaml(Path(path))
    _validate_jsonschema(data, _def_schemas[kind])
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ConfigError(str(e.errors(include_url=False))) from e


def build_registry(spec: RegistryFile, config: DisplayConfig | None = None) -> EnchantRegistry:
    settings = FormatSettings.from_config(config or DisplayConfig())
    types: Dict[str, EnchantType] = {
        tid: EnchantType(tid, format=t.format, priority=i) for i, (tid, t) in enumerate(spec.types.items())
    }
    if spec.default_type not in types:
        raise ConfigError(f"default-type '{spec.default_type}' is not a declared type")
    enchants: List[Enchantment] = []
    for eid, e in spec.enchants.items():
        type_id = e.type or spec.default_type
        if type_id not in types:
            raise ConfigError(f"{eid}: unknown type '{type_id}'")
        enchants.append(
            Enchantment(
                id=eid,
                name=e.name,
                type=types[type_id],
                max_level=e.max_level,
                kind=e.kind,
                description=tuple(e.description),
                placeholders={k: Placeholder(p.base, p.per_level) for k, p in e.placeholders.items()},
                conditions=tuple(
                    Condition(
                        kind=c.type,
                        value=str(c.value),
                        not_met_lines=tuple(c.not_met_lines),
                        show_not_met=c.show_not_met,
                    )
                    for c in e.conditions
                ),
                settings=settings,
            )
        )
    return EnchantRegistry(
        enchants,
        types=list(types.values()),
        default_type=spec.default_type,
        targets=spec.targets,
        settings=settings,
    )


# Public API


def load_enchants(path: Path, config: DisplayConfig | None = None) -> EnchantRegistry:
    return build_registry(_load(path, "enchants", RegistryFile), config)


def item_from_file(spec: ItemFile, markup: TagMarkup | None = None) -> Item:
    unknown = sorted(set(spec.flags) - ITEM_FLAGS)
    if unknown:
        raise ConfigError(f"unknown item flags: {', '.join(unknown)}")
    markup = markup or TagMarkup()
    return Item(
        material=spec.material.lower(),
        lore=markup.deserialize_all(spec.lore),
        flags=set(spec.flags),
        enchants=dict(spec.enchants),
        stored_enchants=dict(spec.stored_enchants),
        data=PersistentData(spec.data),
        stored_enchants_shown=spec.stored_enchants_shown,
    )


def load_item(path: Path, markup: TagMarkup | None = None) -> Item:
    return item_from_file(_load(path, "item", ItemFile), markup)


def load_viewer(path: Path) -> Viewer:
    spec: ViewerFile = _load(path, "viewer", ViewerFile)
    return Viewer(
        name=spec.name,
        permissions=frozenset(spec.permissions),
        level=spec.level,
        world=spec.world,
        sees_descriptions=spec.sees_descriptions,
    )


__all__ = ["build_registry", "item_from_file", "load_enchants", "load_item", "load_viewer"]
