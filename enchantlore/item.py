from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Set

from rich.text import Text

HIDE_ENCHANTS = "hide_enchants"
HIDE_ATTRIBUTES = "hide_attributes"
HIDE_UNBREAKABLE = "hide_unbreakable"
HIDE_ADDITIONAL_TOOLTIP = "hide_additional_tooltip"
HIDE_STORED_ENCHANTS = "hide_stored_enchants"

ITEM_FLAGS = frozenset(
    {
        HIDE_ENCHANTS,
        HIDE_ATTRIBUTES,
        HIDE_UNBREAKABLE,
        HIDE_ADDITIONAL_TOOLTIP,
        HIDE_STORED_ENCHANTS,
    }
)

ENCHANTED_BOOK = "enchanted_book"
BOOK = "book"


class PersistentData:
    """Typed key/value store carried by an item across sessions."""

    def __init__(self, values: Dict[str, int | List[str]] | None = None) -> None:
        self._values: Dict[str, int | List[str]] = {}
        for key, value in (values or {}).items():
            if isinstance(value, list):
                self.set_strings(key, value)
            else:
                self.set_int(key, value)

    def get_int(self, key: str, default: int | None = None) -> int | None:
        value = self._values.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return default

    def set_int(self, key: str, value: int) -> None:
        self._values[key] = int(value)

    def get_strings(self, key: str) -> List[str]:
        value = self._values.get(key)
        if isinstance(value, list):
            return list(value)
        return []

    def set_strings(self, key: str, values: Iterable[str]) -> None:
        self._values[key] = [str(v) for v in values]

    def has(self, key: str) -> bool:
        return key in self._values

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def to_dict(self) -> Dict[str, int | List[str]]:
        return copy.deepcopy(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PersistentData):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"PersistentData({self._values!r})"


@dataclass
class Item:
    material: str
    lore: List[Text] = field(default_factory=list)
    flags: Set[str] = field(default_factory=set)
    enchants: Dict[str, int] = field(default_factory=dict)
    stored_enchants: Dict[str, int] = field(default_factory=dict)
    data: PersistentData = field(default_factory=PersistentData)
    # tooltip component newer hosts use instead of a hide flag
    stored_enchants_shown: bool = True

    def add_flags(self, *flags: str) -> None:
        for flag in flags:
            if flag not in ITEM_FLAGS:
                raise ValueError(f"unknown item flag: {flag}")
            self.flags.add(flag)

    def remove_flags(self, *flags: str) -> None:
        for flag in flags:
            self.flags.discard(flag)

    def has_flag(self, flag: str) -> bool:
        return flag in self.flags

    @property
    def is_enchanted_book(self) -> bool:
        return self.material == ENCHANTED_BOOK

    def get_enchants(self, check_stored: bool = True) -> Dict[str, int]:
        """Enchantments on the item; stored ones (books) win on duplicate ids."""
        out = dict(self.enchants)
        if check_stored:
            out.update(self.stored_enchants)
        return out

    def copy(self) -> "Item":
        return copy.deepcopy(self)


__all__ = [
    "BOOK",
    "ENCHANTED_BOOK",
    "HIDE_ADDITIONAL_TOOLTIP",
    "HIDE_ATTRIBUTES",
    "HIDE_ENCHANTS",
    "HIDE_STORED_ENCHANTS",
    "HIDE_UNBREAKABLE",
    "ITEM_FLAGS",
    "Item",
    "PersistentData",
]
