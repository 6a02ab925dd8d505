from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple

from .config import DisplayConfig
from .item import BOOK, ENCHANTED_BOOK, Item
from .viewer import Viewer

EnchantKind = Literal["basic", "extended"]
ConditionKind = Literal["permission", "min-level", "world"]

_PLACEHOLDER = re.compile(r"\{([a-z][a-z0-9_-]*)\}")

_ROMAN = (
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)


def to_numeral(n: int) -> str:
    if n <= 0:
        return str(n)
    out = []
    for value, sym in _ROMAN:
        count, n = divmod(n, value)
        out.append(sym * count)
    return "".join(out)


def _fmt_number(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else f"{v:g}"


@dataclass(frozen=True)
class FormatSettings:
    numerals: bool = True
    numerals_threshold: int = 10
    not_met_format: str = "&m"
    description_format: str = "&8"
    word_wrap: int = 40

    @classmethod
    def from_config(cls, config: DisplayConfig) -> "FormatSettings":
        return cls(
            numerals=config.numerals.enabled,
            numerals_threshold=config.numerals.threshold,
            not_met_format=config.not_met.format,
            description_format=config.descriptions.format,
            word_wrap=config.descriptions.word_wrap,
        )

    def level_text(self, level: int) -> str:
        if self.numerals and level <= self.numerals_threshold:
            return to_numeral(level)
        return str(level)


@dataclass(frozen=True)
class EnchantType:
    id: str
    format: str = "&7"
    priority: int = 0


@dataclass(frozen=True)
class Placeholder:
    base: float = 0.0
    per_level: float = 1.0

    def value(self, level: int) -> str:
        return _fmt_number(self.base + self.per_level * level)


@dataclass(frozen=True)
class Condition:
    kind: ConditionKind
    value: str
    not_met_lines: Tuple[str, ...] = ()
    show_not_met: bool = False

    def is_met(self, viewer: Viewer) -> bool:
        if self.kind == "permission":
            return viewer.has_permission(self.value)
        if self.kind == "min-level":
            return viewer.level >= int(self.value)
        if self.kind == "world":
            return viewer.world == self.value
        raise ValueError(f"unknown condition kind: {self.kind}")


@dataclass(frozen=True)
class Enchantment:
    """An enchantment as far as lore is concerned.

    ``basic`` entries (vanilla or unregistered enchantments) only have a name.
    ``extended`` entries also carry descriptions and viewer conditions whose
    "not met" lines are shown under the item lore.
    """

    id: str
    name: str
    type: EnchantType
    max_level: int = 1
    kind: EnchantKind = "basic"
    description: Tuple[str, ...] = ()
    placeholders: Mapping[str, Placeholder] = field(default_factory=dict, hash=False, compare=False)
    conditions: Tuple[Condition, ...] = ()
    settings: FormatSettings = field(default_factory=FormatSettings, compare=False)

    @property
    def supports_extended_display(self) -> bool:
        return self.kind == "extended"

    def formatted_name(self, level: int, show_not_met: bool = False) -> str:
        name = self.type.format
        if show_not_met:
            name += self.settings.not_met_format
        name += self.name
        if not (self.max_level == 1 and level == 1):
            name += " " + self.settings.level_text(level)
        return name

    def _substitute(self, line: str, level: int, viewer: Optional[Viewer]) -> str:
        def repl(m: re.Match) -> str:
            key = m.group(1)
            if key == "level":
                return str(level)
            if key == "player":
                return viewer.name if viewer is not None else ""
            ph = self.placeholders.get(key)
            return ph.value(level) if ph is not None else m.group(0)

        return _PLACEHOLDER.sub(repl, line)

    def formatted_description(self, level: int, viewer: Optional[Viewer] = None) -> List[str]:
        if not self.supports_extended_display:
            return []
        fmt = self.settings.description_format
        out: List[str] = []
        for template in self.description:
            line = self._substitute(template, level, viewer)
            wrapped = textwrap.wrap(line, width=self.settings.word_wrap) or [""]
            out.extend(fmt + piece if piece else "" for piece in wrapped)
        return out

    def _unmet(self, viewer: Viewer) -> List[Condition]:
        if not self.supports_extended_display:
            return []
        return [c for c in self.conditions if not c.is_met(viewer)]

    def not_met_lines(self, level: int, viewer: Viewer) -> List[str]:
        return [self._substitute(line, level, viewer) for c in self._unmet(viewer) for line in c.not_met_lines]

    def is_showing_any_not_met(self, level: int, viewer: Viewer) -> bool:
        return any(c.show_not_met for c in self._unmet(viewer))


class EnchantRegistry:
    def __init__(
        self,
        enchants: Iterable[Enchantment] = (),
        *,
        types: Sequence[EnchantType] = (),
        default_type: str = "normal",
        targets: Mapping[str, Iterable[str]] | None = None,
        settings: FormatSettings | None = None,
    ) -> None:
        self.settings = settings or FormatSettings()
        self._types: Dict[str, EnchantType] = {t.id: t for t in types}
        if default_type not in self._types:
            self._types[default_type] = EnchantType(default_type, priority=len(self._types))
        self.default_type = self._types[default_type]
        self._enchants: Dict[str, Enchantment] = {e.id: e for e in enchants}
        self.targets: Dict[str, frozenset[str]] = {
            name: frozenset(m.lower() for m in materials) for name, materials in (targets or {}).items()
        }

    def get(self, enchant_id: str) -> Enchantment | None:
        return self._enchants.get(enchant_id)

    def get_type(self, type_id: str) -> EnchantType | None:
        return self._types.get(type_id)

    def wrap(self, enchant_id: str) -> Enchantment:
        """Registered enchantment, or a basic stand-in for ids nobody registered."""
        found = self._enchants.get(enchant_id)
        if found is not None:
            return found
        name = enchant_id.split(":")[-1].replace("_", " ").title()
        return Enchantment(
            id=enchant_id,
            name=name,
            type=self.default_type,
            max_level=255,
            settings=self.settings,
        )

    def sort_for_display(self, enchant_ids: Iterable[str]) -> List[str]:
        return sorted(enchant_ids, key=lambda eid: (self.wrap(eid).type.priority, eid))

    def targets_for(self, item: Item) -> List[str]:
        return sorted(name for name, mats in self.targets.items() if item.material in mats)

    def is_enchantable(self, item: Item) -> bool:
        if item.material in (BOOK, ENCHANTED_BOOK):
            return True
        return bool(self.targets_for(item)) or bool(item.get_enchants())

    def __contains__(self, enchant_id: object) -> bool:
        return enchant_id in self._enchants

    def __iter__(self):
        return iter(self._enchants.values())

    def __len__(self) -> int:
        return len(self._enchants)


__all__ = [
    "Condition",
    "EnchantKind",
    "EnchantRegistry",
    "EnchantType",
    "Enchantment",
    "FormatSettings",
    "Placeholder",
    "to_numeral",
]
