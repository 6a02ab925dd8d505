from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from rich.text import Text

from ..config import DisplayConfig
from ..enchants import EnchantRegistry, Enchantment, FormatSettings
from ..item import HIDE_ENCHANTS, Item, PersistentData
from ..legacy import legacy_to_tags
from ..logging import get_logger
from ..markup import TagMarkup
from ..viewer import Viewer
from .base import HIGH, DisplayModule, DisplayProperties
from .proxy import HideStoredEnchantsProxy, proxy_for

log = get_logger(__name__)

# persisted toggle: SHOWN, HIDDEN, or absent (UNSET)
HIDE_STATE_KEY = "enchantlore:ecoenchantlore-skip"
GENERATED_LORE_KEY = "enchantlore:generated-lore"
NOT_MET_LORE_KEY = "enchantlore:not-met-lore"

SHOWN = 0
HIDDEN = 1
UNSET = -1


@dataclass(frozen=True)
class DisplayableEnchant:
    enchant: Enchantment
    level: int


def _find_block(lines: Sequence[Text], block: Sequence[Text], *, last: bool) -> int:
    size = len(block)
    starts = range(len(lines) - size, -1, -1) if last else range(len(lines) - size + 1)
    for i in starts:
        if list(lines[i : i + size]) == list(block):
            return i
    return -1


class EnchantDisplay(DisplayModule):
    """Writes enchantment lore onto items and takes it off again.

    Everything that has to survive between calls lives on the item: the
    show/hide toggle under :data:`HIDE_STATE_KEY` and the markup of the lines
    this module generated, so a later call can find and replace them without
    touching lore written by anyone else.
    """

    name = "enchants"
    priority = HIGH

    def __init__(
        self,
        registry: EnchantRegistry,
        config: DisplayConfig | None = None,
        *,
        proxy: HideStoredEnchantsProxy | None = None,
        markup: TagMarkup | None = None,
    ) -> None:
        self.registry = registry
        self.config = config or DisplayConfig()
        self.proxy = proxy or proxy_for("modern")
        self.markup = markup or TagMarkup()

    def _eligible(self, item: Item, config: DisplayConfig) -> bool:
        return self.registry.is_enchantable(item) or not config.require_enchantable

    def render(self, item: Item, viewer: Optional[Viewer] = None, hide: bool = False) -> None:
        self.display(item, viewer, DisplayProperties(), hide)

    def display(self, item: Item, viewer: Optional[Viewer], props: DisplayProperties, *args: Any) -> None:
        config = self.config
        if not self._eligible(item, config):
            return

        data = item.data

        # args[0]: hide enchants
        if args and args[0]:
            item.add_flags(HIDE_ENCHANTS)
            if item.is_enchanted_book:
                self.proxy.hide_stored_enchants(item)
            item.lore = self._strip_generated(item)
            data.remove(GENERATED_LORE_KEY)
            data.remove(NOT_MET_LORE_KEY)
            data.set_int(HIDE_STATE_KEY, HIDDEN)
            return
        data.set_int(HIDE_STATE_KEY, SHOWN)

        old_lore = self._strip_generated(item)

        unsorted = item.get_enchants(check_stored=True)
        settings = FormatSettings.from_config(config)
        enchants = [
            (replace(self.registry.wrap(eid), settings=settings), unsorted[eid])
            for eid in self.registry.sort_for_display(unsorted)
        ]

        should_collapse = config.collapse.enabled and len(enchants) > config.collapse.threshold
        should_describe = (
            config.descriptions.enabled
            and len(enchants) <= config.descriptions.threshold
            and (viewer is None or viewer.sees_descriptions)
        )
        prefix = config.prefix

        entries: List[DisplayableEnchant] = []
        formatted_names: Dict[DisplayableEnchant, str] = {}
        not_met_lines: List[str] = []

        for enchant, level in enchants:
            show_not_met = False
            if viewer is not None and enchant.supports_extended_display:
                lines = [prefix + line for line in enchant.not_met_lines(level, viewer)]
                not_met_lines.extend(lines)
                if lines or enchant.is_showing_any_not_met(level, viewer):
                    show_not_met = True

            entry = DisplayableEnchant(enchant, level)
            entries.append(entry)
            formatted_names[entry] = enchant.formatted_name(level, show_not_met=show_not_met)

        enchant_lore: List[str] = []
        if should_collapse:
            per_line = config.collapse.per_line
            names = [formatted_names[entry] for entry in entries]
            for start in range(0, len(names), per_line):
                enchant_lore.append(prefix + config.collapse.delimiter.join(names[start : start + per_line]))
        else:
            for entry in entries:
                enchant_lore.append(prefix + formatted_names[entry])
                if should_describe:
                    enchant_lore.extend(
                        prefix + line
                        for line in entry.enchant.formatted_description(entry.level, viewer)
                        if line
                    )

        log.debug(
            "rendering %d enchants (collapse=%s, describe=%s, not-met lines=%d)",
            len(enchants),
            should_collapse,
            should_describe,
            len(not_met_lines),
        )

        item.add_flags(HIDE_ENCHANTS)
        if item.is_enchanted_book:
            self.proxy.hide_stored_enchants(item)

        head = [legacy_to_tags(line) for line in enchant_lore]
        tail = [legacy_to_tags(line) for line in not_met_lines]
        item.lore = self._parse(head) + old_lore + self._parse(tail)
        _record(data, GENERATED_LORE_KEY, head)
        _record(data, NOT_MET_LORE_KEY, tail)

    def revert(self, item: Item) -> None:
        if not self._eligible(item, self.config):
            return

        data = item.data

        if self.hide_state(item) != HIDDEN:
            item.remove_flags(HIDE_ENCHANTS)
            if item.is_enchanted_book:
                self.proxy.show_stored_enchants(item)

        item.lore = self._strip_generated(item)
        data.remove(GENERATED_LORE_KEY)
        data.remove(NOT_MET_LORE_KEY)
        data.remove(HIDE_STATE_KEY)

    def generate_args(self, item: Item) -> Tuple[bool]:
        state = self.hide_state(item)
        if state == HIDDEN:
            return (True,)
        if state == SHOWN:
            return (False,)
        return (item.has_flag(HIDE_ENCHANTS) or self.proxy.are_stored_enchants_hidden(item),)

    @staticmethod
    def hide_state(item: Item) -> int:
        return item.data.get_int(HIDE_STATE_KEY, UNSET)

    def _parse(self, markup: Sequence[str]) -> List[Text]:
        return [self.markup.deserialize(line) for line in markup]

    def _strip_generated(self, item: Item) -> List[Text]:
        """Item lore without the blocks recorded by an earlier render."""
        lore = list(item.lore)
        for key, last in ((GENERATED_LORE_KEY, False), (NOT_MET_LORE_KEY, True)):
            block = self._parse(item.data.get_strings(key))
            if not block:
                continue
            start = _find_block(lore, block, last=last)
            if start < 0:
                log.debug("recorded %s not found in lore, leaving lore as is", key)
                continue
            del lore[start : start + len(block)]
        return lore


def _record(data: PersistentData, key: str, lines: List[str]) -> None:
    if lines:
        data.set_strings(key, lines)
    else:
        data.remove(key)


__all__ = [
    "DisplayableEnchant",
    "EnchantDisplay",
    "GENERATED_LORE_KEY",
    "HIDDEN",
    "HIDE_STATE_KEY",
    "NOT_MET_LORE_KEY",
    "SHOWN",
    "UNSET",
]
