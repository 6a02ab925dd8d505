from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from ..item import Item
from ..logging import get_logger
from ..viewer import Viewer

log = get_logger(__name__)

LOWEST = 0
LOW = 1
NORMAL = 2
HIGH = 3
HIGHEST = 4


@dataclass(frozen=True)
class DisplayProperties:
    in_inventory: bool = True
    in_gui: bool = False


class DisplayModule:
    """One step of item display; ``revert`` undoes what ``display`` wrote."""

    name = "module"
    priority = NORMAL

    def display(self, item: Item, viewer: Optional[Viewer], props: DisplayProperties, *args: Any) -> None:
        raise NotImplementedError

    def revert(self, item: Item) -> None:
        pass

    def generate_args(self, item: Item) -> Tuple[Any, ...]:
        return ()


class Display:
    """Runs registered modules in priority order, and in reverse to revert."""

    def __init__(self) -> None:
        self._modules: List[DisplayModule] = []

    def register(self, module: DisplayModule) -> None:
        self._modules.append(module)
        # sort is stable so equal priorities keep registration order
        self._modules.sort(key=lambda m: m.priority)

    @property
    def modules(self) -> List[DisplayModule]:
        return list(self._modules)

    def display(self, item: Item, viewer: Optional[Viewer] = None, props: DisplayProperties | None = None) -> Item:
        props = props or DisplayProperties()
        for module in self._modules:
            args = module.generate_args(item)
            log.debug("display %s with args %r", module.name, args)
            module.display(item, viewer, props, *args)
        return item

    def revert(self, item: Item) -> Item:
        for module in reversed(self._modules):
            module.revert(item)
        return item


__all__ = [
    "Display",
    "DisplayModule",
    "DisplayProperties",
    "HIGH",
    "HIGHEST",
    "LOW",
    "LOWEST",
    "NORMAL",
]
