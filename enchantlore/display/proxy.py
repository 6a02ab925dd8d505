"""Hiding the stored enchantments of enchanted books.

Older hosts hide them with an item flag; newer ones dropped that flag and
use a tooltip component instead. The display code only sees the protocol.
"""

from __future__ import annotations

from typing import Protocol

from ..item import HIDE_STORED_ENCHANTS, Item


class HideStoredEnchantsProxy(Protocol):
    def hide_stored_enchants(self, item: Item) -> None: ...

    def show_stored_enchants(self, item: Item) -> None: ...

    def are_stored_enchants_hidden(self, item: Item) -> bool: ...


class FlagStoredEnchantsProxy:
    def hide_stored_enchants(self, item: Item) -> None:
        item.add_flags(HIDE_STORED_ENCHANTS)

    def show_stored_enchants(self, item: Item) -> None:
        item.remove_flags(HIDE_STORED_ENCHANTS)

    def are_stored_enchants_hidden(self, item: Item) -> bool:
        return item.has_flag(HIDE_STORED_ENCHANTS)


class ComponentStoredEnchantsProxy:
    def hide_stored_enchants(self, item: Item) -> None:
        item.stored_enchants_shown = False

    def show_stored_enchants(self, item: Item) -> None:
        item.stored_enchants_shown = True

    def are_stored_enchants_hidden(self, item: Item) -> bool:
        return not item.stored_enchants_shown


_PROXIES = {
    "legacy": FlagStoredEnchantsProxy,
    "modern": ComponentStoredEnchantsProxy,
}


def proxy_for(host: str = "modern") -> HideStoredEnchantsProxy:
    try:
        return _PROXIES[host.lower()]()
    except KeyError:
        raise ValueError(f"unknown host '{host}', expected one of {sorted(_PROXIES)}") from None


__all__ = [
    "ComponentStoredEnchantsProxy",
    "FlagStoredEnchantsProxy",
    "HideStoredEnchantsProxy",
    "proxy_for",
]
