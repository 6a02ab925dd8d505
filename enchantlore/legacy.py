"""Translate legacy ``§``/``&`` colour codes into tag markup.

Lore coming from configs, older items and other plugins still uses the two
character legacy codes (``&a``, ``§l``) and the 14 character hex form
(``&x&r&r&g&g&b&b``). :func:`legacy_to_tags` rewrites one line into the tag
dialect understood by :class:`enchantlore.markup.TagMarkup`.
"""

from __future__ import annotations

from string import hexdigits
from typing import Dict

MARKERS = frozenset("§&")

CODE_TAGS: Dict[str, str] = {
    "0": "<black>",
    "1": "<dark_blue>",
    "2": "<dark_green>",
    "3": "<dark_aqua>",
    "4": "<dark_red>",
    "5": "<dark_purple>",
    "6": "<gold>",
    "7": "<gray>",
    "8": "<dark_gray>",
    "9": "<blue>",
    "a": "<green>",
    "b": "<aqua>",
    "c": "<red>",
    "d": "<light_purple>",
    "e": "<yellow>",
    "f": "<white>",
    # legacy reset also drops the italics lore gets by default
    "r": "<reset><!i>",
    "l": "<b>",
    "m": "<st>",
    "o": "<i>",
    "n": "<u>",
    "k": "<obf>",
}

# offsets of the six digits of an ``x`` run, relative to the leading marker
_HEX_OFFSETS = (3, 5, 7, 9, 11, 13)
_HEX_RUN_LENGTH = 14


def is_color_code(c: str) -> bool:
    return c in MARKERS


def _hex_run(legacy: str, i: int) -> str | None:
    """Return the ``RRGGBB`` digits of the ``x`` run starting at ``i``, if valid."""
    if i + _HEX_RUN_LENGTH - 1 >= len(legacy):
        return None
    for off in _HEX_OFFSETS:
        if not is_color_code(legacy[i + off - 1]) or legacy[i + off] not in hexdigits:
            return None
    return "".join(legacy[i + off] for off in _HEX_OFFSETS)


def legacy_to_tags(legacy: str) -> str:
    out: list[str] = []
    i = 0
    n = len(legacy)
    while i < n:
        c = legacy[i]
        if not is_color_code(c) or i + 1 >= n:
            out.append(c)
            i += 1
            continue
        code = legacy[i + 1]
        tag = CODE_TAGS.get(code)
        if tag is not None:
            out.append(tag)
            i += 2
            continue
        if code == "x":
            digits = _hex_run(legacy, i)
            if digits is not None:
                out.append(f"<#{digits}>")
                i += _HEX_RUN_LENGTH
                continue
        # malformed: keep the marker and rescan from the next character
        out.append(c)
        i += 1
    return "".join(out)


__all__ = ["CODE_TAGS", "MARKERS", "is_color_code", "legacy_to_tags"]
