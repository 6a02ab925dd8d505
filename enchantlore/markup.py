from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List

from rich.style import Style
from rich.text import Text

from .legacy import legacy_to_tags

# Minecraft chat palette
NAMED_COLORS: Dict[str, str] = {
    "black": "#000000",
    "dark_blue": "#0000AA",
    "dark_green": "#00AA00",
    "dark_aqua": "#00AAAA",
    "dark_red": "#AA0000",
    "dark_purple": "#AA00AA",
    "gold": "#FFAA00",
    "gray": "#AAAAAA",
    "dark_gray": "#555555",
    "blue": "#5555FF",
    "green": "#55FF55",
    "aqua": "#55FFFF",
    "red": "#FF5555",
    "light_purple": "#FF55FF",
    "yellow": "#FFFF55",
    "white": "#FFFFFF",
}

DECORATIONS: Dict[str, str] = {
    "b": "bold",
    "bold": "bold",
    "i": "italic",
    "em": "italic",
    "italic": "italic",
    "u": "underline",
    "underlined": "underline",
    "st": "strike",
    "strikethrough": "strike",
    # no terminal equivalent of obfuscated text
    "obf": "blink",
    "obfuscated": "blink",
}

_TAG = re.compile(r"<(/?)(!?)(#[0-9A-Fa-f]{6}|[a-z_]+)>")


@dataclass(frozen=True)
class _State:
    color: str | None = None
    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    strike: bool | None = None
    blink: bool | None = None

    def style(self) -> Style | None:
        if self == _State():
            return None
        return Style(
            color=self.color,
            bold=self.bold,
            italic=self.italic,
            underline=self.underline,
            strike=self.strike,
            blink=self.blink,
        )


class TagMarkup:
    """Parse the tag dialect produced by :func:`legacy_to_tags` into rich text.

    Colours replace each other, decorations stack, ``<reset>`` drops
    everything and ``<!x>`` explicitly switches decoration ``x`` off. Tags the
    parser does not know are kept as literal text.
    """

    def deserialize(self, markup: str) -> Text:
        text = Text()
        state = _State()
        pos = 0
        for m in _TAG.finditer(markup):
            new_state = self._apply(state, closing=bool(m.group(1)), negate=bool(m.group(2)), name=m.group(3))
            if new_state is None:
                continue
            self._append(text, markup[pos : m.start()], state)
            state = new_state
            pos = m.end()
        self._append(text, markup[pos:], state)
        return text

    def deserialize_legacy(self, legacy: str) -> Text:
        return self.deserialize(legacy_to_tags(legacy))

    def deserialize_all(self, lines: Iterable[str]) -> List[Text]:
        return [self.deserialize_legacy(line) for line in lines]

    @staticmethod
    def _append(text: Text, chunk: str, state: _State) -> None:
        if chunk:
            text.append(chunk, style=state.style())

    @staticmethod
    def _apply(state: _State, *, closing: bool, negate: bool, name: str) -> _State | None:
        if name == "reset" and not (closing or negate):
            return _State()
        if name.startswith("#") or name in NAMED_COLORS:
            if negate:
                return None
            if closing:
                return replace(state, color=None)
            return replace(state, color=NAMED_COLORS.get(name, name.upper()))
        attr = DECORATIONS.get(name)
        if attr is None:
            return None
        if closing:
            return replace(state, **{attr: None})
        return replace(state, **{attr: not negate})


__all__ = ["NAMED_COLORS", "TagMarkup"]
