from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet


@dataclass(frozen=True)
class Viewer:
    """The player an item is being displayed to."""

    name: str
    permissions: FrozenSet[str] = field(default_factory=frozenset)
    level: int = 0
    world: str = "world"
    # per-player opt-in for enchantment descriptions
    sees_descriptions: bool = True

    def has_permission(self, node: str) -> bool:
        if node in self.permissions or "*" in self.permissions:
            return True
        # "enchantlore.*" grants "enchantlore.anything"
        parts = node.split(".")
        return any(".".join(parts[:i]) + ".*" in self.permissions for i in range(1, len(parts)))
