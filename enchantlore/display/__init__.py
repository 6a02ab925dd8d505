"""Item display modules."""

from .base import Display, DisplayModule, DisplayProperties  # noqa: F401
from .enchant_display import EnchantDisplay  # noqa: F401
from .proxy import HideStoredEnchantsProxy, proxy_for  # noqa: F401

__all__ = [
    "Display",
    "DisplayModule",
    "DisplayProperties",
    "EnchantDisplay",
    "HideStoredEnchantsProxy",
    "proxy_for",
]
