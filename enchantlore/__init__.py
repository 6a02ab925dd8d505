__all__ = [
    "__version__",
    "legacy_to_tags",
    "EnchantDisplay",
]

__version__ = "0.1.0"

from .display.enchant_display import EnchantDisplay  # noqa: E402
from .legacy import legacy_to_tags  # noqa: E402
