import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from enchantlore.config import DisplayConfig  # noqa: E402
from enchantlore.display import EnchantDisplay  # noqa: E402
from enchantlore.display.proxy import FlagStoredEnchantsProxy  # noqa: E402
from enchantlore.item import Item  # noqa: E402
from enchantlore.markup import TagMarkup  # noqa: E402
from enchantlore.models import RegistryFile  # noqa: E402
from enchantlore.validation import build_registry  # noqa: E402

DATA_DIR = ROOT / "data"

REGISTRY = {
    "types": {"normal": {"format": "&7"}, "special": {"format": "&d"}, "curse": {"format": "&c"}},
    "targets": {"sword": ["diamond_sword", "iron_sword"]},
    "enchants": {
        "sharpness": {"name": "Sharpness", "max-level": 5},
        "unbreaking": {"name": "Unbreaking", "max-level": 3},
        "mending": {"name": "Mending"},
        "vanishing_curse": {"name": "Curse of Vanishing", "type": "curse"},
        "dust_artifact": {
            "name": "Dust Artifact",
            "type": "special",
            "kind": "extended",
            "description": ["Leaves crit particles"],
        },
        "bleed": {
            "name": "Bleed",
            "max-level": 3,
            "kind": "extended",
            "description": ["Deals {damage} damage"],
            "placeholders": {"damage": {"base": 1, "per-level": 2}},
            "conditions": [
                {
                    "type": "min-level",
                    "value": 10,
                    "show-not-met": True,
                    "not-met-lines": ["&cBleed requires level 10"],
                }
            ],
        },
    },
}


@pytest.fixture
def config():
    return DisplayConfig()


@pytest.fixture
def registry(config):
    return build_registry(RegistryFile.model_validate(REGISTRY), config)


@pytest.fixture
def module(registry, config):
    return EnchantDisplay(registry, config, proxy=FlagStoredEnchantsProxy())


@pytest.fixture
def markup():
    return TagMarkup()


@pytest.fixture
def sword(markup):
    return Item(
        material="diamond_sword",
        lore=[markup.deserialize_legacy("&7An old blade")],
        enchants={"unbreaking": 3, "sharpness": 5},
    )
