import pytest

from enchantlore.enchants import Condition, EnchantType, Enchantment, FormatSettings, to_numeral
from enchantlore.item import Item
from enchantlore.viewer import Viewer


def test_numerals():
    assert [to_numeral(n) for n in (1, 4, 5, 9, 10, 14, 40)] == ["I", "IV", "V", "IX", "X", "XIV", "XL"]
    assert to_numeral(0) == "0"


def test_formatted_name(registry):
    sharp = registry.get("sharpness")
    assert sharp.formatted_name(5) == "&7Sharpness V"
    assert sharp.formatted_name(5, show_not_met=True) == "&7&mSharpness V"
    # single-level enchantments drop the level
    assert registry.get("mending").formatted_name(1) == "&7Mending"
    assert registry.get("vanishing_curse").formatted_name(1) == "&cCurse of Vanishing"


def test_level_above_numeral_threshold_is_arabic():
    e = Enchantment("x", "Power", EnchantType("normal"), max_level=20, settings=FormatSettings(numerals_threshold=10))
    assert e.formatted_name(10) == "&7Power X"
    assert e.formatted_name(11) == "&7Power 11"
    no_numerals = Enchantment("x", "Power", EnchantType("normal"), max_level=20, settings=FormatSettings(numerals=False))
    assert no_numerals.formatted_name(3) == "&7Power 3"


def test_wrap_unknown_enchant_is_basic(registry):
    e = registry.wrap("minecraft:fire_aspect")
    assert e.name == "Fire Aspect"
    assert not e.supports_extended_display
    assert e.formatted_name(2) == "&7Fire Aspect II"
    assert e.formatted_description(2) == []
    assert e.not_met_lines(2, Viewer("a")) == []


def test_sort_for_display_uses_type_then_id(registry):
    ids = ["vanishing_curse", "unbreaking", "dust_artifact", "sharpness", "bleed"]
    assert registry.sort_for_display(ids) == ["bleed", "sharpness", "unbreaking", "dust_artifact", "vanishing_curse"]


def test_description_placeholders(registry):
    bleed = registry.get("bleed")
    assert bleed.formatted_description(2) == ["&8Deals 5 damage"]
    assert registry.get("sharpness").formatted_description(5) == []


def test_description_word_wrap():
    e = Enchantment(
        "soulbound",
        "Soulbound",
        EnchantType("special", "&d"),
        kind="extended",
        description=("Stays with {player} after death and respawn",),
        settings=FormatSettings(word_wrap=20),
    )
    assert e.formatted_description(1, Viewer("Alex")) == ["&8Stays with Alex", "&8after death and", "&8respawn"]


def test_conditions_and_not_met(registry):
    bleed = registry.get("bleed")
    novice = Viewer("novice", level=3)
    veteran = Viewer("veteran", level=30)
    assert bleed.not_met_lines(1, novice) == ["&cBleed requires level 10"]
    assert bleed.is_showing_any_not_met(1, novice)
    assert bleed.not_met_lines(1, veteran) == []
    assert not bleed.is_showing_any_not_met(1, veteran)


@pytest.mark.parametrize(
    "condition, viewer, met",
    [
        (Condition("permission", "enchantlore.soulbound"), Viewer("a", permissions=frozenset({"enchantlore.*"})), True),
        (Condition("permission", "enchantlore.soulbound"), Viewer("a"), False),
        (Condition("world", "nether"), Viewer("a", world="nether"), True),
        (Condition("min-level", "5"), Viewer("a", level=4), False),
    ],
)
def test_condition_kinds(condition, viewer, met):
    assert condition.is_met(viewer) is met


def test_is_enchantable(registry):
    assert registry.is_enchantable(Item("diamond_sword"))
    assert registry.is_enchantable(Item("enchanted_book"))
    assert registry.is_enchantable(Item("stick", enchants={"sharpness": 1}))
    assert not registry.is_enchantable(Item("stick"))
