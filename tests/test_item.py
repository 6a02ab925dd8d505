import pytest

from enchantlore.item import HIDE_ENCHANTS, Item, PersistentData


def test_persistent_data_typed_access():
    data = PersistentData({"count": 3, "lines": ["a", "b"]})
    assert data.get_int("count") == 3
    assert data.get_int("lines") is None
    assert data.get_int("missing", -1) == -1
    assert data.get_strings("lines") == ["a", "b"]
    assert data.get_strings("count") == []
    data.remove("count")
    data.remove("count")
    assert not data.has("count")
    assert list(data.keys()) == ["lines"]


def test_get_strings_returns_a_copy():
    data = PersistentData()
    data.set_strings("k", ["a"])
    data.get_strings("k").append("b")
    assert data.get_strings("k") == ["a"]


def test_flags():
    item = Item("diamond_sword")
    item.add_flags(HIDE_ENCHANTS)
    assert item.has_flag(HIDE_ENCHANTS)
    item.remove_flags(HIDE_ENCHANTS, HIDE_ENCHANTS)
    assert not item.has_flag(HIDE_ENCHANTS)
    with pytest.raises(ValueError):
        item.add_flags("hide_everything")


def test_get_enchants_merges_stored():
    book = Item("enchanted_book", enchants={"mending": 1, "unbreaking": 1}, stored_enchants={"unbreaking": 3})
    assert book.get_enchants() == {"mending": 1, "unbreaking": 3}
    assert book.get_enchants(check_stored=False) == {"mending": 1, "unbreaking": 1}
    assert book.is_enchanted_book


def test_copy_is_deep(sword):
    clone = sword.copy()
    clone.data.set_int("k", 1)
    clone.lore.clear()
    assert not sword.data.has("k")
    assert sword.lore
