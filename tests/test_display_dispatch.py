from enchantlore.display import Display, DisplayModule, EnchantDisplay
from enchantlore.display.base import HIGH, LOW
from enchantlore.item import HIDE_ENCHANTS


class Recorder(DisplayModule):
    def __init__(self, name, priority, calls):
        self.name = name
        self.priority = priority
        self.calls = calls

    def display(self, item, viewer, props, *args):
        self.calls.append(("display", self.name, args))

    def revert(self, item):
        self.calls.append(("revert", self.name))

    def generate_args(self, item):
        return (self.name,)


def test_modules_run_in_priority_order_and_revert_in_reverse(sword):
    calls = []
    display = Display()
    display.register(Recorder("late", HIGH, calls))
    display.register(Recorder("early", LOW, calls))

    display.display(sword)
    display.revert(sword)

    assert calls == [
        ("display", "early", ("early",)),
        ("display", "late", ("late",)),
        ("revert", "late"),
        ("revert", "early"),
    ]


def test_enchant_display_uses_its_own_args(module, sword):
    display = Display()
    display.register(module)
    sword.add_flags(HIDE_ENCHANTS)

    # flag set without a toggle: derived as hidden, lore untouched
    before = list(sword.lore)
    display.display(sword)
    assert sword.lore == before
    assert module.hide_state(sword) == 1

    display.revert(sword)
    assert sword.has_flag(HIDE_ENCHANTS)


def test_enchant_display_visible_through_dispatch(module, sword):
    display = Display()
    display.register(module)
    display.display(sword)
    display.display(sword)
    assert [line.plain for line in sword.lore] == ["Sharpness V", "Unbreaking III", "An old blade"]
    assert isinstance(display.modules[0], EnchantDisplay)
