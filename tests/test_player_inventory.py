from sigdungeon.config import GameConfig
from sigdungeon.models.inventory import Inventory
from sigdungeon.models.item import Item, ItemType, SlotType
from sigdungeon.models.player import Player
from sigdungeon.signature import Signature


def _sword(name="Sword", attack=4.0, defense=1.0, speed=0.0):
    return Item(name=name, type=ItemType.SWORD, power=5, signature=Signature.zero(), attack=attack, defense=defense, speed=speed)


def test_base_stats_without_equipment():
    stats = Player().calculate_stats()
    assert (stats.max_health, stats.attack, stats.defense, stats.speed) == (100, 10, 5, 10)
    assert stats.remaining_health == 100


def test_equipment_adds_contributions_and_recomputes():
    player = Player()
    player.equip(_sword())
    player.equip(Item(name="Boots", type=ItemType.BOOTS, speed=3.0))
    stats = player.calculate_stats()
    assert stats.attack == 14
    assert stats.defense == 6
    assert stats.speed == 13

    player.unequip(SlotType.BOOTS)
    assert player.calculate_stats().speed == 10


def test_equip_returns_displaced_item():
    player = Player()
    first = _sword("Old Sword")
    second = _sword("New Sword")
    assert player.equip(first) is None
    assert player.equip(second) is first
    assert player.equipped(SlotType.WEAPON) is second
    assert player.equipped_items() == [second]


def test_stats_use_configured_base():
    cfg = GameConfig.from_dict({"player": {"base_health": 50, "base_attack": 3}})
    stats = Player().calculate_stats(cfg)
    assert stats.max_health == 50
    assert stats.attack == 3


def test_inventory_capacity():
    inv = Inventory(capacity=2)
    a, b, c = _sword("A"), _sword("B"), _sword("C")
    assert inv.add(a)
    assert inv.add(b)
    assert inv.is_full
    assert not inv.add(c)
    assert len(inv) == 2
    assert c not in inv


def test_inventory_extend_reports_overflow():
    inv = Inventory(capacity=1)
    a, b = _sword("A"), _sword("B")
    assert inv.extend([a, b]) == [b]
    assert list(inv) == [a]


def test_inventory_take_and_remove():
    inv = Inventory()
    a = _sword("A")
    inv.add(a)
    assert inv.find(a.id) is a
    assert inv.take(a.id) is a
    assert inv.take(a.id) is None
    assert not inv.remove(a)
