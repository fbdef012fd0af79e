from sigdungeon.config import GameConfig
from sigdungeon.core.rng import RandomSource
from sigdungeon.exploration.explorer import DungeonExplorer
from sigdungeon.models.item import Item, ItemType
from sigdungeon.models.player import Player
from sigdungeon.signature import Signature


def test_explorer_walks_to_and_defeats_enemy(neutral_player, make_dungeon, make_enemy):
    enemy = make_enemy(health=20, damage=5, x=3, y=2)
    dungeon = make_dungeon([enemy])

    result = DungeonExplorer().explore(dungeon, neutral_player, RandomSource(1))

    assert result.success
    assert enemy in dungeon.defeated
    assert result.player_stats.remaining_health > 0
    assert result.stats.enemies_defeated == 1
    # (0,0) -> (3,0) -> (3,2) is five moves, the fight happens on step six
    assert result.duration == 6
    assert dungeon.player_position == (3, 2)
    assert result.combat_log[0] == "Affinity bonus: 100%"
    assert result.combat_log[1] == "Entered dungeon with 1 enemies!"
    assert "Moved to Stone tile at (1, 0)" in result.combat_log
    assert "All enemies defeated! Dungeon cleared!" in result.combat_log
    assert result.loot[-1].name.startswith("Legendary ")
    assert result.combat_log[-1] == f"Found a legendary treasure: {result.loot[-1].name}!"


def test_overwhelming_enemy_fails_with_no_loot(neutral_player, make_dungeon, make_enemy):
    dungeon = make_dungeon([make_enemy(health=1000, damage=500, x=1, y=0)])
    result = DungeonExplorer().explore(dungeon, neutral_player, RandomSource(1))
    assert not result.success
    assert result.loot == ()
    assert result.player_stats.remaining_health == 0
    assert "PLAYER DEFEATED! Dungeon run failed!" in result.combat_log
    assert not any(line.startswith("Found a legendary") for line in result.combat_log)


def test_empty_dungeon_still_awards_legendary(neutral_player, make_dungeon):
    result = DungeonExplorer().explore(make_dungeon(), neutral_player, RandomSource(2))
    assert result.success
    assert result.stats.enemies_defeated == 0
    assert result.duration == 1
    assert len(result.loot) == 1
    assert result.loot[0].name.startswith("Legendary ")
    assert "DUNGEON CLEARED! Defeated 0/0 enemies." in result.combat_log


def test_legendary_prefix_is_configurable(neutral_player, make_dungeon):
    cfg = GameConfig.from_dict({"loot": {"legendary_prefix": "Mythic"}})
    result = DungeonExplorer(cfg).explore(make_dungeon(), neutral_player, RandomSource(2))
    assert result.loot[0].name.startswith("Mythic ")


def test_enemy_drop_collected(neutral_player, make_dungeon, make_enemy):
    cfg = GameConfig.from_dict({"dungeon": {"enemy_loot_chance": 1.0}})
    dungeon = make_dungeon([make_enemy(x=1, y=0)])
    result = DungeonExplorer(cfg).explore(dungeon, neutral_player, RandomSource(3))
    assert len(result.loot) == 2
    assert f"Found {result.loot[0].name} from defeated Goblin!" in result.combat_log
    assert dungeon.collected_loot == list(result.loot)


def test_no_drop_logged(neutral_player, make_dungeon, make_enemy):
    cfg = GameConfig.from_dict({"dungeon": {"enemy_loot_chance": 0.0}})
    result = DungeonExplorer(cfg).explore(make_dungeon([make_enemy(x=1, y=0)]), neutral_player, RandomSource(3))
    assert len(result.loot) == 1
    assert "No loot found from defeated Goblin." in result.combat_log


def test_passive_recovery_between_moves(neutral_player, make_dungeon, make_enemy):
    def run(cfg):
        dungeon = make_dungeon([make_enemy(x=1, y=0), make_enemy(x=4, y=4)])
        return DungeonExplorer(cfg).explore(dungeon, neutral_player, RandomSource(4))

    # Each goblin lands exactly one 2-point hit before falling
    assert run(GameConfig()).player_stats.remaining_health == 98
    no_rest = GameConfig.from_dict({"combat": {"exploration_recovery_percent": 0.0}})
    assert run(no_rest).player_stats.remaining_health == 96


def test_unreachable_enemy_exhausts_step_budget(neutral_player, make_dungeon, make_enemy):
    cfg = GameConfig.from_dict({"dungeon": {"max_exploration_steps": 25}})
    dungeon = make_dungeon([make_enemy(x=4, y=4)], lava=[(3, 4), (4, 3), (3, 3)])
    result = DungeonExplorer(cfg).explore(dungeon, neutral_player, RandomSource(5))
    assert not result.success
    assert result.duration == 25
    assert result.loot == ()
    assert result.player_stats.remaining_health == 100


def test_stuck_player_stays_put(neutral_player, make_dungeon, make_enemy):
    cfg = GameConfig.from_dict({"dungeon": {"max_exploration_steps": 3}})
    dungeon = make_dungeon([make_enemy(x=4, y=4)], lava=[(1, 0), (0, 1)])
    result = DungeonExplorer(cfg).explore(dungeon, neutral_player, RandomSource(6))
    assert dungeon.player_position == (0, 0)
    stuck = [line for line in result.combat_log if line.startswith("Player is stuck!")]
    assert len(stuck) == 3


def test_round_cap_lets_player_move_on_and_return(neutral_player, make_dungeon, make_enemy):
    stubborn = make_enemy(health=400, damage=0.1, x=1, y=0)
    dungeon = make_dungeon([stubborn])
    result = DungeonExplorer().explore(dungeon, neutral_player, RandomSource(7))
    assert "- Combat taking too long, moving on..." in result.combat_log
    assert "PLAYER DEFEATED! Dungeon run failed!" not in result.combat_log
    assert result.success
    assert stubborn in dungeon.defeated
    assert sum(line.startswith("Encountered") for line in result.combat_log) == 2


def test_selected_item_changes_affinity(make_dungeon):
    bare = Player()
    plain = DungeonExplorer().explore(make_dungeon(), bare, RandomSource(8))
    assert plain.combat_log[0] == "Affinity bonus: 0%"

    charm = Item(name="Charm", type=ItemType.AMULET, signature=Signature.zero())
    tuned = DungeonExplorer().explore(make_dungeon(), bare, RandomSource(8), selected_item=charm)
    assert tuned.combat_log[0] == "Affinity bonus: 100%"


def test_same_seed_same_exploration(neutral_player, make_dungeon, make_enemy):
    def run():
        dungeon = make_dungeon([make_enemy(x=4, y=0), make_enemy(x=0, y=4)], lava=[(2, 0), (2, 1)])
        return DungeonExplorer().explore(dungeon, neutral_player, RandomSource(11))

    a, b = run(), run()
    assert a.combat_log == b.combat_log
    assert a.duration == b.duration
