import pytest

from sigdungeon.config import GameConfig
from sigdungeon.core.rng import RandomSource
from sigdungeon.generation.dungeon import DungeonGenerator
from sigdungeon.models.enemy import EnemyArchetype
from sigdungeon.models.tile import Tile, TileType, classify_tile
from sigdungeon.signature import Signature


def _sig(temperature=0.0, wetness=0.0, resonance=0.0):
    return Signature((temperature, 0.0, wetness, 0.0, 0.0, 0.0, 0.0, resonance))


@pytest.mark.parametrize(
    "sig, expected",
    [
        (_sig(temperature=0.9, wetness=-0.9), TileType.LAVA),
        (_sig(temperature=-0.9, wetness=0.9), TileType.ICE),
        (_sig(wetness=0.9), TileType.WATER),
        (_sig(temperature=0.9, wetness=0.9), TileType.WATER),
        (_sig(temperature=0.2, wetness=0.2), TileType.GRASS),
        (_sig(temperature=0.4, wetness=-0.1), TileType.SAND),
        (_sig(resonance=0.9), TileType.CRYSTAL),
        (_sig(resonance=-0.9), TileType.WOOD),
        (_sig(), TileType.STONE),
    ],
)
def test_tile_classification_first_match_wins(sig, expected):
    assert classify_tile(sig) is expected


def test_only_lava_is_impassable():
    for kind in TileType:
        assert kind.is_passable is (kind is not TileType.LAVA)
    tile = Tile.from_signature(_sig(temperature=0.9, wetness=-0.9), 0, 0)
    assert tile.type is TileType.LAVA and not tile.passable


def test_same_seed_same_dungeon():
    gen = DungeonGenerator()
    seed_sig = Signature.create_random(RandomSource(10))

    d1 = gen.generate(seed_sig, RandomSource(2024))
    d2 = gen.generate(seed_sig, RandomSource(2024))

    assert d1.snapshot() == d2.snapshot()
    assert d1.signature == d2.signature
    assert [(e.name, e.position, e.health) for e in d1.enemies] == [(e.name, e.position, e.health) for e in d2.enemies]


def test_dimensions_difficulty_and_length(config):
    gen = DungeonGenerator(config)
    for seed in range(10):
        d = gen.generate(Signature.zero(), RandomSource(seed))
        assert (d.width, d.height) == (20, 15)
        assert 1 <= d.difficulty <= 3
        assert 3 <= d.length <= 5


def test_forced_path_is_stone_inside_the_grid():
    # A signature that is Lava everywhere before the path is carved
    lava_seed = _sig(temperature=1.0, wetness=-1.0)
    cfg = GameConfig.from_dict({"dungeon": {"signature_variance": 0.0, "tile_noise_scale": 0.0}})
    for seed in range(10):
        d = DungeonGenerator(cfg).generate(lava_seed, RandomSource(seed))
        passable = d.passable_positions()
        assert passable, "forced path must leave passable tiles"
        rows = {}
        for x, y in passable:
            rows.setdefault(y, []).append(x)
        assert sorted(rows) == list(range(d.height))
        for y, xs in rows.items():
            assert len(xs) == 1
            assert 1 <= xs[0] <= d.width - 2
            assert d.tile_at(xs[0], y).type is TileType.STONE
        assert rows[0] == [d.width // 2]


def test_path_drifts_at_most_one_column_per_row():
    lava_seed = _sig(temperature=1.0, wetness=-1.0)
    cfg = GameConfig.from_dict(
        {"dungeon": {"signature_variance": 0.0, "tile_noise_scale": 0.0, "path_drift_chance": 1.0}}
    )
    d = DungeonGenerator(cfg).generate(lava_seed, RandomSource(5))
    cols = [x for _, x in sorted((y, x) for x, y in d.passable_positions())]
    assert all(abs(a - b) <= 1 for a, b in zip(cols, cols[1:]))


def test_enemies_capped_by_open_cells():
    lava_seed = _sig(temperature=1.0, wetness=-1.0)
    cfg = GameConfig.from_dict(
        {"dungeon": {"width": 3, "height": 2, "signature_variance": 0.0, "tile_noise_scale": 0.0}}
    )
    d = DungeonGenerator(cfg).generate(lava_seed, RandomSource(1))
    # Only the two path cells are walkable
    assert len(d.enemies) == 2
    assert {e.position for e in d.enemies} == set(d.passable_positions())


def test_enemies_placed_on_distinct_passable_cells(config):
    d = DungeonGenerator(config).generate(Signature.zero(), RandomSource(33))
    expected = config.dungeon.base_enemy_count + d.difficulty * config.dungeon.enemies_per_difficulty
    assert len(d.enemies) == min(expected, len(d.passable_positions()))
    positions = [e.position for e in d.enemies]
    assert len(set(positions)) == len(positions)
    assert all(d.is_passable(x, y) for x, y in positions)
    assert {e.type for e in d.enemies} <= {a.value for a in EnemyArchetype}


def test_enemy_matching_dungeon_theme_is_stronger():
    cfg = GameConfig.from_dict({"dungeon": {"enemy_signature_variance": 0.0}})
    gen = DungeonGenerator(cfg)
    theme = _sig(temperature=0.2)
    tile = Tile.from_signature(theme, 4, 6)
    enemy = gen.enemy_for_tile(tile, theme, RandomSource(0))
    archetype = EnemyArchetype(enemy.type)
    assert enemy.health == pytest.approx(archetype.base_health * 1.2)
    assert enemy.damage == pytest.approx(archetype.base_damage * 1.2)
    assert enemy.position == (4, 6)
    assert enemy.name == archetype.value


def test_enemy_name_takes_first_descriptor():
    cfg = GameConfig.from_dict({"dungeon": {"enemy_signature_variance": 0.0}})
    gen = DungeonGenerator(cfg)
    sig = Signature((0.0, -0.9, 0.0, 0.9, 0.0, 0.0, 0.0, 0.0))
    enemy = gen.enemy_for_tile(Tile.from_signature(sig, 0, 0), sig, RandomSource(3))
    assert enemy.name == f"Soft {enemy.type}"


def test_dungeon_name_from_signature():
    gen = DungeonGenerator()
    assert gen.dungeon_name(Signature.zero()) == "Dungeon"
    assert gen.dungeon_name(_sig(temperature=0.9, wetness=0.9, resonance=0.9)) == "Hot Wet Dungeon"


def test_generation_logs_summary(caplog):
    caplog.set_level("INFO", logger="sigdungeon.generation.dungeon")
    DungeonGenerator().generate(Signature.zero(), RandomSource(8))
    assert any("difficulty=" in r.getMessage() for r in caplog.records)


class _CountingSource:
    """Hands out 0, 1, 2, ... so every cell of the raw field is known."""

    def __init__(self):
        self._next = 0

    def uniform(self, a, b):
        value = float(self._next)
        self._next += 1
        return value


def test_noise_smoothing_averages_in_bounds_neighbours_only():
    # raw[y][x] == 4 * y + x on a 4x3 grid
    noise = DungeonGenerator()._noise_field(4, 3, _CountingSource())
    assert noise[0][0] == pytest.approx((0 + 1 + 4 + 5) / 4)
    assert noise[2][3] == pytest.approx((6 + 7 + 10 + 11) / 4)
    assert noise[0][1] == pytest.approx((0 + 1 + 2 + 4 + 5 + 6) / 6)
    assert noise[1][0] == pytest.approx((0 + 1 + 4 + 5 + 8 + 9) / 6)
    assert noise[1][1] == pytest.approx(sum([0, 1, 2, 4, 5, 6, 8, 9, 10]) / 9)


def test_enemy_scaling_comes_from_config():
    cfg = GameConfig.from_dict(
        {"dungeon": {"enemy_signature_variance": 0.0, "enemy_min_scale": 1.0, "enemy_scale_range": 0.0}}
    )
    theme = _sig(temperature=0.2)
    enemy = DungeonGenerator(cfg).enemy_for_tile(Tile.from_signature(theme, 0, 0), theme, RandomSource(0))
    archetype = EnemyArchetype(enemy.type)
    assert enemy.health == pytest.approx(archetype.base_health)
    assert enemy.damage == pytest.approx(archetype.base_damage)
