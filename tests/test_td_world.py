import pytest

from miniconsole.td_models import (
    Cell,
    Difficulty,
    EnemyType,
    TowerType,
    WaveDefinition,
)
from miniconsole.td_world import DEFAULT_WAVES, TowerDefenseWorld, load_waves


def _expand(path):
    cells = [path[0]]
    for a, b in zip(path, path[1:]):
        dx = (b.x > a.x) - (b.x < a.x)
        dy = (b.y > a.y) - (b.y < a.y)
        cur = a
        while cur != b:
            cur = Cell(cur.x + dx, cur.y + dy)
            cells.append(cur)
    return cells


def _run(world, seconds, dt=1 / 60):
    steps = int(seconds / dt)
    for _ in range(steps):
        world.fixed_update(dt)
        if world.victory or world.game_over:
            break


def test_normal_reset_values():
    world = TowerDefenseWorld(waves=DEFAULT_WAVES)
    assert (world.gold, world.lives, world.build_cost, world.upgrade_cost) == (140, 20, 50, 40)
    assert world.score == 0 and world.wave == 0
    assert world.max_waves == len(DEFAULT_WAVES)


def test_hard_reset_values():
    world = TowerDefenseWorld(Difficulty.HARD, waves=DEFAULT_WAVES)
    assert (world.gold, world.lives, world.build_cost, world.upgrade_cost) == (115, 14, 56, 46)


def test_initial_path_is_straight_line():
    world = TowerDefenseWorld(waves=DEFAULT_WAVES)
    assert world.path == [world.start_cell, world.goal_cell]


def test_place_tower_charges_build_cost():
    world = TowerDefenseWorld(waves=DEFAULT_WAVES)
    before = world.gold
    assert world.place_tower(Cell(3, 3), TowerType.FROST)
    assert world.gold == before - world.build_cost
    tower = world.tower_at(Cell(3, 3))
    assert tower.type is TowerType.FROST and tower.level == 1


@pytest.mark.parametrize("cell", [Cell(0, 9), Cell(14, 9), Cell(-1, 0), Cell(15, 0), Cell(0, 20)])
def test_place_tower_rejects_invalid_cells(cell):
    world = TowerDefenseWorld(waves=DEFAULT_WAVES)
    assert world.place_tower(cell, TowerType.CANNON) is False
    assert world.towers == []


def test_place_tower_rejects_occupied_and_unaffordable():
    world = TowerDefenseWorld(waves=DEFAULT_WAVES)
    assert world.place_tower(Cell(2, 2), TowerType.CANNON)
    assert world.place_tower(Cell(2, 2), TowerType.CANNON) is False
    world.gold = world.build_cost - 1
    assert world.place_tower(Cell(4, 4), TowerType.CANNON) is False
    assert len(world.towers) == 1


def test_tower_on_path_reroutes():
    world = TowerDefenseWorld(waves=DEFAULT_WAVES)
    assert world.place_tower(Cell(7, 9), TowerType.CANNON)
    cells = _expand(world.path)
    assert Cell(7, 9) not in cells
    assert cells[0] == world.start_cell and cells[-1] == world.goal_cell


def test_blocking_placement_is_rejected():
    world = TowerDefenseWorld(waves=DEFAULT_WAVES)
    world.gold = 10_000
    for y in range(TowerDefenseWorld.ROWS - 1):
        assert world.place_tower(Cell(5, y), TowerType.CANNON)
    gold = world.gold
    assert world.place_tower(Cell(5, TowerDefenseWorld.ROWS - 1), TowerType.CANNON) is False
    assert world.gold == gold
    assert len(world.towers) == TowerDefenseWorld.ROWS - 1
    assert world.tower_at(Cell(5, TowerDefenseWorld.ROWS - 1)) is None
    assert Cell(5, TowerDefenseWorld.ROWS - 1) in _expand(world.path)


def test_upgrade_tower_up_to_level_three():
    world = TowerDefenseWorld(waves=DEFAULT_WAVES)
    world.gold = 1000
    world.place_tower(Cell(1, 1), TowerType.CANNON)
    before = world.gold
    assert world.upgrade_tower(Cell(1, 1))
    assert world.gold == before - world.upgrade_cost
    assert world.upgrade_tower(Cell(1, 1))
    assert world.tower_at(Cell(1, 1)).level == 3
    assert world.upgrade_tower(Cell(1, 1)) is False
    assert world.upgrade_tower(Cell(8, 8)) is False


def test_cycle_targeting():
    world = TowerDefenseWorld(waves=DEFAULT_WAVES)
    world.place_tower(Cell(1, 1), TowerType.CANNON)
    names = []
    for _ in range(3):
        assert world.cycle_tower_targeting(Cell(1, 1))
        names.append(world.tower_at(Cell(1, 1)).strategy.name)
    assert names == ["Strongest", "Closest", "First"]
    assert world.cycle_tower_targeting(Cell(2, 2)) is False


def test_reset_clears_towers_and_restores_gold():
    world = TowerDefenseWorld(waves=DEFAULT_WAVES)
    world.place_tower(Cell(1, 1), TowerType.CANNON)
    world.reset()
    assert world.towers == [] and world.gold == 140
    assert world.path == [world.start_cell, world.goal_cell]


def test_load_waves_parses_file(tmp_path):
    f = tmp_path / "waves.txt"
    f.write_text("# comment\n\nfast 3 0.5\ntank 2 1.0\nweird 4 0.2\nbad line\ngrunt 0 1.0\ngrunt 2 -1\n")
    waves = load_waves(f)
    assert waves == [
        WaveDefinition(EnemyType.FAST, 3, 0.5),
        WaveDefinition(EnemyType.TANK, 2, 1.0),
        WaveDefinition(EnemyType.GRUNT, 4, 0.2),
    ]


def test_load_waves_falls_back_to_defaults(tmp_path):
    assert load_waves(tmp_path / "missing.txt") == list(DEFAULT_WAVES)
    empty = tmp_path / "empty.txt"
    empty.write_text("# nothing\n")
    assert load_waves(empty) == list(DEFAULT_WAVES)


def test_enemy_spawns_at_start():
    world = TowerDefenseWorld(waves=[WaveDefinition(EnemyType.GRUNT, 1, 1.0)])
    for _ in range(3):
        world.fixed_update(0.1)
    assert world.wave == 1
    assert len(world.enemies) == 1
    assert world.enemies[0].type is EnemyType.GRUNT


def test_hard_enemies_are_tougher():
    waves = [WaveDefinition(EnemyType.TANK, 1, 1.0)]
    normal = TowerDefenseWorld(Difficulty.NORMAL, waves)
    hard = TowerDefenseWorld(Difficulty.HARD, waves)
    for world in (normal, hard):
        for _ in range(3):
            world.fixed_update(0.1)
    assert hard.enemies[0].max_hp == pytest.approx(normal.enemies[0].max_hp * 1.2)
    assert hard.enemies[0].speed == pytest.approx(normal.enemies[0].speed * 1.1)


def test_leaking_enemy_costs_a_life_then_victory():
    world = TowerDefenseWorld(waves=[WaveDefinition(EnemyType.GRUNT, 1, 1.0)])
    _run(world, 60)
    assert world.victory
    assert world.lives == 19
    assert world.score == 0


def test_towers_kill_enemies_and_account_consistently():
    count = 5
    world = TowerDefenseWorld(waves=[WaveDefinition(EnemyType.GRUNT, count, 1.0)])
    world.gold = 1000
    for x in (4, 7, 10):
        assert world.place_tower(Cell(x, 8), TowerType.CANNON)
        world.upgrade_tower(Cell(x, 8))
    gold_before = world.gold
    _run(world, 120)
    assert world.victory
    kills = world.score // 12
    assert kills > 0
    assert kills + (20 - world.lives) == count
    assert world.gold == gold_before + kills * 12


def test_game_over_stops_simulation():
    world = TowerDefenseWorld(waves=[WaveDefinition(EnemyType.FAST, 30, 0.1)])
    _run(world, 120)
    assert world.game_over
    snapshot = (world.lives, world.score, len(world.enemies))
    world.fixed_update(1.0)
    assert (world.lives, world.score, len(world.enemies)) == snapshot
    assert world.place_tower(Cell(3, 3), TowerType.CANNON) is False