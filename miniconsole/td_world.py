"""Simulation of the tower defense game: waves, enemies, towers and projectiles."""

from __future__ import annotations

import dataclasses
import math
from pathlib import Path
from typing import Iterable, Optional, Union

from miniconsole.td_models import (
    Cell,
    Difficulty,
    Enemy,
    EnemyType,
    Projectile,
    StatusEffect,
    StatusEffectType,
    Tower,
    TowerType,
    Vec,
    WaveDefinition,
    make_strategy,
    parse_enemy_type,
)
from miniconsole.td_pathfinding import find_path

DEFAULT_WAVES_PATH = Path("levels") / "td_waves.txt"

DEFAULT_WAVES: tuple[WaveDefinition, ...] = (
    WaveDefinition(EnemyType.GRUNT, 8, 0.8),
    WaveDefinition(EnemyType.FAST, 10, 0.7),
    WaveDefinition(EnemyType.TANK, 6, 1.0),
    WaveDefinition(EnemyType.GRUNT, 14, 0.55),
    WaveDefinition(EnemyType.FAST, 16, 0.5),
    WaveDefinition(EnemyType.TANK, 10, 0.8),
)


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _parse_wave_line(line: str) -> Optional[WaveDefinition]:
    tokens = line.split()
    if len(tokens) < 3:
        return None
    try:
        count = int(tokens[1])
        interval = float(tokens[2])
    except ValueError:
        return None
    if count <= 0 or interval <= 0.0:
        return None
    return WaveDefinition(parse_enemy_type(tokens[0]), count, interval)


def load_waves(path: Union[str, Path] = DEFAULT_WAVES_PATH) -> list[WaveDefinition]:
    """Read wave definitions from a text file.

    Each line holds an enemy type, a count and a spawn interval; blank lines,
    comment lines starting with '#' and malformed lines are skipped. When the
    file is missing or yields no waves, the built-in waves are returned.
    """
    waves: list[WaveDefinition] = []
    try:
        with open(path, encoding="utf-8") as handle:
            for raw in handle:
                line = raw.rstrip("\r\n")
                if not line or line.startswith("#"):
                    continue
                wave = _parse_wave_line(line)
                if wave is not None:
                    waves.append(wave)
    except OSError:
        waves = []
    return waves if waves else list(DEFAULT_WAVES)


class TowerDefenseWorld:
    """Grid-based tower defense simulation advanced in fixed time steps."""

    COLS = 15
    ROWS = 20
    TILE_SIZE = 32
    WIDTH = float(COLS * TILE_SIZE)
    HEIGHT = float(ROWS * TILE_SIZE)

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.NORMAL,
        waves: Optional[Iterable[WaveDefinition]] = None,
    ) -> None:
        self.difficulty = difficulty
        self.waves: list[WaveDefinition] = (
            list(waves) if waves is not None else load_waves()
        )
        self.start_cell = Cell(0, 9)
        self.goal_cell = Cell(14, 9)
        self.path: list[Cell] = []
        self.debug_open: list[Cell] = []
        self.debug_closed: list[Cell] = []
        self.towers: list[Tower] = []
        self.enemies: list[Enemy] = []
        self.projectiles: list[Projectile] = []
        self.score = 0
        self.gold = 140
        self.lives = 20
        self.wave = 0
        self.build_cost = 50
        self.upgrade_cost = 40
        self.victory = False
        self._wave_in_progress = False
        self._spawn_remaining = 0
        self._spawn_timer = 0.0
        self._spawn_interval = 0.75
        self._current_wave = WaveDefinition()
        self.reset()

    @property
    def max_waves(self) -> int:
        return len(self.waves)

    @property
    def game_over(self) -> bool:
        return self.lives <= 0

    def reset(self) -> None:
        """Restart the game with the current difficulty."""
        self._apply_difficulty_tuning()
        self.towers.clear()
        self.enemies.clear()
        self.projectiles.clear()
        self.score = 0
        self.wave = 0
        self._wave_in_progress = False
        self._spawn_remaining = 0
        self._spawn_timer = 0.0
        self._current_wave = WaveDefinition()
        self.victory = False
        self._recompute_path()

    def _apply_difficulty_tuning(self) -> None:
        if self.difficulty is Difficulty.HARD:
            self.gold, self.lives = 115, 14
            self.build_cost, self.upgrade_cost = 56, 46
        else:
            self.gold, self.lives = 140, 20
            self.build_cost, self.upgrade_cost = 50, 40

    def _in_bounds(self, cell: Cell) -> bool:
        return 0 <= cell.x < self.COLS and 0 <= cell.y < self.ROWS

    def tower_at(self, cell: Cell) -> Optional[Tower]:
        """Return the tower standing on a cell, if any."""
        return next((t for t in self.towers if t.cell == cell), None)

    def _cell_center(self, cell: Cell) -> Vec:
        half = self.TILE_SIZE * 0.5
        return Vec(cell.x * self.TILE_SIZE + half, cell.y * self.TILE_SIZE + half)

    def _recompute_path(self) -> bool:
        blocked = {t.cell for t in self.towers}
        result = find_path(self.start_cell, self.goal_cell, self.COLS, self.ROWS, blocked)
        self.debug_open = result.open
        self.debug_closed = result.closed
        if not result.found:
            self.path = []
            return False
        self.path = result.path
        for enemy in self.enemies:
            enemy.path_index = self._nearest_path_index(enemy.pos)
        return True

    def _nearest_path_index(self, pos: Vec) -> int:
        if not self.path:
            return 0
        return min(
            range(len(self.path)),
            key=lambda i: (self._cell_center(self.path[i]) - pos).length_sq(),
        )

    def place_tower(self, cell: Cell, tower_type: TowerType) -> bool:
        """Build a tower if the cell is free, affordable and leaves a path open."""
        if self.game_over or self.victory:
            return False
        if (
            not self._in_bounds(cell)
            or cell in (self.start_cell, self.goal_cell)
            or self.tower_at(cell) is not None
        ):
            return False
        if self.gold < self.build_cost:
            return False
        self.towers.append(
            Tower(cell=cell, type=tower_type, level=1, cooldown=0.0,
                  strategy_index=0, strategy=make_strategy(0))
        )
        if not self._recompute_path():
            self.towers.pop()
            self._recompute_path()
            return False
        self.gold -= self.build_cost
        return True

    def upgrade_tower(self, cell: Cell) -> bool:
        """Raise a tower's level, up to 3, if affordable."""
        tower = self.tower_at(cell)
        if tower is None or self.gold < self.upgrade_cost or tower.level >= 3:
            return False
        tower.level += 1
        self.gold -= self.upgrade_cost
        return True

    def cycle_tower_targeting(self, cell: Cell) -> bool:
        """Switch a tower to its next targeting strategy."""
        tower = self.tower_at(cell)
        if tower is None:
            return False
        tower.strategy_index = (tower.strategy_index + 1) % 3
        tower.strategy = make_strategy(tower.strategy_index)
        return True

    def _spawn_enemy(self, definition: WaveDefinition) -> None:
        base_hp, base_speed = 55.0, 44.0
        if definition.type is EnemyType.FAST:
            base_hp, base_speed = 38.0, 70.0
        elif definition.type is EnemyType.TANK:
            base_hp, base_speed = 100.0, 30.0
        hard = self.difficulty is Difficulty.HARD
        wave_scale = 1.15 ** (self.wave - 1)
        max_hp = base_hp * wave_scale * (1.2 if hard else 1.0)
        self.enemies.append(
            Enemy(
                pos=self._cell_center(self.start_cell),
                hp=max_hp,
                max_hp=max_hp,
                speed=base_speed * (1.1 if hard else 1.0),
                path_index=0,
                type=definition.type,
                alive=True,
            )
        )

    def _update_waves(self, dt: float) -> None:
        if not self._wave_in_progress and not self.enemies:
            if self.wave >= len(self.waves):
                self.victory = True
                return
            self._current_wave = self.waves[self.wave]
            self.wave += 1
            self._wave_in_progress = True
            self._spawn_remaining = self._current_wave.count
            self._spawn_interval = self._current_wave.interval
            if self.difficulty is Difficulty.HARD:
                self._spawn_interval *= 0.9
            self._spawn_timer = 0.2
        if not self._wave_in_progress:
            return
        self._spawn_timer -= dt
        if self._spawn_timer <= 0.0 and self._spawn_remaining > 0:
            self._spawn_timer = self._spawn_interval
            self._spawn_remaining -= 1
            self._spawn_enemy(self._current_wave)
        if self._spawn_remaining <= 0 and not self.enemies:
            self._wave_in_progress = False

    @staticmethod
    def _tick_status_effects(enemy: Enemy, dt: float) -> float:
        speed_mult = 1.0
        for fx in enemy.effects:
            fx.duration -= dt
            if fx.type is StatusEffectType.SLOW:
                speed_mult *= _clamp(1.0 - fx.magnitude, 0.2, 1.0)
            elif fx.type is StatusEffectType.BURN:
                fx.tick_accumulator += dt
                while fx.tick_accumulator >= fx.tick_period:
                    fx.tick_accumulator -= fx.tick_period
                    enemy.hp -= fx.magnitude
        enemy.effects = [fx for fx in enemy.effects if fx.duration > 0.0]
        return speed_mult

    def _update_enemies(self, dt: float) -> None:
        if len(self.path) < 2:
            return
        for enemy in self.enemies:
            if not enemy.alive:
                continue
            if enemy.hp <= 0.0:
                enemy.alive = False
                self.score += 12
                self.gold += 10 if self.difficulty is Difficulty.HARD else 12
                continue
            if enemy.path_index >= len(self.path) - 1:
                enemy.alive = False
                self.lives -= 1
                continue
            speed = enemy.speed * self._tick_status_effects(enemy, dt)
            target = self._cell_center(self.path[enemy.path_index + 1])
            delta = target - enemy.pos
            length = delta.length()
            if length < 1e-4:
                enemy.path_index += 1
                continue
            direction = delta * (1.0 / length)
            step = speed * dt
            enemy.vel = direction * speed
            if step >= length:
                enemy.pos = target
                enemy.path_index += 1
            else:
                enemy.pos = enemy.pos + direction * step

    def _make_projectile(self, tower: Tower, origin: Vec, direction: Vec, speed: float) -> Projectile:
        level = tower.level
        projectile = Projectile(
            pos=origin, vel=direction * speed, radius=4.0, source_type=tower.type, alive=True
        )
        if tower.type is TowerType.CANNON:
            projectile.damage = 21.0 + level * 12.0
        elif tower.type is TowerType.FROST:
            projectile.damage = 13.0 + level * 7.0
            projectile.effect = StatusEffect(
                type=StatusEffectType.SLOW,
                magnitude=0.18 + 0.05 * level,
                duration=1.2 + 0.2 * level,
                tick_period=0.25,
            )
        else:
            projectile.damage = 11.0 + level * 6.0
            projectile.effect = StatusEffect(
                type=StatusEffectType.BURN,
                magnitude=3.5 + 1.2 * level,
                duration=2.2 + 0.4 * level,
                tick_period=0.25,
            )
        return projectile

    def _update_towers(self, dt: float) -> None:
        base_ranges = {TowerType.CANNON: 90.0, TowerType.FROST: 82.0, TowerType.EMBER: 88.0}
        for tower in self.towers:
            tower.cooldown -= dt
            if tower.cooldown > 0.0:
                continue
            origin = self._cell_center(tower.cell)
            reach = base_ranges[tower.type] + tower.level * 14.0
            candidates = [
                e for e in self.enemies
                if e.alive and (e.pos - origin).length_sq() <= reach * reach
            ]
            if not candidates:
                tower.cooldown = 0.1
                continue
            target = tower.strategy.select_target(candidates)
            if target is None:
                continue
            speed = (230.0 if tower.type is TowerType.FROST else 290.0) + tower.level * 16.0
            travel = (target.pos - origin).length() / max(1.0, speed)
            aim = target.pos + target.vel * travel - origin
            aim_len = aim.length()
            direction = Vec(1.0, 0.0) if aim_len < 1e-4 else aim * (1.0 / aim_len)
            self.projectiles.append(self._make_projectile(tower, origin, direction, speed))
            base = 0.92 if self.difficulty is Difficulty.HARD else 0.85
            tower.cooldown = _clamp(base - tower.level * 0.12, 0.22, base)

    def _update_projectiles(self, dt: float) -> None:
        for p in self.projectiles:
            if not p.alive:
                continue
            p.pos = p.pos + p.vel * dt
            if not (-20.0 <= p.pos.x <= self.WIDTH + 20.0 and -20.0 <= p.pos.y <= self.HEIGHT + 20.0):
                p.alive = False
                continue
            for enemy in self.enemies:
                if not enemy.alive:
                    continue
                rr = enemy.radius + p.radius
                if (enemy.pos - p.pos).length_sq() > rr * rr:
                    continue
                enemy.hp -= p.damage
                if p.effect is not None:
                    enemy.effects.append(dataclasses.replace(p.effect))
                p.alive = False
                break
        self.projectiles = [p for p in self.projectiles if p.alive]

    def fixed_update(self, dt: float) -> None:
        """Advance the simulation by one time step."""
        if self.game_over or self.victory:
            return
        self._update_waves(dt)
        self._update_enemies(dt)
        self._update_towers(dt)
        self._update_projectiles(dt)
        self.enemies = [e for e in self.enemies if e.alive]


def _unused_math_guard() -> float:
    return math.inf