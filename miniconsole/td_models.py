"""Data types and targeting strategies for the tower defense game."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass, field
from typing import Optional, Sequence


class Difficulty(enum.Enum):
    """Global difficulty setting shared by games that support it."""

    NORMAL = "Normal"
    HARD = "Hard"

    def __str__(self) -> str:
        return self.value


def toggled_difficulty(difficulty: Difficulty) -> Difficulty:
    """Return the other difficulty."""
    return Difficulty.NORMAL if difficulty is Difficulty.HARD else Difficulty.HARD


@dataclass(frozen=True)
class Cell:
    """A grid cell given by column and row."""

    x: int = 0
    y: int = 0


@dataclass
class Vec:
    """A 2D vector of floats."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec) -> Vec:
        return Vec(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec) -> Vec:
        return Vec(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec:
        return Vec(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return self.length_sq() ** 0.5


class EnemyType(enum.Enum):
    GRUNT = "Grunt"
    FAST = "Fast"
    TANK = "Tank"

    def __str__(self) -> str:
        return self.value


class TowerType(enum.Enum):
    CANNON = "Cannon"
    FROST = "Frost"
    EMBER = "Ember"

    def __str__(self) -> str:
        return self.value


class StatusEffectType(enum.Enum):
    SLOW = "Slow"
    BURN = "Burn"


@dataclass
class StatusEffect:
    type: StatusEffectType = StatusEffectType.SLOW
    magnitude: float = 0.0
    duration: float = 0.0
    tick_period: float = 0.25
    tick_accumulator: float = 0.0


@dataclass
class Enemy:
    pos: Vec = field(default_factory=Vec)
    vel: Vec = field(default_factory=Vec)
    hp: float = 60.0
    max_hp: float = 60.0
    speed: float = 45.0
    radius: float = 10.0
    path_index: int = 0
    type: EnemyType = EnemyType.GRUNT
    effects: list[StatusEffect] = field(default_factory=list)
    alive: bool = True


@dataclass
class Projectile:
    pos: Vec = field(default_factory=Vec)
    vel: Vec = field(default_factory=Vec)
    damage: float = 0.0
    radius: float = 4.0
    source_type: TowerType = TowerType.CANNON
    effect: Optional[StatusEffect] = None
    alive: bool = True


class TargetStrategy(abc.ABC):
    """Chooses which enemy in range a tower fires at."""

    name: str = ""

    @abc.abstractmethod
    def select_target(self, candidates: Sequence[Enemy]) -> Optional[Enemy]:
        """Return the chosen enemy, or None when there are no candidates."""

    def __str__(self) -> str:
        return self.name


class FirstEnemyStrategy(TargetStrategy):
    """Targets the enemy furthest along the path."""

    name = "First"

    def select_target(self, candidates: Sequence[Enemy]) -> Optional[Enemy]:
        if not candidates:
            return None
        return max(candidates, key=lambda e: e.path_index)


class StrongestEnemyStrategy(TargetStrategy):
    """Targets the enemy with the most hit points."""

    name = "Strongest"

    def select_target(self, candidates: Sequence[Enemy]) -> Optional[Enemy]:
        if not candidates:
            return None
        return max(candidates, key=lambda e: e.hp)


class ClosestEnemyStrategy(TargetStrategy):
    """Targets the enemy closest to the goal, measured along the path."""

    name = "Closest"

    def select_target(self, candidates: Sequence[Enemy]) -> Optional[Enemy]:
        if not candidates:
            return None
        return max(candidates, key=lambda e: e.path_index)


def make_strategy(mode: int) -> TargetStrategy:
    """Build the targeting strategy for a cycling mode index."""
    # Truncating remainder: negative modes fall back to First.
    index = mode % 3 if mode >= 0 else -((-mode) % 3)
    if index == 1:
        return StrongestEnemyStrategy()
    if index == 2:
        return ClosestEnemyStrategy()
    return FirstEnemyStrategy()


@dataclass
class Tower:
    cell: Cell = field(default_factory=Cell)
    type: TowerType = TowerType.CANNON
    level: int = 1
    cooldown: float = 0.0
    strategy_index: int = 0
    strategy: TargetStrategy = field(default_factory=FirstEnemyStrategy)


@dataclass(frozen=True)
class WaveDefinition:
    type: EnemyType = EnemyType.GRUNT
    count: int = 0
    interval: float = 0.8


def parse_enemy_type(token: str) -> EnemyType:
    """Map a wave-file token to an enemy type; unknown tokens mean grunts."""
    if token == "fast":
        return EnemyType.FAST
    if token == "tank":
        return EnemyType.TANK
    return EnemyType.GRUNT