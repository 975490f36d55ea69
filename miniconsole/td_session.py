"""Keyboard-driven session around the tower defense world: cursor, build mode, pause menu."""

from __future__ import annotations

from typing import Callable, Optional

from miniconsole.td_models import Cell, Difficulty, TowerType
from miniconsole.td_world import TowerDefenseWorld

ScoreSink = Callable[[str, int], None]
MenuOpener = Callable[[], None]

_PAUSE_OPTIONS = ("Resume", "Restart", "Back to Menu")
_START_CURSOR = Cell(7, 10)

_BUILD_KEYS = {
    "1": TowerType.CANNON,
    "2": TowerType.FROST,
    "3": TowerType.EMBER,
}
_MOVE_KEYS = {
    "left": (-1, 0),
    "a": (-1, 0),
    "right": (1, 0),
    "d": (1, 0),
    "up": (0, -1),
    "w": (0, -1),
    "down": (0, 1),
    "s": (0, 1),
}


class TowerDefenseSession:
    """Maps key presses onto a tower defense world and reports finished runs.

    Keys are given by name, case-insensitively: letters ("B", "U", "T", "P",
    "R", "W", "A", "S", "D"), digits ("1".."3") and "Up", "Down", "Left",
    "Right", "Enter", "Space", "Escape" and "Tab".
    """

    pause_options = _PAUSE_OPTIONS

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.NORMAL,
        submit_score: Optional[ScoreSink] = None,
        open_menu: Optional[MenuOpener] = None,
    ) -> None:
        self.difficulty = difficulty
        self.submit_score = submit_score
        self.open_menu = open_menu
        self.world = TowerDefenseWorld(difficulty)
        self.cursor = _START_CURSOR
        self.build_mode = TowerType.CANNON
        self.paused = False
        self.pause_selection = 0
        self.debug_path = False
        self.score_submitted = False
        self.end_flash_time = 0.0

    @property
    def finished(self) -> bool:
        return self.world.game_over or self.world.victory

    def _restart(self) -> None:
        self.world.difficulty = self.difficulty
        self.world.reset()
        self.score_submitted = False
        self.end_flash_time = 0.0

    def _move_cursor(self, dx: int, dy: int) -> None:
        cols, rows = TowerDefenseWorld.COLS, TowerDefenseWorld.ROWS
        self.cursor = Cell(
            max(0, min(cols - 1, self.cursor.x + dx)),
            max(0, min(rows - 1, self.cursor.y + dy)),
        )

    def _handle_pause_key(self, key: str) -> None:
        if key in ("p", "escape"):
            self.paused = False
            return
        if key in ("up", "w"):
            self.pause_selection = (self.pause_selection + 2) % 3
            return
        if key in ("down", "s"):
            self.pause_selection = (self.pause_selection + 1) % 3
            return
        if key not in ("enter", "space"):
            return
        if self.pause_selection == 0:
            self.paused = False
        elif self.pause_selection == 1:
            self._restart()
            self.paused = False
        elif self.open_menu is not None:
            self.open_menu()

    def handle_key(self, key: str) -> None:
        """React to a key press."""
        key = key.lower()
        if self.paused:
            self._handle_pause_key(key)
            return
        if key == "p":
            self.paused = True
            self.pause_selection = 0
            return
        if key == "escape":
            if self.open_menu is not None:
                self.open_menu()
            return
        if key == "r":
            self._restart()
            self.build_mode = TowerType.CANNON
            return
        if key == "tab":
            self.debug_path = not self.debug_path
            return
        if key in _BUILD_KEYS:
            self.build_mode = _BUILD_KEYS[key]
        elif key == "t":
            self.world.cycle_tower_targeting(self.cursor)
        elif key in _MOVE_KEYS:
            self._move_cursor(*_MOVE_KEYS[key])
        elif key == "b":
            self.world.place_tower(self.cursor, self.build_mode)
        elif key == "u":
            self.world.upgrade_tower(self.cursor)

    def update(self, dt: float) -> None:
        """Advance the world unless paused, submitting the score once a run ends."""
        if self.paused:
            return
        self.world.fixed_update(dt)
        if self.finished:
            self.end_flash_time += dt
            if not self.score_submitted and self.submit_score is not None:
                self.submit_score(f"TowerDefense-{self.difficulty}", self.world.score)
                self.score_submitted = True

    def hud_line(self, top_score: int = 0) -> str:
        """Build the one-line status display."""
        w = self.world
        parts = [
            f"TD[{w.difficulty}] S:{w.score} T:{top_score} G:{w.gold} HP:{w.lives}"
            f" W:{w.wave}/{w.max_waves}",
            f"Bld:{self.build_mode}",
        ]
        tower = w.tower_at(self.cursor)
        if tower is not None:
            strategy = tower.strategy.name if tower.strategy is not None else "-"
            parts.append(f"C:{tower.type} L{tower.level} {strategy}")
        if w.victory:
            parts.append("WIN")
        elif w.game_over:
            parts.append("LOSE")
        elif self.paused:
            parts.append("PAUSE")
        elif self.debug_path:
            parts.append("DBG")
        return " | ".join(parts)