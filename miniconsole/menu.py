"""Main menu: game selection, difficulty dialog and minesweeper preset dialog."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from miniconsole.td_models import Difficulty, toggled_difficulty


class Game(enum.Enum):
    """Menu entries in display order, each with a title and a short blurb."""

    BREAKOUT = (
        "Breakout / Arkanoid",
        "Circle-vs-AABB collisions, paddle aim, lives, score — full logic in BreakoutWorld.",
    )
    SHOOTER = (
        "Top-down shooter",
        "Pooled bullets, seek steering on enemies, spawn cadence, invulnerability frames — "
        "logic in ShooterWorld.",
    )
    PLATFORMER = (
        "Platformer",
        "Gravity, jump mechanics, tile collisions, coins and goal.",
    )
    TOWER_DEFENSE = (
        "Tower defense",
        "Grid pathfinding, wave spawns, build and upgrade towers.",
    )
    MINESWEEPER = (
        "Minesweeper",
        "Deferred mine placement, first-click safety, BFS flood reveal, and chord clicking.",
    )
    PACMAN = (
        "Pac-Man",
        "Mode-based ghost AI with personality targets and greedy intersection decisions.",
    )
    HIGH_SCORES = (
        "High Scores",
        "View persistent top-5 scores across games.",
    )

    def __init__(self, title: str, blurb: str) -> None:
        self.title = title
        self.blurb = blurb

    @property
    def needs_difficulty(self) -> bool:
        """Whether the game asks for a difficulty before starting."""
        return self in (Game.PLATFORMER, Game.TOWER_DEFENSE)


_GAMES: tuple[Game, ...] = tuple(Game)


class MinesweeperPreset(enum.Enum):
    """Board presets offered for minesweeper."""

    BEGINNER = "Beginner 9x9 / 10"
    INTERMEDIATE = "Intermediate 16x16 / 40"
    EXPERT = "Expert 30x16 / 99"

    @property
    def label(self) -> str:
        return self.value


_PRESETS: tuple[MinesweeperPreset, ...] = tuple(MinesweeperPreset)


@dataclass(frozen=True)
class LaunchRequest:
    """A request to leave the menu and start a game."""

    game: Game
    difficulty: Difficulty = Difficulty.NORMAL
    minesweeper_preset: MinesweeperPreset = MinesweeperPreset.BEGINNER


def wrap_words(text: str, max_chars: int) -> str:
    """Wrap text at word boundaries so that lines stay within max_chars.

    A single word longer than the limit is kept whole on its own line.
    When the text has no words it is returned unchanged.
    """
    lines: list[str] = []
    line = ""
    for word in text.split():
        candidate = f"{line} {word}" if line else word
        if line and len(candidate) > max_chars:
            lines.append(line)
            line = word
        else:
            line = candidate
    if line:
        lines.append(line)
    return "\n".join(lines) if lines else text


class Menu:
    """Keyboard-driven main menu.

    Keys are given by name, case-insensitively: "Up", "Down", "Left", "Right",
    "Enter", "Space", "Escape" and "Backspace". Typed characters "1".."7"
    start the matching entry directly. A launch is returned as a LaunchRequest;
    Escape on the main list sets quit_requested.
    """

    def __init__(self, difficulty: Difficulty = Difficulty.NORMAL) -> None:
        self.difficulty = difficulty
        self.selection = 0
        self.selecting_difficulty = False
        self.selecting_minesweeper_preset = False
        self.pending_game: Optional[Game] = None
        self.pending_difficulty = difficulty
        self.pending_preset = MinesweeperPreset.BEGINNER
        self.quit_requested = False

    @property
    def entries(self) -> tuple[Game, ...]:
        return _GAMES

    @property
    def selected_game(self) -> Game:
        return _GAMES[self.selection]

    def _launch(self, game: Game) -> LaunchRequest:
        return LaunchRequest(
            game=game,
            difficulty=self.difficulty,
            minesweeper_preset=self.pending_preset,
        )

    def _begin_difficulty_selection(self, game: Game) -> None:
        self.selecting_difficulty = True
        self.selecting_minesweeper_preset = False
        self.pending_game = game
        self.pending_difficulty = self.difficulty

    def _begin_minesweeper_selection(self) -> None:
        self.selecting_minesweeper_preset = True
        self.selecting_difficulty = False
        self.pending_preset = MinesweeperPreset.BEGINNER

    def _launch_selection(self) -> Optional[LaunchRequest]:
        game = self.selected_game
        if game.needs_difficulty:
            self._begin_difficulty_selection(game)
            return None
        if game is Game.MINESWEEPER:
            self._begin_minesweeper_selection()
            return None
        return self._launch(game)

    def _handle_preset_key(self, key: str) -> Optional[LaunchRequest]:
        if key in ("left", "right"):
            index = _PRESETS.index(self.pending_preset)
            self.pending_preset = _PRESETS[(index + 1) % len(_PRESETS)]
        elif key in ("enter", "space"):
            self.selecting_minesweeper_preset = False
            return self._launch(Game.MINESWEEPER)
        elif key in ("escape", "backspace"):
            self.selecting_minesweeper_preset = False
        return None

    def _handle_difficulty_key(self, key: str) -> Optional[LaunchRequest]:
        if key in ("left", "right"):
            self.pending_difficulty = toggled_difficulty(self.pending_difficulty)
        elif key in ("enter", "space"):
            self.difficulty = self.pending_difficulty
            self.selecting_difficulty = False
            game = self.pending_game
            return self._launch(game) if game is not None else None
        elif key in ("escape", "backspace"):
            self.selecting_difficulty = False
            self.pending_game = None
        return None

    def handle_key(self, key: str) -> Optional[LaunchRequest]:
        """React to a key press; return a launch request when a game starts."""
        key = key.lower()
        if self.selecting_minesweeper_preset:
            return self._handle_preset_key(key)
        if self.selecting_difficulty:
            return self._handle_difficulty_key(key)
        count = len(_GAMES)
        if key == "up":
            self.selection = (self.selection - 1) % count
        elif key == "down":
            self.selection = (self.selection + 1) % count
        elif key in ("enter", "space"):
            return self._launch_selection()
        elif key == "escape":
            self.quit_requested = True
        return None

    def handle_text(self, ch: str) -> Optional[LaunchRequest]:
        """React to a typed character: digits 1-7 pick and start an entry."""
        if self.selecting_minesweeper_preset or self.selecting_difficulty:
            return None
        if len(ch) == 1 and "1" <= ch <= str(len(_GAMES)):
            self.selection = ord(ch) - ord("1")
            return self._launch_selection()
        return None