# miniconsole

Game logic for a grid-based tower defense game and for the main menu that
leads into it. Everything is plain Python objects driven by key names and
fixed time steps, so it can be run from tests or put behind any front end.

## Modules

- `miniconsole.td_models` – the building blocks: `Difficulty` (`NORMAL`,
  `HARD`) and `toggled_difficulty`, `Cell`, `Vec`, `EnemyType`,
  `TowerType`, `StatusEffectType`, `StatusEffect`, `Enemy`, `Projectile`,
  `Tower`, `WaveDefinition`, `parse_enemy_type`, and the targeting
  strategies `FirstEnemyStrategy`, `StrongestEnemyStrategy` and
  `ClosestEnemyStrategy`, created by `make_strategy(mode)`.
- `miniconsole.td_pathfinding` – A* search on a 4-connected grid.
  `find_path(start, goal, cols, rows, blocked)` returns a `PathResult`
  with `found`, the smoothed `path`, and the `open` and `closed` cells in
  the order they were visited. `heuristic` is the Manhattan distance and
  `smooth_path` drops the middle cells of straight runs.
- `miniconsole.td_world` – `TowerDefenseWorld`, the simulation, and
  `load_waves`, which reads wave definitions from a text file.
- `miniconsole.td_session` – `TowerDefenseSession`, a play session that
  turns key presses into cursor moves, building, upgrades, targeting
  changes, pausing and restarts, and builds the status line.
- `miniconsole.menu` – `Menu`, the main menu model, with `Game`,
  `MinesweeperPreset`, `LaunchRequest`, and `wrap_words`.

## The tower defense world

The field is 15 columns by 20 rows of 32-pixel tiles
(`TowerDefenseWorld.COLS`, `ROWS`, `TILE_SIZE`). Enemies enter at cell
(0, 9) and walk the shortest path to (14, 9); each one that arrives costs
a life, and the game is lost when lives reach zero (`game_over`). Once
every wave has been sent and cleared, `victory` is set. Call
`fixed_update(dt)` to advance the simulation.

```python
from miniconsole.td_models import Cell, Difficulty, TowerType
from miniconsole.td_world import TowerDefenseWorld

world = TowerDefenseWorld(Difficulty.NORMAL)
world.place_tower(Cell(5, 9), TowerType.FROST)
for _ in range(600):
    world.fixed_update(1 / 60)
print(world.score, world.gold, world.lives, world.wave, world.max_waves)
```

- `place_tower(cell, tower_type)` builds a tower if the cell is inside the
  field, is not the start or goal, is free, the gold covers `build_cost`,
  and a path from start to goal remains. Building re-routes the path.
- `upgrade_tower(cell)` raises a tower's level by one, up to level 3, for
  `upgrade_cost`.
- `cycle_tower_targeting(cell)` steps a tower through its three
  strategies: First (furthest along the path), Strongest (most hit
  points) and Closest (which also picks the enemy furthest along the
  path).
- `tower_at(cell)` returns the tower on a cell, or `None`.

Towers come in three kinds: Cannon deals plain damage, Frost deals lighter
hits that slow the target, and Ember deals lighter hits that set the
target burning. Towers aim ahead of moving targets. Each kill scores 12
and pays gold.

Hard difficulty starts with less gold (115 instead of 140) and fewer
lives (14 instead of 20), makes building and upgrading dearer, pays less
per kill, gives towers a longer cooldown, and sends enemies with more hit
points and speed at a quicker spawn pace.

## Wave files

When no waves are passed to `TowerDefenseWorld`, it calls `load_waves()`,
which reads `levels/td_waves.txt` relative to the working directory. A
wave file has one wave per line: an enemy type (`fast`, `tank`, anything
else meaning a grunt), a count and a spawn interval in seconds. Blank
lines, lines starting with `#`, lines that do not parse and lines whose
count or interval is not positive are skipped.

    # type count interval
    grunt 8 0.8
    fast 10 0.7
    tank 6 1.0

When the file is missing or holds no usable waves, a built-in set of six
waves is used.

## Play session

`TowerDefenseSession(difficulty, submit_score, open_menu)` wraps a world.
`handle_key(name)` takes key names case-insensitively: arrows or WASD move
the cursor, `1`/`2`/`3` pick Cannon/Frost/Ember, `B` builds, `U`
upgrades, `T` cycles targeting, `Tab` toggles the path debug flag, `R`
restarts, `P` opens the pause menu (Resume, Restart, Back to Menu,
navigated with Up/Down and chosen with Enter or Space) and `Escape` calls
`open_menu`. `update(dt)` advances the world unless paused and, the first
time a run ends, calls `submit_score("TowerDefense-Normal" or
"TowerDefense-Hard", score)`. `hud_line(top_score)` builds the status
line.

## Menu

`Menu(difficulty)` holds the seven entries of `Game` in order. Up and
Down move the selection, Enter or Space start it, and typed characters
`"1"` to `"7"` passed to `handle_text` start an entry directly. The
platformer and tower defense first open a Normal/Hard dialog; Minesweeper
first opens a preset dialog (Beginner, Intermediate, Expert). Left or
Right change the choice in a dialog, Enter or Space confirm, Escape or
Backspace cancel. A confirmed start comes back as a `LaunchRequest`;
Escape on the main list sets `quit_requested`. `wrap_words(text,
max_chars)` wraps an entry's blurb at word boundaries.

## What this package does not do

It draws nothing and opens no window; there is no command to run. Scores
are handed to the `submit_score` callback and are not stored anywhere.
Of the games listed in the menu, only tower defense is played here: for
the others the menu returns a `LaunchRequest` and leaves starting them to
the caller.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.