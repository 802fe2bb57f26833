# carrotdefense

A small tower defence game engine. Enemies spawn at one end of a path laid
out on a 14 x 7 grid of 120-unit blocks and walk towards a carrot at the
other end. Money buys towers on the free grid blocks; towers lock on to
enemies in range and damage them. Each enemy that reaches the carrot costs
one health point. Clear every wave and the level is won; lose all health and
it is lost. Winning a level writes `1` to a save file, which unlocks the
second level.

## Installing

    pip install .

## The command

    carrotdefense [--level {1,2}] [--save PATH] [--time SECONDS]

The command picks a level, simulates it at 60 frames per second with no
towers built, and prints the final money, wave and health lines followed by
`Outcome: playing`, `Outcome: won` or `Outcome: lost`.

- `--level` – level to play, 1 (default) or 2. Level 2 is refused with exit
  status 1 until the save file records level 1 as won.
- `--save` – save file for level progress (default `savedata/player.txt`).
  If the file cannot be written, progress is simply not kept.
- `--time` – most seconds of game time to simulate (default 120). A negative
  value is refused with exit status 2.

## Using it from code

    from carrotdefense.level import Level1, Outcome
    from carrotdefense.towers import Dianmei

    level = Level1(save_path=None)          # None: do not write progress
    tower = level.block_at(5, 5).build(level, Dianmei)
    outcome = level.run(max_time=600.0, dt=1 / 60)
    print(level.status_lines(), outcome is Outcome.WON)

`BaseBlock.build` takes the tower's cost from `level.money` and adds the
tower to `level.current_towers`, or returns `None` if the money is short.
Each `tick` moves every enemy one step, lets each tower attack once per
`speed` seconds, pays out the value of dead enemies, removes enemies that
reached the carrot and checks for a win or loss.

## Modules

- `carrotdefense.level` – `BaseLevel`, `Level1` and `Level2`: the grid
  (`block_at`, `add_path`, `coord_to_tag`, `block_center`), money, health,
  `Wave`s of enemies, `spawn_one`, `check_elimination`, `win_check`,
  `set_stop`/`set_move`, `tick`, `run` and `restart`, ending in an `Outcome`
  (`PLAYING`, `WON`, `LOST`).
- `carrotdefense.enemies` – `Enemy` and its kinds (`Mike`, `Nongp`, `Zy`,
  `SoldierEnemy`, `TankEnemy`, `BossEnemy`), the movement strategies
  `FastMove` and `SlowMove`, and `create_enemy` (by name: `"enemy"`,
  `"mike"`, `"nongp"`, `"zy"`, `"soldier"`, `"tank"`, `"boss"`).
- `carrotdefense.towers` – `Tower` and the three buildable towers:
  `Dianmei` (lightning; locks up to 2 and 3 enemies at levels 2 and 3),
  `PoisonTower` (poisons and slows every enemy in range, then a burst hits
  everything within 300 units) and `R99` (a fast gun with a magazine of
  `level * 10` shots that has to reload). Towers sell back for 75% of their
  cost (`sell_value`).
- `carrotdefense.bullets` – `Bullet`, which chases one enemy and hits it on
  contact or can `explode` around a point, with shared `BulletType` records
  handed out by `BulletFactory`.
- `carrotdefense.blocks` – `BaseBlock` (a buildable grid cell; `select`
  returns where each tower choice's button goes) and `PathBlock` (a cell of
  the enemy path, linked to the next one).
- `carrotdefense.events` – a small `Subject`/`Observer` pair; enemies
  notify their observers each time they move.
- `carrotdefense.savegame` – `save_value` and `load_value` for the
  one-number save file.
- `carrotdefense.app` – `LevelSelect` (level screens, lock check, `start`)
  and `main`, the command above.

## What it does not do

There is no graphical screen, no sound and no interactive play: nothing is
drawn, and the command cannot build, upgrade or sell towers while a level
runs. Towers are placed only from code, and levels are driven by calling
`tick` or `run`.

## Running the tests

    pip install .[test]
    pytest