"""Levels: the block grid, the enemy path, waves of enemies and the win/lose rules."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum

from .blocks import BaseBlock, PathBlock
from .enemies import ARRIVAL_TOLERANCE, Enemy, Mike, Nongp, Point, Zy
from .savegame import save_value
from .towers import Tower

#: Number of blocks across the grid.
BLOCK_X_NUM = 14
#: Number of blocks up the grid.
BLOCK_Y_NUM = 7
#: Side length of one block.
BLOCK_LEN = 120
#: Where level progress is stored by default.
SAVE_PATH = "savedata/player.txt"
#: Length of one frame in seconds.
FRAME = 1.0 / 60
#: Speed factor given to enemies while the level is stopped.
STOPPED_SPEED_SCALE = 0.00000001

_EPSILON = 1e-9


def coord_to_tag(x: int, y: int) -> int:
    """Tag of the grid block at column ``x`` and row ``y`` (both counted from 1)."""
    return (y - 1) * BLOCK_X_NUM + x


def block_center(x: int, y: int) -> Point:
    """Centre of the grid block at column ``x`` and row ``y``."""
    return (x * BLOCK_LEN + 0.5 * BLOCK_LEN, y * BLOCK_LEN + 0.5 * BLOCK_LEN)


def _check_coords(x: int, y: int) -> None:
    if not (1 <= x <= BLOCK_X_NUM and 1 <= y <= BLOCK_Y_NUM):
        raise ValueError(f"block ({x}, {y}) is outside the {BLOCK_X_NUM}x{BLOCK_Y_NUM} grid")


@dataclass
class Wave:
    """One wave: the enemies in spawn order and the time between two spawns."""

    spawn_interval: float
    sequence: list[Enemy] = field(default_factory=list)


class Outcome(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class BaseLevel:
    """A level: a grid of blocks, a path to the carrot, and waves of enemies.

    Time advances through :meth:`tick`; enemies move one step per tick, so a
    tick is meant to be one frame (:data:`FRAME` seconds).
    """

    MONEY = 5000
    HEALTH = 10
    SPAWN_POINT = (3, 4)

    def __init__(self, save_path: str | os.PathLike[str] | None = SAVE_PATH) -> None:
        self.save_path = save_path
        self.money = self.MONEY
        self.health = self.HEALTH
        self.current_wave = 0
        self.stop = False

        self.blocks: dict[int, BaseBlock] = {
            coord_to_tag(x, y): BaseBlock(block_center(x, y))
            for x in range(1, BLOCK_X_NUM + 1)
            for y in range(1, BLOCK_Y_NUM + 1)
        }

        sx, sy = self.SPAWN_POINT
        _check_coords(sx, sy)
        spawn = PathBlock(block_center(sx, sy))
        self.blocks[coord_to_tag(sx, sy)] = spawn
        self.path: list[PathBlock] = [spawn]
        self._set_path()
        self.carrot: Point = self.path[-1].position

        self.waves: list[Wave] = self._set_waves()
        self.max_wave = len(self.waves)
        self.wave_index = 0
        self.spawn_index = 0

        self.field: list[Enemy] = []
        self.current_towers: list[Tower] = []
        self.outcome = Outcome.PLAYING
        self.level_passed = False
        self.time = 0.0

        self._spawn_timer: float | None = (
            self.waves[0].spawn_interval if self.waves else None
        )
        self._checking_elimination = False
        self._tower_clocks: dict[Tower, float] = {}

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(money={self.money}, health={self.health}, "
            f"wave={self.current_wave}/{self.max_wave}, outcome={self.outcome.value})"
        )

    # Level layout, overridden by concrete levels.

    def _set_path(self) -> None:
        for x in range(4, 13):
            self.add_path(x, 4)

    def _enemy(self, cls: type[Enemy], texture: str | None = None) -> Enemy:
        return cls(self.path[0].position, texture) if texture else cls(self.path[0].position)

    def _set_waves(self) -> list[Wave]:
        return [
            Wave(0.5, [self._enemy(Enemy, "mike.png") for _ in range(3)]),
            Wave(0.1, [self._enemy(Enemy, "mike.png") for _ in range(3)]),
        ]

    # Grid and path.

    @property
    def waypoints(self) -> list[Point]:
        """Positions of the path blocks, from spawn point to carrot."""
        return [block.position for block in self.path]

    def add_path(self, x: int, y: int) -> PathBlock:
        """Turn block (``x``, ``y``) into the next block of the enemy path."""
        _check_coords(x, y)
        block = PathBlock(block_center(x, y))
        self.blocks[coord_to_tag(x, y)] = block
        self.path[-1].link = block
        self.path.append(block)
        return block

    def block_at(self, x: int, y: int) -> BaseBlock:
        """The block at column ``x`` and row ``y``."""
        _check_coords(x, y)
        return self.blocks[coord_to_tag(x, y)]

    def status_lines(self) -> list[str]:
        """Money, wave and health as shown at the top of the screen."""
        return [
            f"Current money: {self.money}",
            f"Current wave/Max wave: {self.current_wave}/{self.max_wave}",
            f"Current hp: {self.health}",
        ]

    # Waves.

    def spawn_one(self) -> Enemy:
        """Put the next enemy of the current wave on the field and return it."""
        if self.wave_index >= len(self.waves):
            raise IndexError("every wave has already been spawned")
        wave = self.waves[self.wave_index]
        if self.spawn_index >= len(wave.sequence):
            raise IndexError("the current wave has no enemies left to spawn")

        if self.spawn_index == 0:
            self.current_wave += 1
        enemy = wave.sequence[self.spawn_index]
        self.field.append(enemy)
        self.spawn_index += 1

        if self.spawn_index < len(wave.sequence):
            self._spawn_timer = wave.spawn_interval
        else:
            self._spawn_timer = None
            self._checking_elimination = True
        return enemy

    def check_elimination(self) -> bool:
        """Move on to the next wave once the current one is fully spawned and gone.

        Returns True when the wave was finished by this call.
        """
        if self.wave_index >= len(self.waves):
            return False
        wave = self.waves[self.wave_index]
        if self.spawn_index < len(wave.sequence):
            return False
        if any(enemy in self.field for enemy in wave.sequence):
            return False

        self.wave_index += 1
        self._checking_elimination = False
        if self.wave_index < len(self.waves):
            self.spawn_index = 0
            self._spawn_timer = self.waves[self.wave_index].spawn_interval
        else:
            self.current_wave += 1
        return True

    def win_check(self) -> Outcome:
        """Decide whether the level is lost or won; a win unlocks the next level."""
        if self.outcome is not Outcome.PLAYING:
            return self.outcome
        if self.health <= 0:
            self.outcome = Outcome.LOST
        elif self.current_wave > self.max_wave:
            self.outcome = Outcome.WON
            self.level_passed = True
            if self.save_path is not None:
                save_value(self.save_path, 1)
        return self.outcome

    def set_stop(self) -> None:
        """Freeze the enemies of the current wave."""
        self.stop = True
        if self.wave_index < len(self.waves):
            for enemy in self.waves[self.wave_index].sequence:
                enemy.set_speed_scale(STOPPED_SPEED_SCALE)

    def set_move(self) -> None:
        """Let the enemies of the current wave move at normal speed again."""
        self.stop = False
        if self.wave_index < len(self.waves):
            for enemy in self.waves[self.wave_index].sequence:
                enemy.set_speed_scale(1.0)

    # Simulation.

    def _advance_spawns(self, dt: float) -> None:
        if self._spawn_timer is None:
            return
        self._spawn_timer -= dt
        while self._spawn_timer is not None and self._spawn_timer <= _EPSILON:
            overshoot = self._spawn_timer
            self.spawn_one()
            if self._spawn_timer is not None:
                self._spawn_timer += overshoot

    def _advance_towers(self, dt: float) -> None:
        clocks: dict[Tower, float] = {}
        for tower in self.current_towers:
            clock = self._tower_clocks.get(tower, 0.0) + dt
            while tower.speed > 0 and clock >= tower.speed - _EPSILON:
                tower.update(self.field)
                clock -= tower.speed
            clocks[tower] = clock
        self._tower_clocks = clocks

    def _clear_field(self) -> None:
        end_x, end_y = self.path[-1].position
        remaining: list[Enemy] = []
        for enemy in self.field:
            x, y = enemy.position
            if enemy.is_dead():
                enemy.position = (0.0, 0.0)
                self.money += enemy.value
            elif abs(x - end_x) < ARRIVAL_TOLERANCE and abs(y - end_y) < ARRIVAL_TOLERANCE:
                self.health -= 1
            else:
                remaining.append(enemy)
        self.field = remaining

    def tick(self, dt: float = FRAME) -> Outcome:
        """Advance the level by one frame of ``dt`` seconds; return the outcome."""
        if self.outcome is not Outcome.PLAYING:
            return self.outcome
        self.time += dt
        self._advance_spawns(dt)

        waypoints = self.waypoints
        for enemy in list(self.field):
            enemy.advance(waypoints)

        self._advance_towers(dt)
        self._clear_field()
        if self._checking_elimination:
            self.check_elimination()
        return self.win_check()

    def run(self, max_time: float, dt: float = FRAME) -> Outcome:
        """Tick until the level is decided or ``max_time`` seconds have passed."""
        elapsed = 0.0
        while self.outcome is Outcome.PLAYING and elapsed < max_time:
            self.tick(dt)
            elapsed += dt
        return self.outcome

    def restart(self) -> BaseLevel:
        """A fresh copy of this level."""
        return type(self)(save_path=self.save_path)


class Level1(BaseLevel):
    """The first level: a path down from the top edge and across."""

    MONEY = 15000
    HEALTH = 10
    SPAWN_POINT = (2, 7)

    def _set_path(self) -> None:
        for y in (6, 5, 4):
            self.add_path(2, y)
        for x in range(3, 10):
            self.add_path(x, 4)
        self.add_path(9, 3)
        self.add_path(9, 2)

    def _set_waves(self) -> list[Wave]:
        return [
            Wave(0.7, [self._enemy(Mike) for _ in range(5)]),
            Wave(0.5, [self._enemy(Nongp) for _ in range(10)]),
            Wave(1.0, [self._enemy(Zy) for _ in range(3)]),
        ]


class Level2(BaseLevel):
    """The second level: a U-shaped path."""

    MONEY = 15000
    HEALTH = 10
    SPAWN_POINT = (3, 3)

    def _set_path(self) -> None:
        for x in range(4, 13):
            self.add_path(x, 3)
        self.add_path(12, 4)
        self.add_path(12, 5)
        for x in range(11, 2, -1):
            self.add_path(x, 5)

    def _set_waves(self) -> list[Wave]:
        first = Wave(1.0)
        for _ in range(6):
            first.sequence.append(self._enemy(Mike))
            first.sequence.append(self._enemy(Nongp))
        second = Wave(0.7)
        for _ in range(20):
            second.sequence.append(self._enemy(Mike))
            second.sequence.append(self._enemy(Zy))
        return [first, second]