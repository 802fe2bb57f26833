"""Enemies that walk along a level's path, and the ways they move."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence

from .events import Subject

Point = tuple[float, float]

#: How close, on each axis, an enemy must be to a waypoint to count as there.
ARRIVAL_TOLERANCE = 10.0
#: Speed factor applied while an enemy is poisoned.
POISON_SLOWDOWN = 0.5


def _step(enemy: "Enemy", path: Sequence[Point], speed: float) -> Point:
    """Move ``enemy`` one frame towards its next waypoint on ``path``."""
    if enemy.target_index is None:
        if len(path) < 2:
            raise IndexError("a path needs at least two waypoints")
        enemy.target_index = 1

    x, y = enemy.position
    tx, ty = path[enemy.target_index]
    if abs(x - tx) < ARRIVAL_TOLERANCE and abs(y - ty) < ARRIVAL_TOLERANCE:
        if enemy.target_index < len(path) - 1:
            enemy.target_index += 1
        tx, ty = path[enemy.target_index]

    length = math.hypot(tx - x, ty - y)
    if length > 0:
        enemy.position = (x + speed * (tx - x) / length, y + speed * (ty - y) / length)
    return enemy.position


class MoveStrategy(ABC):
    """A way of moving an enemy along a path."""

    @abstractmethod
    def move(self, enemy: "Enemy", path: Sequence[Point], speed: float) -> Point:
        """Move ``enemy`` one frame along ``path`` at ``speed``; return its position."""


class FastMove(MoveStrategy):
    """Moves straight towards the next waypoint at the given speed."""

    def move(self, enemy: "Enemy", path: Sequence[Point], speed: float) -> Point:
        return _step(enemy, path, speed)


class SlowMove(MoveStrategy):
    """Moves straight towards the next waypoint at the given speed."""

    def move(self, enemy: "Enemy", path: Sequence[Point], speed: float) -> Point:
        return _step(enemy, path, speed)


class Enemy(Subject):
    """A monster walking the path towards the carrot."""

    VALUE = 1000
    HP = 100
    SPEED = 5.0
    TEXTURE = "enemy.png"

    def __init__(self, position: Point = (0.0, 0.0), texture: str | None = None) -> None:
        super().__init__()
        self.texture = texture if texture is not None else self.TEXTURE
        self.value = self.VALUE
        self.hp = self.HP
        self.max_hp = self.HP
        self.speed = float(self.SPEED)
        self.speed_scale = 1.0
        self.position: Point = (float(position[0]), float(position[1]))
        self.target_index: int | None = None
        self.move_strategy: MoveStrategy | None = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(hp={self.hp}/{self.max_hp}, "
            f"position={self.position})"
        )

    def scale_hp(self, factor: int) -> None:
        """Multiply current and maximum health by ``factor``."""
        self.hp *= factor
        self.max_hp *= factor

    def hit(self, damage: int) -> None:
        """Take ``damage`` points of damage."""
        self.hp -= damage

    def set_speed_scale(self, scale: float) -> None:
        """Set the factor applied to the enemy's speed."""
        self.speed_scale = scale

    def health_percent(self) -> float:
        """Current health as a percentage of maximum health."""
        return self.hp / self.max_hp * 100.0

    def hp_label(self) -> str:
        """Text shown above the enemy's health bar."""
        return str(self.hp)

    def advance(self, path: Sequence[Point]) -> Point:
        """Move one frame along ``path`` and notify observers; return the new position."""
        if self.move_strategy is not None:
            position = self.move_strategy.move(self, path, self.speed)
        else:
            position = _step(self, path, self.speed * self.speed_scale)
        self.notify_observers()
        return position

    def poison_tick(self, damage: int) -> None:
        """Take poison damage and slow down if moving at normal speed."""
        self.hit(damage)
        if self.speed_scale == 1:
            self.speed_scale = POISON_SLOWDOWN

    def poison_end(self) -> None:
        """Recover normal speed once poison wears off."""
        if self.speed_scale == POISON_SLOWDOWN:
            self.speed_scale = 1.0

    def is_dead(self) -> bool:
        return self.hp <= 0


class Mike(Enemy):
    VALUE = 500
    HP = 300
    SPEED = 5.0
    TEXTURE = "mike.png"


class Nongp(Enemy):
    VALUE = 300
    HP = 150
    SPEED = 10.0
    TEXTURE = "nongp.png"


class Zy(Enemy):
    VALUE = 1000
    HP = 1000
    SPEED = 2.0
    TEXTURE = "zy.png"


class SoldierEnemy(Enemy):
    VALUE = 1000
    HP = 500
    SPEED = 5.0
    TEXTURE = "SoldierEnemy.png"


class TankEnemy(Enemy):
    VALUE = 2000
    HP = 1000
    SPEED = 3.0
    TEXTURE = "TankEnemy.png"


class BossEnemy(Enemy):
    VALUE = 5000
    HP = 2000
    SPEED = 2.0
    TEXTURE = "BossEnemy.png"


_KINDS: dict[str, type[Enemy]] = {
    "enemy": Enemy,
    "mike": Mike,
    "nongp": Nongp,
    "zy": Zy,
    "soldier": SoldierEnemy,
    "tank": TankEnemy,
    "boss": BossEnemy,
}


def create_enemy(kind: str) -> Enemy:
    """Create a fresh enemy by kind name, e.g. ``"boss"`` or ``"mike"``."""
    try:
        cls = _KINDS[kind.lower()]
    except KeyError:
        raise ValueError(f"unknown enemy kind: {kind!r}") from None
    return cls()