"""Bullets that chase an enemy, and shared bullet types."""

from __future__ import annotations

import math
from collections.abc import Collection, Iterable
from dataclasses import dataclass

from .enemies import Enemy, Point
from .towers import BLAST_RADIUS

#: The tracked enemy left the field before the bullet reached it.
TARGET_LOST = 0
#: The bullet reached its enemy and dealt its damage.
HIT = 1
#: The bullet is still flying towards its enemy.
MOVING = 2

#: How close, on each axis, a bullet must be to its enemy to hit it.
HIT_DISTANCE = 100.0


@dataclass(frozen=True)
class BulletType:
    """Properties shared by every bullet of one kind."""

    speed: int
    damage: int
    boom_damage: int
    texture: str


class BulletFactory:
    """Hands out one shared :class:`BulletType` per distinct set of properties."""

    def __init__(self) -> None:
        self._types: dict[tuple[str, int, int, int], BulletType] = {}

    def __len__(self) -> int:
        return len(self._types)

    def get_bullet_type(
        self, speed: int, damage: int, boom_damage: int, texture: str
    ) -> BulletType:
        """Return the cached type for these properties, creating it on first use."""
        key = (texture, speed, damage, boom_damage)
        bullet_type = self._types.get(key)
        if bullet_type is None:
            bullet_type = BulletType(speed, damage, boom_damage, texture)
            self._types[key] = bullet_type
        return bullet_type


_DEFAULT_FACTORY = BulletFactory()


class Bullet:
    """A projectile that flies towards one enemy and damages it on contact.

    ``field``, when given, is the collection of enemies still on the field; a
    target missing from it counts as gone, as does a dead target.
    """

    def __init__(
        self,
        texture: str,
        speed: int,
        damage: int,
        boom_damage: int,
        position: Point = (0.0, 0.0),
        target: Enemy | None = None,
        field: Collection[Enemy] | None = None,
        factory: BulletFactory | None = None,
    ) -> None:
        factory = factory if factory is not None else _DEFAULT_FACTORY
        self.bullet_type = factory.get_bullet_type(speed, damage, boom_damage, texture)
        self.damage = self.bullet_type.damage
        self.boom_damage = self.bullet_type.boom_damage
        self.position: Point = (float(position[0]), float(position[1]))
        self.target = target
        self.field = field
        self.state = MOVING
        self.active = True

    def __repr__(self) -> str:
        return (
            f"Bullet(texture={self.bullet_type.texture!r}, state={self.state}, "
            f"position={self.position})"
        )

    def _target_present(self) -> bool:
        target = self.target
        if target is None or target.is_dead():
            return False
        if self.field is not None:
            return any(e is target for e in self.field)
        return True

    def track_and_attack(self, dt: float) -> int:
        """Advance the bullet by ``dt`` seconds; return its state afterwards.

        A bullet that has hit or lost its target stays inactive and does nothing.
        """
        if not self.active:
            return self.state

        if not self._target_present():
            self.state = TARGET_LOST
            self.active = False
            return self.state

        self.damage = self.bullet_type.damage
        bx, by = self.position
        ex, ey = self.target.position  # type: ignore[union-attr]

        if abs(bx - ex) < HIT_DISTANCE and abs(by - ey) < HIT_DISTANCE:
            self.target.hit(self.damage)  # type: ignore[union-attr]
            self.active = False
            self.state = HIT
        else:
            self.state = MOVING
            duration = self.bullet_type.speed // 1000
            fraction = 1.0 if duration <= 0 else min(1.0, dt / duration)
            self.position = (bx + (ex - bx) * fraction, by + (ey - by) * fraction)
        return self.state

    def multi_search(self, enemies: Iterable[Enemy], center: Point) -> list[Enemy]:
        """Enemies within the blast radius of ``center``, in the order given."""
        cx, cy = center
        return [
            e for e in enemies
            if math.hypot(e.position[0] - cx, e.position[1] - cy) <= BLAST_RADIUS
        ]

    def explode(
        self, enemies: Iterable[Enemy], center: Point, boom_damage: int | None
    ) -> list[Enemy]:
        """Damage every enemy near ``center``; return the enemies hit.

        ``boom_damage`` of None uses the bullet type's own explosion damage.
        """
        if boom_damage is not None:
            self.boom_damage = boom_damage
        hit = self.multi_search(enemies, center)
        for enemy in hit:
            enemy.hit(self.boom_damage)
        return hit