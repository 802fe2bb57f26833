"""Defence towers that lock on to enemies in range and attack them."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .enemies import Enemy, Point

#: The tower is looking for enemies.
SEARCHING = 1
#: The tower has locked on to enemies and is attacking.
ATTACKING = 2

#: Seconds between two poison hits on a poisoned enemy.
POISON_INTERVAL = 0.5
#: Seconds after which poison wears off and the gas shell explodes.
POISON_DURATION = 2.0
#: Radius of the gas shell's explosion.
BLAST_RADIUS = 300.0

_EPSILON = 1e-9


def rotation_angle(turret: Point, target: Point) -> float:
    """Angle in degrees from ``turret`` towards ``target``, counter-clockwise from +x."""
    return math.degrees(math.atan2(target[1] - turret[1], target[0] - turret[0]))


def _contains(enemies: Sequence[Enemy], enemy: Enemy) -> bool:
    return any(e is enemy for e in enemies)


class Tower(ABC):
    """A tower standing on a block; attacks enemies within its range.

    :meth:`update` is meant to be called once per attack interval
    (``speed`` seconds) with the enemies currently on the field.
    """

    COST = 1
    UPGRADE_COST = 0
    SPEED = 1.0
    DAMAGE = 60
    RANGE = 500.0
    MAX_LOCK = 1
    TEXTURE = "tower.png"

    def __init__(self, position: Point = (0.0, 0.0)) -> None:
        self.position: Point = (float(position[0]), float(position[1]))
        self.level = 1
        self.cost = self.COST
        self.upgrade_cost = self.UPGRADE_COST
        self.speed = float(self.SPEED)
        self.damage = self.DAMAGE
        self.attack_range = float(self.RANGE)
        self.max_lock = self.MAX_LOCK
        self.texture = self.TEXTURE
        self.state = SEARCHING
        self.targets: list[Enemy] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self.level}, position={self.position})"

    def set_stats(
        self, level: int, cost: int, speed: float, damage: int, attack_range: int
    ) -> None:
        """Replace level, cost, attack interval, damage and range at once."""
        self.level = level
        self.cost = cost
        self.speed = float(speed)
        self.damage = damage
        self.attack_range = float(int(attack_range))

    def distance_to(self, enemy: Enemy) -> float:
        """Straight-line distance from the tower to ``enemy``."""
        return math.hypot(enemy.position[0] - self.position[0],
                          enemy.position[1] - self.position[1])

    def _in_range(self, enemy: Enemy) -> bool:
        return self.distance_to(enemy) <= self.attack_range

    def search(self, enemies: Iterable[Enemy]) -> Enemy | None:
        """The first enemy within range, or None."""
        return next((e for e in enemies if self._in_range(e)), None)

    def multi_search(self, enemies: Iterable[Enemy]) -> list[Enemy]:
        """Up to ``max_lock`` enemies within range, in the order given."""
        found: list[Enemy] = []
        for enemy in enemies:
            if len(found) >= self.max_lock:
                break
            if self._in_range(enemy):
                found.append(enemy)
        return found

    def update(self, enemies: Iterable[Enemy]) -> list[Enemy]:
        """Run one attack cycle against ``enemies``; return the enemies attacked."""
        field = list(enemies)

        present = any(_contains(field, t) for t in self.targets)
        beyond = any(self.distance_to(t) > self.attack_range for t in self.targets)
        if not self.targets or not present or not beyond:
            self.state = SEARCHING

        if self.state == SEARCHING:
            found = self.multi_search(field)
            if found:
                self.state = ATTACKING
                self.targets = found

        if self.state != ATTACKING:
            return []

        if len(self.targets) < self.max_lock:
            self.targets = self.multi_search(field)
        attacked = self.attack()
        self.targets = []
        return attacked

    def attack(self) -> list[Enemy]:
        """Attack the locked targets; return the enemies actually attacked."""
        return []

    @abstractmethod
    def level_up(self, key: int) -> bool:
        """Raise the tower to level ``key``; return False if there is no such level."""

    @abstractmethod
    def upgrade_picture(self) -> str:
        """Image of the upgrade button for the current level."""

    def sell_value(self) -> int:
        """Money returned when the tower is sold."""
        return int(0.75 * self.cost)


class Dianmei(Tower):
    """Lightning tower: strikes each locked enemy directly."""

    COST = 3000
    UPGRADE_COST = 3000
    SPEED = 1.0
    DAMAGE = 30
    RANGE = 300.0
    MAX_LOCK = 1
    TEXTURE = "dianmei1.png"

    # level: (speed, damage, range, max_lock, texture)
    _LEVELS = {
        2: (0.8, 40, 400, 2, "dianmei2.png"),
        3: (0.5, 40, 500, 3, "dianmei3.png"),
    }

    def level_up(self, key: int) -> bool:
        try:
            speed, damage, attack_range, max_lock, texture = self._LEVELS[key]
        except KeyError:
            return False
        self.set_stats(key, self.cost + self.upgrade_cost, speed, damage, attack_range)
        self.max_lock = max_lock
        self.texture = texture
        return True

    def attack(self) -> list[Enemy]:
        for enemy in self.targets:
            enemy.hit(self.damage)
        return list(self.targets)

    def upgrade_picture(self) -> str:
        return "upgrade_button_dianmei1.png" if self.level in (1, 2) else ""


@dataclass
class _Poisoning:
    enemy: Enemy
    elapsed: float = 0.0


class PoisonTower(Tower):
    """Gas tower: poisons every enemy in range, then the gas shell explodes.

    A poisoned enemy takes ``nox_damage`` every :data:`POISON_INTERVAL`
    seconds and is slowed; after :data:`POISON_DURATION` seconds it recovers
    its speed and every enemy within :data:`BLAST_RADIUS` of it takes
    ``boom_damage``. Time advances by ``speed`` seconds per :meth:`update`.
    """

    COST = 3000
    UPGRADE_COST = 3000
    SPEED = 1.0
    DAMAGE = 30
    RANGE = 300.0
    MAX_LOCK = 1000
    TEXTURE = "p1.png"

    _LEVELS = {
        2: (0.5, 50, 600, "p2.png"),
        3: (0.5, 50, 900, "p3.png"),
    }

    def __init__(self, position: Point = (0.0, 0.0)) -> None:
        super().__init__(position)
        self.nox_damage = 5
        self.boom_damage = 10
        self._poisonings: list[_Poisoning] = []

    def level_up(self, key: int) -> bool:
        try:
            speed, damage, attack_range, texture = self._LEVELS[key]
        except KeyError:
            return False
        self.set_stats(key, self.cost + self.upgrade_cost, speed, damage, attack_range)
        self.texture = texture
        return True

    def upgrade_picture(self) -> str:
        return "upgrade_button_dianmei1.png" if self.level in (1, 2) else ""

    def attack(self) -> list[Enemy]:
        for enemy in self.targets:
            if not any(p.enemy is enemy for p in self._poisonings):
                self._poisonings.append(_Poisoning(enemy))
        return list(self.targets)

    def update(self, enemies: Iterable[Enemy]) -> list[Enemy]:
        field = list(enemies)
        self._advance_poison(field, self.speed)
        return super().update(field)

    def _advance_poison(self, field: list[Enemy], dt: float) -> None:
        remaining: list[_Poisoning] = []
        for poisoning in self._poisonings:
            old = poisoning.elapsed
            new = old + dt
            tick = math.floor(old / POISON_INTERVAL + _EPSILON) + 1
            while (tick * POISON_INTERVAL <= new + _EPSILON
                   and tick * POISON_INTERVAL < POISON_DURATION - _EPSILON):
                poisoning.enemy.poison_tick(self.nox_damage)
                tick += 1
            poisoning.elapsed = new
            if new >= POISON_DURATION - _EPSILON:
                self._explode(poisoning.enemy, field)
            else:
                remaining.append(poisoning)
        self._poisonings = remaining

    def _explode(self, victim: Enemy, field: list[Enemy]) -> None:
        victim.poison_end()
        cx, cy = victim.position
        for enemy in field:
            if math.hypot(enemy.position[0] - cx, enemy.position[1] - cy) <= BLAST_RADIUS:
                enemy.hit(self.boom_damage)


class R99(Tower):
    """Machine gun: fires a magazine of ``level * 10`` shots, then reloads.

    While reloading, each :meth:`update` counts down ``speed`` seconds of the
    reload time instead of attacking.
    """

    COST = 1000
    UPGRADE_COST = 3000
    SPEED = 0.1
    DAMAGE = 40
    RANGE = 300.0
    MAX_LOCK = 1
    TEXTURE = "r991.png"

    _LEVELS = {
        2: (0.1, 40, 300, "r991.png"),
        3: (0.1, 40, 300, "r97.png"),
    }
    _BULLET_SPEEDS = {1: 1000, 2: 3000}

    def __init__(self, position: Point = (0.0, 0.0)) -> None:
        super().__init__(position)
        self.counter = 0
        self.reloading = False
        self.reload_remaining = 0.0
        self.rotation = 0.0
        self.flipped = False
        self.bullet_speed = self._BULLET_SPEEDS[1]

    def level_up(self, key: int) -> bool:
        try:
            speed, damage, attack_range, texture = self._LEVELS[key]
        except KeyError:
            return False
        self.set_stats(key, self.cost + self.upgrade_cost, speed, damage, attack_range)
        self.texture = texture
        return True

    def upgrade_picture(self) -> str:
        if self.level in (1, 2):
            return "upgrade_button_dianmei1.png"
        return "upgrade_button_dianmei3.png"

    def bullets_left(self) -> int:
        """Shots left in the magazine."""
        return self.level * 10 - self.counter

    def attack(self) -> list[Enemy]:
        attacked: list[Enemy] = []
        for enemy in self.targets:
            if self.counter >= self.level * 10:
                continue
            self.bullet_speed = self._BULLET_SPEEDS.get(self.level, 5000)
            enemy.hit(self.damage)
            self.counter += 1
            angle = rotation_angle(self.position, enemy.position)
            self.flipped = abs(angle) > 90.0
            self.rotation = -angle
            attacked.append(enemy)
        return attacked

    def reload_check(self) -> float | None:
        """Start reloading if the magazine is empty; return the reload time, or None."""
        if self.counter < self.level * 10:
            return None
        self.counter = 0
        self.reloading = True
        wait = 0.8 if self.level == 3 else 1.0
        self.reload_remaining = wait * 2 + 0.2
        return self.reload_remaining

    def finish_reload(self) -> int:
        """End reloading and return the number of shots available."""
        self.reloading = False
        self.reload_remaining = 0.0
        return self.bullets_left()

    def update(self, enemies: Iterable[Enemy]) -> list[Enemy]:
        if self.reloading:
            self.reload_remaining -= self.speed
            if self.reload_remaining <= _EPSILON:
                self.finish_reload()
            return []
        attacked = super().update(enemies)
        self.reload_check()
        return attacked