import math

import pytest

from carrotdefense.enemies import (
    ARRIVAL_TOLERANCE,
    BossEnemy,
    Enemy,
    FastMove,
    Mike,
    MoveStrategy,
    Nongp,
    SlowMove,
    SoldierEnemy,
    TankEnemy,
    Zy,
    create_enemy,
)
from carrotdefense.events import Observer


@pytest.mark.parametrize(
    "cls, value, hp, speed",
    [
        (Enemy, 1000, 100, 5),
        (Mike, 500, 300, 5),
        (Nongp, 300, 150, 10),
        (Zy, 1000, 1000, 2),
        (SoldierEnemy, 1000, 500, 5),
        (TankEnemy, 2000, 1000, 3),
        (BossEnemy, 5000, 2000, 2),
    ],
)
def test_stats(cls, value, hp, speed):
    enemy = cls()
    assert (enemy.value, enemy.hp, enemy.max_hp, enemy.speed) == (value, hp, hp, speed)


def test_hit_reduces_hp_and_kills():
    enemy = Enemy()
    enemy.hit(40)
    assert enemy.hp == 60
    assert not enemy.is_dead()
    enemy.hit(60)
    assert enemy.is_dead()


def test_scale_hp_keeps_full_health():
    enemy = Mike()
    enemy.scale_hp(3)
    assert enemy.max_hp == 3 * Mike.HP
    assert enemy.health_percent() == 100.0


def test_health_percent_and_label():
    enemy = Enemy()
    enemy.hit(25)
    assert enemy.health_percent() == 75.0
    assert enemy.hp_label() == "75"


def test_poison_slows_then_recovers():
    enemy = Enemy()
    enemy.poison_tick(5)
    assert enemy.hp == Enemy.HP - 5
    assert enemy.speed_scale == 0.5
    enemy.poison_end()
    assert enemy.speed_scale == 1.0


def test_poison_does_not_override_stop():
    enemy = Enemy()
    enemy.set_speed_scale(0.00000001)
    enemy.poison_tick(5)
    assert enemy.speed_scale == 0.00000001
    enemy.poison_end()
    assert enemy.speed_scale == 0.00000001


def test_advance_moves_by_speed_towards_target():
    path = [(0.0, 0.0), (300.0, 400.0)]
    enemy = Enemy(position=path[0])
    before = math.dist(enemy.position, path[1])
    enemy.advance(path)
    after = math.dist(enemy.position, path[1])
    assert after == pytest.approx(before - Enemy.SPEED)
    assert enemy.target_index == 1


def test_advance_respects_speed_scale():
    path = [(0.0, 0.0), (1000.0, 0.0)]
    enemy = Enemy(position=path[0])
    enemy.set_speed_scale(0.5)
    x, y = enemy.advance(path)
    assert x == pytest.approx(Enemy.SPEED * 0.5)
    assert y == 0.0


def test_advance_turns_at_waypoint():
    path = [(0.0, 0.0), (100.0, 0.0), (100.0, 100.0)]
    enemy = Enemy(position=(100.0 - ARRIVAL_TOLERANCE / 2, 0.0))
    enemy.advance(path)
    assert enemy.target_index == 2
    assert enemy.position[1] > 0.0


def test_advance_stays_on_last_waypoint():
    path = [(0.0, 0.0), (100.0, 0.0)]
    enemy = Enemy(position=(100.0, 0.0))
    enemy.target_index = 1
    assert enemy.advance(path) == (100.0, 0.0)
    assert enemy.target_index == 1


def test_advance_needs_two_waypoints():
    with pytest.raises(IndexError):
        Enemy().advance([(0.0, 0.0)])


@pytest.mark.parametrize("strategy", [FastMove(), SlowMove()])
def test_strategy_ignores_speed_scale(strategy):
    path = [(0.0, 0.0), (1000.0, 0.0)]
    enemy = Enemy(position=path[0])
    enemy.set_speed_scale(0.5)
    enemy.move_strategy = strategy
    x, _ = enemy.advance(path)
    assert x == pytest.approx(Enemy.SPEED)


def test_advance_notifies_observers():
    seen = []

    class Watcher(Observer):
        def update(self, subject):
            seen.append(subject.position)

    enemy = Enemy()
    enemy.add_observer(Watcher())
    enemy.advance([(0.0, 0.0), (0.0, 50.0)])
    assert seen == [enemy.position]


def test_move_strategy_is_abstract():
    with pytest.raises(TypeError):
        MoveStrategy()


@pytest.mark.parametrize(
    "kind, cls",
    [("boss", BossEnemy), ("Tank", TankEnemy), ("soldier", SoldierEnemy), ("mike", Mike)],
)
def test_create_enemy(kind, cls):
    enemy = create_enemy(kind)
    assert type(enemy) is cls
    assert enemy.hp == cls.HP


def test_create_enemy_unknown():
    with pytest.raises(ValueError):
        create_enemy("dragon")


def test_created_enemies_are_independent():
    first = create_enemy("boss")
    second = create_enemy("boss")
    first.hit(10)
    assert second.hp == BossEnemy.HP