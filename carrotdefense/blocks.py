"""Grid blocks: empty plots that towers can be built on, and path blocks."""

from __future__ import annotations

from typing import Protocol

from .enemies import Point
from .towers import Dianmei, PoisonTower, R99, Tower

UNSELECTED_OPACITY = 30
SELECTED_OPACITY = 255
#: Side length of a block on the grid.
BLOCK_SIZE = 120.0

# Tower choices offered above a selected block, as (x, y) offsets in block sizes.
_TOWER_OPTIONS: tuple[tuple[type[Tower], tuple[int, int]], ...] = (
    (Dianmei, (1, 1)),
    (R99, (0, 1)),
    (PoisonTower, (-1, 1)),
)


class _Economy(Protocol):
    money: int
    current_towers: list[Tower]


class BaseBlock:
    """An empty grid cell; selecting it offers towers to build."""

    TEXTURE = "center_grid_selected.png"

    def __init__(self, position: Point = (0.0, 0.0), size: float = BLOCK_SIZE) -> None:
        self.position: Point = (float(position[0]), float(position[1]))
        self.size = float(size)
        self.texture = self.TEXTURE
        self.opacity = UNSELECTED_OPACITY
        self.cost = 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(position={self.position})"

    def select(self) -> dict[type[Tower], Point]:
        """Highlight the block; return where each tower choice's button goes."""
        self.opacity = SELECTED_OPACITY
        x, y = self.position
        return {
            tower: (x + dx * self.size, y + dy * self.size)
            for tower, (dx, dy) in _TOWER_OPTIONS
        }

    def deselect(self) -> None:
        """Drop the highlight."""
        self.opacity = UNSELECTED_OPACITY

    def set_cost(self, cost: int) -> int:
        """Record the cost of what stands on this block and return it."""
        self.cost = cost
        return self.cost

    def build(self, level: _Economy, tower_class: type[Tower]) -> Tower | None:
        """Build ``tower_class`` here if ``level`` can pay for it.

        The block is deselected either way. On success the price is taken from
        ``level.money``, the tower is added to ``level.current_towers`` and
        returned; otherwise None is returned and nothing is spent.
        """
        self.deselect()
        tower = tower_class(self.position)
        if level.money < tower.cost:
            return None
        level.money -= tower.cost
        level.current_towers.append(tower)
        return tower


class PathBlock(BaseBlock):
    """A cell enemies walk over; linked to the next cell of the path."""

    TEXTURE = "path_block.png"

    def __init__(self, position: Point = (0.0, 0.0), size: float = BLOCK_SIZE) -> None:
        super().__init__(position, size)
        self.opacity = SELECTED_OPACITY
        self.link: PathBlock | None = None

    def next_path(self) -> PathBlock | None:
        """The following block on the path, or None at the end."""
        return self.link

    def select(self) -> dict[type[Tower], Point]:
        """Path blocks offer nothing to build."""
        return {}

    def build(self, level: _Economy, tower_class: type[Tower]) -> Tower | None:
        raise TypeError("towers cannot be built on the path")