"""Level selection and the command that plays a level."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from enum import Enum

from .level import SAVE_PATH, BaseLevel, Level1, Level2
from .savegame import load_value

#: Size of the playing field the layout is designed for.
DESIGN_RESOLUTION = (1920, 1080)
#: Frames per second the game runs at.
FRAMES_PER_SECOND = 60


class Transition(Enum):
    """How a level screen appears."""

    NONE = "none"
    SLIDE_IN_LEFT = "slide_in_left"
    SLIDE_IN_RIGHT = "slide_in_right"


class LevelLockedError(Exception):
    """Raised when starting a level that has not been unlocked yet."""


class LevelSelect:
    """The level selection screens reached from the main menu.

    The first level is always playable; the second is unlocked once the
    first has been won, which is recorded in the save file.
    """

    LEVELS: dict[int, type[BaseLevel]] = {1: Level1, 2: Level2}

    def __init__(self, save_path: str | os.PathLike[str] | None = SAVE_PATH) -> None:
        self.save_path = save_path
        self.screen: int | None = None
        self.transition = Transition.NONE

    def __repr__(self) -> str:
        return f"LevelSelect(screen={self.screen}, transition={self.transition.value})"

    def show_first(self) -> Transition:
        """Show the first level's screen; slides in when coming from the second."""
        self.transition = Transition.SLIDE_IN_LEFT if self.screen == 2 else Transition.NONE
        self.screen = 1
        return self.transition

    def show_second(self) -> Transition:
        """Show the second level's screen; slides in when coming from the first."""
        self.transition = Transition.SLIDE_IN_RIGHT if self.screen == 1 else Transition.NONE
        self.screen = 2
        return self.transition

    def second_unlocked(self) -> bool:
        """Whether the save file records the first level as passed."""
        if self.save_path is None:
            return False
        return load_value(self.save_path, 0) != 0

    def start(self) -> BaseLevel:
        """Start the level whose screen is shown and return it."""
        if self.screen is None:
            raise RuntimeError("no level screen is shown")
        if self.screen == 2 and not self.second_unlocked():
            raise LevelLockedError("level 2 is locked until level 1 is won")
        return self.LEVELS[self.screen](save_path=self.save_path)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="carrotdefense", description="Play a tower defence level without towers."
    )
    parser.add_argument("--level", type=int, choices=(1, 2), default=1,
                        help="level to play (default: 1)")
    parser.add_argument("--save", default=SAVE_PATH,
                        help=f"save file recording progress (default: {SAVE_PATH})")
    parser.add_argument("--time", type=float, default=120.0,
                        help="seconds of game time to simulate at most (default: 120)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Select a level, play it, and print the final status."""
    args = _parser().parse_args(argv)
    if args.time < 0:
        print("carrotdefense: --time must not be negative", file=sys.stderr)
        return 2

    select = LevelSelect(args.save)
    if args.level == 1:
        select.show_first()
    else:
        select.show_second()

    try:
        level = select.start()
    except LevelLockedError as error:
        print(f"carrotdefense: {error}", file=sys.stderr)
        return 1

    outcome = level.run(args.time, 1.0 / FRAMES_PER_SECOND)
    for line in level.status_lines():
        print(line)
    print(f"Outcome: {outcome.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())