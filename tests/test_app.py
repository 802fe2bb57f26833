import pytest

from carrotdefense.app import LevelLockedError, LevelSelect, Transition, main
from carrotdefense.level import Level1, Level2
from carrotdefense.savegame import save_value


@pytest.fixture
def save_file(tmp_path):
    return tmp_path / "player.txt"


def test_start_without_screen_raises(save_file):
    select = LevelSelect(save_file)
    assert select.screen is None
    with pytest.raises(RuntimeError):
        select.start()


def test_first_screen_from_menu_has_no_transition(save_file):
    select = LevelSelect(save_file)
    assert select.show_first() is Transition.NONE
    assert select.screen == 1


def test_switching_screens_slides(save_file):
    select = LevelSelect(save_file)
    select.show_first()
    assert select.show_second() is Transition.SLIDE_IN_RIGHT
    assert select.screen == 2
    assert select.show_first() is Transition.SLIDE_IN_LEFT
    assert select.screen == 1


def test_second_screen_from_menu_has_no_transition(save_file):
    select = LevelSelect(save_file)
    assert select.show_second() is Transition.NONE


def test_second_locked_without_save(save_file):
    select = LevelSelect(save_file)
    assert select.second_unlocked() is False
    select.show_second()
    with pytest.raises(LevelLockedError):
        select.start()


def test_second_locked_when_saved_zero(save_file):
    save_value(save_file, 0)
    assert LevelSelect(save_file).second_unlocked() is False


def test_second_unlocked_after_save(save_file):
    save_value(save_file, 1)
    select = LevelSelect(save_file)
    assert select.second_unlocked() is True
    select.show_second()
    level = select.start()
    assert isinstance(level, Level2)
    assert level.save_path == save_file


def test_no_save_path_keeps_second_locked():
    assert LevelSelect(None).second_unlocked() is False


def test_start_first_level(save_file):
    select = LevelSelect(save_file)
    select.show_first()
    level = select.start()
    assert isinstance(level, Level1)
    assert level.money == 15000


def test_main_locked_level_fails(save_file, capsys):
    assert main(["--level", "2", "--save", str(save_file)]) == 1
    assert "locked" in capsys.readouterr().err


def test_main_plays_first_level(save_file, capsys):
    assert main(["--level", "1", "--save", str(save_file), "--time", "0.1"]) == 0
    out = capsys.readouterr().out
    assert "Current money: 15000" in out
    assert "Outcome: playing" in out


def test_main_rejects_negative_time(save_file):
    assert main(["--save", str(save_file), "--time", "-1"]) == 2


def test_main_rejects_unknown_level(save_file):
    with pytest.raises(SystemExit):
        main(["--level", "3", "--save", str(save_file)])