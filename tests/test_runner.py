import pytest

from qirkat import runner
from qirkat.game_controller import GameConfig, GameController
from qirkat.types import PieceColor


def test_parse_move_list():
    assert runner.parse_move_list("c2-c3, c4-c2,,") == ["c2-c3", "c4-c2"]


def test_play_game_with_opening_moves():
    config = GameConfig(
        white_manual=False,
        black_manual=False,
        white_agent="random",
        black_agent="random",
        seed=5,
    )
    summary = runner.play_game(GameController(config), opening=["c2-c3", "c4-c2"], max_plies=6)
    assert summary.plies == 6
    assert [str(m) for m in summary.moves[:2]] == ["c2-c3", "c4-c2"]


def test_main_reports_winner(capsys):
    runner.main(
        [
            "--setup",
            "----- ----- --w-- --b-- -----",
            "--white-depth",
            "1",
            "--black-depth",
            "1",
        ]
    )
    out = capsys.readouterr().out
    assert "White moves c3-c5." in out
    assert out.strip().endswith("White wins.")


def test_main_ply_limit(capsys):
    runner.main(["--white", "random", "--black", "random", "--seed", "1", "--max-plies", "3", "--verbose"])
    out = capsys.readouterr().out
    assert out.count(" moves ") == 3
    assert "No winner after 3 plies." in out


def test_main_rejects_bad_setup(capsys):
    with pytest.raises(SystemExit) as excinfo:
        runner.main(["--setup", "wwww"])
    assert excinfo.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().out


def test_main_rejects_illegal_opening(capsys):
    with pytest.raises(SystemExit) as excinfo:
        runner.main(["--moves", "c2-c4"])
    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert "Opening rejected: illegal move: c2-c4" in out
    assert "Invalid configuration" not in out


def test_black_to_move_from_setup(capsys):
    runner.main(
        [
            "--setup",
            "----- ---w- --b-- ---w- bbbbb",
            "--turn",
            "black",
            "--white-depth",
            "1",
            "--black-depth",
            "2",
        ]
    )
    out = capsys.readouterr().out
    assert out.strip().endswith(f"{PieceColor.BLACK.full_name} wins.")
