import pytest

from qirkat import engine
from qirkat.notation import (
    format_move,
    format_setup,
    parse_color,
    parse_move,
    parse_setup,
    parse_square,
    square_name,
)
from qirkat.types import Move, PieceColor, SetupError


def test_square_roundtrip():
    for k, name in [(0, "a1"), (4, "e1"), (12, "c3"), (20, "a5"), (24, "e5")]:
        assert square_name(k) == name
        assert parse_square(name) == k
    assert parse_square("C3") == 12


def test_invalid_squares():
    for sample in ["", "f1", "a6", "a0", "c33", "3c"]:
        with pytest.raises(ValueError):
            parse_square(sample)
    with pytest.raises(ValueError):
        square_name(25)


def test_parse_slide_and_jump():
    slide = parse_move("c2-c3")
    assert slide == Move(7, 12)
    assert not slide.is_jump
    jump = parse_move("C4-C2")
    assert jump.is_jump
    assert jump.jumped_sq == 12


def test_parse_chain():
    chain = parse_move("a1-a3-c3-e3-c5-a3")
    assert chain.squares() == [0, 10, 12, 14, 22, 10]
    assert chain.final_sq == 10
    assert len(list(chain.steps())) == 5
    assert format_move(chain) == "a1-a3-c3-e3-c5-a3"
    assert str(chain) == "a1-a3-c3-e3-c5-a3"


def test_parse_pass():
    move = parse_move("-")
    assert move is Move.PASS
    assert move.is_pass
    assert format_move(move) == "-"


def test_parse_invalid_moves():
    for sample in ["", "c2", "c2-", "c2-c3-c4", "z1-a1", "a1-a3-b3"]:
        with pytest.raises(ValueError):
            parse_move(sample)


def test_left_and_right_moves():
    assert parse_move("c1-b1").is_left_move
    assert parse_move("b1-c1").is_right_move
    assert not parse_move("c1-c2").is_left_move
    assert not parse_move("e1-a2").is_right_move


def test_parse_setup():
    cells = parse_setup(" wwwww wwwww bb-ww bbbbb bbbbb ")
    assert len(cells) == 25
    assert cells[12] is PieceColor.EMPTY
    assert cells[10] is PieceColor.BLACK
    assert cells[0] is PieceColor.WHITE


def test_parse_setup_errors():
    for sample in ["", "w" * 24, "w" * 26, "q" * 25]:
        with pytest.raises(SetupError):
            parse_setup(sample)


def test_format_setup_roundtrip():
    position = engine.new_game()
    text = format_setup(position)
    assert text == "wwwww wwwww bb-ww bbbbb bbbbb"
    assert parse_setup(text) == position.cells


def test_parse_color():
    assert parse_color("White") is PieceColor.WHITE
    assert parse_color("BLACK") is PieceColor.BLACK
    with pytest.raises(SetupError):
        parse_color("empty")
