"""Qirkat square, move and setup-string notation.

Squares are written column letter then row digit (``a1`` .. ``e5``). A slide is
``c2-c3``; a multi-jump lists every landing square, e.g. ``a1-a3-c3-e3``; a
single ``-`` is a pass. Setup strings give 25 symbols (``w``, ``b``, ``-``) in
row-major order starting at a1, optionally interspersed with whitespace.
"""
from __future__ import annotations

import re
from typing import List

from .types import (
    BOARD_SIZE,
    NUM_SQUARES,
    Move,
    PieceColor,
    Position,
    SetupError,
    col_of,
    index,
    row_of,
)

COLUMNS = "abcde"
ROWS = "12345"

_SYMBOLS = {
    "w": PieceColor.WHITE,
    "b": PieceColor.BLACK,
    "-": PieceColor.EMPTY,
}
_SQUARE_RE = re.compile(r"^[a-e][1-5]$")


def square_name(k: int) -> str:
    """Convert a linear index to its square name (e.g., 0 -> "a1")."""

    if not 0 <= k < NUM_SQUARES:
        raise ValueError(f"square index out of bounds: {k}")
    return f"{COLUMNS[col_of(k)]}{ROWS[row_of(k)]}"


def parse_square(sq: str) -> int:
    """Convert a square name (e.g., "c3") to its linear index."""

    text = sq.strip().lower()
    if not _SQUARE_RE.match(text):
        raise ValueError(f"Invalid square '{sq}'")
    return index(COLUMNS.index(text[0]), ROWS.index(text[1]))


def _is_jump_step(k0: int, k1: int) -> bool:
    dr = abs(row_of(k1) - row_of(k0))
    dc = abs(col_of(k1) - col_of(k0))
    return (dr, dc) in {(0, 2), (2, 0), (2, 2)}


def parse_move(raw: str) -> Move:
    """Parse move text such as ``c2-c3`` or ``a1-a3-c3``.

    Raises:
        ValueError: if the text is not a pass, a slide or a chain of jump steps.
    """

    text = raw.strip().lower()
    if not text:
        raise ValueError("Move text is empty")
    if text == "-":
        return Move.PASS

    parts = [part.strip() for part in text.split("-")]
    if len(parts) < 2:
        raise ValueError(f"Could not parse move '{raw}'; use formats like 'c2-c3'")
    squares = [parse_square(part) for part in parts]
    if len(squares) > 2:
        for k0, k1 in zip(squares, squares[1:]):
            if not _is_jump_step(k0, k1):
                raise ValueError(f"'{raw}' chains squares that are not jumps")
    return Move.jump_chain(squares)


def format_move(move: Move) -> str:
    """Serialize a move to text, the inverse of :func:`parse_move`."""

    if move.is_pass:
        return "-"
    return "-".join(square_name(k) for k in move.squares())


def parse_setup(raw: str) -> List[PieceColor]:
    """Parse a 25-symbol board description into a list of colors."""

    text = re.sub(r"\s", "", raw)
    if len(text) != NUM_SQUARES:
        raise SetupError(f"bad board description: expected {NUM_SQUARES} symbols, got {len(text)}")
    cells: List[PieceColor] = []
    for symbol in text:
        color = _SYMBOLS.get(symbol.lower())
        if color is None:
            raise SetupError(f"bad board description: invalid symbol '{symbol}'")
        cells.append(color)
    return cells


def format_setup(position: Position) -> str:
    """Return the 25-symbol setup string for ``position`` (rows separated by spaces)."""

    rows = []
    for r in range(BOARD_SIZE):
        rows.append("".join(position.cells[index(c, r)].short_name for c in range(BOARD_SIZE)))
    return " ".join(rows)


def parse_color(name: str) -> PieceColor:
    """Parse ``white`` / ``black`` (case-insensitive) into a side."""

    value = (name or "").strip().lower()
    if value == "white":
        return PieceColor.WHITE
    if value == "black":
        return PieceColor.BLACK
    raise SetupError(f"bad player color '{name}'")
