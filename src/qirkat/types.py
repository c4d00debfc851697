"""Core data structures for Qirkat.

Rule reminders:
- Board is 5x5; squares use a linear index 0..24 in row-major order starting at a1.
- Column = index % 5 ('a'..'e'); row = index // 5 ('1'..'5').
- White starts on rows 1-2 and moves up the board; Black starts on rows 4-5.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, List, Optional, Sequence, Tuple

BOARD_SIZE = 5
NUM_SQUARES = BOARD_SIZE * BOARD_SIZE


class SetupError(ValueError):
    """Raised for a malformed board description or side to move."""


class IllegalMoveError(ValueError):
    """Raised when a move is not in the current legal-move set."""


class PieceColor(Enum):
    """Contents of a square, and the two sides of the game."""

    EMPTY = "-"
    WHITE = "w"
    BLACK = "b"

    def opposite(self) -> "PieceColor":
        """Return the opposing color (EMPTY maps to itself)."""

        if self is PieceColor.WHITE:
            return PieceColor.BLACK
        if self is PieceColor.BLACK:
            return PieceColor.WHITE
        return self

    @property
    def is_piece(self) -> bool:
        return self is not PieceColor.EMPTY

    @property
    def short_name(self) -> str:
        return self.value

    @property
    def full_name(self) -> str:
        return self.name.capitalize()


def index(col: int, row: int) -> int:
    """Linear index of the square at 0-based ``col`` and ``row``."""

    return row * BOARD_SIZE + col


def col_of(k: int) -> int:
    return k % BOARD_SIZE


def row_of(k: int) -> int:
    return k // BOARD_SIZE


def valid_square(k: int) -> bool:
    return 0 <= k < NUM_SQUARES


@dataclass(frozen=True)
class Move:
    """A slide, a (possibly multi-step) jump, or a pass.

    Jump chains are linked through ``tail``: each step's ``to_sq`` is the next
    step's ``from_sq``. The pass move uses -1 for both squares.
    """

    from_sq: int
    to_sq: int
    tail: Optional["Move"] = None

    PASS: ClassVar["Move"]

    @classmethod
    def jump_chain(cls, squares: Sequence[int]) -> "Move":
        """Build a chain visiting ``squares`` in order (at least two)."""

        if len(squares) < 2:
            raise ValueError("a move needs at least two squares")
        move: Optional[Move] = None
        for k in range(len(squares) - 1, 0, -1):
            move = cls(squares[k - 1], squares[k], move)
        assert move is not None
        return move

    @property
    def is_pass(self) -> bool:
        return self.from_sq < 0

    @property
    def is_jump(self) -> bool:
        if self.is_pass:
            return False
        return (
            abs(row_of(self.to_sq) - row_of(self.from_sq)) == 2
            or abs(col_of(self.to_sq) - col_of(self.from_sq)) == 2
        )

    @property
    def is_left_move(self) -> bool:
        return (
            not self.is_pass
            and row_of(self.from_sq) == row_of(self.to_sq)
            and col_of(self.to_sq) == col_of(self.from_sq) - 1
        )

    @property
    def is_right_move(self) -> bool:
        return (
            not self.is_pass
            and row_of(self.from_sq) == row_of(self.to_sq)
            and col_of(self.to_sq) == col_of(self.from_sq) + 1
        )

    @property
    def jumped_sq(self) -> int:
        """Square captured by this jump step."""

        return (self.from_sq + self.to_sq) // 2

    @property
    def final_sq(self) -> int:
        step = self
        while step.tail is not None:
            step = step.tail
        return step.to_sq

    def steps(self) -> Iterator["Move"]:
        step: Optional[Move] = self
        while step is not None:
            yield step
            step = step.tail

    def squares(self) -> List[int]:
        """Squares visited by the move, starting square first."""

        if self.is_pass:
            return []
        path = [self.from_sq]
        path.extend(step.to_sq for step in self.steps())
        return path

    def __str__(self) -> str:
        from .notation import format_move

        return format_move(self)


Move.PASS = Move(-1, -1)


def _all_true() -> List[bool]:
    return [True] * NUM_SQUARES


@dataclass
class Position:
    """Complete Qirkat position.

    ``cells`` holds 25 colors in row-major order from a1. ``left_allowed`` and
    ``right_allowed`` are the per-square direction locks that stop a piece from
    sliding straight back the way it came. Equality only looks at the grid and
    the side to move; locks, the terminal flag and the undo snapshot are ignored.
    """

    cells: List[PieceColor]
    turn: PieceColor = PieceColor.WHITE
    game_over: bool = field(default=False, compare=False)
    left_allowed: List[bool] = field(default_factory=_all_true, compare=False)
    right_allowed: List[bool] = field(default_factory=_all_true, compare=False)
    last_state: Optional["Position"] = field(default=None, compare=False, repr=False)

    def clone(self) -> "Position":
        """Return an independent copy (the undo snapshot is shared, not copied)."""

        return Position(
            cells=self.cells[:],
            turn=self.turn,
            game_over=self.game_over,
            left_allowed=self.left_allowed[:],
            right_allowed=self.right_allowed[:],
            last_state=self.last_state,
        )

    def key(self) -> Tuple:
        """Return a hashable key capturing board layout and turn."""

        return (self.turn, tuple(self.cells))

    def get(self, k: int) -> PieceColor:
        return self.cells[k]

    def __str__(self) -> str:
        from .engine import format_board

        return format_board(self)
