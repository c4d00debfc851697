"""Game engine for Qirkat.

Rules:
- Board is 5x5, squares indexed 0..24 from a1 in row-major order.
- White starts on rows 1-2 plus d3/e3, Black on rows 4-5 plus a3/b3; c3 is empty.
- Pieces slide one square sideways or forward (White up, Black down); diagonal
  steps are only possible from even-indexed squares.
- A piece that just slid left may not slide right from its new square (and
  vice versa) until it lands there by some other move.
- Jumps capture an adjacent enemy piece, may continue from the landing square
  and are mandatory: if any jump exists, only full jump chains are legal.
- White on row 5 and Black on row 1 can no longer slide, only jump.
- A side with no legal moves loses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .notation import parse_setup
from .types import (
    BOARD_SIZE,
    NUM_SQUARES,
    IllegalMoveError,
    Move,
    PieceColor,
    Position,
    SetupError,
    col_of,
    valid_square,
)

logger = logging.getLogger(__name__)

INITIAL_SETUP = "wwwwwwwwwwbb-wwbbbbbbbbbb"
# White pieces at or above this index cannot slide.
MAX_WHITE = 20
# Black pieces at or below this index cannot slide.
MIN_BLACK = 4

EMPTY = PieceColor.EMPTY
WHITE = PieceColor.WHITE
BLACK = PieceColor.BLACK

SLIDE_ROWS_WHITE: Tuple[int, ...] = (0, 1)
SLIDE_ROWS_BLACK: Tuple[int, ...] = (-1, 0)
JUMP_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dr, dc) for dr in (-2, 0, 2) for dc in (-2, 0, 2) if (dr, dc) != (0, 0)
)


def new_game() -> Position:
    """Create a position at the start of the game, White to move."""

    position = Position(cells=parse_setup(INITIAL_SETUP), turn=WHITE)
    position.game_over = not _has_any_move(position)
    return position


def from_setup(setup: str, turn: PieceColor = WHITE) -> Position:
    """Create a position from a 25-symbol setup string."""

    position = new_game()
    set_pieces(position, setup, turn)
    return position


def clear(position: Position) -> None:
    """Reset ``position`` to the initial configuration."""

    set_pieces(position, INITIAL_SETUP, WHITE)


def set_pieces(position: Position, setup: str, turn: PieceColor) -> None:
    """Replace the contents of ``position`` as described by ``setup``.

    All squares allow horizontal movement in either direction afterwards and the
    undo snapshot is dropped. Raises ``SetupError`` without touching the
    position if ``turn`` is not a side or ``setup`` is malformed.
    """

    if not isinstance(turn, PieceColor) or not turn.is_piece:
        raise SetupError("bad player color")
    cells = parse_setup(setup)

    position.cells = cells
    position.turn = turn
    position.left_allowed = [True] * NUM_SQUARES
    position.right_allowed = [True] * NUM_SQUARES
    position.last_state = None
    position.game_over = not _has_any_move(position)


def _slide_rows(color: PieceColor) -> Tuple[int, ...]:
    return SLIDE_ROWS_WHITE if color is WHITE else SLIDE_ROWS_BLACK


def _can_slide_from(color: PieceColor, k: int) -> bool:
    if color is WHITE:
        return k < MAX_WHITE
    if color is BLACK:
        return k > MIN_BLACK
    return False


def _slides_from(position: Position, k: int) -> List[Move]:
    """Non-capturing moves for the side to move's piece on ``k``."""

    color = position.cells[k]
    if color is not position.turn or not _can_slide_from(color, k):
        return []
    moves: List[Move] = []
    col = col_of(k)
    for dr in _slide_rows(color):
        for dc in (-1, 0, 1):
            dest = k + dr * BOARD_SIZE + dc
            if not valid_square(dest) or not 0 <= col + dc < BOARD_SIZE:
                continue
            if position.cells[dest] is not EMPTY:
                continue
            if dr != 0 and dc != 0 and k % 2 != 0:
                continue
            if dr == 0 and dc == -1 and not position.left_allowed[k]:
                continue
            if dr == 0 and dc == 1 and not position.right_allowed[k]:
                continue
            moves.append(Move(k, dest))
    return moves


def _jump_targets(position: Position, k: int, color: PieceColor) -> List[int]:
    """Landing squares of single jump steps for a ``color`` piece on ``k``."""

    targets: List[int] = []
    col = col_of(k)
    enemy = color.opposite()
    for dr, dc in JUMP_OFFSETS:
        if dr != 0 and dc != 0 and k % 2 != 0:
            continue
        if not 0 <= col + dc < BOARD_SIZE:
            continue
        dest = k + dr * BOARD_SIZE + dc
        if not valid_square(dest) or position.cells[dest] is not EMPTY:
            continue
        if position.cells[(k + dest) // 2] is not enemy:
            continue
        targets.append(dest)
    return targets


def _jumps_from(position: Position, k: int, color: PieceColor) -> List[Move]:
    """Full jump chains for a ``color`` piece on ``k``.

    Each step is tried on the live grid (origin and captured square cleared,
    jumper placed on the landing square) so that continuations see the board as
    it would be, then the grid is restored before the next step is tried.
    """

    moves: List[Move] = []
    cells = position.cells
    for dest in _jump_targets(position, k, color):
        mid = (k + dest) // 2
        captured = cells[mid]
        cells[k], cells[mid], cells[dest] = EMPTY, EMPTY, color
        try:
            continuations = _jumps_from(position, dest, color)
        finally:
            cells[k], cells[mid], cells[dest] = color, captured, EMPTY
        if continuations:
            moves.extend(Move(k, dest, tail) for tail in continuations)
        else:
            moves.append(Move(k, dest))
    return moves


def jump_possible(position: Position, k: Optional[int] = None) -> bool:
    """Whether the side to move can jump from ``k`` (or from anywhere if ``k`` is None)."""

    squares = range(NUM_SQUARES) if k is None else (k,)
    for sq in squares:
        if position.cells[sq] is position.turn and _jump_targets(position, sq, position.turn):
            return True
    return False


def _has_any_move(position: Position) -> bool:
    turn = position.turn
    if not turn.is_piece:
        return False
    for k in range(NUM_SQUARES):
        if position.cells[k] is not turn:
            continue
        if _jump_targets(position, k, turn) or _slides_from(position, k):
            return True
    return False


def generate_legal_moves(position: Position) -> List[Move]:
    """Generate all legal moves for the side to move.

    Squares are scanned from a1 to e5 and offsets in a fixed order, so equal
    positions always list their moves in the same order.
    """

    if position.game_over:
        return []
    turn = position.turn
    jumps: List[Move] = []
    for k in range(NUM_SQUARES):
        if position.cells[k] is turn:
            jumps.extend(_jumps_from(position, k, turn))
    if jumps:
        return jumps
    slides: List[Move] = []
    for k in range(NUM_SQUARES):
        slides.extend(_slides_from(position, k))
    return slides


def is_legal(position: Position, move: Move) -> bool:
    """Return True iff ``move`` is legal in ``position``."""

    if move is None or move.is_pass:
        return False
    return move in generate_legal_moves(position)


def _is_prefix(proposal: Move, legal: Move) -> bool:
    p: Optional[Move] = proposal
    m: Optional[Move] = legal
    while p is not None:
        if m is None or p.from_sq != m.from_sq or p.to_sq != m.to_sq:
            return False
        p, m = p.tail, m.tail
    return True


def check_jump(position: Position, move: Optional[Move], allow_partial: bool) -> bool:
    """Return True iff ``move`` is a valid jump sequence in ``position``.

    ``None`` is accepted. With ``allow_partial`` a proposal that could still be
    continued is accepted as long as it agrees with some legal chain as far as
    it goes, which lets a jump be entered one hop at a time.
    """

    if move is None:
        return True
    legal = generate_legal_moves(position)
    if not legal or not legal[0].is_jump:
        return False
    if move in legal:
        return True
    if not allow_partial:
        return False
    return any(_is_prefix(move, candidate) for candidate in legal)


@dataclass
class UndoRecord:
    """Information needed to undo an in-place move."""

    prev_turn: PieceColor
    prev_game_over: bool
    cells: List[Tuple[int, PieceColor]]
    locks: List[Tuple[int, bool, bool]]


def _set_locks(position: Position, record: UndoRecord, k: int, left: bool, right: bool) -> None:
    record.locks.append((k, position.left_allowed[k], position.right_allowed[k]))
    position.left_allowed[k] = left
    position.right_allowed[k] = right


def make_move_inplace(position: Position, move: Move) -> UndoRecord:
    """Apply a generated move by mutating ``position``, returning data for undo.

    ``move`` must come from :func:`generate_legal_moves` for this position; it
    is not validated again. The single-level undo snapshot is left untouched.
    """

    cells = position.cells
    mover = cells[move.from_sq]
    record = UndoRecord(
        prev_turn=position.turn,
        prev_game_over=position.game_over,
        cells=[],
        locks=[],
    )

    def _set(k: int, color: PieceColor) -> None:
        record.cells.append((k, cells[k]))
        cells[k] = color

    if move.is_jump:
        for step in move.steps():
            _set(step.from_sq, EMPTY)
            _set(step.jumped_sq, EMPTY)
            _set(step.to_sq, mover)
        _set_locks(position, record, move.final_sq, True, True)
    else:
        _set(move.from_sq, EMPTY)
        _set(move.to_sq, mover)
        if move.is_left_move:
            _set_locks(position, record, move.to_sq, True, False)
        elif move.is_right_move:
            _set_locks(position, record, move.to_sq, False, True)
        else:
            _set_locks(position, record, move.to_sq, True, True)

    position.turn = position.turn.opposite()
    position.game_over = not _has_any_move(position)
    return record


def undo_move_inplace(position: Position, undo: UndoRecord) -> None:
    """Revert a prior call to :func:`make_move_inplace`."""

    for k, color in reversed(undo.cells):
        position.cells[k] = color
    for k, left, right in reversed(undo.locks):
        position.left_allowed[k] = left
        position.right_allowed[k] = right
    position.turn = undo.prev_turn
    position.game_over = undo.prev_game_over


def make_move(position: Position, move: Move) -> None:
    """Make ``move`` on ``position``, keeping the prior state for :func:`undo`.

    Raises ``IllegalMoveError`` (leaving the position unchanged) if the move is
    not in the current legal-move set.
    """

    if not is_legal(position, move):
        logger.debug("rejected move %s for %s", move, position.turn.full_name)
        raise IllegalMoveError(f"illegal move: {move}")
    snapshot = position.clone()
    snapshot.last_state = None
    make_move_inplace(position, move)
    position.last_state = snapshot


def undo(position: Position) -> None:
    """Undo the last move made with :func:`make_move`, if any.

    Only one level is kept, so a second call without an intervening move does
    nothing.
    """

    snapshot = position.last_state
    if snapshot is None:
        return
    position.cells = snapshot.cells[:]
    position.turn = snapshot.turn
    position.game_over = snapshot.game_over
    position.left_allowed = snapshot.left_allowed[:]
    position.right_allowed = snapshot.right_allowed[:]
    position.last_state = None


def apply_move(position: Position, move: Move) -> Position:
    """Apply a move and return the resulting position."""

    next_position = position.clone()
    make_move(next_position, move)
    return next_position


def count_pieces(position: Position) -> Tuple[int, int]:
    """Return ``(white, black)`` piece counts."""

    white = sum(1 for cell in position.cells if cell is WHITE)
    black = sum(1 for cell in position.cells if cell is BLACK)
    return white, black


def winner(position: Position) -> Optional[PieceColor]:
    """Return the winner if the game is over: the side that is not stuck."""

    if not position.game_over:
        return None
    return position.turn.opposite()


def is_terminal(position: Position) -> bool:
    """Whether the side to move has no legal moves."""

    return position.game_over


def format_board(position: Position, legend: bool = False) -> str:
    """Return a text depiction of the board, row 5 first.

    With ``legend`` each row is labeled with its number and a final line names
    the columns.
    """

    lines: List[str] = []
    for r in range(BOARD_SIZE - 1, -1, -1):
        symbols = " ".join(
            position.cells[r * BOARD_SIZE + c].short_name for c in range(BOARD_SIZE)
        )
        prefix = f"{r + 1} " if legend else "  "
        lines.append(prefix + symbols)
    if legend:
        lines.append("  a b c d e")
    return "\n".join(lines)
