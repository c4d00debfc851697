"""Qirkat game package."""

from .types import IllegalMoveError, Move, PieceColor, Position, SetupError
from .engine import (
    BOARD_SIZE,
    INITIAL_SETUP,
    NUM_SQUARES,
    apply_move,
    check_jump,
    count_pieces,
    format_board,
    from_setup,
    generate_legal_moves,
    is_legal,
    is_terminal,
    jump_possible,
    make_move,
    new_game,
    set_pieces,
    undo,
    winner,
)
from .agents import (
    Agent,
    AlphaBetaAgent,
    RandomAgent,
    SearchStats,
    WINNING_VALUE,
    evaluate,
    minimax_value,
    search_value,
)
from .notation import format_move, parse_move, parse_setup, parse_square, square_name

__all__ = [
    "Agent",
    "AlphaBetaAgent",
    "BOARD_SIZE",
    "INITIAL_SETUP",
    "IllegalMoveError",
    "Move",
    "NUM_SQUARES",
    "PieceColor",
    "Position",
    "RandomAgent",
    "SearchStats",
    "SetupError",
    "WINNING_VALUE",
    "apply_move",
    "check_jump",
    "count_pieces",
    "evaluate",
    "format_board",
    "format_move",
    "from_setup",
    "generate_legal_moves",
    "is_legal",
    "is_terminal",
    "jump_possible",
    "make_move",
    "minimax_value",
    "new_game",
    "parse_move",
    "parse_setup",
    "parse_square",
    "search_value",
    "set_pieces",
    "square_name",
    "undo",
    "winner",
]
