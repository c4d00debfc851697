"""Agents for playing Qirkat."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Dict, Optional

from . import engine
from .types import Move, PieceColor, Position

logger = logging.getLogger(__name__)

# A position magnitude indicating a win (for White if positive, Black if negative).
WINNING_VALUE = 10**9
# A magnitude greater than any position value.
INFINITY = WINNING_VALUE + 1

DEFAULT_DEPTHS: Dict[PieceColor, int] = {
    PieceColor.WHITE: 4,
    PieceColor.BLACK: 5,
}

AGENT_NAMES = ("alphabeta", "random")


def evaluate(position: Position) -> int:
    """Static value of ``position`` from White's point of view.

    A side with no pieces left has lost outright; otherwise the value is the
    material difference.
    """

    white, black = engine.count_pieces(position)
    if black == 0:
        return WINNING_VALUE
    if white == 0:
        return -WINNING_VALUE
    return white - black


def terminal_value(position: Position) -> int:
    """Value of a finished game from White's point of view: the side to move lost."""

    return -WINNING_VALUE if position.turn is PieceColor.WHITE else WINNING_VALUE


def _sign(position: Position) -> int:
    return 1 if position.turn is PieceColor.WHITE else -1


@dataclass
class SearchStats:
    """Aggregated statistics from a single search."""

    nodes: int
    cutoffs: int
    depth: int
    best_value: int
    elapsed_ms: float


class Agent:
    """Base class for agents."""

    def choose_move(self, position: Position) -> Optional[Move]:  # noqa: D401
        """Return a move for the side to move, or None if the game is over."""

        raise NotImplementedError


class RandomAgent(Agent):
    """Agent that selects a random legal move with reproducible seeding."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def choose_move(self, position: Position) -> Optional[Move]:
        moves = engine.generate_legal_moves(position)
        if not moves:
            return None
        return self._rng.choice(moves)


class AlphaBetaAgent(Agent):
    """Fixed-depth alpha-beta search in negamax form.

    The search works on one private copy of the position per call and walks
    the tree by making and unmaking moves on it. Among equally valued moves the
    first one generated wins, so results are deterministic.
    """

    def __init__(self, depth: int = DEFAULT_DEPTHS[PieceColor.WHITE]):
        if depth < 1:
            raise ValueError("search depth must be at least 1")
        self.depth = depth
        self.last_stats: Optional[SearchStats] = None
        self.last_value: Optional[int] = None
        self._nodes = 0
        self._cutoffs = 0

    def choose_move(self, position: Position) -> Optional[Move]:
        self.last_stats = None
        self.last_value = None
        if position.game_over:
            return None
        self._nodes = 0
        self._cutoffs = 0
        start_time = time.monotonic()

        work = position.clone()
        best_move: Optional[Move] = None
        best_value = -INFINITY
        alpha, beta = -INFINITY, INFINITY
        for move in engine.generate_legal_moves(work):
            undo = engine.make_move_inplace(work, move)
            try:
                value = -self._negamax(work, self.depth - 1, -beta, -alpha)
            finally:
                engine.undo_move_inplace(work, undo)
            if value > best_value:
                best_value, best_move = value, move
            alpha = max(alpha, best_value)
            # A forced win cannot be improved on.
            if best_value >= WINNING_VALUE:
                break

        elapsed_ms = (time.monotonic() - start_time) * 1000.0
        self.last_value = best_value * _sign(position)
        self.last_stats = SearchStats(
            nodes=self._nodes,
            cutoffs=self._cutoffs,
            depth=self.depth,
            best_value=self.last_value,
            elapsed_ms=elapsed_ms,
        )
        logger.debug(
            "%s depth=%d move=%s value=%d nodes=%d cutoffs=%d elapsed_ms=%.1f",
            position.turn.full_name,
            self.depth,
            best_move,
            self.last_value,
            self._nodes,
            self._cutoffs,
            elapsed_ms,
        )
        return best_move

    def search_value(self, position: Position, depth: Optional[int] = None) -> int:
        """Alpha-beta value of ``position`` from White's point of view."""

        work = position.clone()
        self._nodes = 0
        self._cutoffs = 0
        depth = self.depth if depth is None else depth
        return _sign(work) * self._negamax(work, depth, -INFINITY, INFINITY)

    def _negamax(self, position: Position, depth: int, alpha: int, beta: int) -> int:
        """Value of ``position`` for the side to move, searched ``depth`` plies."""

        self._nodes += 1
        if position.game_over:
            return _sign(position) * terminal_value(position)
        if depth <= 0:
            return _sign(position) * evaluate(position)

        best = -INFINITY
        for move in engine.generate_legal_moves(position):
            undo = engine.make_move_inplace(position, move)
            try:
                value = -self._negamax(position, depth - 1, -beta, -alpha)
            finally:
                engine.undo_move_inplace(position, undo)
            if value > best:
                best = value
            if best > alpha:
                alpha = best
            if alpha >= beta:
                self._cutoffs += 1
                break
        return best


def search_value(position: Position, depth: int) -> int:
    """Alpha-beta value of ``position`` (White-positive) at ``depth`` plies."""

    return AlphaBetaAgent(depth=max(1, depth)).search_value(position, depth)


def _minimax(position: Position, depth: int) -> int:
    if position.game_over:
        return _sign(position) * terminal_value(position)
    if depth <= 0:
        return _sign(position) * evaluate(position)
    best = -INFINITY
    for move in engine.generate_legal_moves(position):
        undo = engine.make_move_inplace(position, move)
        try:
            best = max(best, -_minimax(position, depth - 1))
        finally:
            engine.undo_move_inplace(position, undo)
    return best


def minimax_value(position: Position, depth: int) -> int:
    """Exhaustive (unpruned) minimax value of ``position``, White-positive."""

    work = position.clone()
    return _sign(work) * _minimax(work, depth)


def build_agent(name: str, depth: Optional[int] = None, seed: Optional[int] = None) -> Agent:
    """Create an agent by name (``alphabeta`` or ``random``)."""

    if name == "alphabeta":
        return AlphaBetaAgent(depth=DEFAULT_DEPTHS[PieceColor.WHITE] if depth is None else depth)
    if name == "random":
        return RandomAgent(seed=seed)
    raise ValueError(f"Unknown agent '{name}'")
