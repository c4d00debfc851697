"""Game controller utilities for scripted or interactive play.

This module keeps sequencing concerns (whose turn, which side is automated,
setup versus play) separate from the rules so both can be tested without a
user interface.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from . import engine
from .agents import DEFAULT_DEPTHS, Agent, build_agent
from .notation import parse_color, parse_move
from .types import Move, PieceColor, Position

logger = logging.getLogger(__name__)


class GameState(Enum):
    """States of play."""

    SETUP = "setup"
    PLAYING = "playing"


@dataclass
class GameConfig:
    white_manual: bool = True
    black_manual: bool = False
    white_agent: str = "alphabeta"
    black_agent: str = "alphabeta"
    white_depth: int = DEFAULT_DEPTHS[PieceColor.WHITE]
    black_depth: int = DEFAULT_DEPTHS[PieceColor.BLACK]
    seed: Optional[int] = None
    manual: Dict[PieceColor, bool] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.manual = {
            PieceColor.WHITE: self.white_manual,
            PieceColor.BLACK: self.black_manual,
        }

    def agent_name(self, color: PieceColor) -> str:
        return self.white_agent if color is PieceColor.WHITE else self.black_agent

    def depth(self, color: PieceColor) -> int:
        return self.white_depth if color is PieceColor.WHITE else self.black_depth


class GameController:
    """Manage a single Qirkat game between manual and automated sides."""

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self._default_manual = dict(self.config.manual)
        self.rng = random.Random(self.config.seed)
        self.position: Position = engine.new_game()
        self.state = GameState.SETUP
        self.agents: Dict[PieceColor, Optional[Agent]] = {
            PieceColor.WHITE: None,
            PieceColor.BLACK: None,
        }

    def clear(self) -> None:
        """Return to setup with the initial position and default side assignment."""

        self.config.manual = dict(self._default_manual)
        self.state = GameState.SETUP
        engine.clear(self.position)

    def set_board(self, color_name: str, setup: str) -> None:
        """Load ``setup`` with ``color_name`` ("white"/"black") to move."""

        color = parse_color(color_name)
        engine.set_pieces(self.position, setup, color)

    def set_manual(self, color_name: str) -> None:
        self.state = GameState.SETUP
        self.config.manual[parse_color(color_name)] = True

    def set_auto(self, color_name: str) -> None:
        self.state = GameState.SETUP
        self.config.manual[parse_color(color_name)] = False

    def seed(self, value: int) -> None:
        self.rng.seed(value)
        self.config.seed = value

    def start(self) -> None:
        """Create agents for the automated sides and begin play."""

        for color in (PieceColor.WHITE, PieceColor.BLACK):
            if self.config.manual[color]:
                self.agents[color] = None
                continue
            self.agents[color] = build_agent(
                self.config.agent_name(color),
                depth=self.config.depth(color),
                seed=self.rng.randrange(2**31),
            )
        self.state = GameState.PLAYING

    def legal_moves(self) -> List[Move]:
        return engine.generate_legal_moves(self.position)

    def apply_move(self, move: Move) -> Move:
        """Make ``move`` for the side to move; raises ``IllegalMoveError`` if illegal."""

        mover = self.position.turn
        engine.make_move(self.position, move)
        logger.info("%s moves %s.", mover.full_name, move)
        return move

    def apply_text_move(self, raw: str) -> Move:
        """Parse and apply a move string such as ``c2-c3``."""

        return self.apply_move(parse_move(raw))

    def undo(self) -> None:
        engine.undo(self.position)

    def _current_agent(self) -> Optional[Agent]:
        return self.agents[self.position.turn]

    def compute_ai_move(self) -> Move:
        if self.position.game_over:
            raise ValueError("game is over")
        agent = self._current_agent()
        if agent is None:
            raise ValueError("No agent configured for current player")
        move = agent.choose_move(self.position)
        if move is None:
            raise ValueError("agent found no move")
        return move

    def step_ai(self) -> Move:
        move = self.compute_ai_move()
        return self.apply_move(move)

    def winner(self) -> Optional[PieceColor]:
        return engine.winner(self.position)

    def dump(self, legend: bool = False) -> str:
        return engine.format_board(self.position, legend=legend)

    def play_out(self, max_plies: Optional[int] = None) -> List[Move]:
        """Let the automated sides move until the game ends or a manual side is up.

        Returns the moves played. When the game ends the outcome is reported and
        the controller drops back to setup.
        """

        if self.state is not GameState.PLAYING:
            self.start()
        played: List[Move] = []
        while not self.position.game_over:
            if max_plies is not None and len(played) >= max_plies:
                break
            if self._current_agent() is None:
                break
            played.append(self.step_ai())
        victor = self.winner()
        if victor is not None:
            logger.info("%s wins.", victor.full_name)
            self.state = GameState.SETUP
        return played
