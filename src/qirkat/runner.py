"""CLI runner for Qirkat.

Usage examples:
- AI against AI: ``python -m qirkat.runner --white-depth 3 --black-depth 4 --verbose``
- From a custom position: ``python -m qirkat.runner --setup "w---- b---- -b-b- -b-b- -----"``
- Scripted opening: ``python -m qirkat.runner --moves c2-c3,c4-c2 --black random --seed 7``
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import List, Optional

from .agents import AGENT_NAMES, DEFAULT_DEPTHS
from .game_controller import GameConfig, GameController
from .types import IllegalMoveError, Move, PieceColor


@dataclass
class GameSummary:
    winner: Optional[PieceColor]
    plies: int
    moves: List[Move]


def parse_move_list(raw: str) -> List[str]:
    """Split a comma-separated list of moves."""

    return [part.strip() for part in raw.split(",") if part.strip()]


def play_game(
    controller: GameController,
    opening: Optional[List[str]] = None,
    max_plies: Optional[int] = None,
    show_board: bool = False,
    legend: bool = False,
) -> GameSummary:
    """Play ``opening`` moves, then let both agents finish the game."""

    moves: List[Move] = []
    for text in opening or []:
        moves.append(controller.apply_text_move(text))
        print(f"{controller.position.turn.opposite().full_name} moves {moves[-1]}.")
    if show_board:
        print(controller.dump(legend=legend))
        print()

    controller.start()
    while not controller.position.game_over:
        if max_plies is not None and len(moves) >= max_plies:
            break
        mover = controller.position.turn
        move = controller.step_ai()
        moves.append(move)
        print(f"{mover.full_name} moves {move}.")
        if show_board:
            print(controller.dump(legend=legend))
            print()

    victor = controller.winner()
    return GameSummary(winner=victor, plies=len(moves), moves=moves)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Qirkat runner")
    parser.add_argument("--white", choices=AGENT_NAMES, default="alphabeta")
    parser.add_argument("--black", choices=AGENT_NAMES, default="alphabeta")
    parser.add_argument("--white-depth", type=int, default=DEFAULT_DEPTHS[PieceColor.WHITE])
    parser.add_argument("--black-depth", type=int, default=DEFAULT_DEPTHS[PieceColor.BLACK])
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--setup", type=str, default=None, help="25 symbols of w, b, - starting at a1")
    parser.add_argument("--turn", choices=["white", "black"], default="white", help="Side to move for --setup")
    parser.add_argument("--moves", type=str, default=None, help="Comma-separated opening moves like c2-c3,c4-c2")
    parser.add_argument("--max-plies", type=int, default=200)
    parser.add_argument("--verbose", action="store_true", help="Print the board after every move")
    parser.add_argument("--legend", action="store_true", help="Label rows and columns when printing boards")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    config = GameConfig(
        white_manual=False,
        black_manual=False,
        white_agent=args.white,
        black_agent=args.black,
        white_depth=args.white_depth,
        black_depth=args.black_depth,
        seed=args.seed,
    )

    try:
        controller = GameController(config)
        if args.setup is not None:
            controller.set_board(args.turn, args.setup)
        summary = play_game(
            controller,
            opening=parse_move_list(args.moves) if args.moves else None,
            max_plies=args.max_plies,
            show_board=args.verbose,
            legend=args.legend,
        )
    except IllegalMoveError as exc:
        print(f"Opening rejected: {exc}")
        raise SystemExit(1)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}")
        raise SystemExit(1)

    if summary.winner is None:
        print(f"No winner after {summary.plies} plies.")
    else:
        print(f"{summary.winner.full_name} wins.")


if __name__ == "__main__":
    main()
