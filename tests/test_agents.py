import pytest

from qirkat import engine
from qirkat.agents import (
    WINNING_VALUE,
    AlphaBetaAgent,
    RandomAgent,
    build_agent,
    evaluate,
    minimax_value,
    search_value,
    terminal_value,
)
from qirkat.notation import parse_move
from qirkat.types import PieceColor


def test_evaluate_material_difference():
    assert evaluate(engine.new_game()) == 0
    position = engine.from_setup("ww--- ----- --w-- ----- b----")
    assert evaluate(position) == 2


def test_evaluate_win_sentinels():
    no_black = engine.from_setup("w---- ----- ----- ----- -----", PieceColor.BLACK)
    no_white = engine.from_setup("----- ----- ----- ----- ----b", PieceColor.WHITE)
    assert evaluate(no_black) == WINNING_VALUE
    assert evaluate(no_white) == -WINNING_VALUE


def test_terminal_value_favors_side_not_to_move():
    stuck_white = engine.from_setup("--b-- ----- ----- ----- --w--", PieceColor.WHITE)
    stuck_black = engine.from_setup("--b-- ----- ----- ----- --w--", PieceColor.BLACK)
    assert terminal_value(stuck_white) == -WINNING_VALUE
    assert terminal_value(stuck_black) == WINNING_VALUE


def test_random_agent_seed_reproducible():
    position = engine.new_game()
    move1 = RandomAgent(seed=123).choose_move(position)
    move2 = RandomAgent(seed=123).choose_move(position)
    assert move1 == move2
    assert move1 in engine.generate_legal_moves(position)


def test_agents_return_none_on_terminal_position():
    position = engine.from_setup("--b-- ----- ----- ----- --w--")
    assert RandomAgent(seed=1).choose_move(position) is None
    assert AlphaBetaAgent(depth=3).choose_move(position) is None


def test_alphabeta_takes_winning_capture():
    position = engine.from_setup("----- ----- --w-- --b-- -----")
    agent = AlphaBetaAgent(depth=3)
    assert agent.choose_move(position) == parse_move("c3-c5")
    assert agent.last_value == WINNING_VALUE


def test_alphabeta_black_takes_winning_chain():
    position = engine.from_setup("----- ---w- --b-- ---w- bbbbb", PieceColor.BLACK)
    agent = AlphaBetaAgent(depth=2)
    move = agent.choose_move(position)
    result = engine.apply_move(position, move)
    assert engine.count_pieces(result)[0] == 0
    assert agent.last_value == -WINNING_VALUE


def test_alphabeta_does_not_touch_position_of_record():
    position = engine.new_game()
    engine.make_move(position, parse_move("c2-c3"))
    snapshot = position.last_state
    before = position.clone()
    agent = AlphaBetaAgent(depth=3)
    move = agent.choose_move(position)
    assert move in engine.generate_legal_moves(position)
    assert position == before
    assert position.left_allowed == before.left_allowed
    assert position.right_allowed == before.right_allowed
    assert position.last_state is snapshot
    assert agent.last_stats is not None
    assert agent.last_stats.nodes > 0


def test_alphabeta_is_deterministic():
    position = engine.new_game()
    first = AlphaBetaAgent(depth=3).choose_move(position)
    second = AlphaBetaAgent(depth=3).choose_move(position)
    assert first == second


def test_alphabeta_matches_minimax():
    setups = [
        (engine.INITIAL_SETUP, PieceColor.WHITE, 3),
        ("--w-- ----- ----- ----- --b--", PieceColor.WHITE, 4),
        ("w---- b---- -b-b- -b-b- -----", PieceColor.WHITE, 3),
        ("-w-w- ----- ----- ----- -b-b-", PieceColor.BLACK, 4),
        ("ww--- -w--- --b-- ---bb ---b-", PieceColor.WHITE, 4),
    ]
    for setup, turn, max_depth in setups:
        position = engine.from_setup(setup, turn)
        for depth in range(0, max_depth + 1):
            assert search_value(position, depth) == minimax_value(position, depth)


def test_root_value_matches_search_value():
    position = engine.from_setup("ww--- -w--- --b-- ---bb ---b-")
    agent = AlphaBetaAgent(depth=3)
    agent.choose_move(position)
    assert agent.last_value == search_value(position, 3)


def test_depth_must_be_positive():
    with pytest.raises(ValueError):
        AlphaBetaAgent(depth=0)


def test_build_agent():
    assert isinstance(build_agent("alphabeta", depth=2), AlphaBetaAgent)
    assert build_agent("alphabeta", depth=2).depth == 2
    assert isinstance(build_agent("random", seed=1), RandomAgent)
    with pytest.raises(ValueError):
        build_agent("expecti")
