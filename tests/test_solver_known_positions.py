import numpy as np

from noughts.board import Mark, new_board, place
from noughts.game_basics import empty_cells, get_winner
from noughts.selector import Difficulty, select_move
from noughts.solver import best_move, minimax, pick_best, score_moves
from noughts.tactics import immediate_winning_moves
from noughts.turns import Draw, Game, GameState, Won

X, O = int(Mark.X), int(Mark.O)


def test_terminal_scores():
    assert minimax((X, X, X, O, O, 0, 0, 0, 0), Mark.O, Mark.X) == 10
    assert minimax((X, X, X, O, O, 0, 0, 0, 0), Mark.O, Mark.O) == -10
    assert minimax((X, X, O, O, O, X, X, O, X), Mark.X, Mark.X) == 0


def test_forced_block_still_loses():
    # O must block at 1, after which X forks through the center
    b = (X, 0, X, O, 0, 0, 0, 0, 0)
    idx, score = best_move(b, Mark.O)
    assert (idx, score) == (1, -10)
    assert all(s == -10 for _, s in score_moves(b, Mark.O))


def test_immediate_win_scores_ten():
    b = (X, X, 0, 0, O, 0, 0, O, 0)
    scored = dict(score_moves(b, Mark.X))
    assert scored[2] == 10
    assert best_move(b, Mark.X) == (2, 10)


def test_ties_break_to_first_discovered():
    assert pick_best([(3, 0), (5, 10), (7, 10)]) == (5, 10)
    assert pick_best([(1, -10), (2, -10)]) == (1, -10)


def test_score_moves_follows_empty_cell_order():
    b = (X, 0, 0, 0, O, 0, 0, 0, 0)
    assert [mv for mv, _ in score_moves(b, Mark.X)] == empty_cells(b)


def test_exhaustive_self_play_is_a_draw():
    game = Game(
        GameState.new(Difficulty.EXHAUSTIVE),
        human_marks=(),
        write=lambda _msg: None,
    )
    assert game.play() == Draw()
    assert get_winner(game.state.board) is None
    assert empty_cells(game.state.board) == []


def test_exhaustive_converts_a_won_position():
    # X to move: X can win at once, O threatens nothing it cannot answer
    start = GameState.from_board((O, O, 0, X, X, 0, 0, 0, 0), Difficulty.EXHAUSTIVE)
    assert start.to_move is Mark.X
    for seed in range(5):
        game = Game(
            start,
            human_marks=(),
            write=lambda _msg: None,
            rng=np.random.default_rng(seed),
            tiers={Mark.X: Difficulty.EXHAUSTIVE, Mark.O: Difficulty.RANDOM},
        )
        assert game.play() == Won(Mark.X)


def _outcomes(board, me, to_move):
    """Every result reachable when `me` plays exhaustively and the other side tries each move."""
    w = get_winner(board)
    if w is not None:
        return {w}
    moves = empty_cells(board)
    if not moves:
        return {None}
    if to_move is me:
        mv = select_move(board, me, Difficulty.EXHAUSTIVE)
        return _outcomes(place(board, mv, me), me, me.other)
    results = set()
    for mv in moves:
        results |= _outcomes(place(board, mv, to_move), me, me)
    return results


def test_exhaustive_o_never_loses_against_any_opponent():
    assert Mark.X not in _outcomes(new_board(), Mark.O, Mark.X)


def test_exhaustive_x_never_loses_against_any_opponent():
    assert Mark.O not in _outcomes(new_board(), Mark.X, Mark.X)


def test_exhaustive_finds_a_fork_several_plies_deep():
    # X on 0 and 4, O on 3 and 8: no win in one, but 2 threatens both 1 and 6
    b = (X, 0, 0, O, X, 0, 0, 0, O)
    assert immediate_winning_moves(b, Mark.X) == []
    assert best_move(b, Mark.X)[1] == 10
    assert _outcomes(b, Mark.X, Mark.X) == {Mark.X}
