import pytest

from noughts.board import Mark, as_board, new_board, place
from noughts.errors import IllegalMoveError
from noughts.game_basics import (
    WIN_PATTERNS,
    current_player,
    empty_cells,
    get_winner,
    is_draw,
    is_full,
    is_valid_state,
    outcome,
)

X, O = int(Mark.X), int(Mark.O)


@pytest.mark.parametrize("pattern", WIN_PATTERNS)
@pytest.mark.parametrize("mark", [Mark.X, Mark.O])
def test_every_triple_is_a_win(pattern, mark):
    board = [0] * 9
    for i in pattern:
        board[i] = int(mark)
    assert get_winner(board) is mark


def test_no_winner_on_empty_and_drawn_boards():
    assert get_winner(new_board()) is None
    draw = (X, X, O, O, O, X, X, O, X)
    assert get_winner(draw) is None
    assert is_full(draw)
    assert is_draw(draw)
    res = outcome(draw)
    assert res.is_terminal and res.winner is None


def test_two_completed_lines_resolve_by_scan_order():
    # O owns the top row, X the bottom row: rows are scanned top to bottom
    board = (O, O, O, 0, 0, 0, X, X, X)
    assert get_winner(board) is Mark.O
    # columns are scanned left to right
    board = (O, 0, X, O, 0, X, O, 0, X)
    assert get_winner(board) is Mark.O


def test_empty_cells_ascending():
    board = (X, 0, O, 0, 0, X, 0, O, 0)
    assert empty_cells(board) == [1, 3, 4, 6, 8]
    assert empty_cells(new_board()) == list(range(9))
    assert empty_cells((X, O, X, O, X, O, O, X, O)) == []


def test_place_returns_new_board_and_rejects_bad_cells():
    b0 = new_board()
    b1 = place(b0, 4, Mark.X)
    assert b0 == (0,) * 9
    assert b1[4] == X
    with pytest.raises(IllegalMoveError):
        place(b1, 4, Mark.O)
    with pytest.raises(IllegalMoveError):
        place(b1, 9, Mark.O)
    with pytest.raises(IllegalMoveError):
        place(b1, -1, Mark.O)


def test_as_board_validates_shape_and_values():
    assert as_board([0, 1, 2, 0, 0, 0, 0, 0, 0]) == (0, 1, 2, 0, 0, 0, 0, 0, 0)
    with pytest.raises(ValueError):
        as_board([0] * 8)
    with pytest.raises(ValueError):
        as_board([3] + [0] * 8)


def test_current_player_and_validity():
    assert current_player(new_board()) is Mark.X
    assert current_player((X, 0, 0, 0, 0, 0, 0, 0, 0)) is Mark.O
    assert current_player((X, O, 0, 0, 0, 0, 0, 0, 0)) is Mark.X
    assert is_valid_state((X, X, X, O, O, 0, 0, 0, 0))
    assert not is_valid_state((X, X, X, O, O, O, 0, 0, 0))
    assert not is_valid_state((O, O, 0, 0, 0, 0, 0, 0, 0))


def test_mark_other():
    assert Mark.X.other is Mark.O
    assert Mark.O.other is Mark.X
