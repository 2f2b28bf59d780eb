from noughts.board import Mark, new_board
from noughts.render import INDEX_MAP, render_board

X, O = int(Mark.X), int(Mark.O)


def test_render_board_layout():
    text = render_board((X, O, 0, 0, X, 0, 0, 0, O))
    assert text.splitlines() == [
        " X | O |   ",
        "---+---+---",
        "   | X |   ",
        "---+---+---",
        "   |   | O ",
    ]


def test_render_empty_board_has_no_marks():
    text = render_board(new_board())
    assert "X" not in text and "O" not in text
    assert INDEX_MAP.splitlines()[0] == "1 | 2 | 3"
