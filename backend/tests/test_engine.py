import pytest

from roomserver.models import Mark
from roomserver.services.games import (
    CellOccupied,
    NotYourTurn,
    OutOfRange,
    Verdict,
    apply_move,
    check_terminal,
    mark_for,
    new_game,
)
from roomserver.services.games.engine import WIN_LINES


def _board(layout):
    # 'X', 'O' or '.' per cell
    return ['' if c == '.' else c for c in layout]


def test_new_game_is_empty_with_first_player_to_move():
    state = new_game('a')
    assert state.board == [''] * 9
    assert state.turn == 'a'


def test_marks_follow_join_order():
    assert mark_for(0) == Mark.X
    assert mark_for(1) == Mark.O


def test_apply_move_places_mark_and_flips_turn():
    state = new_game('a')
    after = apply_move(state, 'a', 4, Mark.X, 'b')
    assert after.board[4] == 'X'
    assert after.turn == 'b'
    # input is left untouched
    assert state.board[4] == ''
    assert state.turn == 'a'


def test_apply_move_rejects_wrong_player():
    with pytest.raises(NotYourTurn):
        apply_move(new_game('a'), 'b', 0, Mark.O, 'a')


def test_apply_move_rejects_occupied_cell():
    state = apply_move(new_game('a'), 'a', 4, Mark.X, 'b')
    with pytest.raises(CellOccupied):
        apply_move(state, 'b', 4, Mark.O, 'a')


@pytest.mark.parametrize('index', [-1, 9, 42, '3', None, 1.5, True])
def test_apply_move_rejects_out_of_range(index):
    with pytest.raises(OutOfRange):
        apply_move(new_game('a'), 'a', index, Mark.X, 'b')


def test_turns_alternate_and_cells_written_once():
    players = ['a', 'b']
    state = new_game('a')
    order = [4, 0, 8, 2, 1, 7, 6, 3, 5]
    for step, cell in enumerate(order):
        mover = players[step % 2]
        assert state.turn == mover
        state = apply_move(state, mover, cell, mark_for(step % 2), players[(step + 1) % 2])
        assert sum(1 for c in state.board if c) == step + 1
    assert all(state.board)


@pytest.mark.parametrize('line', WIN_LINES)
def test_every_line_wins(line):
    board = [''] * 9
    for i in line:
        board[i] = 'X'
    assert check_terminal(board, Mark.X) == Verdict.WIN


def test_win_only_checked_for_given_mark():
    board = _board('XXX' 'OO.' '...')
    assert check_terminal(board, Mark.X) == Verdict.WIN
    assert check_terminal(board, Mark.O) == Verdict.ONGOING


def test_draw_when_full_without_line():
    board = _board('XOX' 'XOO' 'OXX')
    assert check_terminal(board, Mark.X) == Verdict.DRAW
    assert check_terminal(board, Mark.O) == Verdict.DRAW


def test_full_board_with_line_is_a_win():
    board = _board('XXX' 'OOX' 'XOO')
    assert check_terminal(board, Mark.X) == Verdict.WIN


def test_ongoing_board():
    assert check_terminal(_board('X...O....'), Mark.X) == Verdict.ONGOING


@pytest.mark.parametrize('layout', ['XXX.O.O..', 'X..X.OXO.', 'XOOOX...X', 'XOX.XO.OX', 'XOXXOOOXX'])
def test_terminal_symmetric_under_relabeling(layout):
    board = _board(layout)
    swapped = [{'X': 'O', 'O': 'X'}.get(c, c) for c in board]
    assert check_terminal(board, Mark.X) == check_terminal(swapped, Mark.O)
