"""Tic-tac-toe rules.

Every function here is pure: callers hand in the full GameState and get a
new one back, nothing is kept between calls.
"""

from enum import Enum
from typing import List

from roomserver.models import BOARD_SIZE, EMPTY, GameState, Mark

WIN_LINES = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
]


class Verdict(str, Enum):
    ONGOING = 'ongoing'
    WIN = 'win'
    DRAW = 'draw'


class MoveError(Exception):
    pass


class NotYourTurn(MoveError):
    pass


class CellOccupied(MoveError):
    pass


class OutOfRange(MoveError):
    pass


def mark_for(player_index: int) -> Mark:
    """Mark of the player at ``player_index`` in a room's roster."""
    return Mark.X if player_index == 0 else Mark.O


def new_game(first_player: str) -> GameState:
    return GameState(board=[EMPTY] * BOARD_SIZE, turn=first_player)


def apply_move(state: GameState, player: str, index: int, mark: Mark, next_player: str) -> GameState:
    """Place ``mark`` at ``index`` for ``player`` and hand the turn to ``next_player``.

    The engine knows nothing about rooms, so the caller supplies the mover's
    mark and who moves next; the returned state has ``turn == next_player``.
    """
    if player != state.turn:
        raise NotYourTurn(f"{player} moved out of turn")
    # bool is an int subclass; True must not address cell 1
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < BOARD_SIZE:
        raise OutOfRange(f"cell {index!r} is not on the board")
    if state.board[index] != EMPTY:
        raise CellOccupied(f"cell {index} already holds {state.board[index]}")
    board = list(state.board)
    board[index] = Mark(mark).value
    return GameState(board=board, turn=next_player)


def check_terminal(board: List[str], mark: Mark) -> Verdict:
    """Classify ``board`` after ``mark`` just moved.

    Only ``mark`` is checked for a line: a single move cannot complete a line
    for the opponent.
    """
    value = Mark(mark).value
    if any(all(board[i] == value for i in line) for line in WIN_LINES):
        return Verdict.WIN
    if all(cell != EMPTY for cell in board):
        return Verdict.DRAW
    return Verdict.ONGOING
