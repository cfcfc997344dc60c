"""Game domain services.

This package contains pure domain logic imported by the room coordinator,
keeping transport concerns separated from core game mechanics.
"""

from .engine import (
    CellOccupied,
    MoveError,
    NotYourTurn,
    OutOfRange,
    Verdict,
    apply_move,
    check_terminal,
    mark_for,
    new_game,
)
