from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

BOARD_SIZE = 9
MAX_PLAYERS = 2
EMPTY = ''


class Mark(str, Enum):
    X = 'X'
    O = 'O'


@dataclass
class User:
    display_name: str
    connection: str


@dataclass
class Player:
    name: str
    id: str

    def to_dict(self):
        return {'name': self.name, 'id': self.id}


@dataclass
class GameState:
    board: List[str]
    turn: str

    def to_dict(self):
        # currentPlayer is what clients compare against their own socket id
        return {'board': list(self.board), 'currentPlayer': self.turn}


@dataclass
class Room:
    id: str
    name: str
    players: List[Player] = field(default_factory=list)
    game: Optional[GameState] = None

    @property
    def status(self) -> str:
        if not self.players:
            return 'empty'
        if len(self.players) < MAX_PLAYERS:
            return 'waiting'
        return 'playing' if self.game else 'finished'

    @property
    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    def index_of(self, connection: str) -> int:
        for idx, player in enumerate(self.players):
            if player.id == connection:
                return idx
        return -1

    def has_player(self, connection: str) -> bool:
        return self.index_of(connection) != -1

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'players': [p.to_dict() for p in self.players],
            'status': self.status,
            'gameState': self.game.to_dict() if self.game else None,
        }
