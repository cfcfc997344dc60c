"""Room coordinator.

The only code that mutates rooms, users and games. Each inbound action is
turned into one of the action types below and handed to
``RoomCoordinator.dispatch``, which runs it to completion under a single lock
before the next one starts. Outbound events go through a gateway object:

    gateway.send(connection, event, payload)
    gateway.to_room(room_id, event, payload)
    gateway.to_all(event, payload)
    gateway.enter(connection, room_id)
    gateway.leave(connection, room_id)

Gateway calls only queue messages on the transport, so holding the lock
while broadcasting keeps per-connection ordering without waiting on clients.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional

from roomserver import errors
from roomserver.models import Player, Room
from roomserver.services import games
from roomserver.services.games import Verdict
from roomserver.services.identity import IdentityRegistry
from roomserver.services.rooms import RoomStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Login:
    connection: str
    name: Any


@dataclass(frozen=True)
class CreateRoom:
    connection: str
    room_name: Any


@dataclass(frozen=True)
class JoinRoom:
    connection: str
    room_id: Any


@dataclass(frozen=True)
class MakeMove:
    connection: str
    room_id: Any
    index: Any


@dataclass(frozen=True)
class ExitRoom:
    connection: str
    room_id: Any


@dataclass(frozen=True)
class Disconnect:
    connection: str


class RoomCoordinator:
    def __init__(self, gateway, identity: Optional[IdentityRegistry] = None, store: Optional[RoomStore] = None,
                 max_name_length: int = 32, prune_empty_rooms: bool = False):
        self.gateway = gateway
        self.identity = identity if identity is not None else IdentityRegistry()
        self.store = store if store is not None else RoomStore()
        self.max_name_length = max_name_length
        self.prune_empty_rooms = prune_empty_rooms
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, gateway, config):
        return cls(
            gateway,
            store=RoomStore(max_rooms=config.get('MAX_ROOMS')),
            max_name_length=int(config.get('MAX_NAME_LENGTH', 32)),
            prune_empty_rooms=bool(config.get('PRUNE_EMPTY_ROOMS', False)),
        )

    def dispatch(self, action) -> bool:
        """Run one action. Returns False when it was rejected; the reason has
        already been sent to the acting connection as ``errorMessage``."""
        with self._lock:
            try:
                if isinstance(action, Login):
                    self.login(action.connection, action.name)
                elif isinstance(action, CreateRoom):
                    self.create_room(action.connection, action.room_name)
                elif isinstance(action, JoinRoom):
                    self.join_room(action.connection, action.room_id)
                elif isinstance(action, MakeMove):
                    self.make_move(action.connection, action.room_id, action.index)
                elif isinstance(action, ExitRoom):
                    self.exit_room(action.connection, action.room_id)
                elif isinstance(action, Disconnect):
                    self.disconnect(action.connection)
                else:
                    raise TypeError(f"unknown action {action!r}")
            except errors.RoomServerError as exc:
                logger.info(f"[rejected] {type(action).__name__} conn={action.connection} code={exc.code.value} msg={exc.message}")
                self.gateway.send(action.connection, 'errorMessage', exc.message)
                return False
            return True

    # ---- snapshots ----

    def rooms_snapshot(self):
        with self._lock:
            return [room.to_dict() for room in self.store.list()]

    def broadcast_rooms(self) -> None:
        self.gateway.to_all('rooms', self.rooms_snapshot())

    # ---- actions ----

    def login(self, connection: str, name) -> None:
        name = self._clean_name(name, 'Username is required')
        self.identity.login(connection, name)
        logger.info(f"[login] conn={connection} name={name}")
        self.gateway.send(connection, 'loginSuccess', name)
        self.broadcast_rooms()

    def create_room(self, connection: str, room_name) -> Room:
        if not self.identity.is_logged_in(connection):
            raise errors.NotAuthenticated('You must be logged in to create a room')
        room_name = self._clean_name(room_name, 'Room name is required')
        room = self.store.create(room_name)
        logger.info(f"[room-create] room={room.id} name={room.name} by={connection}")
        self.broadcast_rooms()
        return room

    def join_room(self, connection: str, room_id) -> Room:
        name = self.identity.name_of(connection)
        if name is None:
            raise errors.NotAuthenticated('You must be logged in to join a room')
        room = self._require_room(room_id)
        if room.has_player(connection):
            raise errors.AlreadyInRoom()
        if room.is_full:
            raise errors.RoomFull()

        room.players.append(Player(name=name, id=connection))
        self.gateway.enter(connection, room.id)
        logger.info(f"[room-join] room={room.id} conn={connection} name={name} players={len(room.players)}")

        if room.is_full:
            room.game = games.new_game(room.players[0].id)
            logger.info(f"[game-start] room={room.id} first={room.players[0].name}")
            self.gateway.to_room(room.id, 'gameState', room.game.to_dict())
            self.gateway.to_room(room.id, 'user-join', name)
        self.broadcast_rooms()
        return room

    def make_move(self, connection: str, room_id, index) -> Verdict:
        room = self._require_room(room_id)
        game = room.game
        if game is None:
            raise errors.GameNotStarted()
        player_index = room.index_of(connection)
        if player_index == -1:
            raise errors.NotAPlayer()
        # Checked here so the user gets the turn message rather than an engine error
        if game.turn != connection:
            raise errors.NotYourTurn()

        mark = games.mark_for(player_index)
        opponent = room.players[1 - player_index].id
        try:
            room.game = games.apply_move(game, connection, index, mark, opponent)
        except games.NotYourTurn:
            raise errors.NotYourTurn()
        except games.MoveError:
            raise errors.InvalidMove()

        logger.info(f"[move] room={room.id} conn={connection} mark={mark.value} cell={index}")
        self.gateway.to_room(room.id, 'gameState', room.game.to_dict())

        verdict = games.check_terminal(room.game.board, mark)
        if verdict == Verdict.WIN:
            self.gateway.to_room(room.id, 'gameOver', {
                'type': 'win',
                'userId': connection,
                'winner': connection,
                'winnerConnection': connection,
                'winnerName': room.players[player_index].name,
            })
            room.game = None
            logger.info(f"[game-over] room={room.id} win={connection}")
        elif verdict == Verdict.DRAW:
            self.gateway.to_room(room.id, 'gameOver', {'type': 'draw'})
            room.game = None
            logger.info(f"[game-over] room={room.id} draw")
        self.broadcast_rooms()
        return verdict

    def exit_room(self, connection: str, room_id) -> None:
        room = self.store.find(room_id) if isinstance(room_id, str) else None
        if room is None or not room.has_player(connection):
            return
        self._leave(room, connection)
        self.broadcast_rooms()

    def disconnect(self, connection: str) -> None:
        for room in self.store.rooms_with(connection):
            self._leave(room, connection)
        self.identity.logout(connection)
        logger.info(f"[disconnect] conn={connection}")
        self.broadcast_rooms()

    # ---- helpers ----

    def _leave(self, room: Room, connection: str) -> None:
        # Resolve the name first; disconnect logs the identity out right after
        player = room.players[room.index_of(connection)]
        name = self.identity.name_of(connection) or player.name

        room.players = [p for p in room.players if p.id != connection]
        self.gateway.leave(connection, room.id)
        self.gateway.to_room(room.id, 'user-leave', name)
        logger.info(f"[room-leave] room={room.id} conn={connection} name={name} players={len(room.players)}")

        # Any departure ends a game in progress
        room.game = None
        if room.players:
            self.gateway.to_room(room.id, 'gameState', None)
        elif self.prune_empty_rooms:
            self.store.remove(room.id)
            logger.info(f"[room-prune] room={room.id}")

    def _require_room(self, room_id) -> Room:
        room = self.store.find(room_id) if isinstance(room_id, str) else None
        if room is None:
            raise errors.RoomNotFound()
        return room

    def _clean_name(self, value, message: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise errors.ValidationError(message)
        value = value.strip()
        if len(value) > self.max_name_length:
            raise errors.ValidationError(f"Names are limited to {self.max_name_length} characters")
        return value
