"""User-facing error taxonomy.

Every failed action is reported back to the acting connection only, as a
single ``errorMessage`` event. The code is what tests and logs look at; the
message is what clients render.
"""

from enum import Enum


class ErrorCode(str, Enum):
    NOT_AUTHENTICATED = 'not_authenticated'
    NAME_TAKEN = 'name_taken'
    ALREADY_LOGGED_IN = 'already_logged_in'
    ROOM_NOT_FOUND = 'room_not_found'
    NOT_A_PLAYER = 'not_a_player'
    NOT_YOUR_TURN = 'not_your_turn'
    INVALID_MOVE = 'invalid_move'
    GAME_NOT_STARTED = 'game_not_started'
    ROOM_FULL = 'room_full'
    ALREADY_IN_ROOM = 'already_in_room'
    INVALID_INPUT = 'invalid_input'
    ROOM_NAME_TAKEN = 'room_name_taken'
    ROOM_LIMIT_REACHED = 'room_limit_reached'


class RoomServerError(Exception):
    code = None
    default_message = 'Something went wrong'

    def __init__(self, message=None, code=None):
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        super().__init__(self.message)


class AuthenticationError(RoomServerError):
    pass


class NotAuthenticated(AuthenticationError):
    code = ErrorCode.NOT_AUTHENTICATED
    default_message = 'You must be logged in'


class NameTaken(AuthenticationError):
    code = ErrorCode.NAME_TAKEN
    default_message = 'User already logged in'


class AlreadyLoggedIn(AuthenticationError):
    code = ErrorCode.ALREADY_LOGGED_IN
    default_message = 'You are already logged in'


class LookupFailed(RoomServerError):
    pass


class RoomNotFound(LookupFailed):
    code = ErrorCode.ROOM_NOT_FOUND
    default_message = 'Room does not exist'


class NotAPlayer(LookupFailed):
    code = ErrorCode.NOT_A_PLAYER
    default_message = 'You are not a player in this room'


class LegalityError(RoomServerError):
    pass


class NotYourTurn(LegalityError):
    code = ErrorCode.NOT_YOUR_TURN
    default_message = "It's not your turn"


class InvalidMove(LegalityError):
    code = ErrorCode.INVALID_MOVE
    default_message = 'Invalid move'


class GameNotStarted(LegalityError):
    code = ErrorCode.GAME_NOT_STARTED
    default_message = 'Game not started yet'


class RoomFull(LegalityError):
    code = ErrorCode.ROOM_FULL
    default_message = 'Room is full'


class AlreadyInRoom(LegalityError):
    code = ErrorCode.ALREADY_IN_ROOM
    default_message = 'You are already in this room'


class ValidationError(RoomServerError):
    code = ErrorCode.INVALID_INPUT
    default_message = 'Invalid input'


class RoomNameTaken(ValidationError):
    code = ErrorCode.ROOM_NAME_TAKEN
    default_message = 'Rooms name already exist'


class RoomLimitReached(ValidationError):
    code = ErrorCode.ROOM_LIMIT_REACHED
    default_message = 'Too many rooms, try again later'
