"""Errors reported back to the connection that caused them."""


class GameError(Exception):
    code = 'GameError'
    default_message = 'Request could not be completed'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self, event=None):
        payload = {'error': self.code, 'message': self.message}
        if event:
            payload['event'] = event
        return payload


class UserNotFound(GameError):
    code = 'UserNotFound'
    default_message = 'User not found'


class RoomNotFound(GameError):
    code = 'RoomNotFound'
    default_message = 'Room not found'


class RoomFull(GameError):
    code = 'RoomFull'
    default_message = 'Room is full'


class AlreadyInRoom(GameError):
    code = 'AlreadyInRoom'
    default_message = 'User already in a room'


class DuplicateNickname(GameError):
    code = 'DuplicateNickname'
    default_message = 'Nickname already in use'


class InvalidPayload(GameError):
    code = 'InvalidPayload'
    default_message = 'Malformed payload'


class OpponentMissing(GameError):
    code = 'OpponentMissing'
    default_message = 'Cannot unpause game with only one player'
