from typing import Callable, Dict, Tuple


class RoomTimers:
    """Holds at most one pending tick per room.

    The token for a room lives here rather than on the Room itself, so room
    snapshots stay free of scheduling state. Scheduling again replaces the
    token; a timer whose token is no longer current does nothing.
    """

    def __init__(self, logger):
        self.logger = logger
        self._tokens: Dict[int, object] = {}

    def schedule(self, room_id: int, delay_ms: int, callback: Callable[[], None]) -> None:
        token = object()
        self._tokens[room_id] = token
        self.logger.info(f"[timer-set] room={room_id} delay={delay_ms}ms")
        self._start(room_id, token, delay_ms, callback)

    def cancel(self, room_id: int) -> bool:
        return self._tokens.pop(room_id, None) is not None

    def pending(self, room_id: int) -> bool:
        return room_id in self._tokens

    def _claim(self, room_id: int, token: object) -> bool:
        if self._tokens.get(room_id) is not token:
            self.logger.info(f"[timer-abort] room={room_id} superseded or cancelled")
            return False
        del self._tokens[room_id]
        self.logger.debug(f"[timer-fire] room={room_id}")
        return True

    def _start(self, room_id, token, delay_ms, callback):
        raise NotImplementedError


class SocketIOTimers(RoomTimers):
    """Background-task timers driven by the Socket.IO async mode."""

    def __init__(self, socketio, lock, logger):
        super().__init__(logger)
        self.socketio = socketio
        self.lock = lock

    def _start(self, room_id, token, delay_ms, callback):
        def _worker():
            self.socketio.sleep(delay_ms / 1000.0)
            with self.lock:
                if self._claim(room_id, token):
                    callback()

        self.socketio.start_background_task(_worker)


class ManualTimers(RoomTimers):
    """Timers that only fire when asked to. Used in TESTING mode."""

    def __init__(self, logger):
        super().__init__(logger)
        self._pending: Dict[int, Tuple[object, int, Callable[[], None]]] = {}

    def _start(self, room_id, token, delay_ms, callback):
        self._pending[room_id] = (token, delay_ms, callback)

    def delay_for(self, room_id: int) -> int:
        return self._pending[room_id][1]

    def fire(self, room_id: int) -> bool:
        """Run the room's pending tick as if its delay had elapsed."""
        entry = self._pending.pop(room_id, None)
        if entry is None:
            return False
        token, _, callback = entry
        if not self._claim(room_id, token):
            return False
        callback()
        return True
