import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class DeadlineHandle:
    """Single-shot timer handle. ``cancel`` is idempotent and safe after firing."""

    def __init__(self, delay: float, callback: Callable[['DeadlineHandle'], None]) -> None:
        self.delay = delay
        self._callback = callback
        self._lock = threading.Lock()
        self._cancelled = False
        self._fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True

    def fire(self) -> bool:
        """Run the callback unless cancelled or already fired."""
        with self._lock:
            if not self.pending:
                return False
            self._fired = True
        self._callback(self)
        return True


class SocketIOScheduler:
    """Arms deadlines as Socket.IO background tasks.

    The task sleeps with the server's own ``sleep`` so it cooperates with
    whichever async mode (threading, eventlet, gevent) the server runs.
    """

    def __init__(self, socketio) -> None:
        self._socketio = socketio

    def call_later(self, delay: float, callback: Callable[[DeadlineHandle], None]) -> DeadlineHandle:
        handle = DeadlineHandle(delay, callback)

        def _worker(h: DeadlineHandle) -> None:
            self._socketio.sleep(h.delay)
            if not h.fire():
                logger.debug(f'[timer-skip] cancelled before firing delay={h.delay}s')

        logger.info(f'[timer-set] delay={delay}s')
        self._socketio.start_background_task(_worker, handle)
        return handle
