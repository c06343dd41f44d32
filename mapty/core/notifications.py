"""Status message area with cancel-and-replace hide/clear timers."""
import logging
import threading
from typing import Callable, Optional, Protocol, Tuple

from mapty.config import NOTIFICATION_TRANSITION_SEC, NOTIFICATION_VISIBLE_SEC
from mapty.models.notification import Notification, Severity

logger = logging.getLogger(__name__)

SEVERITIES = ("error", "success")


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def start_thread_timer(delay_sec: float, callback: Callable[[], None]) -> threading.Timer:
    """Default timer factory: a started daemon threading.Timer."""
    timer = threading.Timer(delay_sec, callback)
    timer.daemon = True
    timer.start()
    return timer


class NotificationScheduler:
    """Shows one message at a time.

    A message is visible at once, hidden after visible_sec and cleared
    (text and severity removed) transition_sec later. Showing a new
    message cancels both pending timers of the previous one; a callback
    that was already running for a superseded message is ignored.
    """

    def __init__(
        self,
        visible_sec: float = NOTIFICATION_VISIBLE_SEC,
        transition_sec: float = NOTIFICATION_TRANSITION_SEC,
        timer_factory: TimerFactory = start_thread_timer,
    ) -> None:
        self._visible_sec = visible_sec
        self._transition_sec = transition_sec
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._generation = 0
        self._timers: Optional[Tuple[TimerHandle, TimerHandle]] = None
        self._state = Notification(message="", severity=None, visible=False)

    def current(self) -> Notification:
        with self._lock:
            s = self._state
            return Notification(message=s.message, severity=s.severity, visible=s.visible)

    def show(self, message: str, severity: Severity) -> Tuple[TimerHandle, TimerHandle]:
        """Display message now; return (hide, clear) timer handles."""
        if severity not in SEVERITIES:
            raise ValueError(f"severity must be one of {SEVERITIES}, got {severity!r}")
        with self._lock:
            self._cancel_timers()
            self._generation += 1
            gen = self._generation
            self._state = Notification(message=message, severity=severity, visible=True)
            hide = self._timer_factory(self._visible_sec, lambda: self._hide(gen))
            clear = self._timer_factory(
                self._visible_sec + self._transition_sec, lambda: self._clear(gen)
            )
            self._timers = (hide, clear)
        logger.info("Notification (%s): %s", severity, message)
        return hide, clear

    def cancel(self) -> None:
        """Cancel pending timers; the current message stays as it is."""
        with self._lock:
            self._cancel_timers()

    def _cancel_timers(self) -> None:
        if self._timers is None:
            return
        for timer in self._timers:
            timer.cancel()
        self._timers = None
        logger.debug("Cancelled pending notification timers")

    def _hide(self, gen: int) -> None:
        with self._lock:
            if gen != self._generation:
                return
            self._state = Notification(
                message=self._state.message, severity=self._state.severity, visible=False
            )

    def _clear(self, gen: int) -> None:
        with self._lock:
            if gen != self._generation:
                return
            self._state = Notification(message="", severity=None, visible=False)
            self._timers = None
