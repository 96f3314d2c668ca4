from typing import Callable, Dict, List
import asyncio
import logging

logger = logging.getLogger(__name__)

# Event names emitted during a run
FILE_COMPLETE = "file_complete"
FILE_FAIL = "file_fail"
FAILURE_REPORT = "failure_report"
STATE_CHANGE = "state_change"
FINISH = "finish"


class EventEmitter:
    """Simple event emitter for upload events. Listeners may be sync or async."""

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {}

    def on(self, event_name: str, callback: Callable):
        """Subscribe to an event."""
        listeners = self._listeners.setdefault(event_name, [])
        if callback not in listeners:
            listeners.append(callback)

    def off(self, event_name: str, callback: Callable):
        """Unsubscribe from an event."""
        listeners = self._listeners.get(event_name, [])
        if callback in listeners:
            listeners.remove(callback)

    def listener_count(self, event_name: str) -> int:
        return len(self._listeners.get(event_name, []))

    async def emit(self, event_name: str, *args, **kwargs):
        """
        Emit an event to all listeners.

        A failing listener is logged and does not stop delivery to the others
        or the upload that triggered the event.
        """
        for callback in list(self._listeners.get(event_name, [])):
            try:
                if asyncio.iscoroutinefunction(callback):
                    await callback(*args, **kwargs)
                else:
                    callback(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in event listener for {event_name}: {e}")
