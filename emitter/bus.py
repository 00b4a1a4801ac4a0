# Public emitter: same registry, with emit() exposed to everyone.
from typing import Optional

from .registry import MixableEmitter


class EventEmitter(MixableEmitter):
    def emit(self, event: str, *args, **kwargs) -> "EventEmitter":
        """Emit ``event``, passing the remaining arguments to each listener."""
        return self._emit(event, *args, **kwargs)


# Global default emitter (optional use)
GLOBAL_EMITTER: Optional[EventEmitter] = None


def get_global_emitter() -> EventEmitter:
    """Return a process-global EventEmitter, creating one if necessary."""
    global GLOBAL_EMITTER
    if GLOBAL_EMITTER is None:
        GLOBAL_EMITTER = EventEmitter()
    return GLOBAL_EMITTER
