class EmitterError(Exception):
    """Base exception for the emitter package."""


class InvalidEventNameError(EmitterError, TypeError):
    """Raised when an event key is not a string."""


class InvalidListenerError(EmitterError, TypeError):
    """Raised when a listener passed to on()/once() is not callable."""
