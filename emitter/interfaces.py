from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional


class SubscribeInterface(ABC):
    """Subscription half of an emitter.

    Objects that let others listen to them without letting them publish
    implement this, typically by mixing in ``MixableEmitter``.
    """

    @abstractmethod
    def on(self, event: str, callback: Callable[..., Any], context: Any = None) -> "SubscribeInterface":
        """Add a listener. Adding an already attached listener does nothing.

        Args:
            event: Event name, optionally suffixed with ".namespace"
            callback: The listener
            context: Receiver passed as the listener's first argument

        Returns:
            The instance itself, to allow chaining
        """
        raise NotImplementedError

    @abstractmethod
    def off(
        self,
        event: Optional[str] = None,
        callback: Optional[Callable[..., Any]] = None,
        context: Any = None,
    ) -> "SubscribeInterface":
        """Remove listeners.

        When the callback is omitted, removes every listener of the event
        (or of the namespace); without an event, removes every listener of every event.

        Returns:
            The instance itself, to allow chaining
        """
        raise NotImplementedError
