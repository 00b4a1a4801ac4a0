import inspect
from dataclasses import dataclass
from typing import Any, Callable, NamedTuple, Optional

import config
from .errors import InvalidEventNameError


class EventKey(NamedTuple):
    name: str
    namespace: Optional[str] = None


def split_event_name(key: str) -> EventKey:
    """Split "name.namespace" on the first delimiter only."""
    if not isinstance(key, str):
        raise InvalidEventNameError(f"Event name must be a string, got {type(key).__name__}")
    name, sep, namespace = key.partition(config.NAMESPACE_DELIMITER)
    if not sep or not namespace:
        return EventKey(name)
    return EventKey(name, namespace)


def same_callback(a: Optional[Callable], b: Optional[Callable]) -> bool:
    # Bound methods are rebuilt on every attribute access; compare their parts
    return a is b or (
        inspect.ismethod(a)
        and inspect.ismethod(b)
        and a.__self__ is b.__self__
        and a.__func__ is b.__func__
    )


@dataclass(eq=False)
class ListenerRecord:
    # -------------------------------
    # Identity
    # -------------------------------
    event: str = ""
    namespace: Optional[str] = None
    callback: Optional[Callable[..., Any]] = None   # None marks a tombstone
    context: Any = None                             # None = no receiver

    # -------------------------------
    # Dispatch
    # -------------------------------
    invoker: Optional[Callable[..., Any]] = None    # callback, or the once() wrapper
    once: bool = False

    @classmethod
    def tombstone(cls) -> "ListenerRecord":
        return cls()

    @property
    def is_tombstone(self) -> bool:
        return self.callback is None

    def matches(self, callback: Callable, context: Any = None) -> bool:
        """Listener identity: same callback and the very same context object."""
        return (
            not self.is_tombstone
            and same_callback(self.callback, callback)
            and self.context is context
        )

    def in_namespace(self, namespace: Optional[str]) -> bool:
        return namespace is None or self.namespace == namespace

    def invoke(self, *args, **kwargs):
        """Run the invoker, passing the context first when one was bound."""
        if self.context is not None:
            return self.invoker(self.context, *args, **kwargs)
        return self.invoker(*args, **kwargs)
