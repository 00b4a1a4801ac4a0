from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Set

from .errors import InvalidListenerError
from .interfaces import SubscribeInterface
from .models import EventKey, ListenerRecord, split_event_name

logger = logging.getLogger(__name__)

Visitor = Callable[..., Any]

# Default for off(): "no callback given", as opposed to an explicit None
_ANY = object()


class MixableEmitter(SubscribeInterface):
    """
    Listener registry with a protected dispatcher, meant to be mixed in.

    Subclasses get on/once/off/has publicly and call ``_emit`` themselves;
    ``EventEmitter`` is the variant that makes ``emit`` public.

    Dispatch is synchronous and re-entrant: listeners may call on/off/emit
    on the same emitter. While any event is firing, removals leave a
    tombstone in the by-name list instead of shifting it, and the pass that
    owns the list compacts it. Not thread-safe; use from one thread.
    """

    def __init__(self) -> None:
        self._by_name: Dict[str, List[ListenerRecord]] = {}
        self._by_namespace: Dict[str, List[ListenerRecord]] = {}
        self._firing = False
        self._passes: Dict[str, int] = {}    # active dispatch depth per event
        self._dirty: Set[str] = set()        # events holding tombstones

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def on(self, event: str, callback: Callable[..., Any], context: Any = None) -> MixableEmitter:
        """Add a listener. If it is already attached it won't get duplicated."""
        return self._add(event, callback, context, once=False)

    def once(self, event: str, callback: Callable[..., Any], context: Any = None) -> MixableEmitter:
        """Add a listener that is removed right before its first invocation."""
        return self._add(event, callback, context, once=True)

    def _add(self, event: str, callback: Callable[..., Any], context: Any, once: bool) -> MixableEmitter:
        key = split_event_name(event)
        if not callable(callback):
            raise InvalidListenerError(f"Listener for '{event}' is not callable: {callback!r}")

        # Duplicates are checked against the event, whatever the namespace
        if self._find(key.name, callback, context) is not None:
            logger.debug("Listener %s already attached to '%s'", callback, key.name)
            return self

        record = ListenerRecord(
            event=key.name,
            namespace=key.namespace,
            callback=callback,
            context=context,
            once=once,
        )
        record.invoker = self._once_invoker(record) if once else callback

        self._by_name.setdefault(key.name, []).append(record)
        if key.namespace is not None:
            self._by_namespace.setdefault(key.namespace, []).append(record)
        logger.debug("Added %s listener %s to '%s'", "once" if once else "on", callback, event)
        return self

    def _once_invoker(self, record: ListenerRecord) -> Callable[..., Any]:
        callback = record.callback

        def invoker(*args, **kwargs):
            self._remove_record(record)
            return callback(*args, **kwargs)

        return invoker

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def off(
        self,
        event: Optional[str] = None,
        callback: Any = _ANY,
        context: Any = None,
    ) -> MixableEmitter:
        """
        Remove listeners.

          off()                   every listener of every event
          off("x")                every listener of "x"
          off("x.ns") / off(".ns") listeners tagged "ns" (of "x" / of any event)
          off("x", fn, ctx)       the one listener matching fn and ctx
        """
        if event is None:
            if callback is _ANY:
                self._clear_all()
            return self

        key = split_event_name(event)
        if callback is _ANY:
            if key.namespace is None:
                self._clear_event(key.name)
            else:
                self._clear_namespace(key)
            return self

        for record in list(self._live(key)):
            if record.matches(callback, context):
                self._remove_record(record)
                break
        return self

    def _clear_all(self) -> None:
        if self._firing:
            # Passes in progress hold indices into these lists
            for name, listeners in self._by_name.items():
                listeners[:] = [ListenerRecord.tombstone() for _ in listeners]
                self._dirty.add(name)
        else:
            self._by_name.clear()
        self._by_namespace.clear()
        logger.debug("Removed all listeners")

    def _clear_event(self, name: str) -> None:
        listeners = self._by_name.get(name)
        if listeners is None:
            return
        for record in listeners:
            self._unindex(record)
        if self._firing:
            listeners[:] = [ListenerRecord.tombstone() for _ in listeners]
            self._dirty.add(name)
        else:
            del self._by_name[name]
        logger.debug("Removed all listeners of '%s'", name)

    def _clear_namespace(self, key: EventKey) -> None:
        for record in list(self._by_namespace.get(key.namespace, ())):
            if key.name and record.event != key.name:
                continue
            self._remove_record(record)
        logger.debug("Removed listeners of '%s' in namespace '%s'", key.name or "*", key.namespace)

    def _remove_record(self, record: ListenerRecord) -> None:
        listeners = self._by_name.get(record.event)
        if listeners is not None:
            for index, current in enumerate(listeners):
                if current is record:
                    if self._firing:
                        listeners[index] = ListenerRecord.tombstone()
                        self._dirty.add(record.event)
                    else:
                        del listeners[index]
                        if not listeners:
                            del self._by_name[record.event]
                    logger.debug("Removed listener %s from '%s'", record.callback, record.event)
                    break
        self._unindex(record)

    def _unindex(self, record: ListenerRecord) -> None:
        if record.namespace is None:
            return
        tagged = self._by_namespace.get(record.namespace)
        if tagged is None:
            return
        # Namespace lists are never iterated by a pass, so splice right away
        for index, current in enumerate(tagged):
            if current is record:
                del tagged[index]
                break
        if not tagged:
            del self._by_namespace[record.namespace]

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _emit(self, event: str, *args, **kwargs) -> MixableEmitter:
        """
        Invoke every listener of ``event`` in registration order.

        Listeners added to the same event during the pass are reached in that
        pass; removed ones are skipped. A listener exception propagates as is
        and aborts the rest of the pass.
        """
        key = split_event_name(event)
        name = key.name
        listeners = self._by_name.get(name)
        if not listeners:
            logger.debug("Emitting '%s' with no listeners", event)
            return self

        logger.debug("Emitting '%s' to %d listeners", event, len(listeners))
        was_firing = self._firing
        self._firing = True
        depth = self._passes.get(name, 0) + 1
        self._passes[name] = depth
        # Only the outermost pass over a list may shift its indices
        owner = depth == 1

        try:
            index = 0
            while index < len(listeners):
                record = listeners[index]
                if record.is_tombstone:
                    if owner:
                        del listeners[index]
                        continue
                elif record.in_namespace(key.namespace):
                    record.invoke(*args, **kwargs)
                index += 1
        finally:
            if owner:
                del self._passes[name]
                if not listeners and self._by_name.get(name) is listeners:
                    del self._by_name[name]
            else:
                self._passes[name] = depth - 1
            self._firing = was_firing
            if not was_firing:
                self._compact()
        return self

    def _compact(self) -> None:
        for name in self._dirty:
            listeners = self._by_name.get(name)
            if listeners is None:
                continue
            listeners[:] = [r for r in listeners if not r.is_tombstone]
            if not listeners:
                del self._by_name[name]
        self._dirty.clear()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _find(self, name: str, callback: Callable[..., Any], context: Any) -> Optional[ListenerRecord]:
        for record in reversed(self._by_name.get(name, ())):
            if record.matches(callback, context):
                return record
        return None

    def _live(self, key: EventKey) -> Iterator[ListenerRecord]:
        if key.name or key.namespace is None:
            source = self._by_name.get(key.name, ())
        else:
            source = self._by_namespace.get(key.namespace, ())
        for record in source:
            if not record.is_tombstone and record.in_namespace(key.namespace):
                yield record

    def has(self, event: str, callback: Optional[Callable[..., Any]] = None, context: Any = None) -> bool:
        """Check whether a listener (or, without a callback, any listener) is attached."""
        key = split_event_name(event)
        for record in self._live(key):
            if callback is None or record.matches(callback, context):
                return True
        return False

    def listener_count(self, event: Optional[str] = None) -> int:
        if event is not None:
            return sum(1 for _ in self._live(split_event_name(event)))
        return sum(
            1
            for listeners in self._by_name.values()
            for record in listeners
            if not record.is_tombstone
        )

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def for_each(self, visitor: Visitor, context: Any = None) -> MixableEmitter:
        """Call ``visitor(event, callback, context)`` for every listener.

        If ``context`` is given it is passed first, like a listener context.
        The visitor must not add or remove listeners.
        """
        for name, listeners in self._by_name.items():
            for record in listeners:
                if record.is_tombstone:
                    continue
                if context is not None:
                    visitor(context, name, record.callback, record.context)
                else:
                    visitor(name, record.callback, record.context)
        return self

    def for_each_meta(self, visitor: Callable[[ListenerRecord], Any]) -> MixableEmitter:
        """Call ``visitor(record)`` with the raw record of every listener."""
        for listeners in self._by_name.values():
            for record in listeners:
                if not record.is_tombstone:
                    visitor(record)
        return self
