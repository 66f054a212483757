from __future__ import annotations
from collections import defaultdict
from typing import Callable, Iterable, Optional
from modalstack.core.modal_event import ModalEvent, ModalEventType

class EventListener:
    """Central hub for publishing ModalEvents to subscribed callbacks.

    Subscribers can optionally specify a set of ModalEventType filters; if omitted they
    receive all events.
    """

    def __init__(self):
        self._subs_all: list[Callable[[ModalEvent], None]] = []
        self._subs_specific: dict[ModalEventType, list[Callable[[ModalEvent], None]]] = defaultdict(list)
        # Events published during a callback are queued and processed afterward
        self._queue: list[ModalEvent] = []
        self._dispatching: bool = False

    def subscribe(self, callback: Callable[[ModalEvent], None], types: Optional[Iterable[ModalEventType]] = None):
        if types is None:
            if callback not in self._subs_all:
                self._subs_all.append(callback)
        else:
            for t in types:
                lst = self._subs_specific[t]
                if callback not in lst:
                    lst.append(callback)

    def unsubscribe(self, callback: Callable[[ModalEvent], None]):
        if callback in self._subs_all:
            self._subs_all.remove(callback)
        for lst in self._subs_specific.values():
            if callback in lst:
                lst.remove(callback)

    def subscriber_count(self, event_type: Optional[ModalEventType] = None) -> int:
        if event_type is None:
            return len(self._subs_all)
        return len(self._subs_all) + len(self._subs_specific.get(event_type, []))

    def publish(self, event: ModalEvent):
        self._queue.append(event)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                ev = self._queue.pop(0)
                for cb in list(self._subs_all) + list(self._subs_specific.get(ev.type, [])):
                    try:
                        cb(ev)
                    except Exception as e:
                        print(f"Warning: subscriber {cb!r} failed on {ev.type.name}: {e}")
        finally:
            self._dispatching = False

__all__ = ["EventListener"]
