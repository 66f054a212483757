"""Stack manager for modal dialogs.

Owns the ordered list of open entries (insertion order = z-order) and one
ModalInstance per entry. Callers get a Future from open() that is settled
exactly once: with the view's result on change, or with None on any other
close path and on dismiss_all().

Per-entry lifecycle (manager view):

    OPEN --close/handle_change--> CLOSING --grace timer--> REMOVED
    OPEN/CLOSING --dismiss_all/teardown--> REMOVED

Integration with a pygame loop:

    manager.handle_event(event)   # per input event, returns True if consumed
    manager.update(dt)            # per frame, dt in seconds
    manager.draw(screen)          # per frame, after the scene
"""
from __future__ import annotations
from concurrent.futures import Future
from typing import Any, Dict, List, Optional, Tuple, Union
import pygame

from modalstack.core.event_listener import EventListener
from modalstack.core.modal_event import ModalEvent, ModalEventType
from modalstack.core.scroll_lock import ScrollLock, default_scroll_lock
from modalstack.core.timers import Timer, TimerScheduler
from modalstack.modal.entry import EntryState, ModalEntry, next_modal_id
from modalstack.modal.errors import ModalManagerClosedError
from modalstack.modal.instance import ModalInstance
from modalstack.modal.options import ModalOptions
from modalstack.modal.view import as_view
from modalstack.ui.settings import MODAL_SHOW_DELAY_MS, MODAL_CLOSE_GRACE_MS, MODAL_SHAKE_MS

EntryRef = Union[ModalEntry, str]


class ModalManager:
    def __init__(
        self,
        event_listener: Optional[EventListener] = None,
        scheduler: Optional[TimerScheduler] = None,
        scroll_lock: Optional[ScrollLock] = None,
        renderer=None,
        *,
        show_delay_ms: float = MODAL_SHOW_DELAY_MS,
        close_grace_ms: float = MODAL_CLOSE_GRACE_MS,
        shake_ms: float = MODAL_SHAKE_MS,
    ):
        """Create a manager.

        Args:
            event_listener: Hub receiving lifecycle ModalEvents (a private one if omitted)
            scheduler: Timer queue; when supplied the caller advances it, otherwise update(dt) does
            scroll_lock: Shared lock; defaults to the process-wide one
            renderer: Object with draw(surface, instances); a ModalRenderer is created lazily
            show_delay_ms / close_grace_ms / shake_ms: Timing overrides
        """
        self.event_listener = event_listener or EventListener()
        # Per-instance key subscriptions live on their own hub
        self.key_events = EventListener()
        self._owns_scheduler = scheduler is None
        self.scheduler = scheduler or TimerScheduler()
        self.scroll_lock = scroll_lock or default_scroll_lock()
        self.renderer = renderer
        self.show_delay_ms = show_delay_ms
        self.close_grace_ms = close_grace_ms
        self.shake_ms = shake_ms
        self.closed = False
        self._entries: List[ModalEntry] = []
        self._instances: Dict[str, ModalInstance] = {}
        self._grace_timers: Dict[str, Timer] = {}

    # --- Queries -----------------------------------------------------------
    @property
    def entries(self) -> Tuple[ModalEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def is_open(self) -> bool:
        return bool(self._entries)

    def open_count(self) -> int:
        """Entries not yet closing."""
        return sum(1 for e in self._entries if e.state is EntryState.OPEN)

    def top(self) -> Optional[ModalEntry]:
        return self._entries[-1] if self._entries else None

    def get_entry(self, entry_id: str) -> Optional[ModalEntry]:
        for e in self._entries:
            if e.id == entry_id:
                return e
        return None

    def instance_for(self, entry: EntryRef) -> Optional[ModalInstance]:
        entry_id = entry if isinstance(entry, str) else entry.id
        return self._instances.get(entry_id)

    def instances(self) -> List[ModalInstance]:
        return [self._instances[e.id] for e in self._entries if e.id in self._instances]

    def _resolve(self, entry: Optional[EntryRef]) -> Optional[ModalEntry]:
        if entry is None:
            for e in reversed(self._entries):
                if e.state is EntryState.OPEN:
                    return e
            return None
        if isinstance(entry, str):
            return self.get_entry(entry)
        # Entries owned by another manager (or already removed) are ignored
        for e in self._entries:
            if e is entry:
                return e
        return None

    # --- Mutations ---------------------------------------------------------
    def open(self, view: Any, model: Any = None, options: Any = None) -> "Future[Any]":
        """Push a modal and return the Future its result is delivered through.

        Args:
            view: Renderable content, or a callable taking model=, on_close=, on_change=
            model: Payload handed to the view
            options: ModalOptions, a mapping of option names, or None
        """
        if self.closed:
            raise ModalManagerClosedError("Cannot open a modal on a torn-down ModalManager")
        opts = ModalOptions.coerce(options)
        entry: ModalEntry = ModalEntry(next_modal_id(), as_view(view), model, opts)
        self._entries.append(entry)
        self._emit(ModalEventType.MODAL_OPENED, entry, index=len(self._entries) - 1)
        self._sync()
        return entry.result

    def close(self, entry: Optional[EntryRef] = None) -> bool:
        """Begin closing ``entry`` (topmost open entry if omitted).

        The entry's result settles to None unless already settled; the entry
        itself leaves the stack after the grace period. Returns False when
        there was nothing to close.
        """
        target = self._resolve(entry)
        if target is None or target.state is not EntryState.OPEN:
            return False
        target.state = EntryState.CLOSING
        inst = self._instances.get(target.id)
        if inst is not None:
            inst.terminate()
        self._settle(target, None)
        self._emit(ModalEventType.MODAL_CLOSING, target)
        self._grace_timers[target.id] = self.scheduler.schedule(
            self.close_grace_ms, lambda: self._remove(target), name=f"{target.id}:grace"
        )
        return True

    def handle_change(self, entry: EntryRef, result: Any) -> bool:
        """Deliver ``result`` for ``entry`` and close it."""
        target = self._resolve(entry)
        if target is None:
            return False
        self._settle(target, result)
        return self.close(target)

    def dismiss_all(self) -> int:
        """Settle every entry with None and empty the stack now. Returns the count."""
        if not self._entries:
            return 0
        entries = list(self._entries)
        # Detach first so done-callbacks that open new modals land on a clean stack
        self._entries.clear()
        for timer in self._grace_timers.values():
            self.scheduler.cancel(timer)
        self._grace_timers.clear()
        for e in entries:
            e.state = EntryState.REMOVED
        self._sync()
        for e in entries:
            self._settle(e, None)
        self.event_listener.publish(ModalEvent(
            ModalEventType.MODAL_DISMISSED_ALL, source=self,
            payload={"count": len(entries), "ids": [e.id for e in entries]},
        ))
        return len(entries)

    def teardown(self) -> None:
        """Dismiss everything and release the scroll lock unconditionally."""
        if self.closed:
            return
        self.dismiss_all()
        self.closed = True
        self._apply_scroll_lock()

    def __enter__(self) -> "ModalManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    # --- Internals ---------------------------------------------------------
    def _settle(self, entry: ModalEntry, value: Any) -> None:
        if entry.settle(value):
            self._emit(ModalEventType.MODAL_RESOLVED, entry, result=value)

    def _remove(self, entry: ModalEntry) -> None:
        self._grace_timers.pop(entry.id, None)
        if not any(e is entry for e in self._entries):
            return
        self._entries.remove(entry)
        entry.state = EntryState.REMOVED
        self._sync()
        self._emit(ModalEventType.MODAL_REMOVED, entry)

    def _sync(self) -> None:
        """Reconcile mounted instances with the stack, then the scroll lock."""
        live = {e.id for e in self._entries}
        for entry_id in [k for k in self._instances if k not in live]:
            self._instances.pop(entry_id).unmount()
        for e in self._entries:
            if e.id not in self._instances:
                inst = ModalInstance(
                    e, self,
                    on_close=lambda e=e: self.close(e),
                    on_change=lambda result, e=e: self.handle_change(e, result),
                )
                self._instances[e.id] = inst
                inst.mount()
        self._apply_scroll_lock()

    def _apply_scroll_lock(self) -> None:
        if self._entries and not self.closed:
            changed = self.scroll_lock.acquire(self)
        else:
            changed = self.scroll_lock.release(self)
        if changed:
            self.event_listener.publish(ModalEvent(
                ModalEventType.SCROLL_LOCK_CHANGED, source=self,
                payload={"held": self.scroll_lock.holds(self), "locked": self.scroll_lock.locked},
            ))

    def _emit(self, event_type: ModalEventType, entry: ModalEntry, **extra) -> None:
        payload = {"id": entry.id}
        payload.update(extra)
        self.event_listener.publish(ModalEvent(event_type, source=self, payload=payload))

    # --- Frame integration -------------------------------------------------
    def handle_event(self, event: pygame.event.Event) -> bool:
        """Route a pygame event to the modals. Returns True if the scene should not see it."""
        if event.type == pygame.MOUSEWHEEL:
            return self.scroll_lock.blocks(event)
        if not self._entries:
            return False
        if event.type == pygame.KEYDOWN:
            before = self.open_count()
            self.key_events.publish(ModalEvent(ModalEventType.KEY_DOWN, source=self, payload={"key": event.key}))
            return self.open_count() < before
        if event.type == pygame.MOUSEBUTTONDOWN:
            if getattr(event, "button", 1) == 1:
                top = self._instances.get(self._entries[-1].id)
                if top is not None:
                    top.handle_click(event.pos)
            return True
        if event.type == pygame.MOUSEBUTTONUP:
            return True
        return False

    def update(self, dt: float) -> None:
        if self._owns_scheduler:
            self.scheduler.update(dt)

    def draw(self, surface: pygame.Surface) -> None:
        if self.renderer is None:
            from modalstack.ui.renderer import ModalRenderer
            self.renderer = ModalRenderer()
        self.renderer.draw(surface, self.instances())

__all__ = ["ModalManager"]
