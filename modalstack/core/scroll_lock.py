"""Process-wide scroll lock shared by modal managers.

While locked, wheel scrolling must not reach the scene beneath the modals.
The lock counts holders so nested managers restore the prior state instead
of unconditionally unlocking.
"""
from __future__ import annotations
from typing import Callable, Optional, Set
import pygame


class ScrollLock:
    def __init__(self, on_change: Optional[Callable[[bool], None]] = None):
        self._holders: Set[object] = set()
        self._on_change = on_change

    @property
    def locked(self) -> bool:
        return bool(self._holders)

    def acquire(self, owner: object) -> bool:
        """Register ``owner`` as a holder. Returns False if it already held the lock."""
        if owner in self._holders:
            return False
        was = self.locked
        self._holders.add(owner)
        if not was:
            self._notify(True)
        return True

    def release(self, owner: object) -> bool:
        if owner not in self._holders:
            return False
        self._holders.discard(owner)
        if not self.locked:
            self._notify(False)
        return True

    def holds(self, owner: object) -> bool:
        return owner in self._holders

    def blocks(self, event: pygame.event.Event) -> bool:
        return self.locked and event.type == pygame.MOUSEWHEEL

    def _notify(self, locked: bool):
        if self._on_change:
            try:
                self._on_change(locked)
            except Exception as e:
                print(f"Warning: scroll lock callback failed: {e}")


_default_lock: Optional[ScrollLock] = None

def default_scroll_lock() -> ScrollLock:
    """Shared lock used by managers that are not given one explicitly."""
    global _default_lock
    if _default_lock is None:
        _default_lock = ScrollLock()
    return _default_lock

__all__ = ["ScrollLock", "default_scroll_lock"]
