"""Per-modal visual state and close reconciliation.

A ModalInstance exists while its entry is in the stack. It owns only
transient visual flags:

  shown  -- False on mount, flips True after the show delay (fade-in), back
            to False on the first terminal trigger (fade-out).
  shake  -- pulsed by clicks on a static backdrop, auto-cleared.

Four triggers can end a modal: Escape, a backdrop click, an explicit close
from the view and an explicit change/submit from the view. Only the first
one reaches the manager; the rest are ignored.
"""
from __future__ import annotations
from typing import Any, Callable, Optional, TYPE_CHECKING
import pygame

from modalstack.core.modal_event import ModalEvent, ModalEventType
from modalstack.core.timers import Timer

if TYPE_CHECKING:
    from modalstack.modal.entry import ModalEntry
    from modalstack.modal.manager import ModalManager


class ModalInstance:
    def __init__(
        self,
        entry: "ModalEntry",
        manager: "ModalManager",
        on_close: Callable[[], None],
        on_change: Callable[[Any], None],
    ):
        self.entry = entry
        self.manager = manager
        self._on_close = on_close
        self._on_change = on_change
        self.shown: bool = False
        self.shake: bool = False
        self.mounted: bool = False
        self.terminated: bool = False
        # Last laid-out dialog rectangle, set by the renderer for hit testing
        self.dialog_rect: Optional[pygame.Rect] = None
        self._show_timer: Optional[Timer] = None
        self._shake_timer: Optional[Timer] = None

    @property
    def options(self):
        return self.entry.options

    # --- Mount / unmount ---------------------------------------------------
    def mount(self) -> None:
        if self.mounted:
            return
        self.mounted = True
        self.shown = False
        self._show_timer = self.manager.scheduler.schedule(
            self.manager.show_delay_ms, self._show, name=f"{self.entry.id}:show"
        )
        self.manager.key_events.subscribe(self.on_key, [ModalEventType.KEY_DOWN])

    def unmount(self) -> None:
        if not self.mounted:
            return
        self.mounted = False
        self.manager.scheduler.cancel(self._show_timer)
        self.manager.scheduler.cancel(self._shake_timer)
        self._show_timer = None
        self._shake_timer = None
        self.manager.key_events.unsubscribe(self.on_key)

    def _show(self):
        self._show_timer = None
        if not self.mounted or self.terminated:
            return
        self.shown = True
        self._emit(ModalEventType.MODAL_SHOWN)

    # --- Triggers ----------------------------------------------------------
    def on_key(self, event: ModalEvent) -> None:
        if event.get("key") == pygame.K_ESCAPE and self.options.keyboard:
            self.close()

    def click_backdrop(self) -> bool:
        """Handle a click outside the dialog. Returns True if it closed the modal."""
        if not self.options.has_backdrop or self.terminated:
            return False
        if self.options.static_backdrop:
            self._pulse_shake()
            return False
        return self.close()

    def close(self) -> bool:
        if not self.terminate():
            return False
        self._on_close()
        return True

    def change(self, result: Any) -> bool:
        if not self.terminate():
            return False
        self._on_change(result)
        return True

    def terminate(self) -> bool:
        """Enter the exit transition without notifying the manager."""
        if self.terminated:
            return False
        self.terminated = True
        self.shown = False
        return True

    # --- Static backdrop feedback ------------------------------------------
    def _pulse_shake(self):
        # Restart the clear timer so only one is ever pending
        self.manager.scheduler.cancel(self._shake_timer)
        self.shake = True
        self._emit(ModalEventType.MODAL_SHAKE_STARTED)
        self._shake_timer = self.manager.scheduler.schedule(
            self.manager.shake_ms, self._clear_shake, name=f"{self.entry.id}:shake"
        )

    def _clear_shake(self):
        self._shake_timer = None
        if not self.mounted:
            return
        self.shake = False
        self._emit(ModalEventType.MODAL_SHAKE_CLEARED)

    # --- Input / rendering -------------------------------------------------
    def handle_click(self, pos) -> bool:
        """Route a mouse press. Clicks inside the dialog are swallowed.

        Before the first draw there is no laid-out dialog to test against, so
        the click is swallowed as well.
        """
        if self.dialog_rect is None or self.dialog_rect.collidepoint(pos):
            return False
        return self.click_backdrop()

    def render(self) -> Any:
        return self.entry.view.render(self.entry.model, self.close, self.change)

    def _emit(self, event_type: ModalEventType):
        self.manager.event_listener.publish(
            ModalEvent(event_type, source=self, payload={"id": self.entry.id})
        )

    def __repr__(self) -> str:
        return f"ModalInstance(id={self.entry.id!r}, shown={self.shown}, shake={self.shake})"

__all__ = ["ModalInstance"]
