from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional

class ModalEventType(Enum):
    # Stack lifecycle
    MODAL_OPENED = auto()
    MODAL_RESOLVED = auto()
    MODAL_CLOSING = auto()
    MODAL_REMOVED = auto()
    MODAL_DISMISSED_ALL = auto()
    # Instance visual state
    MODAL_SHOWN = auto()
    MODAL_SHAKE_STARTED = auto()
    MODAL_SHAKE_CLEARED = auto()
    # Input forwarded to mounted instances
    KEY_DOWN = auto()
    # Process-wide side effects
    SCROLL_LOCK_CHANGED = auto()

@dataclass(slots=True)
class ModalEvent:
    type: ModalEventType
    source: Any | None = None
    payload: Optional[dict[str, Any]] = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default) if self.payload else default

    def __repr__(self) -> str:  # Helpful for debugging
        return f"ModalEvent(type={self.type}, payload={self.payload})"
