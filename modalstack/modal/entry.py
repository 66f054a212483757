from __future__ import annotations
from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Generic, Optional, TypeVar
import itertools

from modalstack.modal.options import ModalOptions
from modalstack.modal.view import ModalView

M = TypeVar("M")
R = TypeVar("R")

_id_seq = itertools.count(1)


def next_modal_id() -> str:
    """Process-wide ids; a counter never hands out the same value twice."""
    return f"modal-{next(_id_seq)}"


class EntryState(Enum):
    OPEN = auto()      # Live in the stack
    CLOSING = auto()   # Still drawn while the exit transition plays
    REMOVED = auto()   # Gone from the stack


@dataclass(eq=False)
class ModalEntry(Generic[M, R]):
    """Durable record of one open modal, owned by the ModalManager."""
    id: str
    view: ModalView
    model: Optional[M]
    options: ModalOptions
    result: "Future[Optional[R]]" = field(default_factory=Future)
    state: EntryState = EntryState.OPEN

    @property
    def settled(self) -> bool:
        return self.result.done()

    def settle(self, value: Optional[R]) -> bool:
        """Resolve the deferred result. Only the first call has any effect."""
        if self.result.done():
            return False
        self.result.set_result(value)
        return True

    def __repr__(self) -> str:
        return f"ModalEntry(id={self.id!r}, state={self.state.name}, settled={self.settled})"

__all__ = ["ModalEntry", "EntryState", "next_modal_id"]
