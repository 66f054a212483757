"""modalstack package public API.

Exports the modal stack manager and the types callers pass to it.
"""
from __future__ import annotations

from .modal.manager import ModalManager
from .modal.options import ModalOptions
from .modal.entry import ModalEntry, EntryState
from .modal.errors import ModalError, InvalidModalOptionError, ModalManagerClosedError

__all__ = [
    "ModalManager",
    "ModalOptions",
    "ModalEntry",
    "EntryState",
    "ModalError",
    "InvalidModalOptionError",
    "ModalManagerClosedError",
]
