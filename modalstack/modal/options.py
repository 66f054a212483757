"""Per-open modal configuration."""
from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Literal, Mapping, Optional, Tuple, Union

from modalstack.modal.errors import InvalidModalOptionError

ModalSize = Literal["sm", "lg", "xl", "fullscreen"]
Backdrop = Union[bool, Literal["static"]]

MODAL_SIZES: Tuple[str, ...] = ("sm", "lg", "xl", "fullscreen")


@dataclass(frozen=True)
class ModalOptions:
    """Configuration snapshot captured when a modal is opened.

    backdrop:
        True shows a backdrop that closes the modal on click, False renders no
        backdrop at all, "static" shows a backdrop whose clicks shake the dialog.
    keyboard:
        Escape closes the modal when enabled.
    size / centered / scrollable / modal_class_name:
        Visual variants consumed by the renderer.
    """
    backdrop: Backdrop = True
    keyboard: bool = False
    size: Optional[ModalSize] = None
    centered: bool = False
    scrollable: bool = False
    modal_class_name: Optional[str] = None

    def __post_init__(self):
        # Identity checks so 0/1 are not mistaken for booleans
        if not (self.backdrop is True or self.backdrop is False or self.backdrop == "static"):
            raise InvalidModalOptionError(f"backdrop must be True, False or 'static', got {self.backdrop!r}")
        if self.size is not None and self.size not in MODAL_SIZES:
            raise InvalidModalOptionError(f"size must be one of {MODAL_SIZES}, got {self.size!r}")

    @property
    def static_backdrop(self) -> bool:
        return self.backdrop == "static"

    @property
    def has_backdrop(self) -> bool:
        return self.backdrop is not False

    def variant_classes(self) -> Tuple[str, ...]:
        """Variant tokens in the order they apply to the dialog element."""
        classes = [
            self.modal_class_name,
            self.centered and "modal-dialog-centered",
            self.size and f"modal-{self.size}",
            self.scrollable and "modal-dialog-scrollable",
        ]
        return tuple(c for c in classes if c)

    @classmethod
    def coerce(cls, value: Any = None) -> "ModalOptions":
        """Build options from None, a mapping of field names, or an existing instance."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            known = {f.name for f in fields(cls)}
            unknown = sorted(set(value) - known)
            if unknown:
                raise InvalidModalOptionError(f"Unknown modal option(s): {', '.join(unknown)}")
            return cls(**dict(value))
        raise InvalidModalOptionError(f"Cannot build ModalOptions from {type(value).__name__}")

__all__ = ["ModalOptions", "ModalSize", "Backdrop", "MODAL_SIZES"]
