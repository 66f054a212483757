"""Exceptions raised by the modal stack.

Races between close triggers are routine and never raise; only programmer
misuse that cannot be reconciled does.
"""


class ModalError(Exception):
    pass


class InvalidModalOptionError(ModalError, ValueError):
    pass


class ModalManagerClosedError(ModalError, RuntimeError):
    pass

__all__ = ["ModalError", "InvalidModalOptionError", "ModalManagerClosedError"]
