"""Renderable content of a modal.

A view is either fixed content (StaticView) or a function that builds content
from the modal's model and its two lifecycle hooks (DynamicView). The stack
never inspects what the view produces; the renderer decides how to draw it.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Union


@dataclass(frozen=True)
class StaticView:
    content: Any

    def render(self, model: Any, on_close: Callable[[], None], on_change: Callable[[Any], None]) -> Any:
        return self.content


@dataclass(frozen=True)
class DynamicView:
    fn: Callable[..., Any]

    def render(self, model: Any, on_close: Callable[[], None], on_change: Callable[[Any], None]) -> Any:
        return self.fn(model=model, on_close=on_close, on_change=on_change)


ModalView = Union[StaticView, DynamicView]


def as_view(view: Any) -> ModalView:
    """Wrap caller-supplied content. Callables become DynamicView, anything else StaticView."""
    if isinstance(view, (StaticView, DynamicView)):
        return view
    if callable(view):
        return DynamicView(view)
    return StaticView(view)

__all__ = ["StaticView", "DynamicView", "ModalView", "as_view"]
