"""Dialog placement from modal options."""
from __future__ import annotations
from typing import Optional, Tuple
import pygame

from modalstack.modal.options import ModalOptions
from modalstack.ui.settings import (
    DIALOG_WIDTHS, DIALOG_DEFAULT_HEIGHT, DIALOG_MARGIN_TOP, DIALOG_MARGIN, DIALOG_PADDING
)


def dialog_rect(options: ModalOptions, screen_rect: pygame.Rect,
                content_size: Optional[Tuple[int, int]] = None) -> pygame.Rect:
    """Return the dialog rectangle for ``options`` inside ``screen_rect``.

    - size "fullscreen" fills the screen.
    - other sizes pick a width from DIALOG_WIDTHS, clamped to the screen.
    - height follows the content (plus padding) or DIALOG_DEFAULT_HEIGHT.
    - scrollable clamps the height so the dialog never overflows the screen.
    - centered places the dialog in the vertical middle, otherwise near the top.
    """
    if options.size == "fullscreen":
        return screen_rect.copy()
    max_w = screen_rect.width - 2 * DIALOG_MARGIN
    width = min(DIALOG_WIDTHS.get(options.size, DIALOG_WIDTHS[None]), max_w)
    if content_size is not None:
        height = content_size[1] + 2 * DIALOG_PADDING
    else:
        height = DIALOG_DEFAULT_HEIGHT
    top_margin = DIALOG_MARGIN if options.centered else DIALOG_MARGIN_TOP
    if options.scrollable:
        height = min(height, screen_rect.height - top_margin - DIALOG_MARGIN)
    rect = pygame.Rect(0, 0, width, max(1, height))
    rect.centerx = screen_rect.centerx
    if options.centered:
        rect.centery = screen_rect.centery
    else:
        rect.top = screen_rect.top + top_margin
    return rect

__all__ = ["dialog_rect"]
