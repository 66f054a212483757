"""Pygame rendering of the modal stack.

Draws, for every instance in stack order: the backdrop (unless disabled),
then the dialog panel with the view's rendered content. Opacity eases toward
the instance's shown flag a step per frame, so the hidden -> shown flip after
mount becomes a fade-in and the flip back on close becomes a fade-out while
the entry sits out its grace period.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Tuple
import pygame

from modalstack.modal.instance import ModalInstance
from modalstack.ui.layout import dialog_rect
from modalstack.ui.settings import (
    BACKDROP_COLOR, BACKDROP_ALPHA_SHOWN, BACKDROP_ALPHA_HIDDEN,
    DIALOG_BG_COLOR, DIALOG_BORDER_COLOR, DIALOG_TEXT_COLOR, DIALOG_BORDER_WIDTH,
    DIALOG_BORDER_RADIUS, DIALOG_PADDING, DIALOG_ALPHA_SHOWN, DIALOG_ALPHA_HIDDEN,
    SHAKE_OFFSET_PX,
)

FADE_STEP = 40  # opacity change per drawn frame


def _wrap(font: pygame.font.Font, text: str, max_width: int) -> List[str]:
    lines: List[str] = []
    for paragraph in text.split("\n"):
        cur = ""
        for w in paragraph.split():
            test = (cur + " " + w).strip()
            if font.size(test)[0] <= max_width:
                cur = test
            else:
                if cur:
                    lines.append(cur)
                cur = w
        lines.append(cur)
    return lines


class ModalRenderer:
    def __init__(self, font: Optional[pygame.font.Font] = None):
        self._font = font
        # Current opacity per entry id, in [0, 1]
        self._opacity: Dict[str, float] = {}

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, 24)
        return self._font

    def opacity(self, entry_id: str) -> float:
        return self._opacity.get(entry_id, 0.0)

    def draw(self, surface: pygame.Surface, instances: Iterable[ModalInstance]) -> None:
        instances = list(instances)
        live = {inst.entry.id for inst in instances}
        for stale in [k for k in self._opacity if k not in live]:
            del self._opacity[stale]
        screen_rect = surface.get_rect()
        for inst in instances:
            self.draw_instance(surface, inst, screen_rect)

    def _step_opacity(self, inst: ModalInstance) -> float:
        current = self._opacity.get(inst.entry.id, 0.0)
        target = 1.0 if inst.shown else 0.0
        step = FADE_STEP / 255.0
        if current < target:
            current = min(target, current + step)
        elif current > target:
            current = max(target, current - step)
        self._opacity[inst.entry.id] = current
        return current

    def draw_instance(self, surface: pygame.Surface, inst: ModalInstance, screen_rect: pygame.Rect) -> None:
        opts = inst.options
        t = self._step_opacity(inst)

        if opts.has_backdrop:
            alpha = int(BACKDROP_ALPHA_HIDDEN + (BACKDROP_ALPHA_SHOWN - BACKDROP_ALPHA_HIDDEN) * t)
            if alpha > 0:
                overlay = pygame.Surface(screen_rect.size, pygame.SRCALPHA)
                overlay.fill((*BACKDROP_COLOR, alpha))
                surface.blit(overlay, screen_rect.topleft)

        content = inst.render()
        # Width first (clamped to the screen), then measure content at that width
        wrap_width = dialog_rect(opts, screen_rect).width - 2 * DIALOG_PADDING
        rect = dialog_rect(opts, screen_rect, self._content_size(content, wrap_width))
        # Hit testing uses the resting position, not the shaken one
        inst.dialog_rect = rect.copy()
        if inst.shake:
            rect = rect.move(SHAKE_OFFSET_PX, 0)

        alpha = int(DIALOG_ALPHA_HIDDEN + (DIALOG_ALPHA_SHOWN - DIALOG_ALPHA_HIDDEN) * t)
        if alpha <= 0:
            return
        panel = pygame.Surface(rect.size, pygame.SRCALPHA)
        local = panel.get_rect()
        pygame.draw.rect(panel, DIALOG_BG_COLOR, local, border_radius=DIALOG_BORDER_RADIUS)
        pygame.draw.rect(panel, DIALOG_BORDER_COLOR, local, DIALOG_BORDER_WIDTH, border_radius=DIALOG_BORDER_RADIUS)
        inner = local.inflate(-2 * DIALOG_PADDING, -2 * DIALOG_PADDING)
        prev_clip = panel.get_clip()
        panel.set_clip(inner)
        self._draw_content(panel, content, inner)
        panel.set_clip(prev_clip)
        panel.set_alpha(alpha)
        surface.blit(panel, rect.topleft)

    def _content_size(self, content, wrap_width: int) -> Optional[Tuple[int, int]]:
        if isinstance(content, pygame.Surface):
            return content.get_size()
        if isinstance(content, str):
            lines = _wrap(self.font, content, wrap_width)
            return (wrap_width, len(lines) * self.font.get_linesize())
        size = getattr(content, "size", None)
        if isinstance(size, tuple) and len(size) == 2:
            return size
        return None

    def _draw_content(self, panel: pygame.Surface, content, inner: pygame.Rect) -> None:
        if content is None:
            return
        if isinstance(content, pygame.Surface):
            panel.blit(content, inner.topleft)
        elif isinstance(content, str):
            y = inner.top
            for line in _wrap(self.font, content, inner.width):
                if line:
                    panel.blit(self.font.render(line, True, DIALOG_TEXT_COLOR), (inner.left, y))
                y += self.font.get_linesize()
        elif hasattr(content, "draw"):
            content.draw(panel, inner)

__all__ = ["ModalRenderer"]
