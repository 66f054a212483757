"""Rendering tests; need a (hidden) pygame display."""

import unittest
import pygame
from modalstack.modal.manager import ModalManager
from modalstack.modal.options import ModalOptions
from modalstack.core.scroll_lock import ScrollLock
from modalstack.ui.layout import dialog_rect
from modalstack.ui.renderer import ModalRenderer, _wrap
from modalstack.ui.settings import (
    WIDTH, HEIGHT, DIALOG_WIDTHS, DIALOG_MARGIN, DIALOG_MARGIN_TOP, DIALOG_PADDING, SHAKE_OFFSET_PX,
)


class Panel:
    size = (200, 120)
    def __init__(self):
        self.drawn_in = None
    def draw(self, surface, rect):
        self.drawn_in = rect.copy()


class ModalRendererTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        pygame.init()
        flags = pygame.HIDDEN if hasattr(pygame, 'HIDDEN') else 0
        cls.screen = pygame.display.set_mode((WIDTH, HEIGHT), flags)
        cls.font = pygame.font.Font(None, 24)

    def setUp(self):
        self.renderer = ModalRenderer(self.font)
        self.manager = ModalManager(scroll_lock=ScrollLock(), renderer=self.renderer)

    def tearDown(self):
        self.manager.teardown()

    def test_draw_records_dialog_rect_for_hit_testing(self):
        self.manager.open("Are you sure?")
        self.manager.update(0.05)
        self.manager.draw(self.screen)
        inst = self.manager.instance_for(self.manager.top())
        self.assertIsNotNone(inst.dialog_rect)
        self.assertEqual(inst.dialog_rect.width, DIALOG_WIDTHS[None])
        self.assertEqual(inst.dialog_rect.centerx, self.screen.get_rect().centerx)

    def test_click_inside_drawn_dialog_does_not_close(self):
        future = self.manager.open("Body text")
        self.manager.draw(self.screen)
        inst = self.manager.instance_for(self.manager.top())
        self.manager.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=inst.dialog_rect.center))
        self.assertFalse(future.done())
        self.manager.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(2, HEIGHT - 2)))
        self.assertTrue(future.done())

    def test_opacity_fades_in_and_out(self):
        self.manager.open("x")
        entry_id = self.manager.top().id
        self.manager.draw(self.screen)
        self.assertEqual(self.renderer.opacity(entry_id), 0.0)
        self.manager.update(0.05)
        for _ in range(10):
            self.manager.draw(self.screen)
        self.assertEqual(self.renderer.opacity(entry_id), 1.0)
        self.manager.close()
        self.manager.draw(self.screen)
        self.assertLess(self.renderer.opacity(entry_id), 1.0)
        self.manager.update(1.0)
        self.manager.draw(self.screen)
        self.assertEqual(self.renderer.opacity(entry_id), 0.0)

    def test_object_content_drawn_inside_panel(self):
        panel = Panel()
        self.manager.open(panel, options={"centered": True})
        self.manager.update(0.05)
        self.manager.draw(self.screen)
        self.assertIsNotNone(panel.drawn_in)
        inst = self.manager.instance_for(self.manager.top())
        self.assertEqual(inst.dialog_rect.centery, self.screen.get_rect().centery)

    def test_surface_content_and_shake_offset(self):
        surf = pygame.Surface((100, 50))
        self.manager.open(lambda model, on_close, on_change: surf, options={"backdrop": "static"})
        inst = self.manager.instance_for(self.manager.top())
        inst.click_backdrop()
        self.manager.draw(self.screen)
        self.assertTrue(inst.shake)
        # Hit-test rect stays at the resting position
        self.assertEqual(inst.dialog_rect.centerx, self.screen.get_rect().centerx)
        self.assertGreater(SHAKE_OFFSET_PX, 0)

    def settle_frames(self, surface, fill):
        # Reach full opacity, then draw one clean frame over a fresh fill
        self.manager.update(0.05)
        for _ in range(10):
            self.manager.draw(surface)
        surface.fill(fill)
        self.manager.draw(surface)

    def test_no_backdrop_leaves_scene_untouched(self):
        surface = pygame.Surface((WIDTH, HEIGHT))
        fill = (200, 200, 200)
        corner = (2, HEIGHT - 2)
        self.manager.open("x", options={"backdrop": False})
        self.settle_frames(surface, fill)
        self.assertEqual(tuple(surface.get_at(corner))[:3], fill)

        self.manager.dismiss_all()
        self.manager.open("x")
        self.settle_frames(surface, fill)
        darkened = tuple(surface.get_at(corner))[:3]
        self.assertLess(sum(darkened), sum(fill))

    def test_wrapped_text_fits_screen_clamped_dialog(self):
        surface = pygame.Surface((400, 300))
        text = "word " * 60
        self.manager.open(text, options={"size": "xl"})
        self.manager.update(0.05)
        self.manager.draw(surface)
        rect = self.manager.instance_for(self.manager.top()).dialog_rect
        self.assertEqual(rect.width, 400 - 2 * DIALOG_MARGIN)
        lines = _wrap(self.font, text, rect.width - 2 * DIALOG_PADDING)
        self.assertGreater(len(lines), 3)
        self.assertGreaterEqual(rect.height - 2 * DIALOG_PADDING, len(lines) * self.font.get_linesize())


class LayoutTests(unittest.TestCase):
    screen = pygame.Rect(0, 0, WIDTH, HEIGHT)

    def test_fullscreen_fills_screen(self):
        self.assertEqual(dialog_rect(ModalOptions(size="fullscreen"), self.screen), self.screen)

    def test_size_variants(self):
        self.assertEqual(dialog_rect(ModalOptions(size="sm"), self.screen).width, DIALOG_WIDTHS["sm"])
        self.assertEqual(dialog_rect(ModalOptions(size="lg"), self.screen).width, DIALOG_WIDTHS["lg"])

    def test_width_clamped_to_small_screen(self):
        small = pygame.Rect(0, 0, 400, 300)
        rect = dialog_rect(ModalOptions(size="xl"), small)
        self.assertEqual(rect.width, small.width - 2 * DIALOG_MARGIN)
        self.assertTrue(small.contains(rect))

    def test_top_aligned_unless_centered(self):
        rect = dialog_rect(ModalOptions(), self.screen)
        self.assertEqual(rect.top, DIALOG_MARGIN_TOP)
        rect = dialog_rect(ModalOptions(centered=True), self.screen)
        self.assertEqual(rect.centery, self.screen.centery)

    def test_scrollable_clamps_tall_content(self):
        tall = (100, HEIGHT * 3)
        rect = dialog_rect(ModalOptions(scrollable=True), self.screen, tall)
        self.assertLessEqual(rect.bottom, self.screen.bottom)
        rect = dialog_rect(ModalOptions(), self.screen, tall)
        self.assertGreater(rect.bottom, self.screen.bottom)


if __name__ == '__main__':
    unittest.main()
