"""
Demonstration of the modal stack

Keys:
  1  open a plain message (backdrop click or Escape closes it)
  2  open a static-backdrop confirm dialog (backdrop click shakes it; Y/N answer)
  3  open a dialog without backdrop (Escape only)
  D  dismiss every open modal
  Q  quit

Results are printed as each modal's Future settles.
"""

import pygame
from modalstack import ModalManager
from modalstack.core.modal_event import ModalEventType
from modalstack.ui.settings import WIDTH, HEIGHT, DIALOG_TEXT_COLOR


class ConfirmView:
    """Render function view: draws a question and answers on Y/N."""

    def __init__(self, font):
        self.font = font
        self.on_change = None

    def __call__(self, model, on_close, on_change):
        self.on_change = on_change
        return self.font.render(f"{model['question']}  [Y/N]", True, DIALOG_TEXT_COLOR)

    def handle_key(self, key):
        if self.on_change is None:
            return
        if key == pygame.K_y:
            self.on_change(True)
        elif key == pygame.K_n:
            self.on_change(False)


def report(label):
    def _done(future):
        print(f"{label} -> {future.result()!r}")
    return _done


def main():
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Modal stack demo")
    font = pygame.font.SysFont("Arial", 22)
    clock = pygame.time.Clock()
    manager = ModalManager()
    manager.event_listener.subscribe(
        lambda e: print(e), [ModalEventType.MODAL_OPENED, ModalEventType.MODAL_REMOVED]
    )
    confirm = ConfirmView(font)

    with manager:
        running = True
        while running:
            dt = clock.tick(30) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    continue
                if event.type == pygame.KEYDOWN:
                    confirm.handle_key(event.key)
                if manager.handle_event(event):
                    continue
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_1:
                        manager.open("Hello from the modal stack.", options={"keyboard": True}) \
                            .add_done_callback(report("message"))
                    elif event.key == pygame.K_2:
                        manager.open(confirm, {"question": "Discard changes?"},
                                     {"backdrop": "static", "centered": True, "size": "sm"}) \
                            .add_done_callback(report("confirm"))
                    elif event.key == pygame.K_3:
                        manager.open("No backdrop here. Press Escape.",
                                     options={"backdrop": False, "keyboard": True, "size": "lg"}) \
                            .add_done_callback(report("no-backdrop"))
                    elif event.key == pygame.K_d:
                        manager.dismiss_all()
                    elif event.key == pygame.K_q:
                        running = False
            manager.update(dt)
            screen.fill((22, 38, 46))
            manager.draw(screen)
            pygame.display.flip()
    pygame.quit()


if __name__ == "__main__":
    main()
