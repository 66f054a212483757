"""Central timing and presentation constants for the modal stack."""

WIDTH, HEIGHT = 1200, 700

# === TIMING (ms) ===
MODAL_SHOW_DELAY_MS = 10     # hidden -> shown after mount so the fade-in is visible
MODAL_CLOSE_GRACE_MS = 200   # logical close -> removal from the stack (exit fade)
MODAL_SHAKE_MS = 300         # static backdrop shake pulse

# === BACKDROP ===
BACKDROP_COLOR = (0, 0, 0)
BACKDROP_ALPHA_SHOWN = 128
BACKDROP_ALPHA_HIDDEN = 0

# === DIALOG ===
DIALOG_BG_COLOR = (30, 45, 55)
DIALOG_BORDER_COLOR = (120, 160, 190)
DIALOG_TEXT_COLOR = (235, 235, 240)
DIALOG_BORDER_WIDTH = 2
DIALOG_BORDER_RADIUS = 6
DIALOG_PADDING = 16
DIALOG_ALPHA_SHOWN = 255
DIALOG_ALPHA_HIDDEN = 0

# Dialog widths per size variant; None is the default width
DIALOG_WIDTHS = {
    "sm": 300,
    None: 500,
    "lg": 800,
    "xl": 1140,
}
DIALOG_DEFAULT_HEIGHT = 200
DIALOG_MARGIN_TOP = 28   # distance from the top edge when not centered
DIALOG_MARGIN = 8        # minimum gap to the screen edges

# Horizontal offset applied while the static-backdrop shake flag is set
SHAKE_OFFSET_PX = 8
