import logging
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from PySide6.QtGui import QPalette, QColor
from .config import parse_args
from .ui.main_window import TicTacToeWindow

# -----------------------------------------------------------------------------
# COLOR CONSTANTS
# -----------------------------------------------------------------------------

WINDOW_COLOR = QColor(53, 53, 53)
WINDOW_TEXT_COLOR = Qt.white
BASE_COLOR = QColor(35, 35, 35)
TEXT_COLOR = Qt.white
BUTTON_COLOR = QColor(66, 66, 66)
BUTTON_TEXT_COLOR = Qt.white
HIGHLIGHT_COLOR = QColor(42, 130, 218)
HIGHLIGHTED_TEXT_COLOR = Qt.white

DISABLED_TEXT_COLOR = QColor(127, 127, 127)

# -----------------------------------------------------------------------------
# PALETTE SETUP
# -----------------------------------------------------------------------------

def apply_default_palette(app: QApplication):
    """
    Apply the dark theme palette used by the board.
    """
    palette = QPalette()
    palette.setColor(QPalette.Window, WINDOW_COLOR)
    palette.setColor(QPalette.WindowText, WINDOW_TEXT_COLOR)
    palette.setColor(QPalette.Base, BASE_COLOR)
    palette.setColor(QPalette.Text, TEXT_COLOR)
    palette.setColor(QPalette.Button, BUTTON_COLOR)
    palette.setColor(QPalette.ButtonText, BUTTON_TEXT_COLOR)
    palette.setColor(QPalette.Highlight, HIGHLIGHT_COLOR)
    palette.setColor(QPalette.HighlightedText, HIGHLIGHTED_TEXT_COLOR)
    palette.setColor(QPalette.Disabled, QPalette.Text, DISABLED_TEXT_COLOR)
    palette.setColor(QPalette.Disabled, QPalette.ButtonText, DISABLED_TEXT_COLOR)
    palette.setColor(QPalette.Disabled, QPalette.WindowText, DISABLED_TEXT_COLOR)
    app.setPalette(palette)

# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------

def main(argv=None):
    config = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if config.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.info("starting %dx%d game", config.grid_size, config.grid_size)

    app = QApplication(sys.argv[:1])
    app.setStyle('Fusion')
    apply_default_palette(app)

    window = TicTacToeWindow(config)
    window.resize(480, 640)
    window.show()
    return app.exec()
