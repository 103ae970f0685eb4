from PySide6.QtWidgets import QWidget, QLabel, QVBoxLayout, QApplication
from PySide6.QtCore import Qt, QSize, QMimeData, QPointF
from PySide6.QtGui import QPainter, QPixmap, QDrag

from ..game_logic import Player
from .board_widget import paint_piece

PIECE_SIZE = 64


def piece_pixmap(player, image=None, size=PIECE_SIZE):
    """
    the picture used for a piece, from image if given else painted
    """
    if image is not None:
        pix = QPixmap(str(image))
        if not pix.isNull():
            return pix.scaled(size, size, Qt.KeepAspectRatio, Qt.SmoothTransformation)
    pix = QPixmap(size, size)
    pix.fill(Qt.transparent)
    painter = QPainter(pix)
    try:
        painter.setRenderHint(QPainter.Antialiasing, True)
        paint_piece(painter, player, QPointF(size/2, size/2), size/2 * 0.7)
    finally:
        painter.end()
    return pix


class PieceWidget(QWidget):
    """
    a player's piece with its name underneath; drag it onto the board
    """

    def __init__(self, player, name, image=None, parent=None):
        super().__init__(parent)
        self.player = Player(player)
        self._drag_start = None
        self.pixmap = piece_pixmap(self.player, image)

        self.image_label = QLabel()
        self.image_label.setPixmap(self.pixmap)
        self.image_label.setAlignment(Qt.AlignCenter)
        self.name_label = QLabel(name)
        self.name_label.setAlignment(Qt.AlignCenter)
        layout = QVBoxLayout(self)
        layout.addWidget(self.image_label); layout.addWidget(self.name_label)
        self.setCursor(Qt.OpenHandCursor)
        self.setToolTip(f"Drag onto the board to play as {name}")

    def sizeHint(self):
        return QSize(PIECE_SIZE + 40, PIECE_SIZE + 40)

    def mime_data(self):
        mime = QMimeData()
        mime.setText(self.player.piece_id)
        return mime

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._drag_start = event.position().toPoint()

    def mouseMoveEvent(self, event):
        """
        start the drag once the pointer has moved far enough
        """
        if self._drag_start is None or not (event.buttons() & Qt.LeftButton):
            return
        moved = (event.position().toPoint() - self._drag_start).manhattanLength()
        if moved < QApplication.startDragDistance():
            return
        drag = QDrag(self)
        drag.setMimeData(self.mime_data())
        drag.setPixmap(self.pixmap)
        drag.setHotSpot(self.pixmap.rect().center())
        self._drag_start = None
        drag.exec(Qt.CopyAction)

    def mouseReleaseEvent(self, event):
        self._drag_start = None
