import logging

from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import QSize, Signal, QPointF, QRectF
from PySide6.QtGui import QPainter, QColor, QPen, QPixmap

from ..config import PLAYER_ONE_COLOR, PLAYER_TWO_COLOR, WIN_HIGHLIGHT_COLOR
from ..game_logic import Player

log = logging.getLogger(__name__)


def board_geometry(width, height):
    """
    side and top-left offset of the square grid centred in width x height
    """
    side = min(width, height)
    return side, (width - side) / 2, (height - side) / 2


def cell_at(px, py, width, height, size):
    """
    map a widget position to (x, y) = (column, row), None outside the grid
    """
    side, ox, oy = board_geometry(width, height)
    if side <= 0 or not (ox <= px < ox + side and oy <= py < oy + side):
        return None
    cell = side / size
    x = int((px - ox) // cell); y = int((py - oy) // cell)
    # clamp float edge cases back into range
    x = max(0, min(x, size - 1)); y = max(0, min(y, size - 1))
    return x, y


def piece_from_mime(mime):
    """
    player carried by a drag, None if it is not one of our pieces
    """
    if mime is None or not mime.hasText():
        return None
    try:
        return Player.from_piece_id(mime.text())
    except ValueError:
        return None


def paint_piece(painter, player, center, radius):
    """
    X for player one, O for player two
    """
    if player is Player.ONE:
        painter.setPen(QPen(QColor(PLAYER_ONE_COLOR), 4))
        painter.drawLine(QPointF(center.x()-radius, center.y()-radius),
                         QPointF(center.x()+radius, center.y()+radius))
        painter.drawLine(QPointF(center.x()+radius, center.y()-radius),
                         QPointF(center.x()-radius, center.y()+radius))
    else:
        painter.setPen(QPen(QColor(PLAYER_TWO_COLOR), 4))
        painter.drawEllipse(center, radius, radius)


class BoardWidget(QWidget):
    """
    n x n drop target that draws the engine's board
    """
    piece_dropped = Signal(int, int, int)  # player value, x, y

    def __init__(self, engine, images=None, parent=None):
        super().__init__(parent)
        self.engine = engine            # reference to game state
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        self.setAcceptDrops(True)
        self._pixmaps = {}
        for player, path in (images or {}).items():
            if path is None:
                continue
            pix = QPixmap(str(path))
            if pix.isNull():
                log.warning("could not load piece image %s", path)
                continue
            self._pixmaps[player] = pix

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def paintEvent(self, event):
        """
        draw grid, pieces, and highlight the winning line
        """
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            side, ox, oy = board_geometry(self.width(), self.height())
            painter.fillRect(self.rect(), QColor("#333"))
            size = self.engine.grid_size
            cell = side / size
            # winning cells first so grid lines stay on top
            for x, y in self.engine.winning_line() or ():
                painter.fillRect(QRectF(ox + x*cell, oy + y*cell, cell, cell),
                                 QColor(WIN_HIGHLIGHT_COLOR))
            painter.setPen(QPen(QColor("#555"), 2))
            for i in range(1, size):
                gx = ox + i*cell
                painter.drawLine(int(gx), int(oy), int(gx), int(oy+side))
                gy = oy + i*cell
                painter.drawLine(int(ox), int(gy), int(ox+side), int(gy))
            board = self.engine.board
            for x in range(size):
                for y in range(size):
                    player = board[x][y]
                    if player is None: continue
                    self._paint_cell(painter, player, ox + x*cell, oy + y*cell, cell)
        finally:
            painter.end()

    def _paint_cell(self, painter, player, left, top, cell):
        pix = self._pixmaps.get(player)
        if pix is not None:
            inset = cell * 0.1
            painter.drawPixmap(QRectF(left+inset, top+inset, cell-2*inset, cell-2*inset).toRect(), pix)
            return
        center = QPointF(left + cell/2, top + cell/2)
        paint_piece(painter, player, center, cell/2 * 0.7)

    def dragEnterEvent(self, event):
        # only our own pieces; late drops still reach the engine for its message
        if piece_from_mime(event.mimeData()) is not None:
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        pos = event.position()
        if piece_from_mime(event.mimeData()) is not None and \
           cell_at(pos.x(), pos.y(), self.width(), self.height(), self.engine.grid_size):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        """
        map the drop to a cell and hand it to the window
        """
        player = piece_from_mime(event.mimeData())
        pos = event.position()
        target = cell_at(pos.x(), pos.y(), self.width(), self.height(), self.engine.grid_size)
        if player is None or target is None:
            event.ignore()
            return
        event.acceptProposedAction()
        x, y = target
        self.piece_dropped.emit(int(player), x, y)  # notify main window
