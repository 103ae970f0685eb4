import logging

from ..config import STATUS_ERROR_STYLE, STATUS_SUCCESS_STYLE, STATUS_TURN_STYLE
from ..game_logic import GameEngine, Player, Outcome
from .board_widget import BoardWidget
from .piece_widget import PieceWidget

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QMenuBar, QMenu, QSizePolicy
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, Slot

log = logging.getLogger(__name__)


def status_style(result):
    """
    stylesheet for the status line: rejections red, finished games green
    """
    if result.rejected:
        return STATUS_ERROR_STYLE
    if result.outcome in (Outcome.WIN, Outcome.DRAW):
        return STATUS_SUCCESS_STYLE
    return STATUS_TURN_STYLE


class TicTacToeWindow(QMainWindow):
    """
    main window: board, piece tray, status line
    """
    def __init__(self, config):
        """
        build the engine for this session and the widgets around it
        """
        super().__init__()
        self.config = config
        self.engine = GameEngine(config.grid_size, config.player_names())
        images = {p: config.piece_image(p) for p in Player}
        self.board_widget = BoardWidget(self.engine, images, parent=self)
        self.pieces = [PieceWidget(p, self.engine.player_name(p), images[p])
                       for p in (Player.ONE, Player.TWO)]
        self._setup_ui()
        self._show_status()

    def _setup_ui(self):
        '''window look + layout'''
        n = self.engine.grid_size
        self.setWindowTitle(f"Tic-Tac-Toe {n}x{n}")
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)

        self._create_menu_bar()            # top menu
        self.main_layout.addWidget(self.board_widget, 1)
        self.board_widget.piece_dropped.connect(self._on_piece_dropped)

        self._create_bottom_controls()     # status, pieces, reset
        self.main_layout.addWidget(self.controls_bottom_widget)

    def _create_menu_bar(self):
        '''game menu actions'''
        menu_bar = QMenuBar()
        game_menu = QMenu("Game", self)
        self.new_action = QAction("New Game", self)
        self.new_action.triggered.connect(self.reset_game)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        game_menu.addAction(self.new_action)
        game_menu.addSeparator(); game_menu.addAction(quit_action)
        menu_bar.addMenu(game_menu)
        self.setMenuBar(menu_bar)

    def _create_bottom_controls(self):
        # status label above the piece tray and reset button
        self.controls_bottom_widget = QWidget()
        vl = QVBoxLayout(self.controls_bottom_widget)
        self.message_label = QLabel("")
        f = QFont(); f.setPointSize(14); f.setBold(True); self.message_label.setFont(f)
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.message_label.setWordWrap(True)
        vl.addWidget(self.message_label)

        hl = QHBoxLayout()
        self.reset_button = QPushButton("Reset"); self.reset_button.clicked.connect(self.reset_game)
        for w in (self.pieces[0], None, self.reset_button, None, self.pieces[1]):
            if w: hl.addWidget(w)
            else: hl.addStretch(1)
        vl.addLayout(hl)

    def _update_message(self, result):
        # set message text + style from a move result
        self.message_label.setStyleSheet(status_style(result))
        self.message_label.setText(result.message)

    def _show_status(self):
        # reflect the engine's last result
        self._update_message(self.engine.last_result)

    @Slot(int, int, int)
    def _on_piece_dropped(self, player, x, y):
        res = self.engine.attempt_move(Player(player), x, y)
        if res.accepted:
            self.board_widget.update()
        self._show_status()

    @Slot()
    def reset_game(self):
        # fresh game, same grid
        self.engine.reset()
        log.info("game reset")
        self.board_widget.update()
        self._show_status()
