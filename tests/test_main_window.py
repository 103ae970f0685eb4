import pytest
from PySide6.QtGui import QPalette

from nxn_tictactoe import app as app_module
from nxn_tictactoe.config import (
    STATUS_ERROR_STYLE, STATUS_SUCCESS_STYLE, STATUS_TURN_STYLE, GameConfig,
)
from nxn_tictactoe.game_logic import MoveResult, Outcome, Player, Rejection
from nxn_tictactoe.ui.board_widget import piece_from_mime
from nxn_tictactoe.ui.main_window import TicTacToeWindow, status_style


@pytest.fixture
def window(qapp):
    w = TicTacToeWindow(GameConfig(player_one_name="Ann", player_two_name="Ben"))
    yield w
    w.close()


def label(w):
    return w.message_label.text(), w.message_label.styleSheet()


def drop(w, player, x, y):
    w._on_piece_dropped(int(player), x, y)


def test_status_style_by_result():
    assert status_style(MoveResult(False, reason=Rejection.CELL_OCCUPIED)) == STATUS_ERROR_STYLE
    assert status_style(MoveResult(True, outcome=Outcome.WIN)) == STATUS_SUCCESS_STYLE
    assert status_style(MoveResult(True, outcome=Outcome.DRAW)) == STATUS_SUCCESS_STYLE
    assert status_style(MoveResult(True, outcome=Outcome.CONTINUE)) == STATUS_TURN_STYLE
    # the start-of-game status is neither a rejection nor an outcome
    assert status_style(MoveResult(False)) == STATUS_TURN_STYLE


def test_window_starts_with_player_one(window):
    assert label(window) == ("Ann starts the game", STATUS_TURN_STYLE)
    assert window.windowTitle() == "Tic-Tac-Toe 3x3"


def test_drops_drive_the_status_line(window):
    drop(window, Player.TWO, 0, 0)
    assert label(window) == ("HEY! LISTEN! It's Ann's turn!", STATUS_ERROR_STYLE)
    assert window.engine.turn_count == 0

    drop(window, Player.ONE, 0, 0)
    assert label(window) == ("Ben's turn", STATUS_TURN_STYLE)

    drop(window, Player.TWO, 0, 0)
    assert label(window) == ("That spot is already taken!", STATUS_ERROR_STYLE)

    for player, x, y in [(Player.TWO, 0, 1), (Player.ONE, 1, 1),
                         (Player.TWO, 0, 2), (Player.ONE, 2, 2)]:
        drop(window, player, x, y)
    assert label(window) == ("Ann wins!", STATUS_SUCCESS_STYLE)
    assert window.engine.winner is Player.ONE

    drop(window, Player.TWO, 2, 0)
    assert label(window) == ("The game is already over!", STATUS_ERROR_STYLE)


def test_board_paints_winning_line(window):
    for player, x, y in [(Player.ONE, 0, 0), (Player.TWO, 0, 1), (Player.ONE, 1, 1),
                         (Player.TWO, 0, 2), (Player.ONE, 2, 2)]:
        drop(window, player, x, y)
    assert window.engine.winning_line() == [(0, 0), (1, 1), (2, 2)]
    window.board_widget.resize(300, 300)
    pix = window.board_widget.grab()
    assert not pix.isNull()
    assert pix.width() > 0 and pix.height() > 0


def test_reset_button_starts_over(window):
    drop(window, Player.ONE, 1, 1)
    window.reset_button.click()
    assert window.engine.turn_count == 0
    assert window.engine.current_player is Player.ONE
    assert label(window) == ("Ann starts the game", STATUS_TURN_STYLE)


def test_new_game_action_starts_over(window):
    for player, x, y in [(Player.ONE, 0, 0), (Player.TWO, 0, 1), (Player.ONE, 1, 0),
                         (Player.TWO, 1, 1), (Player.ONE, 2, 0)]:
        drop(window, player, x, y)
    assert window.engine.game_over
    window.new_action.trigger()
    assert not window.engine.game_over
    assert label(window) == ("Ann starts the game", STATUS_TURN_STYLE)


def test_pieces_carry_their_player(window):
    one, two = window.pieces
    assert piece_from_mime(one.mime_data()) is Player.ONE
    assert piece_from_mime(two.mime_data()) is Player.TWO
    assert one.name_label.text() == "Ann"
    assert two.name_label.text() == "Ben"
    assert not one.pixmap.isNull()


def test_window_follows_configured_grid(qapp):
    w = TicTacToeWindow(GameConfig(grid_size=5))
    try:
        assert w.engine.grid_size == 5
        assert w.windowTitle() == "Tic-Tac-Toe 5x5"
    finally:
        w.close()


def test_palette_applied(qapp):
    app_module.apply_default_palette(qapp)
    assert qapp.palette().color(QPalette.Window) == app_module.WINDOW_COLOR
    assert callable(app_module.main)
