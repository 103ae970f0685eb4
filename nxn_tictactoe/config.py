"""
Configuration for a tic-tac-toe session: defaults, limits and the
command line that fills a GameConfig.
"""
import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .game_logic import DEFAULT_NAMES, Player

log = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_GRID_SIZE = 3
MIN_GRID_SIZE = 1
MAX_GRID_SIZE = 12      # beyond this the cells get too small to drop on

DEFAULT_PLAYER_NAMES = DEFAULT_NAMES

PLAYER_ONE_COLOR = "#8acaff"
PLAYER_TWO_COLOR = "#ff8a8a"
WIN_HIGHLIGHT_COLOR = "#3c5a3c"

# status line text styles
STATUS_ERROR_STYLE = f"color: {PLAYER_TWO_COLOR}; font-weight: bold;"
STATUS_SUCCESS_STYLE = "color: lime; font-weight: bold;"
STATUS_TURN_STYLE = f"color: {PLAYER_ONE_COLOR}; font-weight: bold;"


@dataclass
class GameConfig:
    grid_size: int = DEFAULT_GRID_SIZE
    player_one_name: str = DEFAULT_PLAYER_NAMES[Player.ONE]
    player_two_name: str = DEFAULT_PLAYER_NAMES[Player.TWO]
    image_dir: Optional[Path] = None
    verbose: bool = False

    def player_names(self):
        return {Player.ONE: self.player_one_name, Player.TWO: self.player_two_name}

    def piece_image(self, player):
        """
        path of player-1.png / player-2.png in image_dir, None to paint the piece
        """
        if self.image_dir is None:
            return None
        path = Path(self.image_dir) / f"{Player(player).piece_id}.png"
        if not path.is_file():
            log.warning("no piece image at %s, painting the piece instead", path)
            return None
        return path


def _grid_size(text):
    try:
        size = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if not MIN_GRID_SIZE <= size <= MAX_GRID_SIZE:
        raise argparse.ArgumentTypeError(
            f"grid size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}")
    return size


def _name(text):
    text = text.strip()
    if not text:
        raise argparse.ArgumentTypeError("player name cannot be blank")
    return text


def build_parser():
    p = argparse.ArgumentParser(
        prog="nxn-tictactoe",
        description="Drag-and-drop tic-tac-toe on an N x N grid")
    p.add_argument("--size", "-n", type=_grid_size, default=DEFAULT_GRID_SIZE,
                   help=f"Grid size N (default: {DEFAULT_GRID_SIZE})")
    p.add_argument("--player-one", type=_name, default=DEFAULT_PLAYER_NAMES[Player.ONE],
                   help="Display name of the first player")
    p.add_argument("--player-two", type=_name, default=DEFAULT_PLAYER_NAMES[Player.TWO],
                   help="Display name of the second player")
    p.add_argument("--image-dir", type=Path, default=None,
                   help="Directory holding player-1.png and player-2.png")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return p


def parse_args(argv=None):
    ns = build_parser().parse_args(argv)
    return GameConfig(
        grid_size=ns.size,
        player_one_name=ns.player_one,
        player_two_name=ns.player_two,
        image_dir=ns.image_dir,
        verbose=ns.verbose,
    )
