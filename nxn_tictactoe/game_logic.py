import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

log = logging.getLogger(__name__)

# status text shown by the ui
START_MSG = "{name} starts the game"
TURN_MSG = "{name}'s turn"
WIN_MSG = "{name} wins!"
DRAW_MSG = "Tie game... you both lose!"
OVER_MSG = "The game is already over!"
NOT_TURN_MSG = "HEY! LISTEN! It's {name}'s turn!"
TAKEN_MSG = "That spot is already taken!"


class Player(IntEnum):
    """
    the two players; the value is what a piece adds to a line sum
    """
    ONE = 1
    TWO = -1

    @property
    def other(self):
        return Player.TWO if self is Player.ONE else Player.ONE

    @property
    def piece_id(self):
        # drag payload used by the piece widgets
        return "player-1" if self is Player.ONE else "player-2"

    @classmethod
    def from_piece_id(cls, piece_id):
        for p in cls:
            if p.piece_id == piece_id:
                return p
        raise ValueError(f"not a piece id: {piece_id!r}")


DEFAULT_NAMES = {Player.ONE: "Player 1", Player.TWO: "Player 2"}


class GameState(Enum):
    AWAITING_MOVE = "awaiting_move"
    WON = "won"
    DRAW = "draw"


class Rejection(Enum):
    GAME_ALREADY_OVER = "game_already_over"
    NOT_YOUR_TURN = "not_your_turn"
    CELL_OCCUPIED = "cell_occupied"


class Outcome(Enum):
    CONTINUE = "continue"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class MoveResult:
    """
    what happened to one move attempt

    player is the expected player for NOT_YOUR_TURN, the next player
    for CONTINUE and the winner for WIN.
    """
    accepted: bool
    reason: Optional[Rejection] = None
    outcome: Optional[Outcome] = None
    player: Optional[Player] = None
    message: str = ""

    @property
    def rejected(self):
        return self.reason is not None


class GameError(Exception):
    """base for caller contract violations"""


class InvalidGridSize(GameError, ValueError):
    def __init__(self, grid_size):
        super().__init__(f"grid size must be an integer >= 1, got {grid_size!r}")
        self.grid_size = grid_size


class InvalidCoordinate(GameError, IndexError):
    def __init__(self, x, y, grid_size):
        super().__init__(
            f"cell ({x!r}, {y!r}) is outside the {grid_size}x{grid_size} grid")
        self.x = x; self.y = y; self.grid_size = grid_size


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


class GameEngine:
    """
    n x n tic-tac-toe rules and state

    Victory is tracked with one running sum per line: columns at
    0..n-1, rows at n..2n-1, the main diagonal at 2n and the anti
    diagonal at 2n+1. Player one adds +1 and player two -1, so a line
    is complete exactly when its sum reaches +n or -n. A move touches
    at most four lines, which keeps each check O(1).
    """

    def __init__(self, grid_size, player_names=None):
        if not _is_int(grid_size) or grid_size < 1:
            raise InvalidGridSize(grid_size)
        self.grid_size = grid_size
        self._names = dict(DEFAULT_NAMES)
        for p, name in (player_names or {}).items():
            if p in self._names:
                self._names[Player(p)] = name
        self.reset()

    def reset(self):
        """
        back to a fresh game, same grid size
        """
        n = self.grid_size
        self._board = [[None] * n for _ in range(n)]   # board[x][y]
        self._line_sums = [0] * (2 * n + 2)
        self.current_player = Player.ONE
        self.turn_count = 0
        self.game_over = False
        self.winner = None
        self.last_result = MoveResult(
            accepted=False, player=Player.ONE,
            message=START_MSG.format(name=self.player_name(Player.ONE)))
        log.debug("new %dx%d game", n, n)

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def player_name(self, player):
        return self._names[Player(player)]

    @property
    def status(self):
        return self.last_result.message

    @property
    def state(self):
        if self.winner is not None:
            return GameState.WON
        if self.game_over:
            return GameState.DRAW
        return GameState.AWAITING_MOVE

    @property
    def line_sums(self):
        return tuple(self._line_sums)

    @property
    def board(self):
        return tuple(tuple(col) for col in self._board)

    @property
    def cells_remaining(self):
        return self.grid_size * self.grid_size - self.turn_count

    def _check_coords(self, x, y):
        n = self.grid_size
        if not (_is_int(x) and _is_int(y) and 0 <= x < n and 0 <= y < n):
            log.warning("rejecting out of range cell (%r, %r) on %dx%d grid",
                        x, y, n, n)
            raise InvalidCoordinate(x, y, n)

    def occupant(self, x, y):
        self._check_coords(x, y)
        return self._board[x][y]

    def is_occupied(self, x, y):
        return self.occupant(x, y) is not None

    def winning_line(self):
        """
        cells of the completed line, or None when nobody has won
        """
        if self.winner is None:
            return None
        n = self.grid_size
        for i, total in enumerate(self._line_sums):
            if abs(total) != n:
                continue
            if i < n:
                return [(i, y) for y in range(n)]
            if i < 2 * n:
                return [(x, i - n) for x in range(n)]
            if i == 2 * n:
                return [(k, k) for k in range(n)]
            return [(n - 1 - k, k) for k in range(n)]
        return None

    # ------------------------------------------------------------------
    # moves
    # ------------------------------------------------------------------

    def attempt_move(self, player, x, y):
        """
        place player's piece at (x, y) if the rules allow it

        Rule violations come back as a rejected MoveResult and leave the
        game untouched. Cells outside the grid raise InvalidCoordinate.
        """
        if isinstance(player, bool):
            raise ValueError(f"not a player: {player!r}")
        player = Player(player)
        self._check_coords(x, y)

        if self.game_over:
            return self._reject(Rejection.GAME_ALREADY_OVER, OVER_MSG)
        if player is not self.current_player:
            name = self.player_name(self.current_player)
            return self._reject(Rejection.NOT_YOUR_TURN,
                                NOT_TURN_MSG.format(name=name),
                                self.current_player)
        if self._board[x][y] is not None:
            return self._reject(Rejection.CELL_OCCUPIED, TAKEN_MSG)

        # all checks passed, mutate
        self._board[x][y] = player
        victory = self._update_line_sums(x, y, player)
        self.turn_count += 1
        log.debug("%s placed at (%d, %d), turn %d",
                  self.player_name(player), x, y, self.turn_count)

        if victory:
            self.game_over = True; self.winner = player
            result = MoveResult(True, outcome=Outcome.WIN, player=player,
                                message=WIN_MSG.format(name=self.player_name(player)))
            log.info("%s wins after %d turns", self.player_name(player), self.turn_count)
        elif self.turn_count == self.grid_size * self.grid_size:
            self.game_over = True
            result = MoveResult(True, outcome=Outcome.DRAW, message=DRAW_MSG)
            log.info("draw after %d turns", self.turn_count)
        else:
            self.current_player = player.other
            nxt = self.player_name(self.current_player)
            result = MoveResult(True, outcome=Outcome.CONTINUE,
                                player=self.current_player,
                                message=TURN_MSG.format(name=nxt))
        self.last_result = result
        return result

    def _reject(self, reason, message, player=None):
        result = MoveResult(False, reason=reason, player=player, message=message)
        log.debug("move rejected: %s", reason.value)
        self.last_result = result
        return result

    def _update_line_sums(self, x, y, player):
        """
        add the piece to its column, row and any diagonal; true on a full line
        """
        n = self.grid_size; sums = self._line_sums
        sums[x] += player
        sums[n + y] += player
        victory = abs(sums[x]) == n or abs(sums[n + y]) == n
        # main diagonal
        if not victory and x == y:
            sums[2 * n] += player
            victory = abs(sums[2 * n]) == n
        # anti diagonal
        if not victory and abs(x - (n - 1)) == y:
            sums[2 * n + 1] += player
            victory = abs(sums[2 * n + 1]) == n
        return victory
