from hypothesis import given, settings, strategies as st

from nxn_tictactoe.game_logic import GameEngine, Outcome, Player, Rejection


def lines(n):
    cols = [[(x, y) for y in range(n)] for x in range(n)]
    rows = [[(x, y) for x in range(n)] for y in range(n)]
    diag = [(k, k) for k in range(n)]
    anti = [(n - 1 - k, k) for k in range(n)]
    return cols + rows + [diag, anti]


def full_line_owner(engine, cells):
    owners = {engine.occupant(x, y) for x, y in cells}
    if len(owners) == 1:
        return owners.pop()
    return None


@st.composite
def games(draw):
    n = draw(st.integers(min_value=1, max_value=6))
    cells = [(x, y) for x in range(n) for y in range(n)]
    attempts = draw(st.lists(
        st.tuples(st.sampled_from(list(Player)), st.sampled_from(cells)),
        max_size=2 * n * n))
    return n, attempts


@settings(max_examples=200, deadline=None)
@given(games())
def test_random_games_keep_invariants(game):
    n, attempts = game
    g = GameEngine(n)
    for player, (x, y) in attempts:
        before = (g.board, g.line_sums, g.current_player, g.turn_count, g.game_over)
        res = g.attempt_move(player, x, y)
        if not res.accepted:
            assert (g.board, g.line_sums, g.current_player, g.turn_count, g.game_over) == before
            continue

        occupied = sum(1 for col in g.board for cell in col if cell is not None)
        assert g.turn_count == occupied
        assert all(abs(s) <= n for s in g.line_sums)

        owners = [full_line_owner(g, cells) for cells in lines(n)]
        if res.outcome is Outcome.CONTINUE:
            # nobody holds a full line and the sums agree
            assert not any(owners)
            assert all(abs(s) < n for s in g.line_sums)
            assert g.current_player is player.other
        elif res.outcome is Outcome.WIN:
            assert player in owners
            assert g.winner is player
            # any sum at +-n belongs to a line the mover completed
            for total, owner in zip(g.line_sums, owners):
                if abs(total) == n:
                    assert owner is player and total == n * player
        else:
            assert g.turn_count == n * n
            assert not any(owners)
        assert g.game_over == (res.outcome is not Outcome.CONTINUE)


@settings(max_examples=100, deadline=None)
@given(games())
def test_every_attempt_after_game_over_is_rejected(game):
    n, attempts = game
    g = GameEngine(n)
    for player, (x, y) in attempts:
        was_over = g.game_over
        res = g.attempt_move(player, x, y)
        if was_over:
            assert res.reason is Rejection.GAME_ALREADY_OVER


@given(st.integers(min_value=1, max_value=8))
def test_reset_is_idempotent(n):
    g = GameEngine(n)
    g.attempt_move(Player.ONE, 0, 0)
    g.reset()
    once = (g.board, g.line_sums, g.current_player, g.turn_count, g.game_over, g.winner, g.status)
    g.reset()
    assert (g.board, g.line_sums, g.current_player, g.turn_count, g.game_over, g.winner, g.status) == once
