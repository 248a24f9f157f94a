import pytest

from reversi.game import BLACK, BOARD_SIZE, EMPTY, WHITE, Board
from reversi.turns import Outcome, TurnController


def board_with(stones):
    rows = [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    for (r, c), value in stones.items():
        rows[r][c] = value
    return Board.from_rows(rows)


def pass_position():
    # Black playing (7,2) leaves White without a reply while Black can
    # still play (0,2).
    return board_with({
        (0, 0): BLACK, (0, 1): WHITE,
        (7, 0): BLACK, (7, 1): WHITE,
    })


def test_initial_state():
    controller = TurnController()
    snap = controller.snapshot()
    assert snap.current == BLACK
    assert snap.valid_moves == [(2, 3), (3, 2), (4, 5), (5, 4)]
    assert (snap.black, snap.white) == (2, 2)
    assert snap.board[3][3] == WHITE and snap.board[4][4] == WHITE
    assert snap.board[3][4] == BLACK and snap.board[4][3] == BLACK
    assert snap.outcome is Outcome.IN_PROGRESS
    assert snap.passed is None
    assert snap.last_move is None
    assert controller.active


def test_move_switches_player():
    controller = TurnController()
    assert controller.attempt_move(2, 3)
    snap = controller.snapshot()
    assert snap.current == WHITE
    assert snap.valid_moves == [(2, 2), (2, 4), (4, 2)]
    assert snap.flipped == [(3, 3)]
    assert snap.last_move == (2, 3)
    assert (snap.black, snap.white) == (4, 1)
    assert snap.passed is None


def test_illegal_and_occupied_cells_are_ignored():
    controller = TurnController()
    before = controller.snapshot()
    assert not controller.attempt_move(0, 0)
    assert not controller.attempt_move(3, 3)
    assert controller.snapshot() == before


def test_out_of_range_move_raises():
    controller = TurnController()
    with pytest.raises(ValueError):
        controller.attempt_move(8, 8)


def test_pass_keeps_player_and_names_skipped_opponent():
    controller = TurnController.from_board(pass_position(), BLACK)
    assert controller.valid_moves == {(0, 2), (7, 2)}

    assert controller.attempt_move(7, 2)
    snap = controller.snapshot()
    assert snap.current == BLACK
    assert snap.passed == WHITE
    assert snap.valid_moves == [(0, 2)]
    assert snap.outcome is Outcome.IN_PROGRESS


def test_dismiss_pass_only_clears_advisory():
    controller = TurnController.from_board(pass_position(), BLACK)
    controller.attempt_move(7, 2)
    before = controller.snapshot()
    controller.dismiss_pass()
    after = controller.snapshot()
    assert after.passed is None
    assert after.board == before.board
    assert after.current == before.current
    assert after.valid_moves == before.valid_moves


def test_game_ends_when_nobody_can_move():
    controller = TurnController.from_board(pass_position(), BLACK)
    controller.attempt_move(7, 2)
    assert controller.passed == WHITE
    assert controller.attempt_move(0, 2)

    snap = controller.snapshot()
    assert not controller.active
    # The next move clears the pass notice.
    assert snap.passed is None
    assert snap.outcome is Outcome.BLACK_WINS
    assert snap.current is None
    assert snap.valid_moves == []
    assert (snap.black, snap.white) == (6, 0)

    # Ended is terminal
    assert not controller.attempt_move(5, 5)
    assert controller.snapshot() == snap


def test_white_wins_on_majority():
    board = board_with({
        (0, 0): BLACK, (0, 1): WHITE,
        (6, 6): WHITE, (6, 7): WHITE, (7, 6): WHITE, (7, 7): WHITE,
    })
    controller = TurnController.from_board(board, BLACK)
    assert controller.attempt_move(0, 2)
    snap = controller.snapshot()
    assert snap.outcome is Outcome.WHITE_WINS
    assert (snap.black, snap.white) == (3, 4)


def test_draw_on_equal_counts():
    board = board_with({
        (0, 0): BLACK, (0, 1): WHITE,
        (6, 7): WHITE, (7, 6): WHITE, (7, 7): WHITE,
    })
    controller = TurnController.from_board(board, BLACK)
    assert controller.attempt_move(0, 2)
    snap = controller.snapshot()
    assert snap.outcome is Outcome.DRAW
    assert (snap.black, snap.white) == (3, 3)


def test_from_board_passes_when_player_cannot_move():
    # Black has nothing to play; White can capture at (0,2).
    board = board_with({(0, 0): WHITE, (0, 1): BLACK})
    controller = TurnController.from_board(board, BLACK)
    snap = controller.snapshot()
    assert controller.active
    assert snap.current == WHITE
    assert snap.passed == BLACK
    assert snap.valid_moves == [(0, 2)]


def test_from_board_ends_when_nobody_can_move():
    board = board_with({(0, 0): BLACK, (7, 7): WHITE})
    controller = TurnController.from_board(board, BLACK)
    snap = controller.snapshot()
    assert not controller.active
    assert snap.outcome is Outcome.DRAW
    assert snap.current is None
    assert snap.valid_moves == []
    assert not controller.attempt_move(0, 1)


def test_moves_alternate_and_conserve_stones():
    controller = TurnController()
    while controller.active:
        snap = controller.snapshot()
        row, col = snap.valid_moves[-1]
        assert controller.attempt_move(row, col)
        after = controller.snapshot()
        assert after.black + after.white == snap.black + snap.white + 1
        if after.passed is None and after.current is not None:
            assert after.current == -snap.current
    assert controller.snapshot().outcome is not Outcome.IN_PROGRESS


def test_reset_restores_initial_state():
    controller = TurnController()
    controller.attempt_move(2, 3)
    controller.attempt_move(2, 2)
    controller.reset()
    assert controller.snapshot() == TurnController().snapshot()
    assert controller.active


def test_snapshot_to_dict():
    controller = TurnController()
    controller.attempt_move(2, 3)
    data = controller.snapshot().to_dict()
    assert data["current"] == WHITE
    assert data["valid"] == [[2, 2], [2, 4], [4, 2]]
    assert data["last"] == [2, 3]
    assert data["flipped"] == [[3, 3]]
    assert data["outcome"] == "in_progress"
    assert data["passed"] is None
    assert data["black"] == 4 and data["white"] == 1
