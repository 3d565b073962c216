import pytest

from engine.constants import BLACK, CHECKMATE_SCORE, WHITE
from engine.evaluate import evaluate, evaluate_position
from engine.rules import RulesEngine
from tests.positions import FOOLS_MATE, QUEEN_VS_KING


def _empty_grid():
    return [[None] * 8 for _ in range(8)]


def test_start_position_is_balanced(start_rules):
    snapshot = start_rules.board_snapshot()
    assert evaluate(snapshot, WHITE) == 0
    assert evaluate(snapshot, BLACK) == 0


def test_snapshot_layout(start_rules):
    snapshot = start_rules.board_snapshot()
    assert snapshot[0][4] == ("king", "black")
    assert snapshot[7][4] == ("king", "white")
    assert snapshot[6][0] == ("pawn", "white")
    assert snapshot[0][1] == ("knight", "black")
    assert snapshot[3][3] is None


@pytest.mark.parametrize("perspective,expected", [(WHITE, 900), (BLACK, -900)])
def test_kings_cancel_out(perspective, expected):
    rules = RulesEngine(QUEEN_VS_KING)
    assert evaluate(rules.board_snapshot(), perspective) == expected


def test_material_sums_by_piece_value():
    grid = _empty_grid()
    grid[0][0] = ("rook", BLACK)
    grid[1][1] = ("bishop", WHITE)
    grid[2][2] = ("knight", WHITE)
    grid[3][3] = ("pawn", BLACK)
    # 330 + 320 - 500 - 100
    assert evaluate(tuple(map(tuple, grid)), WHITE) == 50
    assert evaluate(tuple(map(tuple, grid)), BLACK) == -50


def test_mated_side_overrides_material():
    grid = _empty_grid()
    grid[0][0] = ("queen", WHITE)
    snapshot = tuple(map(tuple, grid))
    assert evaluate(snapshot, WHITE, mated=WHITE) == -CHECKMATE_SCORE
    assert evaluate(snapshot, BLACK, mated=WHITE) == CHECKMATE_SCORE


def test_checkmate_position_scores_terminal():
    rules = RulesEngine(FOOLS_MATE)
    assert rules.is_checkmate()
    assert evaluate_position(rules, WHITE) == -50_000
    assert evaluate_position(rules, BLACK) == 50_000


def test_evaluation_does_not_touch_position():
    rules = RulesEngine(FOOLS_MATE)
    fen = rules.fen()
    evaluate_position(rules, BLACK)
    assert rules.fen() == fen
