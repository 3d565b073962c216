import pytest

from engine.constants import BASE_DEPTH, MAX_BOT_DEPTH, MIN_DEPTH, depth_from_env


def test_depth_defaults_without_override(monkeypatch):
    monkeypatch.delenv("CHESS_BOT_DEPTH", raising=False)
    assert depth_from_env() == BASE_DEPTH == 3


@pytest.mark.parametrize(
    "value,expected",
    [("2", 2), ("4", 4), ("0", MIN_DEPTH), ("-3", MIN_DEPTH), ("99", MAX_BOT_DEPTH)],
)
def test_depth_override_is_clamped(monkeypatch, value, expected):
    monkeypatch.setenv("CHESS_BOT_DEPTH", value)
    assert depth_from_env() == expected


@pytest.mark.parametrize("value", ["deep", "", "3.5"])
def test_non_integer_override_is_ignored(monkeypatch, value):
    monkeypatch.setenv("CHESS_BOT_DEPTH", value)
    assert depth_from_env() == BASE_DEPTH
