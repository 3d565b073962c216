import pytest

from engine.rules import RulesEngine


@pytest.fixture
def start_rules():
    return RulesEngine()
