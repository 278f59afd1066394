import json
import math

import pytest

from klondike.history import HistoryState, create_history, push_history
from klondike.rules import (
    DRAW_THREE,
    PROFILES,
    STANDARD,
    VEGAS,
    RuleProfile,
    resolve_profile,
)
from klondike.stock import draw_from_stock


@pytest.fixture
def history():
    base = create_history(42)
    return push_history(base, draw_from_stock(base.present))


@pytest.mark.parametrize(
    "profile,expected",
    [
        (STANDARD, True),
        (DRAW_THREE, True),
        (VEGAS, False),
    ],
)
def test_undo_allowed_by_profile(profile, history, expected):
    assert profile.is_action_legal(history, {"type": "UNDO"}) is expected


def test_undo_requires_past_states():
    fresh = create_history(1)
    assert not STANDARD.is_action_legal(fresh, {"type": "UNDO"})
    assert not STANDARD.is_action_legal(fresh, {"type": "REDO"})


def test_redo_requires_future_states(history):
    assert not STANDARD.is_action_legal(history, {"type": "REDO"})
    undone = HistoryState(past=(), present=history.past[-1], future=(history.present,))
    assert STANDARD.is_action_legal(undone, {"type": "REDO"})


def test_draw_count_enforced(history):
    assert STANDARD.is_action_legal(history, {"type": "DRAW_CARD", "count": 1})
    assert not STANDARD.is_action_legal(history, {"type": "DRAW_CARD", "count": 3})
    assert DRAW_THREE.is_action_legal(history, {"type": "draw_card", "count": 3})
    assert STANDARD.is_action_legal(history, {"type": "DRAW_CARD"})


@pytest.mark.parametrize("profile", [STANDARD, DRAW_THREE, VEGAS])
def test_moves_and_deals_are_always_allowed(profile, history):
    for kind in ("MOVE_CARD", "NEW_GAME", "AUTO_COMPLETE", "custom"):
        assert profile.is_action_legal(history, {"type": kind})


def test_action_without_type_raises(history):
    with pytest.raises(ValueError):
        STANDARD.is_action_legal(history, {})


def test_serialisation_round_trip():
    payload = VEGAS.to_json()
    restored = RuleProfile.from_json(payload)
    assert restored == VEGAS
    assert json.loads(payload)["draw_count"] == 3


def test_from_dict_ignores_unknown_keys():
    profile = RuleProfile.from_dict({"draw_count": 3, "theme": "green"})
    assert profile.draw == 3
    assert profile.scoring_mode == "standard"


@pytest.mark.parametrize(
    "value,expected",
    [(1, 1), (3, 3), ("3", 3), (" three ", 3), ("single", 1), (3.0, 3)],
)
def test_draw_count_normalisation(value, expected):
    assert RuleProfile(draw_count=value).draw == expected


@pytest.mark.parametrize(
    "value,expected_exception",
    [
        (0, ValueError),
        (-1, ValueError),
        ("bogus", ValueError),
        (True, TypeError),
        (2.5, ValueError),
        (math.nan, ValueError),
        (math.inf, ValueError),
        ([3], TypeError),
    ],
)
def test_invalid_draw_counts_raise(value, expected_exception):
    profile = RuleProfile(draw_count=value)
    with pytest.raises(expected_exception):
        _ = profile.draw


def test_history_limit_normalisation():
    assert RuleProfile(history_limit="25").max_history == 25
    with pytest.raises(ValueError):
        _ = RuleProfile(history_limit=0).max_history


def test_scoring_mode_validation():
    assert RuleProfile(scoring=" Vegas ").scoring_mode == "vegas"
    assert RuleProfile(scoring=None).scoring_mode == "none"
    with pytest.raises(ValueError):
        _ = RuleProfile(scoring="casino").scoring_mode
    with pytest.raises(TypeError):
        _ = RuleProfile(scoring=5).scoring_mode  # type: ignore[arg-type]


def test_validated_returns_profile_or_raises():
    assert STANDARD.validated() is STANDARD
    with pytest.raises(ValueError):
        RuleProfile(draw_count="many").validated()


def test_resolve_profile():
    assert resolve_profile(None) is STANDARD
    assert resolve_profile("Vegas") is VEGAS
    assert resolve_profile(DRAW_THREE) is DRAW_THREE
    assert resolve_profile({"draw_count": 3, "scoring": "none"}).scoring_mode == "none"
    assert set(PROFILES) == {"standard", "draw_three", "vegas"}
    with pytest.raises(ValueError):
        resolve_profile("spider")
    with pytest.raises(TypeError):
        resolve_profile(42)
