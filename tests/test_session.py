import pytest

from klondike.cards import RANKS, SUITS, Card
from klondike.history import HistoryState
from klondike.rules import DRAW_THREE, STANDARD, VEGAS, RuleProfile
from klondike.session import ActionError, GameSession
from klondike.state import (
    FoundationLocation,
    Move,
    TableauLocation,
    WasteLocation,
    make_game_state,
)


@pytest.fixture
def session():
    return GameSession(STANDARD, seed=42, clock=lambda: 1000.0)


def test_new_session_is_dealt(session):
    assert len(session.game_state.tableau.columns[0]) == 1
    assert session.history.past == ()
    assert session.history.future == ()
    assert session.game_state.is_won is False
    assert session.game_state.stats.start_time == 1000.0


def test_new_game_resets_history(session):
    session.draw_card()
    session.draw_card()
    session.new_game(99)
    assert session.history.past == ()
    assert session.history.future == ()
    assert session.game_state.stock_and_waste.waste == ()


def test_draw_card_commits_history(session):
    stock = len(session.game_state.stock_and_waste.stock)
    assert session.draw_card() is True
    assert len(session.game_state.stock_and_waste.stock) == stock - 1
    assert len(session.game_state.stock_and_waste.waste) == 1
    assert len(session.history.past) == 1


def test_noop_draw_does_not_touch_history():
    state = make_game_state([()] * 7)
    session = GameSession(STANDARD)
    session.history = HistoryState(past=(), present=state)
    assert session.draw_card() is False
    assert session.history.present is state
    assert session.history.past == ()


def test_invalid_move_leaves_history_untouched(session):
    initial = session.history.present
    invalid = Move(TableauLocation(1, 0), FoundationLocation("hearts"), card_count=2)
    result = session.move_card(invalid)
    assert result.error == "Cannot move face-down cards"
    assert session.history.present is initial
    assert session.history.past == ()


def test_undo_redo_restore_exact_states(session):
    initial = session.game_state
    session.draw_card()
    after_draw = session.game_state
    assert session.undo() is True
    assert session.game_state is initial
    assert session.can_redo()
    assert session.redo() is True
    assert session.game_state is after_draw


def test_undo_and_redo_unavailable(session):
    initial = session.game_state
    assert session.undo() is False
    assert session.game_state is initial
    session.draw_card()
    after_draw = session.game_state
    assert session.redo() is False
    assert session.game_state is after_draw


def test_new_action_clears_redo(session):
    session.draw_card()
    session.undo()
    assert len(session.history.future) == 1
    session.draw_card()
    assert session.history.future == ()


def test_move_card_scores_standard_points():
    session = GameSession(STANDARD)
    state = make_game_state(
        [(Card("clubs", 4), Card("hearts", 1, True))] + [()] * 6,
    )
    session.history = HistoryState(past=(), present=state)
    result = session.move_card(Move(TableauLocation(0, 1), FoundationLocation("hearts")))
    assert result.ok
    # Tableau to foundation plus the flip bonus.
    assert session.game_state.stats.score == 15
    assert session.game_state.stats.moves == 1
    assert session.game_state.tableau.columns[0] == (Card("clubs", 4, True),)


def test_vegas_profile_buys_in_and_blocks_undo():
    session = GameSession(VEGAS, seed=7)
    assert session.game_state.stats.score == -52
    assert session.draw_card() is True
    assert len(session.game_state.stock_and_waste.waste) == 3
    assert session.can_undo() is False
    assert session.undo() is False


def test_draw_count_must_match_profile(session):
    assert session.draw_card(3) is False
    assert session.history.past == ()
    three = GameSession(DRAW_THREE, seed=42)
    assert three.dispatch({"type": "DRAW_CARD", "count": 3}) is True
    assert len(three.game_state.stock_and_waste.waste) == 3


def test_auto_complete_commits_single_history_entry():
    columns = [tuple(Card(suit, rank, True) for rank in reversed(RANKS)) for suit in SUITS]
    state = make_game_state(columns + [()] * 3)
    session = GameSession(STANDARD)
    session.history = HistoryState(past=(), present=state)

    assert session.auto_complete() is True
    assert session.game_state.is_won
    assert session.game_state.stats.score == 520
    assert len(session.history.past) == 1
    assert session.auto_complete() is False


def test_auto_complete_refused_on_fresh_deal(session):
    assert session.auto_complete() is False
    assert session.history.past == ()


def test_tick_updates_elapsed_without_history(session):
    session.tick(42)
    assert session.game_state.stats.elapsed_seconds == 42
    assert session.history.past == ()


def test_dispatch_routes_actions(session):
    session.dispatch({"type": "DRAW_CARD"})
    assert len(session.history.past) == 1
    session.dispatch({"type": "UNDO"})
    assert session.game_state.stock_and_waste.waste == ()
    session.dispatch({"type": "REDO"})
    assert len(session.game_state.stock_and_waste.waste) == 1
    session.dispatch({"type": "NEW_GAME", "seed": 100})
    assert session.history.past == ()


def test_dispatch_move_from_mapping():
    session = GameSession(STANDARD)
    state = make_game_state(
        [(Card("spades", 9, True),)] + [()] * 6, waste=[Card("hearts", 8, True)]
    )
    session.history = HistoryState(past=(), present=state)
    result = session.dispatch(
        {
            "type": "MOVE_CARD",
            "move": {
                "from": {"type": "waste"},
                "to": {"type": "tableau", "column_index": 0},
                "card_count": 1,
            },
        }
    )
    assert result.ok
    assert session.history.past == (state,)
    assert session.game_state.stats.score == 5
    assert session.game_state.tableau.columns[0][-1] == Card("hearts", 8, True)


def test_dispatch_best_move_from_mapping():
    session = GameSession(STANDARD)
    state = make_game_state([()] * 7, waste=[Card("spades", 1, True)])
    session.history = HistoryState(past=(), present=state)
    move = session.dispatch({"type": "BEST_MOVE", "location": {"type": "waste"}})
    assert move == Move(WasteLocation(), FoundationLocation("spades"))


@pytest.mark.parametrize(
    "action",
    [
        {},
        {"type": "SHUFFLE"},
        {"type": "MOVE_CARD"},
        {"type": "MOVE_CARD", "move": {"from": {"type": "waste"}}},
        {"type": "BEST_MOVE", "location": {"type": "nowhere"}},
    ],
)
def test_dispatch_rejects_bad_actions(session, action):
    with pytest.raises(ActionError):
        session.dispatch(action)


def test_custom_history_limit_is_respected():
    session = GameSession(RuleProfile(draw_count=1, history_limit=5), seed=3)
    for _ in range(10):
        session.draw_card()
    assert len(session.history.past) == 5


@pytest.mark.parametrize("count", [3, 3.0, "3"])
def test_draw_count_accepts_json_numbers(count):
    session = GameSession(DRAW_THREE, seed=42)
    assert session.dispatch({"type": "DRAW_CARD", "count": count}) is True
    assert len(session.game_state.stock_and_waste.waste) == 3
    assert len(session.history.past) == 1


@pytest.mark.parametrize("count", [2.5, "lots", True])
def test_draw_count_must_be_integral(count):
    session = GameSession(DRAW_THREE, seed=42)
    with pytest.raises(ValueError):
        session.draw_card(count)
    with pytest.raises(ActionError):
        session.dispatch({"type": "DRAW_CARD", "count": count})
    assert session.history.past == ()
