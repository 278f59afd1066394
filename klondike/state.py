"""Immutable game state model.

Every structure here is a frozen dataclass holding tuples, so a state can be
shared freely between history entries.  Transitions build new objects with
:func:`dataclasses.replace` and reuse untouched piles by reference.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Generic, Iterator, Mapping, Sequence, TypeVar, Union

from klondike.cards import SUITS, Card

TABLEAU_COLUMNS = 7
DECK_SIZE = 52

Pile = tuple[Card, ...]

T = TypeVar("T")


def get_value(obj: Any, key: str, default: Any = None) -> Any:
    """Retrieve *key* from mappings or objects with a fallback."""
    if isinstance(obj, Mapping):
        return obj.get(key, default)
    if hasattr(obj, key):
        return getattr(obj, key)
    return default


@dataclass(frozen=True)
class Tableau:
    columns: tuple[Pile, ...]

    def __post_init__(self) -> None:
        if len(self.columns) != TABLEAU_COLUMNS:
            raise ValueError(
                f"Tableau must have exactly {TABLEAU_COLUMNS} columns, got {len(self.columns)}"
            )

    def with_column(self, index: int, column: Pile) -> "Tableau":
        columns = list(self.columns)
        columns[index] = column
        return Tableau(tuple(columns))


@dataclass(frozen=True)
class Foundations:
    """One pile per suit; a pile only ever holds an ace-to-king run of its suit."""

    hearts: Pile = ()
    diamonds: Pile = ()
    clubs: Pile = ()
    spades: Pile = ()

    def pile(self, suit: str) -> Pile:
        if suit not in SUITS:
            raise ValueError(f"Unknown suit: {suit!r}")
        return getattr(self, suit)

    def with_pile(self, suit: str, pile: Pile) -> "Foundations":
        if suit not in SUITS:
            raise ValueError(f"Unknown suit: {suit!r}")
        return replace(self, **{suit: pile})

    def piles(self) -> Iterator[tuple[str, Pile]]:
        for suit in SUITS:
            yield suit, getattr(self, suit)

    def total(self) -> int:
        return sum(len(pile) for _, pile in self.piles())


@dataclass(frozen=True)
class StockAndWaste:
    stock: Pile = ()
    waste: Pile = ()


@dataclass(frozen=True)
class GameStats:
    """Counters exposed to scoring and timer collaborators."""

    moves: int = 0
    score: int = 0
    start_time: float = 0.0
    elapsed_seconds: int = 0


@dataclass(frozen=True)
class GameState:
    tableau: Tableau
    foundations: Foundations = field(default_factory=Foundations)
    stock_and_waste: StockAndWaste = field(default_factory=StockAndWaste)
    stats: GameStats = field(default_factory=GameStats)
    is_won: bool = False


# ----------------------------------------------------------------------
# Locations and moves
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class TableauLocation:
    """A card inside a tableau column; ``card_index`` is the first card of the run."""

    kind: ClassVar[str] = "tableau"

    column_index: int
    card_index: int = 0


@dataclass(frozen=True)
class FoundationLocation:
    kind: ClassVar[str] = "foundation"

    suit: str

    def __post_init__(self) -> None:
        if self.suit not in SUITS:
            raise ValueError(f"Unknown foundation suit: {self.suit!r}")


@dataclass(frozen=True)
class StockLocation:
    kind: ClassVar[str] = "stock"


@dataclass(frozen=True)
class WasteLocation:
    kind: ClassVar[str] = "waste"


CardLocation = Union[TableauLocation, FoundationLocation, StockLocation, WasteLocation]

LOCATION_KINDS = ("tableau", "foundation", "stock", "waste")


@dataclass(frozen=True)
class Move:
    """A request to relocate ``card_count`` cards from *source* to *target*."""

    source: CardLocation
    target: CardLocation
    card_count: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.card_count, bool) or not isinstance(self.card_count, int):
            raise TypeError("card_count must be an integer")
        if self.card_count < 1:
            raise ValueError("card_count must be at least 1")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a validation or transition: a value or a failure reason."""

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def success(value: T) -> Result[T]:
    return Result(value=value)


def failure(error: str) -> Result[Any]:
    return Result(error=error)


# ----------------------------------------------------------------------
# Construction helpers
# ----------------------------------------------------------------------
def make_game_state(
    columns: Sequence[Sequence[Card]],
    *,
    foundations: Mapping[str, Sequence[Card]] | Foundations | None = None,
    stock: Sequence[Card] = (),
    waste: Sequence[Card] = (),
    stats: GameStats | None = None,
    is_won: bool = False,
) -> GameState:
    """Build a :class:`GameState` from plain sequences."""

    if isinstance(foundations, Foundations):
        built_foundations = foundations
    else:
        piles = foundations or {}
        unknown = set(piles) - set(SUITS)
        if unknown:
            raise ValueError("Unknown foundation suits: " + ", ".join(sorted(unknown)))
        built_foundations = Foundations(**{suit: tuple(piles.get(suit, ())) for suit in SUITS})

    return GameState(
        tableau=Tableau(tuple(tuple(column) for column in columns)),
        foundations=built_foundations,
        stock_and_waste=StockAndWaste(stock=tuple(stock), waste=tuple(waste)),
        stats=stats if stats is not None else GameStats(),
        is_won=is_won,
    )


def all_cards(state: GameState) -> Iterator[Card]:
    """Yield every card in *state*: tableau, foundations, stock then waste."""

    for column in state.tableau.columns:
        yield from column
    for _, pile in state.foundations.piles():
        yield from pile
    yield from state.stock_and_waste.stock
    yield from state.stock_and_waste.waste


def with_stats(state: GameState, **changes: Any) -> GameState:
    """Return *state* with the given :class:`GameStats` fields replaced."""

    return replace(state, stats=replace(state.stats, **changes))


# ----------------------------------------------------------------------
# Serialisation
# ----------------------------------------------------------------------
def card_to_dict(card: Card) -> dict[str, Any]:
    return {"suit": card.suit, "rank": card.rank, "face_up": card.face_up}


def _pile_to_list(pile: Pile) -> list[dict[str, Any]]:
    return [card_to_dict(card) for card in pile]


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Return a JSON-serialisable mapping describing *state*."""

    return {
        "tableau": [_pile_to_list(column) for column in state.tableau.columns],
        "foundations": {suit: _pile_to_list(pile) for suit, pile in state.foundations.piles()},
        "stock": _pile_to_list(state.stock_and_waste.stock),
        "waste": _pile_to_list(state.stock_and_waste.waste),
        "stats": {
            "moves": state.stats.moves,
            "score": state.stats.score,
            "start_time": state.stats.start_time,
            "elapsed_seconds": state.stats.elapsed_seconds,
        },
        "is_won": state.is_won,
    }


def coerce_int(value: Any, name: str) -> int:
    """Convert JSON-ish *value* (int, integral float or numeric string) to ``int``."""

    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{name} must be an integer, got {value!r}")
        return int(value)
    if isinstance(value, str):
        token = value.strip()
        try:
            return int(token, 10)
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    raise ValueError(f"{name} must be an integer, got {type(value).__name__}")


def location_from_dict(data: Any) -> CardLocation:
    """Create a location from a mapping such as ``{"type": "waste"}``."""

    kind = get_value(data, "type") or get_value(data, "kind")
    if not kind:
        raise ValueError("Location must define a 'type'")
    kind = str(kind).lower()
    if kind not in LOCATION_KINDS:
        raise ValueError(f"Unknown location type: {kind!r}")

    if kind == "tableau":
        column = get_value(data, "column_index")
        if column is None:
            raise ValueError("Tableau location requires 'column_index'")
        card = get_value(data, "card_index", 0)
        return TableauLocation(
            column_index=coerce_int(column, "column_index"),
            card_index=coerce_int(card, "card_index"),
        )
    if kind == "foundation":
        suit = get_value(data, "suit")
        if not suit:
            raise ValueError("Foundation location requires 'suit'")
        return FoundationLocation(str(suit).lower())
    if kind == "stock":
        return StockLocation()
    return WasteLocation()


def location_to_dict(location: CardLocation) -> dict[str, Any]:
    if isinstance(location, TableauLocation):
        return {
            "type": location.kind,
            "column_index": location.column_index,
            "card_index": location.card_index,
        }
    if isinstance(location, FoundationLocation):
        return {"type": location.kind, "suit": location.suit}
    return {"type": location.kind}


def move_from_dict(data: Any) -> Move:
    source = get_value(data, "from") or get_value(data, "source")
    target = get_value(data, "to") or get_value(data, "target")
    if source is None or target is None:
        raise ValueError("Move requires both 'from' and 'to' locations")
    count = get_value(data, "card_count", 1)
    return Move(
        source=location_from_dict(source),
        target=location_from_dict(target),
        card_count=coerce_int(count, "card_count"),
    )


def move_to_dict(move: Move) -> dict[str, Any]:
    return {
        "from": location_to_dict(move.source),
        "to": location_to_dict(move.target),
        "card_count": move.card_count,
    }


__all__ = [
    "TABLEAU_COLUMNS",
    "DECK_SIZE",
    "Pile",
    "Tableau",
    "Foundations",
    "StockAndWaste",
    "GameStats",
    "GameState",
    "TableauLocation",
    "FoundationLocation",
    "StockLocation",
    "WasteLocation",
    "CardLocation",
    "LOCATION_KINDS",
    "Move",
    "Result",
    "success",
    "failure",
    "make_game_state",
    "all_cards",
    "with_stats",
    "card_to_dict",
    "state_to_dict",
    "location_from_dict",
    "location_to_dict",
    "move_from_dict",
    "move_to_dict",
    "get_value",
    "coerce_int",
]
