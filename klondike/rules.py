"""Rule profiles configuring draw size, scoring and undo for a game session."""
from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass
from typing import Any, Mapping, MutableMapping

from klondike.history import MAX_HISTORY_LENGTH
from klondike.state import get_value


SCORING_MODES = ("standard", "vegas", "none")

DRAW_COUNTS = {
    "one": 1,
    "single": 1,
    "three": 3,
    "triple": 3,
}


def _coerce_positive_int(value: Any, name: str) -> int:
    """Convert *value* into a positive integer.

    Configuration usually arrives as JSON or CLI text, so integers, integral
    floats and numeric strings are accepted.  ``ValueError`` flags content
    that is recognised but out of range; ``TypeError`` flags unsupported
    types.
    """

    if isinstance(value, bool):
        raise TypeError(f"Boolean values are not valid for {name}")
    if isinstance(value, int):
        candidate = value
    elif isinstance(value, float):
        if math.isnan(value) or math.isinf(value) or not value.is_integer():
            raise ValueError(f"{name} must be a whole number, got {value!r}")
        candidate = int(value)
    elif isinstance(value, str):
        token = value.strip().lower()
        if token in DRAW_COUNTS:
            candidate = DRAW_COUNTS[token]
        else:
            try:
                candidate = int(token, 10)
            except ValueError as exc:
                raise ValueError(f"Unknown {name} value: {value!r}") from exc
    else:
        raise TypeError(f"Unsupported {name} type: {type(value).__name__}")

    if candidate < 1:
        raise ValueError(f"{name} must be at least 1")
    return candidate


@dataclass(frozen=True)
class RuleProfile:
    """A configurable rules profile for a Klondike session."""

    draw_count: int | str = 1
    scoring: str = "standard"
    history_limit: int | str = MAX_HISTORY_LENGTH
    undo_allowed: bool = True

    def to_dict(self) -> MutableMapping[str, Any]:
        """Return the profile as a JSON-serialisable mapping."""
        return dict(asdict(self))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RuleProfile":
        """Create a profile from *data* produced by :meth:`to_dict`."""
        fields = {field.name for field in cls.__dataclass_fields__.values()}
        filtered = {k: data[k] for k in data if k in fields}
        return cls(**filtered)  # type: ignore[arg-type]

    def to_json(self) -> str:
        """Serialise the profile to a JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, payload: str) -> "RuleProfile":
        """Deserialise a :class:`RuleProfile` from *payload*."""
        return cls.from_dict(json.loads(payload))

    @property
    def draw(self) -> int:
        """Return the number of cards turned per stock draw."""

        return _coerce_positive_int(self.draw_count, "draw_count")

    @property
    def max_history(self) -> int:
        return _coerce_positive_int(self.history_limit, "history_limit")

    @property
    def scoring_mode(self) -> str:
        if self.scoring is not None and not isinstance(self.scoring, str):
            raise TypeError(f"Unsupported scoring type: {type(self.scoring).__name__}")
        mode = (self.scoring or "none").strip().lower()
        if mode not in SCORING_MODES:
            raise ValueError(f"Unknown scoring mode: {self.scoring!r}")
        return mode

    def validated(self) -> "RuleProfile":
        """Return the profile itself once every field normalises cleanly."""

        _ = self.draw, self.max_history, self.scoring_mode
        return self

    def is_action_legal(self, history: Any, action: Any) -> bool:
        """Determine whether *action* is allowed for *history* under this profile."""
        kind = get_value(action, "type") or get_value(action, "action")
        if not kind:
            raise ValueError("Action must define a 'type' or 'action' attribute")
        kind = str(kind).upper()

        if kind == "DRAW_CARD":
            requested = get_value(action, "count")
            return requested is None or requested == self.draw

        if kind in ("UNDO", "REDO"):
            if not self.undo_allowed:
                return False
            stack = "past" if kind == "UNDO" else "future"
            return bool(get_value(history, stack, ()))

        # Moves, deals and auto-complete carry no profile restriction.
        return True


STANDARD = RuleProfile(
    draw_count=1,
    scoring="standard",
    history_limit=MAX_HISTORY_LENGTH,
    undo_allowed=True,
)

DRAW_THREE = RuleProfile(
    draw_count=3,
    scoring="standard",
    history_limit=MAX_HISTORY_LENGTH,
    undo_allowed=True,
)

VEGAS = RuleProfile(
    draw_count=3,
    scoring="vegas",
    history_limit=MAX_HISTORY_LENGTH,
    undo_allowed=False,
)

PROFILES = {
    "standard": STANDARD,
    "draw_three": DRAW_THREE,
    "vegas": VEGAS,
}


def resolve_profile(value: Any) -> RuleProfile:
    """Return a profile from a preset name, a mapping, or a profile instance."""

    if value is None:
        return STANDARD
    if isinstance(value, RuleProfile):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if key not in PROFILES:
            raise ValueError(f"Unknown rule profile: {value!r}")
        return PROFILES[key]
    if isinstance(value, Mapping):
        return RuleProfile.from_dict(value)
    raise TypeError(f"Unsupported profile type: {type(value).__name__}")


__all__ = [
    "RuleProfile",
    "STANDARD",
    "DRAW_THREE",
    "VEGAS",
    "PROFILES",
    "SCORING_MODES",
    "resolve_profile",
]
