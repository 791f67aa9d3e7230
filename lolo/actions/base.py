"""Action proposals — the request currency between the host and the controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from lolo.core.enums import ActionType, Direction
from lolo.core.errors import InvalidRequest
from lolo.core.models import DIRECTION_OFFSETS, Vector2

_DIRECTION_NAMES: dict[str, Direction] = {
    "up": Direction.NORTH, "north": Direction.NORTH, "u": Direction.NORTH,
    "right": Direction.EAST, "east": Direction.EAST, "r": Direction.EAST,
    "down": Direction.SOUTH, "south": Direction.SOUTH, "d": Direction.SOUTH,
    "left": Direction.WEST, "west": Direction.WEST, "l": Direction.WEST,
}


def parse_direction(value: Any) -> Vector2:
    """Normalize a directional intent into one of the four unit offsets.

    Accepts a ``Direction``, a ``Vector2``, an ``(dx, dy)`` pair or a name
    such as ``"up"`` / ``"west"``. Anything else raises InvalidRequest.
    """
    if isinstance(value, Direction):
        return DIRECTION_OFFSETS[value]
    if isinstance(value, Vector2):
        vec = value
    elif isinstance(value, str):
        direction = _DIRECTION_NAMES.get(value.strip().lower())
        if direction is None:
            raise InvalidRequest(f"Unknown direction {value!r}")
        return DIRECTION_OFFSETS[direction]
    elif isinstance(value, (tuple, list)) and len(value) == 2:
        dx, dy = value
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in (dx, dy)):
            raise InvalidRequest(f"Direction components must be integers, got {value!r}")
        vec = Vector2(dx, dy)
    else:
        raise InvalidRequest(f"Unsupported direction {value!r}")

    if not vec.is_unit:
        raise InvalidRequest(f"Direction {vec} is not an orthogonal unit step")
    return vec


@dataclass(frozen=True, slots=True)
class ActionProposal:
    """One request for the stage controller, validated on construction."""

    verb: ActionType
    direction: Vector2 | None = None
    level_index: int | None = None
    reason: str = ""

    def __post_init__(self) -> None:
        if self.verb == ActionType.MOVE:
            if self.direction is None or not self.direction.is_unit:
                raise InvalidRequest(f"MOVE needs a unit direction, got {self.direction}")
        elif self.direction is not None:
            raise InvalidRequest(f"{self.verb.name} does not take a direction")
        if self.level_index is not None and self.verb != ActionType.RESET:
            raise InvalidRequest(f"{self.verb.name} does not take a level index")

    @classmethod
    def move(cls, direction: Any, reason: str = "") -> ActionProposal:
        return cls(verb=ActionType.MOVE, direction=parse_direction(direction), reason=reason)

    def __repr__(self) -> str:
        extra = f", dir={self.direction}" if self.direction is not None else ""
        if self.level_index is not None:
            extra += f", level={self.level_index}"
        return f"Proposal({self.verb.name}{extra}, reason={self.reason!r})"
