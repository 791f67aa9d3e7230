"""Player actions: request proposals and the movement resolver."""

from lolo.actions.base import ActionProposal, parse_direction
from lolo.actions.move import MoveAction, StepResult

__all__ = ["ActionProposal", "MoveAction", "StepResult", "parse_direction"]
