"""Exception taxonomy for the engine boundary.

Gameplay rejections (a blocked step) are NOT errors; they are reported
through ``StepResult.accepted``. Lethal contact and stage clear are game
states. Only load-time and request-boundary failures raise.
"""

from __future__ import annotations


class LoloError(Exception):
    """Base class for all engine errors."""


class MalformedLevel(LoloError, ValueError):
    """A level description could not be turned into a Stage."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Level {name!r} is malformed: {reason}")
        self.name = name
        self.reason = reason


class InvalidRequest(LoloError, ValueError):
    """A move/reset/advance request was malformed at the boundary."""
