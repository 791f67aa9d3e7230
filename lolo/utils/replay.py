"""Replay serialization — records request-by-request outcomes for deterministic replay."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lolo.actions.base import ActionProposal
    from lolo.core.enums import Outcome
    from lolo.core.snapshot import StageSnapshot

logger = logging.getLogger(__name__)


class ReplayRecorder:
    """Accumulates handled requests and flushes them to a JSON replay file."""

    __slots__ = ("_path", "_entries", "_initial")

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._entries: list[dict[str, Any]] = []
        self._initial: dict[str, Any] | None = None

    def record_start(self, snapshot: StageSnapshot) -> None:
        self._initial = {
            "level": snapshot.level_index,
            "name": snapshot.name,
            "board": snapshot.to_ascii(),
            "fingerprint": snapshot.fingerprint(),
        }

    def record(
        self,
        proposal: ActionProposal,
        accepted: bool,
        outcome: Outcome,
        snapshot: StageSnapshot,
    ) -> None:
        self._entries.append(
            {
                "tick": snapshot.tick,
                "verb": proposal.verb.name,
                "direction": (
                    [proposal.direction.x, proposal.direction.y]
                    if proposal.direction is not None
                    else None
                ),
                "accepted": accepted,
                "outcome": outcome.name,
                "state": snapshot.state.name,
                "level": snapshot.level_index,
                "player": [snapshot.player.x, snapshot.player.y],
                "fingerprint": snapshot.fingerprint(),
            }
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": "1.0",
            "initial": self._initial,
            "total_requests": len(self._entries),
            "requests": self._entries,
        }

    def flush(self) -> None:
        """Write accumulated data to disk."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.info("Replay saved to %s (%d requests)", self._path, len(self._entries))
