from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from palletrush.engine.actions import Action
from palletrush.engine.errors import RuleError
from palletrush.engine.game import Game
from palletrush.engine.serialize import action_to_dict


@dataclass
class TelemetryService:
    path: Path

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def action_accepted(self, action: Action, game: Game) -> None:
        self.log("action_accepted", {"action": action_to_dict(action), "next_player": game.current_player().name})
        if game.winner is not None:
            self.log("game_over", {"winner": game.winner.name})

    def action_rejected(self, action: Action, error: RuleError) -> None:
        self.log("action_rejected", {"action": action_to_dict(action), "error": error.code})
