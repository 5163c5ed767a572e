from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Player:
    """Opaque player token. Identity is the tag supplied by the match."""

    tag: int
    name: str

    def __str__(self) -> str:
        return self.name


def spawn_players() -> tuple[Player, Player]:
    return Player(tag=0, name="A"), Player(tag=1, name="B")
