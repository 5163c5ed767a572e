from __future__ import annotations

from palletrush.engine.actions import Action
from palletrush.engine.battle import Battle
from palletrush.engine.errors import IllegalDestination
from palletrush.engine.game import Game


def test_play_records_history() -> None:
    battle = Battle.start()
    first = battle.game
    res = battle.play(Action.parse("c1 down"))
    assert res.ok
    assert battle.history == [first]
    assert battle.moves == [Action.parse("c1 down")]
    assert battle.game is res.game
    assert battle.event_log[0]["type"] == "MARKER_MIGRATED"


def test_rejected_action_changes_nothing() -> None:
    battle = Battle()
    before = battle.game
    res = battle.play(Action.parse("c1 up"))
    assert not res.ok
    assert res.error == IllegalDestination()
    assert battle.game is before
    assert battle.history == []
    assert battle.moves == []


def test_undo_restores_previous_game() -> None:
    battle = Battle.start()
    assert not battle.undo()
    battle.play(Action.parse("c1 down"))
    battle.play(Action.parse("c6 up"))
    after_first = battle.history[-1]
    assert battle.undo()
    assert battle.game is after_first
    assert battle.game.current_player() == battle.game.player_b
    assert len(battle.moves) == 1
    assert battle.undo()
    assert battle.game == Game.new()
    assert not battle.can_undo()


def test_reset() -> None:
    battle = Battle.start()
    battle.play(Action.parse("c1 down"))
    battle.reset()
    assert battle.game == Game.new()
    assert battle.history == []
    assert battle.event_log == []
