"""Deterministic, headless rules engine for palletrush.

IMPORTANT: This package must never import pygame.
"""

from .actions import Action
from .battle import Battle
from .board import AlreadyOwned, Board, Fullfilled, Moveable, MovingRange, OutOfField
from .errors import RuleError
from .game import Game, Phase, StepResult, replay
from .pallet import PALLET_HEIGHT_LIMIT, Cell
from .players import Player
from .topology import ALL_COORDINATES, Column, Coordinate, Direction, Row

__all__ = [
    "ALL_COORDINATES",
    "Action",
    "AlreadyOwned",
    "Battle",
    "Board",
    "Cell",
    "Column",
    "Coordinate",
    "Direction",
    "Fullfilled",
    "Game",
    "Moveable",
    "MovingRange",
    "OutOfField",
    "PALLET_HEIGHT_LIMIT",
    "Phase",
    "Player",
    "Row",
    "RuleError",
    "StepResult",
    "replay",
]
