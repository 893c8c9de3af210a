"""Snake core: deterministic single-snake game engine."""

from snake_core.apple import place_apple
from snake_core.board import BoardSnapshot, CellType
from snake_core.collision import would_collide
from snake_core.config import EngineConfig
from snake_core.engine import GameEngine, GameState
from snake_core.geometry import Direction, successor_cell
from snake_core.session import DirectionEvent, GameSession, TickEvent
from snake_core.snake import Segment, Snake, TurnMarker

__all__ = [
    "BoardSnapshot",
    "CellType",
    "Direction",
    "DirectionEvent",
    "EngineConfig",
    "GameEngine",
    "GameSession",
    "GameState",
    "Segment",
    "Snake",
    "TickEvent",
    "TurnMarker",
    "place_apple",
    "successor_cell",
    "would_collide",
]
