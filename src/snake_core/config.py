"""Startup configuration for the snake engine."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

BOARD_SIZE = 12
TICK_INTERVAL_MS = 500
INITIAL_LENGTH = 4

# The starting head sits in column 4, so at most five segments fit behind it.
_MAX_INITIAL_LENGTH = 5


@dataclass(frozen=True)
class EngineConfig:
    """Board size, tick period and starting snake length.

    These are fixed for the lifetime of an engine; build a new config to
    change them.
    """

    board_size: int = BOARD_SIZE
    tick_interval_ms: int = TICK_INTERVAL_MS
    initial_length: int = INITIAL_LENGTH
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.board_size < 5:
            raise ValueError("board_size must be at least 5.")
        if self.tick_interval_ms < 1:
            raise ValueError("tick_interval_ms must be at least 1.")
        if not 1 <= self.initial_length <= _MAX_INITIAL_LENGTH:
            raise ValueError(
                f"initial_length must be between 1 and {_MAX_INITIAL_LENGTH}.",
            )

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> EngineConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
