"""
Game state aggregate.

A GameState is treated as an immutable snapshot by everything outside the
engine: each transition calls clone() and mutates only the copy.
"""

import copy
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from metrotrade.config import GameConfig, InitOptions
from metrotrade.player import Player
from metrotrade.spaces import Tile


class Phase(str, Enum):
    """Turn phases gating which transition may run."""

    AWAIT_ROLL = "await_roll"
    AWAIT_RESOLVE = "await_resolve"
    AWAIT_ACTION = "await_action"
    AWAIT_END = "await_end"


@dataclass
class Prompts:
    """Flags a UI reads to enable or disable its affordances."""

    can_buy: bool = False
    must_pay: int = 0
    landed_tile: Optional[int] = None


@dataclass
class LogEntry:
    """A timestamped, human-readable log line."""

    t: float
    text: str


@dataclass
class GameState:
    """Represents the complete state of a MetroTrade game."""

    turn: int
    dice: Optional[Tuple[int, int]]
    tiles: List[Tile]
    players: List[Player]
    deck_event: List[int]
    deck_fund: List[int]
    phase: Phase
    prompts: Prompts
    rng_seed: int
    settings: InitOptions
    config: GameConfig = field(default_factory=GameConfig)
    log: List[LogEntry] = field(default_factory=list)

    def clone(self) -> "GameState":
        """Return a deep copy sharing no mutable reference with this state."""
        return copy.deepcopy(self)

    def add_log(self, text: str) -> None:
        self.log.append(LogEntry(time.time(), text))

    @property
    def current_player(self) -> Player:
        return self.players[self.turn]

    @property
    def current_tile(self) -> Tile:
        return self.tiles[self.current_player.pos]

    @property
    def active_players(self) -> List[Player]:
        """Get all non-bankrupt players."""
        return [p for p in self.players if not p.bankrupt]

    @property
    def is_over(self) -> bool:
        """A game with more than one seat ends when a single solvent player is left."""
        return len(self.players) > 1 and len(self.active_players) <= 1

    @property
    def winner(self) -> Optional[int]:
        if not self.is_over:
            return None
        active = self.active_players
        return active[0].id if active else None
