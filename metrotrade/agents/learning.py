"""
Tabular Q-learning opponent.

Each AI seat keeps a sparse table of value estimates keyed by a discretized
view of the game plus the action taken. Two independent choices are
modelled: BUY vs SKIP when landing on an unowned tile, and BUILD vs HOLD
when considering an improvement.

State features (all small integers):
- cash bucket: cash // 300, clamped to 0..6
- cost bucket: tile cost // 100, clamped to 0..6
- holding bucket: share of the tile's group already owned, scaled to 0..3
- dice bucket: (dice total - 2) // 4, capped at 2 (1 when no dice rolled)

Keys pack action (2 bits), cash (3), cost (3), holding (2) and dice (2)
into a single int.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, Optional

from metrotrade.agents.base import Agent
from metrotrade.board import group_size
from metrotrade.config import LearnerConfig
from metrotrade.exceptions import StorageError
from metrotrade.rules import count_owned_in_group
from metrotrade.state import GameState
from metrotrade.storage import KeyValueStorage, NullStorage

logger = logging.getLogger(__name__)


class Action(IntEnum):
    BUY = 0
    SKIP = 1
    BUILD = 2
    HOLD = 3


@dataclass(frozen=True)
class Features:
    """Discretized state seen by the learner."""

    cash: int
    cost: int
    holding: int
    dice: int

    def key(self, action: Action) -> int:
        return int(action) | (self.cash << 2) | (self.cost << 5) | (self.holding << 8) | (self.dice << 10)


def _bucket(value: int, step: int, top: int = 6) -> int:
    return min(top, max(0, value // step))


def discretize(state: GameState, player_id: int, tile_index: Optional[int] = None) -> Features:
    """
    Reduce a game state to the learner's features.

    Args:
        state: Game state to observe
        player_id: Seat whose point of view is taken
        tile_index: Tile under consideration (defaults to the player's position)
    """
    me = state.players[player_id]
    tile = state.tiles[me.pos if tile_index is None else tile_index]
    prop = tile.prop
    cost = prop.cost if prop is not None else 0
    group = prop.group if prop is not None else None

    own_in_group = count_owned_in_group(state, me.id, group) if group is not None else 0
    size = (group_size(state.tiles, group) if group is not None else 0) or 1

    if state.dice is not None:
        dice = min(2, (state.dice[0] + state.dice[1] - 2) // 4)
    else:
        dice = 1

    return Features(
        cash=_bucket(me.cash, 300),
        cost=_bucket(cost, 100),
        holding=int(own_in_group / size * 3),
        dice=dice,
    )


def storage_key(player_id: int) -> str:
    return f"q.p{player_id}"


class LearningAgent(Agent):
    """
    Epsilon-greedy tabular learner trained online with TD(0).

    The table is loaded from storage at construction and written back after
    every update. Storage problems are logged and otherwise ignored.
    """

    def __init__(
        self,
        player_id: int,
        storage: Optional[KeyValueStorage] = None,
        config: Optional[LearnerConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(player_id)
        self.storage = storage if storage is not None else NullStorage()
        self.config = config or LearnerConfig()
        self.rng = rng if rng is not None else random.Random(player_id)
        self.key = storage_key(player_id)
        self.q: Dict[int, float] = self._load()

    def _load(self) -> Dict[int, float]:
        try:
            raw = self.storage.get(self.key, {})
        except StorageError as e:
            logger.warning(f"Could not load policy for player {self.player_id}: {e}")
            return {}
        if not isinstance(raw, dict):
            logger.warning(f"Ignoring malformed policy table under {self.key}")
            return {}
        table: Dict[int, float] = {}
        for k, v in raw.items():
            try:
                table[int(k)] = float(v)
            except (TypeError, ValueError):
                logger.warning(f"Dropping malformed entry {k!r} under {self.key}")
        return table

    def _save(self) -> None:
        try:
            self.storage.set(self.key, {str(k): v for k, v in self.q.items()})
        except StorageError as e:
            logger.warning(f"Could not save policy for player {self.player_id}: {e}")

    def value(self, key: int) -> float:
        return self.q.get(key, 0.0)

    def update(self, s: int, reward: float, s2: int) -> float:
        """Apply one TD(0) step to Q(s) and persist the table."""
        target = reward + self.config.gamma * self.value(s2)
        v = self.value(s) + self.config.alpha * (target - self.value(s))
        self.q[s] = v
        self._save()
        return v

    def _choose(self, features: Features, yes: Action, no: Action) -> bool:
        if self.rng.random() < self.config.epsilon:
            return self.rng.random() < 0.5
        return self.value(features.key(yes)) >= self.value(features.key(no))

    def decide_buy(self, state: GameState) -> bool:
        return self._choose(discretize(state, self.player_id), Action.BUY, Action.SKIP)

    def decide_build(self, state: GameState, tile_index: int) -> bool:
        return self._choose(discretize(state, self.player_id, tile_index), Action.BUILD, Action.HOLD)

    def _learn(self, before: GameState, after: GameState, action: Action, tile_index: Optional[int] = None) -> float:
        s = discretize(before, self.player_id, tile_index).key(action)
        s2 = discretize(after, self.player_id, tile_index).key(action)
        delta = after.players[self.player_id].net_worth - before.players[self.player_id].net_worth
        return self.update(s, delta / self.config.reward_scale, s2)

    def learn_buy(self, before: GameState, after: GameState, did_buy: bool) -> None:
        self._learn(before, after, Action.BUY if did_buy else Action.SKIP)

    def learn_build(
        self,
        before: GameState,
        after: GameState,
        did_build: bool,
        tile_index: Optional[int] = None,
    ) -> None:
        self._learn(before, after, Action.BUILD if did_build else Action.HOLD, tile_index)


AgentFactory = Callable[[int, GameState], Agent]


def agent_seed(state: GameState, player_id: int) -> int:
    """Exploration seed for a seat, derived from the game's own seed."""
    return (state.rng_seed ^ ((player_id + 1) * 0x9E3779B1)) & 0xFFFFFFFF


def learning_agents(
    storage: Optional[KeyValueStorage] = None,
    config: Optional[LearnerConfig] = None,
) -> AgentFactory:
    """
    Build a factory producing LearningAgents that share one storage backend.

    Each agent's exploration generator is seeded from the game state, so a
    replay from the same state makes the same choices.
    """

    def factory(player_id: int, state: GameState) -> Agent:
        return LearningAgent(player_id, storage, config, rng=random.Random(agent_seed(state, player_id)))

    return factory
