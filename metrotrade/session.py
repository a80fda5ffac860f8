"""
GameSession holds the live state for a UI and records history for undo/redo.

Each method runs one engine transition and replaces the held state with
the returned snapshot. Because transitions never mutate their input,
undo and redo simply move a cursor over the recorded snapshots.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from metrotrade import game
from metrotrade.agents import AgentFactory, learning_agents
from metrotrade.config import GameConfig, InitOptions, LearnerConfig
from metrotrade.state import GameState
from metrotrade.settings import MetroTradeSettings, get_settings
from metrotrade.storage import KeyValueStorage, build_storage

logger = logging.getLogger(__name__)


class GameSession:
    """Use-case façade over the engine for a single hosted game."""

    def __init__(
        self,
        options: Optional[InitOptions] = None,
        storage: Optional[KeyValueStorage] = None,
        config: Optional[GameConfig] = None,
        learner_config: Optional[LearnerConfig] = None,
        agents: Optional[AgentFactory] = None,
    ):
        self.config = config
        self.agents = agents or learning_agents(storage, learner_config)
        self._history: List[GameState] = []
        self._cursor = -1
        self.reset(options)

    @classmethod
    def from_settings(
        cls,
        options: Optional[InitOptions] = None,
        settings: Optional[MetroTradeSettings] = None,
    ) -> GameSession:
        """Create a session wired to the configured storage, learner and log level."""
        settings = settings or get_settings()
        settings.configure_logging()
        return cls(
            options,
            storage=build_storage(settings),
            learner_config=settings.learner_config(),
        )

    @property
    def state(self) -> GameState:
        return self._history[self._cursor]

    def _push(self, state: GameState) -> GameState:
        # A new move discards anything that was undone
        del self._history[self._cursor + 1 :]
        self._history.append(state)
        self._cursor = len(self._history) - 1
        return state

    def _apply(self, transition: Callable[[GameState], GameState]) -> GameState:
        return self._push(transition(self.state))

    def reset(self, options: Optional[InitOptions] = None) -> GameState:
        """Start a new game and let computer players move first if they hold the turn."""
        fresh = game.reset_game(options, self.config)
        self._history = []
        self._cursor = -1
        logger.info(f"Session reset: {fresh.settings.players} players, {fresh.settings.humans} human")
        return self._push(game.run_until_human(fresh, self.agents))

    def roll(self) -> GameState:
        return self._apply(game.roll_and_advance)

    def resolve(self) -> GameState:
        return self._apply(game.resolve_landing)

    def buy(self) -> GameState:
        return self._apply(lambda s: game.buy_current(s, self.agents))

    def decline(self) -> GameState:
        return self._apply(game.decline_current)

    def build(self, tile_index: int) -> GameState:
        return self._apply(lambda s: game.build_on_owned(s, tile_index, self.agents))

    def mortgage(self, tile_index: int) -> GameState:
        return self._apply(lambda s: game.toggle_mortgage(s, tile_index))

    def end(self) -> GameState:
        return self._apply(lambda s: game.end_turn(s, self.agents))

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._history) - 1

    def undo(self) -> bool:
        """Step back one snapshot. Returns False when already at the start."""
        if not self.can_undo:
            return False
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        """Step forward one undone snapshot. Returns False when nothing was undone."""
        if not self.can_redo:
            return False
        self._cursor += 1
        return True
