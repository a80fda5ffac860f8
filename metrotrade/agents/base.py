"""Base class for MetroTrade computer opponents."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from metrotrade.state import GameState


class Agent(ABC):
    """
    Abstract base class for computer players.

    The engine asks an agent two yes/no questions during an AI turn and
    reports the outcome of each decision back so the agent can learn.

    Attributes:
        player_id: The seat this agent plays.
    """

    def __init__(self, player_id: int):
        self.player_id = player_id

    @abstractmethod
    def decide_buy(self, state: "GameState") -> bool:
        """Return True to buy the tile the player is standing on."""

    @abstractmethod
    def decide_build(self, state: "GameState", tile_index: int) -> bool:
        """Return True to add an improvement to an owned tile."""

    def learn_buy(self, before: "GameState", after: "GameState", did_buy: bool) -> None:
        """Observe the result of a buy decision. Agents that don't learn ignore it."""

    def learn_build(
        self,
        before: "GameState",
        after: "GameState",
        did_build: bool,
        tile_index: Optional[int] = None,
    ) -> None:
        """Observe the result of a build decision. Agents that don't learn ignore it."""
