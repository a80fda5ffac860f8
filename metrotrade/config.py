"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import Optional

from metrotrade.exceptions import ValidationError


@dataclass
class GameConfig:
    """Rule constants for a MetroTrade game."""

    starting_cash: int = 1500
    pass_start_bonus: int = 200
    jail_fine: int = 50
    jail_index: int = 10
    min_jail_turns: int = 1

    bankruptcy_threshold: int = -500

    build_cost_ratio: float = 0.6
    mortgage_ratio: float = 0.5
    unmortgage_ratio: float = 0.55

    fund_grant: int = 100
    event_step: int = 50

    deck_size: int = 14

    ai_build_threshold: int = 250
    ai_turn_guard: int = 20


@dataclass
class LearnerConfig:
    """Hyper-parameters for the tabular learner."""

    epsilon: float = 0.1
    alpha: float = 0.2
    gamma: float = 0.9
    reward_scale: float = 50.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.epsilon <= 1.0:
            raise ValidationError("epsilon must be in [0, 1]")
        if not 0.0 < self.alpha <= 1.0:
            raise ValidationError("alpha must be in (0, 1]")
        if not 0.0 <= self.gamma <= 1.0:
            raise ValidationError("gamma must be in [0, 1]")
        if self.reward_scale <= 0:
            raise ValidationError("reward_scale must be positive")


@dataclass
class InitOptions:
    """Options for starting a game: seat count, human seats and an optional seed."""

    players: int = 2
    humans: int = 1
    seed: Optional[int] = None

    def validate(self) -> None:
        """Raise ValidationError when the seat layout is impossible."""
        if self.players < 1:
            raise ValidationError("Game requires at least 1 player")
        if not 0 <= self.humans <= self.players:
            raise ValidationError(
                f"humans must be between 0 and {self.players}, got {self.humans}"
            )
