"""
Player state.
"""

from dataclasses import dataclass


@dataclass
class Player:
    """Represents the complete state of a player in the game."""

    id: int
    name: str
    is_human: bool
    cash: int
    pos: int = 0
    in_jail: bool = False
    jail_turns: int = 0
    bankrupt: bool = False
    net_worth: int = 0

    def __repr__(self) -> str:
        return (
            f"Player(id={self.id}, name='{self.name}', cash={self.cash}, "
            f"pos={self.pos}, bankrupt={self.bankrupt})"
        )
