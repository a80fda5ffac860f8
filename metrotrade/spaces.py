"""
Board tile definitions and types.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class TileType(str, Enum):
    """Types of tiles on the board."""

    GO = "GO"
    PROPERTY = "PROPERTY"
    TRANSIT = "TRANSIT"
    UTILITY = "UTILITY"
    TAX = "TAX"
    EVENT = "EVENT"
    FUND = "FUND"
    GO_TO_JAIL = "GO_TO_JAIL"
    VISIT = "VISIT"
    PARKING = "PARKING"


OWNABLE_TYPES = (TileType.PROPERTY, TileType.TRANSIT, TileType.UTILITY)

MAX_UPGRADES = 5


@dataclass
class Property:
    """Purchasable economics of a tile plus its live ownership state."""

    cost: int
    group: str
    base_rent: List[int] = field(default_factory=list)
    owner: Optional[int] = None
    upgrades: int = 0
    mortgaged: bool = False

    def is_owned(self) -> bool:
        """Check if the property is owned by any player."""
        return self.owner is not None


@dataclass
class Tile:
    """One of the 40 board cells."""

    index: int
    name: str
    type: TileType
    prop: Optional[Property] = None
    tax_amount: int = 0

    @property
    def is_ownable(self) -> bool:
        return self.type in OWNABLE_TYPES and self.prop is not None

    def __repr__(self) -> str:
        return f"Tile(index={self.index}, name='{self.name}', type={self.type.value})"
