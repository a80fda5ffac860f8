"""
The fixed MetroTrade board template.

BOARD is never handed out directly; create_tiles() returns a deep copy so
that ownership and improvements on a live game never touch the template.
"""

import copy
from typing import List, Sequence

from metrotrade.spaces import Property, Tile, TileType

TRANSIT_RENT = [25, 50, 100, 200, 200, 200]
UTILITY_RENT = [4, 10, 30, 90, 160, 250]


def _go(index: int) -> Tile:
    return Tile(index, "Metro Hub", TileType.GO)


def _street(index: int, name: str, cost: int, group: str, rent: Sequence[int]) -> Tile:
    return Tile(index, name, TileType.PROPERTY, Property(cost, group, list(rent)))


def _transit(index: int, name: str) -> Tile:
    return Tile(index, name, TileType.TRANSIT, Property(200, "transit", list(TRANSIT_RENT)))


def _utility(index: int, name: str) -> Tile:
    return Tile(index, name, TileType.UTILITY, Property(150, "utility", list(UTILITY_RENT)))


def _tax(index: int, name: str, amount: int) -> Tile:
    return Tile(index, name, TileType.TAX, tax_amount=amount)


def _event(index: int) -> Tile:
    return Tile(index, "City Event", TileType.EVENT)


def _fund(index: int) -> Tile:
    return Tile(index, "Transit Fund", TileType.FUND)


def _create_board() -> List[Tile]:
    """Create the 40-tile MetroTrade board."""
    return [
        # Bottom row (0-10)
        _go(0),
        _street(1, "Ash Lane", 60, "brown", [2, 10, 30, 90, 160, 250]),
        _fund(2),
        _street(3, "Birch Row", 60, "brown", [4, 20, 60, 180, 320, 450]),
        _tax(4, "City Tax", 200),
        _transit(5, "North Line"),
        _street(6, "Cedar Street", 100, "light_blue", [6, 30, 90, 270, 400, 550]),
        _event(7),
        _street(8, "Dune Street", 100, "light_blue", [6, 30, 90, 270, 400, 550]),
        _street(9, "Elm Avenue", 120, "light_blue", [8, 40, 100, 300, 450, 600]),
        Tile(10, "Detention", TileType.VISIT),
        # Left side (11-20)
        _street(11, "Fern Place", 140, "pink", [10, 50, 150, 450, 625, 750]),
        _utility(12, "Power Grid"),
        _street(13, "Grove Avenue", 140, "pink", [10, 50, 150, 450, 625, 750]),
        _street(14, "Harbor Avenue", 160, "pink", [12, 60, 180, 500, 700, 900]),
        _transit(15, "East Line"),
        _street(16, "Iris Place", 180, "orange", [14, 70, 200, 550, 750, 950]),
        _fund(17),
        _street(18, "Juniper Avenue", 180, "orange", [14, 70, 200, 550, 750, 950]),
        _street(19, "Kestrel Avenue", 200, "orange", [16, 80, 220, 600, 800, 1000]),
        Tile(20, "Park & Ride", TileType.PARKING),
        # Top row (21-30)
        _street(21, "Laurel Avenue", 220, "red", [18, 90, 250, 700, 875, 1050]),
        _event(22),
        _street(23, "Maple Avenue", 220, "red", [18, 90, 250, 700, 875, 1050]),
        _street(24, "Nova Avenue", 240, "red", [20, 100, 300, 750, 925, 1100]),
        _transit(25, "South Line"),
        _street(26, "Oak Avenue", 260, "yellow", [22, 110, 330, 800, 975, 1150]),
        _street(27, "Pine Avenue", 260, "yellow", [22, 110, 330, 800, 975, 1150]),
        _utility(28, "Water Works"),
        _street(29, "Quarry Gardens", 280, "yellow", [24, 120, 360, 850, 1025, 1200]),
        Tile(30, "Go to Detention", TileType.GO_TO_JAIL),
        # Right side (31-39)
        _street(31, "River Avenue", 300, "green", [26, 130, 390, 900, 1100, 1275]),
        _street(32, "Sage Avenue", 300, "green", [26, 130, 390, 900, 1100, 1275]),
        _fund(33),
        _street(34, "Tower Avenue", 320, "green", [28, 150, 450, 1000, 1200, 1400]),
        _transit(35, "West Line"),
        _event(36),
        _street(37, "Union Place", 350, "dark_blue", [35, 175, 500, 1100, 1300, 1500]),
        _tax(38, "Luxury Tax", 100),
        _street(39, "Vista Boulevard", 400, "dark_blue", [50, 200, 600, 1400, 1700, 2000]),
    ]


BOARD: List[Tile] = _create_board()


def create_tiles() -> List[Tile]:
    """Return a fresh, independent copy of the board template."""
    return copy.deepcopy(BOARD)


def group_size(tiles: Sequence[Tile], group: str) -> int:
    """Count the tiles that belong to a group."""
    return sum(1 for t in tiles if t.prop is not None and t.prop.group == group)
