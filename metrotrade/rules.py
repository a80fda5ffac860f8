"""
Pure rule helpers: rent, jail, property valuation and bankruptcy.

Functions taking a Player or GameState mutate the object they are given;
the engine only ever hands them its own working copy.
"""

import math
from typing import Optional

from metrotrade.config import GameConfig
from metrotrade.player import Player
from metrotrade.spaces import MAX_UPGRADES, Property, Tile
from metrotrade.state import GameState

MONOPOLY_HOLDINGS = 3
MONOPOLY_MULTIPLIER = 1.5


def compute_rent(tile: Tile, owner_holdings_in_group: int) -> int:
    """
    Calculate rent owed for landing on a tile.

    Args:
        tile: The landed tile
        owner_holdings_in_group: Tiles of the same group held by the owner

    Returns:
        Rent amount (0 for mortgaged or non-ownable tiles)
    """
    prop = tile.prop
    if prop is None or prop.mortgaged:
        return 0

    level = min(prop.upgrades, MAX_UPGRADES, len(prop.base_rent) - 1)
    base = prop.base_rent[level] if level >= 0 else 0

    # Unimproved tiles get the group bonus
    if owner_holdings_in_group >= MONOPOLY_HOLDINGS and prop.upgrades == 0:
        return math.floor(base * MONOPOLY_MULTIPLIER)
    return base


def count_owned_in_group(state: GameState, owner_id: int, group: Optional[str]) -> int:
    """Count tiles of a group owned by a player."""
    return sum(
        1
        for t in state.tiles
        if t.prop is not None and t.prop.owner == owner_id and t.prop.group == group
    )


def jail_player(player: Player, config: Optional[GameConfig] = None) -> None:
    """Send a player to Detention."""
    config = config or GameConfig()
    player.in_jail = True
    player.jail_turns = 0
    player.pos = config.jail_index


def leave_jail(player: Player) -> None:
    """Release a player from Detention."""
    player.in_jail = False
    player.jail_turns = 0


def property_value(prop: Property) -> int:
    """Rough resale estimate of a property including its improvements."""
    return math.floor(prop.cost * (1 + 0.5 * prop.upgrades))


def build_cost(prop: Property, config: Optional[GameConfig] = None) -> int:
    config = config or GameConfig()
    return math.floor(prop.cost * config.build_cost_ratio)


def mortgage_value(prop: Property, config: Optional[GameConfig] = None) -> int:
    config = config or GameConfig()
    return math.floor(prop.cost * config.mortgage_ratio)


def unmortgage_cost(prop: Property, config: Optional[GameConfig] = None) -> int:
    config = config or GameConfig()
    return math.floor(prop.cost * config.unmortgage_ratio)


def adjust_net_worth(state: GameState) -> None:
    """
    Recompute every player's net worth and trip bankruptcy flags.

    Bankruptcy is derived here rather than at the moment of a charge, so cash
    can sit anywhere above the threshold until this runs. The flag is never
    cleared once set.
    """
    for player in state.players:
        holdings = sum(
            property_value(t.prop)
            for t in state.tiles
            if t.prop is not None and t.prop.owner == player.id
        )
        player.net_worth = player.cash + holdings
        if player.cash < state.config.bankruptcy_threshold:
            player.bankrupt = True
