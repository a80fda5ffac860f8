"""
Tests for the board template.
"""

from metrotrade.board import BOARD, TRANSIT_RENT, UTILITY_RENT, create_tiles, group_size
from metrotrade.spaces import TileType


def test_board_has_forty_indexed_tiles():
    assert len(BOARD) == 40
    assert [t.index for t in BOARD] == list(range(40))


def test_special_tiles():
    assert BOARD[0].type == TileType.GO
    assert BOARD[10].type == TileType.VISIT
    assert BOARD[20].type == TileType.PARKING
    assert BOARD[30].type == TileType.GO_TO_JAIL
    assert BOARD[4].type == TileType.TAX and BOARD[4].tax_amount == 200
    assert BOARD[38].type == TileType.TAX and BOARD[38].tax_amount == 100


def test_first_street_economics():
    prop = BOARD[1].prop
    assert prop.cost == 60
    assert prop.base_rent == [2, 10, 30, 90, 160, 250]
    assert prop.owner is None
    assert prop.upgrades == 0


def test_every_ownable_tile_has_six_rent_levels():
    for tile in BOARD:
        if tile.type in (TileType.PROPERTY, TileType.TRANSIT, TileType.UTILITY):
            assert tile.prop is not None
            assert len(tile.prop.base_rent) == 6
        else:
            assert tile.prop is None


def test_groups():
    assert group_size(BOARD, "transit") == 4
    assert group_size(BOARD, "utility") == 2
    assert group_size(BOARD, "brown") == 2


def test_create_tiles_is_independent_copy():
    tiles = create_tiles()
    tiles[1].prop.owner = 0
    tiles[1].prop.upgrades = 3
    assert BOARD[1].prop.owner is None
    assert BOARD[1].prop.upgrades == 0
    assert create_tiles()[1].prop.owner is None


def test_transit_and_utility_rent_tables():
    assert TRANSIT_RENT == [25, 50, 100, 200, 200, 200]
    assert UTILITY_RENT == [4, 10, 30, 90, 160, 250]
    assert BOARD[5].prop.cost == 200
    assert BOARD[12].prop.cost == 150
    assert BOARD[28].prop.base_rent == UTILITY_RENT


def test_ownable_tiles():
    assert BOARD[1].is_ownable
    assert BOARD[5].is_ownable
    assert BOARD[12].is_ownable
    assert not BOARD[0].is_ownable
    assert not BOARD[4].is_ownable
    assert not BOARD[30].is_ownable
