"""
Tests for buying, rent, improvements and mortgages.
"""

import pytest

from metrotrade.game import (
    buy_current,
    build_on_owned,
    decline_current,
    end_turn,
    resolve_landing,
    toggle_mortgage,
)
from metrotrade.state import Phase


def test_buy_affordable_tile(two_humans, land_on):
    offered = resolve_landing(land_on(two_humans, 0, 1))
    state = buy_current(offered)

    assert state.players[0].cash == 1440
    assert state.tiles[1].prop.owner == 0
    assert state.prompts.can_buy is False
    assert state.phase == Phase.AWAIT_END
    assert state.players[0].net_worth == 1500
    assert offered.tiles[1].prop.owner is None


def test_buy_unaffordable_tile_moves_on(two_humans, land_on):
    g = land_on(two_humans, 0, 39)
    g.players[0].cash = 100
    offered = resolve_landing(g)
    state = buy_current(offered)

    assert state.tiles[39].prop.owner is None
    assert state.players[0].cash == 100
    assert state.phase == Phase.AWAIT_END
    assert "cannot buy" in state.log[-1].text


def test_buy_outside_action_phase_is_absorbed(two_humans):
    state = buy_current(two_humans)
    assert state.phase == Phase.AWAIT_ROLL
    assert state.tiles[1].prop.owner is None
    assert len(state.log) == len(two_humans.log) + 1


def test_decline_leaves_tile_unowned(two_humans, land_on):
    offered = resolve_landing(land_on(two_humans, 0, 1))
    state = decline_current(offered)
    assert state.tiles[1].prop.owner is None
    assert state.players[0].cash == 1500
    assert state.prompts.can_buy is False
    assert state.phase == Phase.AWAIT_END


def test_decline_outside_action_phase_is_absorbed(two_humans):
    state = decline_current(two_humans)
    assert state.phase == Phase.AWAIT_ROLL
    assert len(state.log) == len(two_humans.log) + 1


def test_rent_moves_cash_between_players(two_humans, land_on, owned_by):
    g = owned_by(two_humans, 0, 1)
    state = resolve_landing(land_on(g, 1, 1))
    assert state.players[1].cash == 1498
    assert state.players[0].cash == 1502
    assert state.prompts.must_pay == 2
    assert state.phase == Phase.AWAIT_END


def test_no_rent_on_own_tile(two_humans, land_on, owned_by):
    g = owned_by(two_humans, 0, 1)
    state = resolve_landing(land_on(g, 0, 1))
    assert state.players[0].cash == 1500
    assert state.prompts.must_pay == 0
    assert state.phase == Phase.AWAIT_END


def test_no_rent_on_mortgaged_tile(two_humans, land_on, owned_by):
    g = owned_by(two_humans, 0, 1)
    g.tiles[1].prop.mortgaged = True
    state = resolve_landing(land_on(g, 1, 1))
    assert state.players[1].cash == 1500
    assert state.players[0].cash == 1500


def test_group_bonus_rent(two_humans, land_on, owned_by):
    g = owned_by(two_humans, 0, 11, 13, 14)
    state = resolve_landing(land_on(g, 1, 11))
    assert state.prompts.must_pay == 15
    assert state.players[1].cash == 1485


def test_transit_group_bonus(two_humans, land_on, owned_by):
    g = owned_by(two_humans, 0, 5, 15, 25)
    state = resolve_landing(land_on(g, 1, 5))
    assert state.prompts.must_pay == 37


def test_utility_and_transit_rent(two_humans, land_on, owned_by):
    g = owned_by(two_humans, 0, 12, 35)
    on_utility = resolve_landing(land_on(g, 1, 12))
    assert on_utility.prompts.must_pay == 4
    assert on_utility.players[1].cash == 1496

    g.tiles[35].prop.upgrades = 5
    on_transit = resolve_landing(land_on(g, 1, 35))
    assert on_transit.prompts.must_pay == 200


def test_improved_rent(two_humans, land_on, owned_by):
    g = owned_by(two_humans, 0, 1)
    g.tiles[1].prop.upgrades = 3
    state = resolve_landing(land_on(g, 1, 1))
    assert state.prompts.must_pay == 90


def test_build_on_owned_tile(two_humans, owned_by):
    g = owned_by(two_humans, 0, 1)
    state = build_on_owned(g, 1)
    assert state.tiles[1].prop.upgrades == 1
    assert state.players[0].cash == 1500 - 36
    assert state.players[0].net_worth == 1464 + 90
    assert g.tiles[1].prop.upgrades == 0


@pytest.mark.parametrize("phase", list(Phase))
def test_build_allowed_in_any_phase(two_humans, owned_by, phase):
    g = owned_by(two_humans, 0, 1)
    g.phase = phase
    state = build_on_owned(g, 1)
    assert state.tiles[1].prop.upgrades == 1
    assert state.phase == phase


def test_build_requires_ownership(two_humans, owned_by):
    g = owned_by(two_humans, 1, 1)
    state = build_on_owned(g, 1)
    assert state.tiles[1].prop.upgrades == 0
    assert state.players[0].cash == 1500
    assert "does not own" in state.log[-1].text


def test_build_on_unownable_tile(two_humans):
    state = build_on_owned(two_humans, 0)
    assert state.players == two_humans.players
    assert len(state.log) == len(two_humans.log) + 1


def test_build_out_of_range_index(two_humans):
    state = build_on_owned(two_humans, 40)
    assert state.tiles == two_humans.tiles
    assert len(state.log) == len(two_humans.log) + 1


def test_build_stops_at_level_five(two_humans, owned_by):
    g = owned_by(two_humans, 0, 1)
    g.tiles[1].prop.upgrades = 5
    state = build_on_owned(g, 1)
    assert state.tiles[1].prop.upgrades == 5
    assert state.players[0].cash == 1500


def test_build_needs_cash(two_humans, owned_by):
    g = owned_by(two_humans, 0, 39)
    g.players[0].cash = 239
    state = build_on_owned(g, 39)
    assert state.tiles[39].prop.upgrades == 0
    assert state.players[0].cash == 239

    g.players[0].cash = 240
    state = build_on_owned(g, 39)
    assert state.tiles[39].prop.upgrades == 1
    assert state.players[0].cash == 0


def test_mortgage_round_trip_costs_ten_percent(two_humans, owned_by):
    g = owned_by(two_humans, 0, 39)
    mortgaged = toggle_mortgage(g, 39)
    assert mortgaged.tiles[39].prop.mortgaged
    assert mortgaged.players[0].cash == 1700

    lifted = toggle_mortgage(mortgaged, 39)
    assert not lifted.tiles[39].prop.mortgaged
    assert lifted.players[0].cash == 1480


def test_unmortgage_needs_cash(two_humans, owned_by):
    g = owned_by(two_humans, 0, 39)
    g.tiles[39].prop.mortgaged = True
    g.players[0].cash = 219
    state = toggle_mortgage(g, 39)
    assert state.tiles[39].prop.mortgaged
    assert state.players[0].cash == 219
    assert "cannot afford" in state.log[-1].text


def test_mortgage_requires_ownership(two_humans, owned_by):
    g = owned_by(two_humans, 1, 39)
    state = toggle_mortgage(g, 39)
    assert not state.tiles[39].prop.mortgaged
    assert state.players[0].cash == 1500


def test_two_player_rent_scenario(two_humans, land_on):
    """Player 0 buys the first street, player 1 lands on it and pays base rent."""
    state = resolve_landing(land_on(two_humans, 0, 1))
    state = buy_current(state)
    assert state.players[0].cash == 1440
    assert state.tiles[1].prop.owner == 0

    state = end_turn(state)
    assert state.turn == 1

    state = resolve_landing(land_on(state, 1, 1))
    assert state.players[1].cash == 1500 - 2
    assert state.players[0].cash == 1440 + 2
