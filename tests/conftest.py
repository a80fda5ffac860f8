"""Shared test fixtures for MetroTrade tests."""

import pytest

from metrotrade.agents import Agent
from metrotrade.config import InitOptions
from metrotrade.game import init_game
from metrotrade.state import GameState, Phase
from metrotrade.storage import MemoryStorage


class ScriptedAgent(Agent):
    """Agent with fixed answers that records what it was told."""

    def __init__(self, player_id: int, buy: bool = True, build: bool = False):
        super().__init__(player_id)
        self.buy = buy
        self.build = build
        self.buy_lessons = []
        self.build_lessons = []

    def decide_buy(self, state):
        return self.buy

    def decide_build(self, state, tile_index):
        return self.build

    def learn_buy(self, before, after, did_buy):
        self.buy_lessons.append(did_buy)

    def learn_build(self, before, after, did_build, tile_index=None):
        self.build_lessons.append((tile_index, did_build))


def land(state: GameState, player_id: int, pos: int) -> GameState:
    """Copy of state with player_id holding the turn, standing on pos, ready to resolve."""
    g = state.clone()
    g.turn = player_id
    g.players[player_id].pos = pos
    g.prompts.landed_tile = pos
    g.phase = Phase.AWAIT_RESOLVE
    return g


def give(state: GameState, player_id: int, *tiles: int) -> GameState:
    """Copy of state with tiles assigned to player_id."""
    g = state.clone()
    for index in tiles:
        g.tiles[index].prop.owner = player_id
    return g


@pytest.fixture
def two_humans():
    """Two human seats and a fixed seed."""
    return init_game(InitOptions(players=2, humans=2, seed=42))


@pytest.fixture
def human_vs_cpu():
    """One human against one computer player, fixed seed."""
    return init_game(InitOptions(players=2, humans=1, seed=7))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def scripted():
    """Factory producing one ScriptedAgent per seat and remembering them."""

    class Factory:
        def __init__(self):
            self.agents = {}
            self.calls = 0
            self.buy = True
            self.build = False

        def __call__(self, player_id, state):
            self.calls += 1
            if player_id not in self.agents:
                self.agents[player_id] = ScriptedAgent(player_id, self.buy, self.build)
            return self.agents[player_id]

    return Factory()


@pytest.fixture
def land_on():
    return land


@pytest.fixture
def owned_by():
    return give
