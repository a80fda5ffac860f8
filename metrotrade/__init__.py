"""
MetroTrade simulation core.

A deterministic, turn-based property-trading engine with a seeded PRNG,
rent economics and a small tabular learning opponent.
"""

from metrotrade.agents import Agent, LearningAgent, learning_agents
from metrotrade.config import GameConfig, InitOptions, LearnerConfig
from metrotrade.game import (
    ai_take_turn,
    buy_current,
    build_on_owned,
    decline_current,
    end_turn,
    init_game,
    reset_game,
    resolve_landing,
    roll_and_advance,
    run_until_human,
    toggle_mortgage,
)
from metrotrade.player import Player
from metrotrade.session import GameSession
from metrotrade.state import GameState, Phase, Prompts
from metrotrade.storage import JsonFileStorage, KeyValueStorage, MemoryStorage, NullStorage, SqlStorage

__version__ = "0.1.0"

__all__ = [
    "Agent",
    "LearningAgent",
    "learning_agents",
    "GameConfig",
    "InitOptions",
    "LearnerConfig",
    "ai_take_turn",
    "buy_current",
    "build_on_owned",
    "decline_current",
    "end_turn",
    "init_game",
    "reset_game",
    "resolve_landing",
    "roll_and_advance",
    "run_until_human",
    "toggle_mortgage",
    "Player",
    "GameSession",
    "GameState",
    "Phase",
    "Prompts",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "NullStorage",
    "SqlStorage",
]
