"""
Public snapshot serialization of GameState.

Produces a UI-friendly, JSON-compatible view of the current game without
exposing hidden information (deck order).
"""

from __future__ import annotations

from typing import Any, Dict, List

from metrotrade.state import GameState


def serialize_snapshot(state: GameState, log_tail: int = 20) -> Dict[str, Any]:
    """Serialize a GameState into a stable JSON dict.

    The snapshot includes:
    - turn, current player, phase, dice and prompts
    - players with public info and the tiles they own
    - owned tiles with improvement and mortgage status
    - deck sizes only
    - game-over flag, winner and the most recent log lines
    """
    owned: List[Dict[str, Any]] = []
    for tile in state.tiles:
        prop = tile.prop
        if prop is None or prop.owner is None:
            continue
        owned.append(
            {
                "index": tile.index,
                "name": tile.name,
                "type": tile.type.value,
                "group": prop.group,
                "owner": prop.owner,
                "upgrades": prop.upgrades,
                "mortgaged": prop.mortgaged,
            }
        )

    players: List[Dict[str, Any]] = []
    for p in state.players:
        players.append(
            {
                "id": p.id,
                "name": p.name,
                "is_human": p.is_human,
                "cash": p.cash,
                "pos": p.pos,
                "in_jail": p.in_jail,
                "jail_turns": p.jail_turns,
                "bankrupt": p.bankrupt,
                "net_worth": p.net_worth,
                "tiles": [t["index"] for t in owned if t["owner"] == p.id],
            }
        )

    log = state.log[-log_tail:] if log_tail > 0 else []

    return {
        "turn": state.turn,
        "current_player_id": state.current_player.id,
        "phase": state.phase.value,
        "dice": list(state.dice) if state.dice is not None else None,
        "prompts": {
            "can_buy": state.prompts.can_buy,
            "must_pay": state.prompts.must_pay,
            "landed_tile": state.prompts.landed_tile,
        },
        "players": players,
        "owned_tiles": owned,
        "decks": {
            "event": len(state.deck_event),
            "fund": len(state.deck_fund),
        },
        "game_over": state.is_over,
        "winner": state.winner,
        "log": [{"t": e.t, "text": e.text} for e in log],
    }
