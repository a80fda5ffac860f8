"""
Turn-phase state machine.

Every transition takes a GameState, works on a deep copy and returns that
copy; the input is never mutated. Calls made in the wrong phase, without
enough cash or on someone else's tile do not raise: they return the copy
with one explanatory line appended to the game log.

Phases: await_roll -> await_resolve -> (await_action | await_end) -> await_roll
"""

import logging
import time
from typing import List, Optional

from metrotrade.agents import AgentFactory, learning_agents
from metrotrade.board import create_tiles
from metrotrade.config import GameConfig, InitOptions
from metrotrade.dice import next_seed, roll_dice, shuffled_deck, wrap
from metrotrade.player import Player
from metrotrade.rules import (
    adjust_net_worth,
    build_cost,
    compute_rent,
    count_owned_in_group,
    jail_player,
    leave_jail,
    mortgage_value,
    unmortgage_cost,
)
from metrotrade.spaces import MAX_UPGRADES, TileType
from metrotrade.state import GameState, Phase, Prompts

logger = logging.getLogger(__name__)

EVENT_DECK_SALT = 0xABC
FUND_DECK_SALT = 0xDEF


def _make_players(options: InitOptions, config: GameConfig) -> List[Player]:
    players = []
    for i in range(options.players):
        is_human = i < options.humans
        players.append(
            Player(
                id=i,
                name=f"You {i + 1}" if is_human else f"CPU {i + 1}",
                is_human=is_human,
                cash=config.starting_cash,
                net_worth=config.starting_cash,
            )
        )
    return players


def init_game(options: InitOptions, config: Optional[GameConfig] = None) -> GameState:
    """
    Create a new game.

    Args:
        options: Seat count, human seats and optional seed
        config: Rule constants (defaults to GameConfig())

    Returns:
        Initialized GameState in phase await_roll

    Raises:
        ValidationError: If the seat layout is impossible
    """
    options.validate()
    config = config or GameConfig()
    seed = options.seed if options.seed is not None else int(time.time() * 1000)
    seed &= 0xFFFFFFFF

    state = GameState(
        turn=0,
        dice=None,
        tiles=create_tiles(),
        players=_make_players(options, config),
        deck_event=shuffled_deck(config.deck_size, seed ^ EVENT_DECK_SALT),
        deck_fund=shuffled_deck(config.deck_size, seed ^ FUND_DECK_SALT),
        phase=Phase.AWAIT_ROLL,
        prompts=Prompts(),
        rng_seed=seed,
        settings=options,
        config=config,
    )
    state.add_log(f"Game started with {options.players} players ({options.humans} human).")
    adjust_net_worth(state)
    logger.debug(f"New game: players={options.players} humans={options.humans} seed={seed}")
    return state


def reset_game(options: Optional[InitOptions] = None, config: Optional[GameConfig] = None) -> GameState:
    """Start over, with one human against one computer unless told otherwise."""
    return init_game(options or InitOptions(players=2, humans=1), config)


def roll_and_advance(state: GameState) -> GameState:
    """Roll the dice for the current player and move their token."""
    g = state.clone()
    me = g.current_player
    if me.bankrupt:
        return g
    if g.phase != Phase.AWAIT_ROLL:
        g.add_log("Wait: already rolled. Resolve first.")
        return g

    if me.in_jail:
        me.jail_turns += 1
        if me.jail_turns >= g.config.min_jail_turns and me.cash >= g.config.jail_fine:
            me.cash -= g.config.jail_fine
            leave_jail(me)
            g.add_log(f"{me.name} paid {g.config.jail_fine} to leave Detention.")
        else:
            g.add_log(f"{me.name} waits in Detention.")
            # Waiting uses up the roll; the turn can only be ended
            g.phase = Phase.AWAIT_END
            return g

    roll = roll_dice(g.rng_seed)
    g.rng_seed = roll.seed
    g.dice = (roll.d1, roll.d2)

    old = me.pos
    new = wrap(old + roll.total)
    if new < old:
        me.cash += g.config.pass_start_bonus
        g.add_log(f"{me.name} passed Metro Hub (+{g.config.pass_start_bonus}).")
    me.pos = new

    g.prompts = Prompts(can_buy=False, must_pay=0, landed_tile=new)
    g.phase = Phase.AWAIT_RESOLVE
    logger.debug(f"{me.name} rolled {roll.d1}+{roll.d2}, moved {old} -> {new}")
    return g


def resolve_landing(state: GameState) -> GameState:
    """Apply the effect of the tile the current player landed on."""
    g = state.clone()
    if g.phase != Phase.AWAIT_RESOLVE:
        g.add_log("Wait: roll first.")
        return g

    me = g.current_player
    tile = g.tiles[me.pos]

    if tile.type == TileType.GO:
        g.add_log(f"{me.name} is at Metro Hub.")

    elif tile.is_ownable:
        prop = tile.prop
        if not prop.is_owned():
            g.prompts.can_buy = True
            g.add_log(f"{me.name} can buy {tile.name} for {prop.cost}.")
        elif prop.owner != me.id and not prop.mortgaged:
            owner = g.players[prop.owner]
            holdings = count_owned_in_group(g, owner.id, prop.group)
            rent = compute_rent(tile, holdings)
            me.cash -= rent
            owner.cash += rent
            g.prompts.must_pay = rent
            g.add_log(f"{me.name} pays {rent} to {owner.name} for {tile.name}.")

    elif tile.type == TileType.TAX:
        amount = tile.tax_amount
        me.cash -= amount
        g.prompts.must_pay = amount
        g.add_log(f"{me.name} pays tax {amount}.")

    elif tile.type == TileType.EVENT:
        amount = ((g.rng_seed % 6) - 3) * g.config.event_step
        g.rng_seed = next_seed(g.rng_seed)
        me.cash += amount
        g.add_log(f"Event card: {'Gain' if amount >= 0 else 'Lose'} {abs(amount)}.")

    elif tile.type == TileType.FUND:
        me.cash += g.config.fund_grant
        g.add_log(f"Transit fund grant +{g.config.fund_grant}.")

    elif tile.type == TileType.GO_TO_JAIL:
        jail_player(me, g.config)
        g.add_log(f"{me.name} sent to Detention.")

    else:
        g.add_log(f"{me.name} is safe at {tile.name}.")

    adjust_net_worth(g)
    g.phase = Phase.AWAIT_ACTION if g.prompts.can_buy else Phase.AWAIT_END
    return g


def buy_current(state: GameState, agents: Optional[AgentFactory] = None) -> GameState:
    """
    Buy the tile the current player is standing on.

    A computer player's learner is trained on the outcome. The phase moves
    to await_end whether or not the purchase went through.
    """
    g = state.clone()
    if g.phase != Phase.AWAIT_ACTION:
        g.add_log("Wait: nothing to buy now.")
        return g

    me = g.current_player
    tile = g.tiles[me.pos]
    prop = tile.prop
    before = g.clone()

    if prop is not None and not prop.is_owned() and me.cash >= prop.cost:
        me.cash -= prop.cost
        prop.owner = me.id
        g.add_log(f"{me.name} bought {tile.name}.")
        adjust_net_worth(g)
        if not me.is_human:
            _agent_for(agents, me.id, before).learn_buy(before, g, True)
    else:
        g.add_log(f"{me.name} cannot buy {tile.name}.")
        if prop is not None and not prop.is_owned() and not me.is_human:
            adjust_net_worth(g)
            _agent_for(agents, me.id, before).learn_buy(before, g, False)

    g.prompts.can_buy = False
    g.phase = Phase.AWAIT_END
    return g


def decline_current(state: GameState) -> GameState:
    """Pass on the offered tile without buying it."""
    g = state.clone()
    if g.phase != Phase.AWAIT_ACTION:
        g.add_log("Wait: nothing to decline now.")
        return g

    me = g.current_player
    g.prompts.can_buy = False
    g.add_log(f"{me.name} passed on {g.tiles[me.pos].name}.")
    g.phase = Phase.AWAIT_END
    return g


def build_on_owned(state: GameState, tile_index: int, agents: Optional[AgentFactory] = None) -> GameState:
    """Add one improvement level to a tile the current player owns. Allowed in any phase."""
    g = state.clone()
    me = g.current_player
    if not 0 <= tile_index < len(g.tiles):
        g.add_log(f"No tile at index {tile_index}.")
        return g

    tile = g.tiles[tile_index]
    prop = tile.prop
    if prop is None or prop.owner != me.id:
        g.add_log(f"{me.name} does not own {tile.name}.")
        return g
    if prop.upgrades >= MAX_UPGRADES:
        g.add_log(f"{tile.name} is fully upgraded.")
        return g

    cost = build_cost(prop, g.config)
    if me.cash < cost:
        g.add_log(f"{me.name} cannot afford to upgrade {tile.name} ({cost}).")
        return g

    before = g.clone()
    me.cash -= cost
    prop.upgrades += 1
    g.add_log(f"{me.name} upgraded {tile.name} (lvl {prop.upgrades}).")
    adjust_net_worth(g)
    if not me.is_human:
        _agent_for(agents, me.id, before).learn_build(before, g, True, tile_index)
    return g


def toggle_mortgage(state: GameState, tile_index: int) -> GameState:
    """Mortgage an owned tile for half its cost, or lift the mortgage for 55% of it."""
    g = state.clone()
    me = g.current_player
    if not 0 <= tile_index < len(g.tiles):
        g.add_log(f"No tile at index {tile_index}.")
        return g

    tile = g.tiles[tile_index]
    prop = tile.prop
    if prop is None or prop.owner != me.id:
        g.add_log(f"{me.name} does not own {tile.name}.")
        return g

    if prop.mortgaged:
        cost = unmortgage_cost(prop, g.config)
        if me.cash < cost:
            g.add_log(f"{me.name} cannot afford to unmortgage {tile.name} ({cost}).")
            return g
        me.cash -= cost
        prop.mortgaged = False
        g.add_log(f"{me.name} unmortgaged {tile.name} for {cost}.")
    else:
        value = mortgage_value(prop, g.config)
        me.cash += value
        prop.mortgaged = True
        g.add_log(f"{me.name} mortgaged {tile.name} for {value}.")

    adjust_net_worth(g)
    return g


def _advance_turn(g: GameState) -> None:
    """Hand the turn to the next solvent player and reset per-turn state."""
    count = len(g.players)
    nxt = (g.turn + 1) % count
    for _ in range(count):
        if not g.players[nxt].bankrupt:
            break
        nxt = (nxt + 1) % count
    g.turn = nxt
    g.dice = None
    g.prompts = Prompts()
    g.phase = Phase.AWAIT_ROLL
    adjust_net_worth(g)


def end_turn(state: GameState, agents: Optional[AgentFactory] = None) -> GameState:
    """Finish the current turn, then let computer players move until a human is up."""
    g = state.clone()
    if g.phase != Phase.AWAIT_END:
        g.add_log("Resolve your move before ending turn.")
        return g

    _advance_turn(g)
    return run_until_human(g, agents)


def run_until_human(state: GameState, agents: Optional[AgentFactory] = None) -> GameState:
    """Play computer turns until a human (or a finished game) holds the turn."""
    g = state.clone()
    guard = 0
    while (
        not g.is_over
        and not g.current_player.is_human
        and not g.current_player.bankrupt
        and guard < g.config.ai_turn_guard
    ):
        g = ai_take_turn(g, agents)
        guard += 1
    if guard >= g.config.ai_turn_guard and not g.is_over and not g.current_player.is_human:
        logger.warning(f"Stopped after {guard} consecutive computer turns")
    return g


def ai_take_turn(state: GameState, agents: Optional[AgentFactory] = None) -> GameState:
    """
    Play one complete turn for a computer player.

    Roll and resolve, let the learner decide on a purchase, try improvements
    when cash allows, then pass the turn. The turn is advanced here rather
    than through end_turn so that run_until_human is not re-entered.
    """
    g = state.clone()
    actor = g.current_player
    if actor.is_human or actor.bankrupt:
        return g

    agent = _agent_for(agents, actor.id, g)

    def same_agent(player_id, _state):
        return agent

    g = roll_and_advance(g)
    if g.phase == Phase.AWAIT_RESOLVE:
        before = g.clone()
        g = resolve_landing(g)

        tile = g.current_tile
        prop = tile.prop
        if g.phase == Phase.AWAIT_ACTION and prop is not None and not prop.is_owned():
            me = g.current_player
            if agent.decide_buy(before) and me.cash >= prop.cost:
                g = buy_current(g, same_agent)
            else:
                agent.learn_buy(before, g, False)
                g = decline_current(g)

        me = g.current_player
        if me.cash > g.config.ai_build_threshold:
            for i, t in enumerate(g.tiles):
                p = t.prop
                if p is not None and p.owner == me.id and p.upgrades < MAX_UPGRADES:
                    if agent.decide_build(g, i):
                        g = build_on_owned(g, i, same_agent)

    _advance_turn(g)
    return g


def _agent_for(agents: Optional[AgentFactory], player_id: int, state: GameState):
    factory = agents if agents is not None else learning_agents()
    return factory(player_id, state)
