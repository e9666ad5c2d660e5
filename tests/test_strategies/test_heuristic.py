"""Tests for bot strategies."""

import pytest

from lastcard_engine.cards import Card
from lastcard_engine.move_generator import generate_legal_moves
from lastcard_engine.moves import DrawCards, PlayCards
from lastcard_engine.state import GameState, create_initial_state
from strategies import (
    Difficulty,
    HeuristicStrategy,
    RandomStrategy,
    StrategyFactory,
    bot_turn_delay,
    create_strategy,
)


def c(card_id: str) -> Card:
    return Card.from_id(card_id)


def cards(*ids: str) -> tuple[Card, ...]:
    return tuple(c(x) for x in ids)


def make_state(hand, top="9♥", **kwargs) -> GameState:
    return GameState(
        deck=cards("3♦", "4♦", "5♦"),
        discard_pile=(c(top),),
        hands=(cards(*hand), cards("K♠", "K♣")),
        **kwargs,
    )


def choose(strategy, state):
    return strategy.select_move(state, generate_legal_moves(state))


class TestHeuristicStrategy:
    def test_draws_without_plays(self):
        state = make_state(["3♣", "4♣"])
        assert choose(HeuristicStrategy(), state) == DrawCards()

    def test_prefers_two(self):
        state = make_state(["5♥", "2♥", "J♥"])
        move = choose(HeuristicStrategy(), state)
        assert move.last_card == c("2♥")

    def test_prefers_black_jack_over_red_jack(self):
        state = make_state(["J♠", "J♥", "5♥"], top="J♦")
        move = choose(HeuristicStrategy(), state)
        assert move.last_card == c("J♠")

    def test_red_jack_before_ace(self):
        state = make_state(["A♥", "J♥"])
        assert choose(HeuristicStrategy(), state).last_card == c("J♥")

    def test_ties_go_to_most_pressure(self):
        state = make_state(["2♥", "2♠", "7♣"])
        move = choose(HeuristicStrategy(), state)
        assert move == PlayCards(cards=cards("2♥", "2♠"))

    def test_first_play_when_nothing_preferred(self):
        state = make_state(["5♥", "6♥", "3♣"])
        assert choose(HeuristicStrategy(), state) == PlayCards(cards=cards("5♥"))

    def test_hard_maximises_pressure(self):
        state = make_state(["2♠", "J♠", "5♥"], top="9♠")
        assert choose(HeuristicStrategy(), state).last_card == c("2♠")
        assert choose(HeuristicStrategy(Difficulty.HARD), state).last_card == c("J♠")

    def test_finishes_when_declared(self):
        state = make_state(["5♥", "6♥"], last_card_called=(True, False))
        move = choose(HeuristicStrategy(), state)
        assert move == PlayCards(cards=cards("5♥", "6♥"))

    def test_easy_always_legal(self):
        strategy = HeuristicStrategy("easy", seed=4)
        state = create_initial_state(seed=4)
        legal = generate_legal_moves(state)
        for _ in range(20):
            assert strategy.select_move(state, legal) in legal

    def test_no_moves(self):
        with pytest.raises(ValueError):
            HeuristicStrategy().select_move(make_state(["3♣"]), [])

    def test_name(self):
        assert HeuristicStrategy("hard").name == "Heuristic (hard)"

    def test_wants_to_declare_by_default(self):
        assert HeuristicStrategy().wants_to_declare(make_state(["3♣"]), 0)


class TestBotDelay:
    def test_delays(self):
        assert bot_turn_delay("easy") == 2.0
        assert bot_turn_delay(Difficulty.MEDIUM) == 1.5
        assert bot_turn_delay("hard") == 1.0

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError):
            bot_turn_delay("impossible")


class TestStrategyFactory:
    def test_create_each(self):
        for name in StrategyFactory.AVAILABLE_STRATEGIES:
            assert create_strategy(name) is not None

    def test_heuristic_alias(self):
        strategy = create_strategy("heuristic")
        assert isinstance(strategy, HeuristicStrategy)
        assert strategy.difficulty == Difficulty.MEDIUM

    def test_random(self):
        assert isinstance(create_strategy("RANDOM", {"seed": 1}), RandomStrategy)

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_strategy("minimax")


class TestRandomStrategy:
    def test_plays_when_possible(self):
        state = make_state(["5♥", "3♣"])
        strategy = RandomStrategy(seed=1)
        for _ in range(10):
            assert choose(strategy, state) == PlayCards(cards=cards("5♥"))

    def test_draws_when_stuck(self):
        assert choose(RandomStrategy(seed=1), make_state(["3♣"])) == DrawCards()

    def test_voluntary_draws(self):
        strategy = RandomStrategy(seed=1, voluntary_draws=True)
        state = make_state(["5♥", "3♣"])
        seen = {choose(strategy, state) for _ in range(50)}
        assert seen == {PlayCards(cards=cards("5♥")), DrawCards()}
        assert strategy.name == "Random (drawing)"
