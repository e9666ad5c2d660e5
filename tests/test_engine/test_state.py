"""Tests for game state."""

import pytest

from lastcard_engine.cards import Card
from lastcard_engine.deck import build_deck
from lastcard_engine.state import GameState, create_initial_state, is_round_over


def c(card_id: str) -> Card:
    return Card.from_id(card_id)


def make_state(hands, top="9♥", **kwargs) -> GameState:
    return GameState(
        deck=tuple(c(x) for x in ("3♦", "4♦", "5♦")),
        discard_pile=(c(top),),
        hands=tuple(tuple(c(x) for x in hand) for hand in hands),
        **kwargs,
    )


class TestCreateInitialState:
    def test_two_player_deal(self):
        state = create_initial_state(seed=42)
        assert state.player_count == 2
        assert all(len(hand) == 5 for hand in state.hands)
        assert len(state.discard_pile) == 1
        assert len(state.deck) == 52 - 10 - 1
        assert state.current_player == 0
        assert state.direction == 1
        assert state.draw_pressure == 0
        assert state.last_card_called == (False, False)
        assert state.has_played == (False, False)
        assert state.message == "Game started!"

    def test_total_cards(self):
        for players in (2, 3, 4):
            assert create_initial_state(player_count=players, seed=1).total_cards == 52

    def test_seed_is_reproducible(self):
        assert create_initial_state(seed=9) == create_initial_state(seed=9)

    def test_fixed_deck(self):
        deck = build_deck()
        state = create_initial_state(deck=deck)
        assert state.hands[0] == tuple(deck[0:5])
        assert state.hands[1] == tuple(deck[5:10])
        assert state.top_card == deck[10]
        assert state.deck == tuple(deck[11:])

    @pytest.mark.parametrize("players", [0, 1, 5])
    def test_bad_player_count(self, players):
        with pytest.raises(ValueError):
            create_initial_state(player_count=players)

    def test_hand_size_too_large(self):
        with pytest.raises(ValueError):
            create_initial_state(player_count=4, hand_size=13)


class TestGameState:
    def test_flags_default_per_seat(self):
        state = make_state([["7♣"], ["8♣"], ["9♣"]])
        assert state.last_card_called == (False, False, False)
        assert state.has_played == (False, False, False)

    def test_top_card(self):
        assert make_state([["7♣"], ["8♣"]], top="Q♠").top_card == c("Q♠")

    def test_next_player_wraps(self):
        state = make_state([["7♣"], ["8♣"], ["9♣"]], current_player=2)
        assert state.next_player() == 0
        assert state.next_player(direction=-1) == 1
        assert state.next_player(0, -1) == 2

    def test_with_helpers_do_not_mutate(self):
        state = make_state([["7♣"], ["8♣"]])
        updated = state.with_hand(0, ()).with_last_card_called(1, True).with_has_played(0)
        assert state.hands[0] == (c("7♣"),)
        assert updated.hands[0] == ()
        assert updated.last_card_called == (False, True)
        assert updated.has_played == (True, False)

    def test_frozen(self):
        state = make_state([["7♣"], ["8♣"]])
        with pytest.raises(AttributeError):
            state.current_player = 1


class TestIsRoundOver:
    def test_not_over(self):
        assert is_round_over(make_state([["7♣"], ["8♣"]])) == (False, None)

    def test_declared_empty_hand_wins(self):
        state = make_state([["7♣"], []], last_card_called=(False, True))
        result = is_round_over(state)
        assert result.over
        assert result.winner == 1

    def test_undeclared_empty_hand_is_stalemate(self):
        state = make_state([["7♣"], []])
        assert is_round_over(state) == (True, None)

    def test_first_declared_seat_wins(self):
        state = make_state([[], [], ["7♣"]], last_card_called=(False, True, False))
        assert is_round_over(state).winner == 1
