"""Tests for deck construction, dealing and drawing."""

import logging
import random

import pytest

from lastcard_engine.cards import Card, Rank, Suit
from lastcard_engine.deck import build_deck, deal, draw_cards, shuffle


def c(card_id: str) -> Card:
    return Card.from_id(card_id)


class TestBuildDeck:
    def test_52_unique_cards(self):
        deck = build_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    def test_canonical_order(self):
        deck = build_deck()
        assert deck[0] == Card(Rank.ACE, Suit.SPADES)
        assert deck[12] == Card(Rank.KING, Suit.SPADES)
        assert deck[13] == Card(Rank.ACE, Suit.HEARTS)
        assert deck[-1] == Card(Rank.KING, Suit.CLUBS)


class TestShuffle:
    def test_is_permutation(self):
        deck = build_deck()
        shuffled = shuffle(deck, random.Random(1))
        assert sorted(shuffled) == sorted(deck)

    def test_does_not_mutate_input(self):
        deck = build_deck()
        shuffle(deck, random.Random(1))
        assert deck == build_deck()

    def test_seeded_is_reproducible(self):
        assert shuffle(build_deck(), random.Random(7)) == shuffle(build_deck(), random.Random(7))

    def test_changes_order(self):
        assert shuffle(build_deck(), random.Random(3)) != build_deck()


class TestDeal:
    def test_contiguous_blocks(self):
        deck = build_deck()
        result = deal(deck, 2, 5)
        assert result.hands[0] == tuple(deck[0:5])
        assert result.hands[1] == tuple(deck[5:10])
        assert result.remaining == tuple(deck[10:])

    def test_conserves_cards(self):
        result = deal(build_deck(), 4, 5)
        total = sum(len(h) for h in result.hands) + len(result.remaining)
        assert total == 52

    def test_too_many_cards(self):
        with pytest.raises(ValueError):
            deal(build_deck(), 4, 14)


class TestDrawCards:
    def test_draws_from_front(self):
        deck = [c("3♠"), c("4♠"), c("5♠")]
        result = draw_cards(deck, [c("9♥")], 2)
        assert result.drawn == (c("3♠"), c("4♠"))
        assert result.deck == (c("5♠"),)
        assert result.discard_pile == (c("9♥"),)

    def test_recycles_discard_keeping_top(self):
        discard = [c("3♠"), c("4♠"), c("5♠"), c("9♥")]
        result = draw_cards([], discard, 2, random.Random(0))
        assert len(result.drawn) == 2
        assert result.discard_pile == (c("9♥"),)
        assert set(result.drawn) | set(result.deck) == {c("3♠"), c("4♠"), c("5♠")}

    def test_stops_when_nothing_to_recycle(self, caplog):
        with caplog.at_level(logging.WARNING, logger="lastcard_engine.deck"):
            result = draw_cards([c("3♠")], [c("9♥")], 3)
        assert result.drawn == (c("3♠"),)
        assert result.deck == ()
        assert result.discard_pile == (c("9♥"),)
        assert "Deck exhaustion" in caplog.text

    def test_empty_discard_and_deck(self):
        result = draw_cards([], [], 1)
        assert result.drawn == ()

    def test_conserves_cards(self):
        deck = [c("3♠")]
        discard = [c("4♠"), c("5♠"), c("6♠"), c("9♥")]
        result = draw_cards(deck, discard, 4, random.Random(3))
        assert len(result.deck) + len(result.discard_pile) + len(result.drawn) == 5
