"""Last Card rules engine."""

from lastcard_engine.cards import Card, Rank, Suit
from lastcard_engine.deck import build_deck, deal, draw_cards, shuffle
from lastcard_engine.executor import (
    IllegalMoveError,
    apply_card_effect,
    apply_draw,
    apply_penalty,
    declare_last_card,
    execute_move,
)
from lastcard_engine.move_generator import LegalMoves, generate_legal_moves, legal_moves
from lastcard_engine.moves import DeclareLastCard, DrawCards, Move, MoveType, PlayCards
from lastcard_engine.state import GameState, RoundResult, create_initial_state, is_round_over

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "build_deck",
    "shuffle",
    "deal",
    "draw_cards",
    "GameState",
    "RoundResult",
    "create_initial_state",
    "is_round_over",
    "LegalMoves",
    "legal_moves",
    "generate_legal_moves",
    "Move",
    "MoveType",
    "PlayCards",
    "DrawCards",
    "DeclareLastCard",
    "IllegalMoveError",
    "apply_card_effect",
    "apply_penalty",
    "apply_draw",
    "declare_last_card",
    "execute_move",
]
