"""Single-player transport: a human against the heuristic bot, in process."""

from __future__ import annotations

import asyncio
import logging
import random

from lastcard_engine.executor import IllegalMoveError, declare_last_card, execute_move
from lastcard_engine.move_generator import generate_legal_moves
from lastcard_engine.moves import DeclareLastCard
from lastcard_engine.state import DEFAULT_HAND_SIZE, GameState, create_initial_state, is_round_over
from strategies.heuristic import Difficulty, HeuristicStrategy, bot_turn_delay
from transport.schemas import PlayerSummary, PrivateHandPayload, PublicGameView
from transport.types import ConnectionStatus, TransportCallbacks
from transport.views import to_hand_payload, to_public_view

logger = logging.getLogger(__name__)

HUMAN_SEAT = 0
BOT_SEAT = 1
PLAYER_IDS = ("player", "bot")


class LocalTransport:
    """Runs a two-seat hand locally and reports it through callbacks.

    The same callback contract is used for networked play, so a UI can be
    written once against either transport.
    """

    room_id = "local-game"

    def __init__(
        self,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        seed: int | None = None,
        bot_delay: float | None = None,
        hand_size: int = DEFAULT_HAND_SIZE,
    ):
        """Create a local transport.

        Args:
            difficulty: Bot difficulty.
            seed: Seed for the deal, reshuffles and the bot's choices.
            bot_delay: Seconds before the bot acts; defaults to the
                difficulty's thinking delay.
            hand_size: Cards dealt to each seat.
        """
        self.difficulty = Difficulty(difficulty)
        self.bot = HeuristicStrategy(self.difficulty, seed=seed)
        self._explicit_delay = bot_delay
        self.bot_delay = bot_turn_delay(self.difficulty) if bot_delay is None else bot_delay
        self.hand_size = hand_size
        self.callbacks = TransportCallbacks()
        self.status = ConnectionStatus.DISCONNECTED
        self.state: GameState | None = None
        self._seed = seed
        self._rng = random.Random(seed)
        self._bot_timer: asyncio.TimerHandle | None = None

    def set_callbacks(self, callbacks: TransportCallbacks) -> None:
        """Register hooks; hooks left as None keep their previous value."""
        self.callbacks = self.callbacks.merged(callbacks)

    def set_difficulty(self, difficulty: Difficulty | str) -> None:
        """Change the bot's difficulty, and its thinking delay unless one was given."""
        self.difficulty = Difficulty(difficulty)
        self.bot.difficulty = self.difficulty
        if self._explicit_delay is None:
            self.bot_delay = bot_turn_delay(self.difficulty)

    async def connect(self) -> None:
        """Deal a new hand and schedule the game-start event."""
        self._cancel_bot_timer()
        self._set_status(ConnectionStatus.CONNECTING)
        self.state = create_initial_state(
            player_count=2,
            hand_size=self.hand_size,
            seed=self._seed,
            message="Game started! Your turn.",
        )
        self.bot.on_game_start(self.state, BOT_SEAT)
        self._set_status(ConnectionStatus.CONNECTED)
        logger.info(f"Local game started against {self.bot.name}")

        # Deferred so callers can register callbacks after connect() returns
        asyncio.get_running_loop().call_soon(self._emit_game_start)

    def disconnect(self) -> None:
        """Stop the game and cancel any pending bot move."""
        self._cancel_bot_timer()
        self.state = None
        self._set_status(ConnectionStatus.DISCONNECTED)

    async def send_action(self, move) -> None:
        """Apply a move for the human seat.

        Plays and draws need it to be the human's turn; declarations are
        made off-turn. Problems are reported through ``on_error``.
        """
        if self.state is None or self.status != ConnectionStatus.CONNECTED:
            self._error("Game not active")
            return
        if is_round_over(self.state).over:
            self._error("Game not active")
            return

        if isinstance(move, DeclareLastCard):
            move = DeclareLastCard(player=HUMAN_SEAT)
        elif self.state.current_player != HUMAN_SEAT:
            self._error("Not your turn")
            return

        try:
            new_state = execute_move(self.state, move, self._rng)
        except IllegalMoveError as e:
            self._error(str(e))
            return

        if new_state is self.state:
            self._error("Cannot declare last card now")
            return

        self._apply(HUMAN_SEAT, move, new_state)

    def _apply(self, seat: int, move, new_state: GameState) -> None:
        self.state = new_state
        self.bot.on_move_made(new_state, move, seat)
        self._emit_update(PLAYER_IDS[seat], move)

        if self._finish_if_over():
            return

        if new_state.current_player == BOT_SEAT:
            self._schedule_bot_move()
        else:
            self._bot_declare()

    def _bot_declare(self) -> None:
        state = self.state
        if state is None or state.last_card_called[BOT_SEAT]:
            return
        if not self.bot.wants_to_declare(state, BOT_SEAT):
            return
        declared = declare_last_card(state, BOT_SEAT)
        if declared is state:
            return
        self.state = declared
        self._emit_update(PLAYER_IDS[BOT_SEAT], DeclareLastCard(player=BOT_SEAT))

    def _schedule_bot_move(self) -> None:
        self._cancel_bot_timer()
        loop = asyncio.get_running_loop()
        self._bot_timer = loop.call_later(self.bot_delay, self._run_bot_turn)

    def _run_bot_turn(self) -> None:
        self._bot_timer = None
        state = self.state
        if state is None or state.current_player != BOT_SEAT:
            return
        if is_round_over(state).over:
            return

        move = self.bot.select_move(state, generate_legal_moves(state))
        logger.debug(f"Bot plays: {move}")
        self._apply(BOT_SEAT, move, execute_move(state, move, self._rng))

    def _finish_if_over(self) -> bool:
        outcome = is_round_over(self.state)
        if not outcome.over:
            return False

        if outcome.winner == HUMAN_SEAT:
            message = "Congratulations! You win!"
        elif outcome.winner == BOT_SEAT:
            message = "Bot wins! Better luck next time."
        else:
            message = "It's a draw!"
        winner_id = PLAYER_IDS[outcome.winner] if outcome.winner is not None else None

        self.bot.on_game_end(self.state, outcome.winner)
        logger.info(f"Local game over: {message}")
        if self.callbacks.on_game_over:
            self.callbacks.on_game_over(winner_id, message)
        return True

    def _public_view(self) -> PublicGameView:
        players = [
            PlayerSummary(player_id=PLAYER_IDS[seat], is_bot=seat == BOT_SEAT)
            for seat in (HUMAN_SEAT, BOT_SEAT)
        ]
        return to_public_view(self.state, self.room_id, players)

    def _hand_payload(self) -> PrivateHandPayload:
        return to_hand_payload(self.state, self.room_id, PLAYER_IDS[HUMAN_SEAT], HUMAN_SEAT)

    def _emit_game_start(self) -> None:
        if self.state is None:
            return
        if self.callbacks.on_game_start:
            self.callbacks.on_game_start(self._public_view(), self._hand_payload())

    def _emit_update(self, player_id: str, move) -> None:
        if self.callbacks.on_state_update:
            self.callbacks.on_state_update(self._public_view())
        if self.callbacks.on_hand_update:
            self.callbacks.on_hand_update(self._hand_payload())
        if self.callbacks.on_player_action:
            self.callbacks.on_player_action(player_id, move)

    def _error(self, message: str) -> None:
        logger.debug(f"Rejected local action: {message}")
        if self.callbacks.on_error:
            self.callbacks.on_error(message)

    def _set_status(self, status: ConnectionStatus) -> None:
        self.status = status
        if self.callbacks.on_connection_change:
            self.callbacks.on_connection_change(status)

    def _cancel_bot_timer(self) -> None:
        if self._bot_timer is not None:
            self._bot_timer.cancel()
            self._bot_timer = None
