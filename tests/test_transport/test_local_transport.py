"""Tests for the single-player local transport."""

import asyncio

import pytest

from lastcard_engine.cards import Card
from lastcard_engine.moves import DeclareLastCard, DrawCards, PlayCards
from lastcard_engine.state import GameState
from strategies.heuristic import Difficulty
from transport import ConnectionStatus, LocalTransport, TransportCallbacks, to_public_view
from transport.schemas import CardModel, PlayerSummary


def c(card_id: str) -> Card:
    return Card.from_id(card_id)


def cards(*ids: str) -> tuple[Card, ...]:
    return tuple(c(x) for x in ids)


def make_state(human, bot, top="9♥", **kwargs) -> GameState:
    return GameState(
        deck=cards("3♦", "4♦", "5♦", "6♦"),
        discard_pile=(c(top),),
        hands=(cards(*human), cards(*bot)),
        **kwargs,
    )


class Recorder:
    """Collects every callback a transport fires."""

    def __init__(self):
        self.events = []

    def callbacks(self) -> TransportCallbacks:
        return TransportCallbacks(
            on_state_update=lambda view: self.events.append(("state", view)),
            on_hand_update=lambda hand: self.events.append(("hand", hand)),
            on_game_start=lambda view, hand: self.events.append(("start", view, hand)),
            on_game_over=lambda winner, msg: self.events.append(("over", winner, msg)),
            on_player_action=lambda pid, move: self.events.append(("action", pid, move)),
            on_error=lambda msg: self.events.append(("error", msg)),
            on_connection_change=lambda status: self.events.append(("status", status)),
        )

    def of(self, kind):
        return [e for e in self.events if e[0] == kind]


async def settle():
    # Let call_soon / call_later(0) callbacks run
    for _ in range(5):
        await asyncio.sleep(0)


async def connected(recorder, state=None, **kwargs) -> LocalTransport:
    transport = LocalTransport("medium", seed=1, bot_delay=0, **kwargs)
    transport.set_callbacks(recorder.callbacks())
    await transport.connect()
    await settle()
    if state is not None:
        transport.state = state
    return transport


class TestConnect:
    @pytest.mark.asyncio
    async def test_connect_starts_game(self):
        recorder = Recorder()
        transport = await connected(recorder)

        assert transport.status == ConnectionStatus.CONNECTED
        assert [e[1] for e in recorder.of("status")] == [
            ConnectionStatus.CONNECTING,
            ConnectionStatus.CONNECTED,
        ]
        (_, view, hand) = recorder.of("start")[0]
        assert view.room_id == "local-game"
        assert [p.player_id for p in view.players] == ["player", "bot"]
        assert view.players[1].is_bot
        assert view.players[1].hand_count == 5
        assert len(hand.hand) == 5
        assert view.message == "Game started! Your turn."

    @pytest.mark.asyncio
    async def test_game_start_deferred_until_callbacks_set(self):
        recorder = Recorder()
        transport = LocalTransport(seed=2, bot_delay=0)
        await transport.connect()
        transport.set_callbacks(recorder.callbacks())
        await settle()
        assert len(recorder.of("start")) == 1

    @pytest.mark.asyncio
    async def test_action_before_connect(self):
        recorder = Recorder()
        transport = LocalTransport(bot_delay=0)
        transport.set_callbacks(recorder.callbacks())
        await transport.send_action(DrawCards())
        assert recorder.of("error") == [("error", "Game not active")]

    def test_set_difficulty_updates_bot_and_delay(self):
        transport = LocalTransport("easy")
        assert transport.bot_delay == 2.0
        transport.set_difficulty("hard")
        assert transport.difficulty == Difficulty.HARD
        assert transport.bot.difficulty == Difficulty.HARD
        assert transport.bot_delay == 1.0

    def test_set_difficulty_keeps_explicit_delay(self):
        transport = LocalTransport("easy", bot_delay=0)
        transport.set_difficulty("hard")
        assert transport.bot.difficulty == Difficulty.HARD
        assert transport.bot_delay == 0

    @pytest.mark.asyncio
    async def test_set_callbacks_merges(self):
        seen = []
        transport = LocalTransport(bot_delay=0)
        transport.set_callbacks(TransportCallbacks(on_error=seen.append))
        transport.set_callbacks(TransportCallbacks(on_state_update=lambda view: None))
        await transport.send_action(DrawCards())
        assert seen == ["Game not active"]


class TestActions:
    @pytest.mark.asyncio
    async def test_not_your_turn(self):
        recorder = Recorder()
        transport = await connected(recorder, make_state(["5♥"], ["5♣"], current_player=1))
        await transport.send_action(DrawCards())
        assert recorder.of("error") == [("error", "Not your turn")]

    @pytest.mark.asyncio
    async def test_illegal_play_is_reported(self):
        recorder = Recorder()
        transport = await connected(recorder, make_state(["3♣", "4♣"], ["5♣"]))
        before = transport.state

        await transport.send_action(PlayCards(cards=cards("3♣")))

        assert "Cannot play" in recorder.of("error")[0][1]
        assert transport.state is before

    @pytest.mark.asyncio
    async def test_play_then_bot_replies(self):
        recorder = Recorder()
        transport = await connected(recorder, make_state(["5♥", "3♣"], ["5♣", "6♦"]))

        await transport.send_action(PlayCards(cards=cards("5♥")))
        await settle()

        actions = recorder.of("action")
        assert actions[0] == ("action", "player", PlayCards(cards=cards("5♥")))
        assert actions[1] == ("action", "bot", PlayCards(cards=cards("5♣")))
        assert transport.state.current_player == 0

        last_view = recorder.of("state")[-1][1]
        assert last_view.discard_pile[-1].id == "5♣"
        assert last_view.players[1].hand_count == 1
        last_hand = recorder.of("hand")[-1][1]
        assert [card.id for card in last_hand.hand] == ["3♣"]

    @pytest.mark.asyncio
    async def test_disconnect_cancels_bot_move(self):
        recorder = Recorder()
        transport = LocalTransport(seed=1, bot_delay=0.05)
        transport.set_callbacks(recorder.callbacks())
        await transport.connect()
        transport.state = make_state(["5♥", "3♣"], ["5♣", "6♦"])

        await transport.send_action(PlayCards(cards=cards("5♥")))
        transport.disconnect()
        await asyncio.sleep(0.1)

        assert [e[1] for e in recorder.of("action")] == ["player"]
        assert transport.state is None
        assert transport.status == ConnectionStatus.DISCONNECTED

    @pytest.mark.asyncio
    async def test_bot_declares_while_waiting(self):
        recorder = Recorder()
        state = make_state(["8♥", "3♥"], ["8♣"], has_played=(True, False))
        transport = await connected(recorder, state)

        # The Eight skips the bot, handing the turn straight back
        await transport.send_action(PlayCards(cards=cards("8♥")))

        assert transport.state.last_card_called == (False, True)
        assert recorder.of("action")[-1] == ("action", "bot", DeclareLastCard(player=1))

    @pytest.mark.asyncio
    async def test_rejected_declaration(self):
        recorder = Recorder()
        transport = await connected(recorder, make_state(["5♥", "3♣"], ["5♣"]))
        await transport.send_action(DeclareLastCard(player=0))
        assert recorder.of("error") == [("error", "Cannot declare last card now")]

    @pytest.mark.asyncio
    async def test_human_wins(self):
        recorder = Recorder()
        state = make_state(["7♣"], ["5♣", "6♦"], top="7♥", last_card_called=(True, False))
        transport = await connected(recorder, state)

        await transport.send_action(PlayCards(cards=cards("7♣")))

        assert recorder.of("over") == [("over", "player", "Congratulations! You win!")]
        await transport.send_action(DrawCards())
        assert recorder.of("error")[-1] == ("error", "Game not active")


class TestViews:
    def test_public_view_hides_hands(self):
        state = make_state(["5♥", "3♣"], ["5♣"])
        players = [PlayerSummary(player_id="ann"), PlayerSummary(player_id="bob")]
        view = to_public_view(state, "ROOM01", players)

        data = view.model_dump()
        assert "hands" not in data
        assert [p.hand_count for p in view.players] == [2, 1]
        assert view.deck_count == 4
        assert players[0].hand_count == 0

    def test_card_model_round_trip(self):
        model = CardModel.from_card(c("10♥"))
        assert model.id == "10♥"
        assert model.is_red
        assert model.to_card() is c("10♥")
