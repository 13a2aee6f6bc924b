"""Unit tests for ChatSession turn handling, status and reset."""

import pytest
import pytest_check as check

from src.chat.reconciler import format_error
from src.chat.session import ATTACHMENTS_ONLY_CONTENT, ChatSession, build_chat_session
from src.exceptions import InvalidSendRequest, RemoteCallError
from src.models.schemas import ChatStatus, Role, StreamChunk, TextPart
from src.parsing.file_types import PDF_MIME, TEXT_MIME
from tests.fakes import FakeDialogueFactory, FakeReply, make_raw


async def _drain(session: ChatSession, text: str = "") -> list[StreamChunk]:
    return [chunk async for chunk in session.send(text)]


class TestSend:
    async def test_scenario_text_reply_streams_into_entry(
        self, chat_session: ChatSession, dialogue_factory: FakeDialogueFactory
    ) -> None:
        """Fragments H, e, llo update the reply to H, He, Hello; no failure."""
        dialogue_factory.script(FakeReply(["H", "e", "llo"]))
        seen_status: list[ChatStatus] = []
        seen_content: list[str] = []

        stream = chat_session.send("Hello")
        reply_id = list(chat_session.transcript)[-1].id
        async for _ in stream:
            seen_status.append(chat_session.status)
            seen_content.append(chat_session.transcript.get(reply_id).content)

        user, reply = list(chat_session.transcript)
        check.equal(user.role, Role.USER)
        check.equal(user.content, "Hello")
        check.equal(reply.role, Role.ASSISTANT)
        check.equal(reply.content, "Hello")
        check.is_false(reply.in_progress)
        check.equal(chat_session.status, ChatStatus.IDLE)
        check.is_not_in(ChatStatus.FAILED, seen_status)
        check.is_not_in(ChatStatus.IDLE, seen_status[:-1])
        check.equal(seen_content, ["", "H", "He", "Hello", "Hello"])

    async def test_scenario_attachments_only_send(
        self,
        chat_session: ChatSession,
        dialogue_factory: FakeDialogueFactory,
        pdf_bytes: bytes,
    ) -> None:
        """Two pending attachments and empty text: [att1, att2, default prompt]."""
        await chat_session.upload(
            [make_raw("deed.pdf", pdf_bytes, PDF_MIME), make_raw("facts.txt", b"facts", TEXT_MIME)]
        )

        await _drain(chat_session, "")

        turn = dialogue_factory.created[0].turns[0]
        check.equal(len(turn), 3)
        check.equal(turn[0].mime_type, PDF_MIME)
        check.equal(turn[1], TextPart(text="[Document: facts.txt]\nfacts"))
        check.equal(turn[2], TextPart(text="Summarize the documents."))
        check.is_true(all(a.delivered for a in chat_session.attachments.pending))

        user = next(iter(chat_session.transcript))
        check.equal(user.content, ATTACHMENTS_ONLY_CONTENT)
        check.equal([a.name for a in user.attachments], ["deed.pdf", "facts.txt"])

    async def test_delivered_attachments_are_not_resent(
        self, chat_session: ChatSession, dialogue_factory: FakeDialogueFactory
    ) -> None:
        await chat_session.upload([make_raw("facts.txt", b"facts", TEXT_MIME)])
        await _drain(chat_session, "first")

        await _drain(chat_session, "second")

        second_turn = dialogue_factory.created[0].turns[1]
        check.equal(second_turn, [TextPart(text="second")])
        entries = list(chat_session.transcript)
        check.equal(entries[2].attachments, [])

    async def test_scenario_failure_mid_stream(
        self, chat_session: ChatSession, dialogue_factory: FakeDialogueFactory
    ) -> None:
        """Failure after Partial leaves the error text, status failed, dialogue usable."""
        dialogue_factory.script(
            FakeReply(["Partial"], error=ConnectionError("connection reset")),
            FakeReply(["Recovered"]),
        )

        chunks = await _drain(chat_session, "question")

        reply = list(chat_session.transcript)[-1]
        check.equal(reply.content, format_error(RemoteCallError("connection reset")))
        check.equal(chat_session.status, ChatStatus.FAILED)
        check.equal(chunks[-1].status, ChatStatus.FAILED)
        check.is_true(chat_session.conversation.has_dialogue)

        await _drain(chat_session, "again")

        check.equal(chat_session.status, ChatStatus.IDLE)
        check.equal(list(chat_session.transcript)[-1].content, "Recovered")
        check.equal(len(dialogue_factory.created), 1)

    async def test_first_chunk_announces_waiting(self, chat_session: ChatSession) -> None:
        stream = chat_session.send("hi")

        first = await anext(stream)

        check.equal(first, StreamChunk(content="", done=False, status=ChatStatus.AWAITING_FIRST_TOKEN))
        check.is_true(chat_session.transcript.in_progress() is not None)
        await stream.aclose()

    async def test_rejects_send_while_busy(self, chat_session: ChatSession) -> None:
        chat_session.send("first")

        with pytest.raises(InvalidSendRequest, match="already in progress"):
            chat_session.send("second")

    async def test_rejects_empty_send(self, chat_session: ChatSession) -> None:
        with pytest.raises(InvalidSendRequest):
            chat_session.send("   ")

        check.equal(len(chat_session.transcript), 0)
        check.equal(chat_session.status, ChatStatus.IDLE)

    async def test_rejects_send_when_all_attachments_delivered(
        self, chat_session: ChatSession
    ) -> None:
        await chat_session.upload([make_raw("facts.txt", b"facts", TEXT_MIME)])
        await _drain(chat_session, "")

        with pytest.raises(InvalidSendRequest):
            chat_session.send("")

    async def test_send_clears_draft(self, chat_session: ChatSession) -> None:
        chat_session.draft = "Hello"

        await _drain(chat_session, "Hello")

        assert chat_session.draft == ""

    async def test_abandoned_stream_returns_to_idle(self, chat_session: ChatSession) -> None:
        stream = chat_session.send("hi")
        await anext(stream)

        await stream.aclose()

        check.equal(chat_session.status, ChatStatus.IDLE)
        check.is_none(chat_session.transcript.in_progress())

    async def test_stream_closed_before_first_chunk_releases_session(
        self, chat_session: ChatSession, dialogue_factory: FakeDialogueFactory
    ) -> None:
        stream = chat_session.send("hi")

        await stream.aclose()

        check.equal(chat_session.status, ChatStatus.IDLE)
        check.is_none(chat_session.transcript.in_progress())
        check.equal(dialogue_factory.created, [])

        await _drain(chat_session, "again")
        check.equal(chat_session.status, ChatStatus.IDLE)

    async def test_closing_finished_stream_keeps_next_turn_busy(
        self, chat_session: ChatSession
    ) -> None:
        first = chat_session.send("one")
        async for _ in first:
            pass
        chat_session.send("two")

        await first.aclose()

        assert chat_session.is_busy


class TestReset:
    async def test_scenario_reset_clears_everything(
        self, chat_session: ChatSession, dialogue_factory: FakeDialogueFactory
    ) -> None:
        await chat_session.upload([make_raw("facts.txt", b"facts", TEXT_MIME)])
        await _drain(chat_session, "hello")
        chat_session.draft = "unsent"

        chat_session.reset()

        check.equal(chat_session.attachments.pending, [])
        check.equal(len(chat_session.transcript), 0)
        check.is_false(chat_session.conversation.has_dialogue)
        check.equal(chat_session.status, ChatStatus.IDLE)
        check.equal(chat_session.draft, "")

        await _drain(chat_session, "fresh start")
        check.equal(len(dialogue_factory.created), 2)

    async def test_reset_during_stream_drops_stale_updates(
        self, chat_session: ChatSession, dialogue_factory: FakeDialogueFactory
    ) -> None:
        dialogue_factory.script(FakeReply(["one", " two", " three"]))
        chunks: list[StreamChunk] = []

        async for chunk in chat_session.send("count"):
            chunks.append(chunk)
            if chunk.content == "one":
                chat_session.reset()

        check.equal(len(chat_session.transcript), 0)
        check.equal(chat_session.status, ChatStatus.IDLE)
        check.equal([c.content for c in chunks], ["", "one"])


class TestSnapshot:
    async def test_snapshot_hides_payloads(self, chat_session: ChatSession) -> None:
        await chat_session.upload([make_raw("facts.txt", b"facts", TEXT_MIME)])
        await _drain(chat_session, "hello")

        state = chat_session.snapshot()

        check.equal(state.status, ChatStatus.IDLE)
        check.equal([e.role for e in state.transcript], [Role.USER, Role.ASSISTANT])
        check.equal(state.transcript[0].attachments[0].name, "facts.txt")
        check.is_true(state.attachments[0].delivered)
        check.is_false(hasattr(state.attachments[0], "data"))


def test_build_chat_session_wires_components(agent_config, attachment_config) -> None:
    factory = FakeDialogueFactory()

    session = build_chat_session(agent_config, attachment_config, factory)

    check.equal(session.status, ChatStatus.IDLE)
    check.equal(session.attachments._codec.max_file_size, 50 * 1024 * 1024)
    check.is_false(session.conversation.has_dialogue)
