"""Unit tests for chunk sequences and stream assembly."""

from collections.abc import AsyncGenerator

import pytest
import pytest_check as check

from inquiry_analyst.errors import ModelRequestError, StreamInterruptedError
from inquiry_analyst.streaming.assembler import StreamAssembler, StreamingTurn, TurnStatus
from inquiry_analyst.streaming.chunks import ChunkSequence


async def scripted(*items: str | Exception) -> AsyncGenerator[str]:
    """Yield fragments, raising any exception instance in place."""
    for item in items:
        if isinstance(item, Exception):
            raise item
        yield item


class TestChunkSequence:
    """Tests for opening and consuming a ChunkSequence."""

    async def test_replays_first_fragment(self) -> None:
        """The fragment pulled on open is the first one yielded."""
        chunks = await ChunkSequence.open(scripted("a", "b", "c"))

        check.equal([fragment async for fragment in chunks], ["a", "b", "c"])
        check.equal(chunks.received, 3)

    async def test_skips_empty_fragments(self) -> None:
        """Empty fragments carry nothing and are not counted."""
        chunks = await ChunkSequence.open(scripted("a", "", "b", ""))

        check.equal([fragment async for fragment in chunks], ["a", "b"])
        check.equal(chunks.received, 2)

    async def test_empty_response(self) -> None:
        """A response without fragments is an empty sequence."""
        chunks = await ChunkSequence.open(scripted())

        check.equal([fragment async for fragment in chunks], [])

    async def test_failure_before_first_fragment_is_request_error(self) -> None:
        """Errors during dispatch surface as ModelRequestError."""
        cause = ConnectionError("connection refused")

        with pytest.raises(ModelRequestError) as exc_info:
            await ChunkSequence.open(scripted(cause))

        check.is_(exc_info.value.cause, cause)

    async def test_failure_after_first_fragment_is_interruption(self) -> None:
        """Errors after the first fragment surface as StreamInterruptedError."""
        chunks = await ChunkSequence.open(scripted("a", "b", ConnectionError("reset")))
        received: list[str] = []

        with pytest.raises(StreamInterruptedError) as exc_info:
            async for fragment in chunks:
                received.append(fragment)

        check.equal(received, ["a", "b"])
        check.equal(exc_info.value.fragments_received, 2)

    async def test_can_only_be_consumed_once(self) -> None:
        """A second iteration is refused."""
        chunks = await ChunkSequence.open(scripted("a"))
        [fragment async for fragment in chunks]

        with pytest.raises(RuntimeError, match="once"):
            aiter(chunks)


class TestStreamingTurn:
    """Tests for the StreamingTurn buffer."""

    def test_append_accumulates(self) -> None:
        turn = StreamingTurn()
        turn.append("Con")
        turn.append("clusão")

        check.equal(turn.text, "Conclusão")
        check.equal(turn.fragments, 2)
        check.is_false(turn.copyable)

    def test_finalize_enables_copy(self) -> None:
        turn = StreamingTurn()
        turn.append("texto")
        turn.finalize()

        check.is_true(turn.is_complete)
        check.is_true(turn.copyable)

    def test_rejects_append_after_completion(self) -> None:
        """A finished turn is immutable."""
        turn = StreamingTurn()
        turn.finalize()

        with pytest.raises(RuntimeError):
            turn.append("mais")


class TestStreamAssembler:
    """Tests for incremental assembly and rendering."""

    async def test_buffer_is_prefix_after_each_fragment(self) -> None:
        """After k fragments the rendered text is their concatenation."""
        fragments = ["Con", "clu", "são: Arquivamento"]
        rendered: list[str] = []
        chunks = await ChunkSequence.open(scripted(*fragments))
        assembler = StreamAssembler(chunks, render=rendered.append)

        turn = await assembler.run()

        check.equal(rendered, ["Con", "Conclu", "Conclusão: Arquivamento"])
        check.equal(turn.text, "Conclusão: Arquivamento")
        check.equal(turn.status, TurnStatus.COMPLETE)
        check.is_true(turn.copyable)

    async def test_updates_yield_fragments_in_order(self) -> None:
        chunks = await ChunkSequence.open(scripted("um ", "dois ", "três"))
        assembler = StreamAssembler(chunks)

        check.equal([fragment async for fragment in assembler.updates()], ["um ", "dois ", "três"])

    async def test_finalize_callback_runs_once(self) -> None:
        """on_finalize receives the completed turn exactly once."""
        finished: list[StreamingTurn] = []
        chunks = await ChunkSequence.open(scripted("a", "b"))
        assembler = StreamAssembler(chunks, on_finalize=finished.append)

        await assembler.run()

        check.equal(len(finished), 1)
        check.is_(finished[0], assembler.turn)

    async def test_interruption_keeps_partial_text(self) -> None:
        """A mid-stream failure keeps what arrived and marks the turn interrupted."""
        finished: list[StreamingTurn] = []
        chunks = await ChunkSequence.open(
            scripted("Análise ", "parcial", ConnectionError("reset"))
        )
        assembler = StreamAssembler(chunks, on_finalize=finished.append)

        with pytest.raises(StreamInterruptedError):
            await assembler.run()

        check.equal(assembler.turn.text, "Análise parcial")
        check.equal(assembler.turn.status, TurnStatus.INTERRUPTED)
        check.is_false(assembler.turn.copyable)
        check.equal(finished, [])

    async def test_empty_response_completes_with_empty_text(self) -> None:
        chunks = await ChunkSequence.open(scripted())

        turn = await StreamAssembler(chunks).run()

        check.equal(turn.text, "")
        check.is_true(turn.is_complete)

    async def test_fills_given_turn(self) -> None:
        """An existing turn is filled in place."""
        turn = StreamingTurn()
        chunks = await ChunkSequence.open(scripted("x"))

        await StreamAssembler(chunks, turn).run()

        check.equal(turn.text, "x")

    async def test_can_only_be_consumed_once(self) -> None:
        chunks = await ChunkSequence.open(scripted("x"))
        assembler = StreamAssembler(chunks)
        await assembler.run()

        with pytest.raises(RuntimeError, match="once"):
            await assembler.run()
