"""HTTP side of the analysis page: requests to the API and SSE decoding."""

from collections.abc import AsyncGenerator, Callable

import httpx

from inquiry_analyst.errors import AnalystError, ModelRequestError, StreamInterruptedError
from inquiry_analyst.models.schemas import StreamChunk, StreamStatus, TranscriptTurn
from inquiry_analyst.streaming.assembler import StreamAssembler, StreamingTurn
from inquiry_analyst.streaming.chunks import ChunkSequence


class ApiError(AnalystError):
    """Raised when the API rejects a request before streaming."""


async def raise_for_status(response: httpx.Response) -> None:
    """Raise ApiError with the response's ``detail`` unless it succeeded."""
    if response.is_success:
        return
    await response.aread()
    try:
        detail = response.json().get("detail", response.text)
    except ValueError:
        detail = response.text
    if isinstance(detail, list):
        detail = "; ".join(str(item.get("msg", item)) for item in detail)
    raise ApiError(f"{detail}")


async def sse_fragments(response: httpx.Response) -> AsyncGenerator[str]:
    """Turn the SSE body of a chat response into text fragments."""
    async for line in response.aiter_lines():
        if not line.startswith("data: "):
            continue
        chunk = StreamChunk.model_validate_json(line.removeprefix("data: "))
        if chunk.error:
            if chunk.status is StreamStatus.ERROR:
                raise ModelRequestError(chunk.error)
            raise StreamInterruptedError(chunk.error)
        if chunk.done:
            return
        if chunk.content:
            yield chunk.content


async def stream_chat(
    client: httpx.AsyncClient,
    path: str,
    render: Callable[[str], None],
    **request_kwargs,
) -> StreamingTurn:
    """POST to a chat endpoint and assemble the streamed answer.

    Args:
        client: Client bound to the API base URL.
        path: ``/chat/analysis`` or ``/chat/follow-up``.
        render: Called with the full text after every fragment.
        **request_kwargs: Passed to the request (``json``, ``data``, ``files``).

    Returns:
        The completed turn.

    Raises:
        ApiError: The API rejected the request.
        ModelRequestError: The model request failed before any text arrived.
        StreamInterruptedError: The answer stopped early. Partial text was rendered.
        httpx.RequestError: The API could not be reached.
    """
    async with client.stream("POST", path, **request_kwargs) as response:
        await raise_for_status(response)
        chunks = await ChunkSequence.open(sse_fragments(response))
        return await StreamAssembler(chunks, render=render).run()


def procedure_turns(turns: list[TranscriptTurn]) -> set[int]:
    """Indexes of the user turns that carry procedure text.

    Every user turn before the first model turn that got an answer is an
    attempt at the initial analysis, including retries after a failure.
    """
    indexes: set[int] = set()
    for index, turn in enumerate(turns):
        if turn.role == "user":
            indexes.add(index)
        elif turn.status != "error":
            break
    return indexes
