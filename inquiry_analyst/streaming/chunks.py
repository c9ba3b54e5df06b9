"""Lazy, single-use sequence of response text fragments."""

from collections.abc import AsyncGenerator, AsyncIterator

from inquiry_analyst.errors import ModelRequestError, StreamInterruptedError


class ChunkSequence:
    """The text fragments of one in-flight model response.

    Finite and not restartable: it can be iterated exactly once. Empty
    fragments are skipped. Any failure while pulling a fragment ends the
    sequence with ``StreamInterruptedError``.
    """

    def __init__(self, fragments: AsyncIterator[str], head: str | None = None) -> None:
        self._fragments = fragments
        self._head = head
        self._consumed = False
        self.received = 0

    @classmethod
    async def open(cls, fragments: AsyncIterator[str]) -> "ChunkSequence":
        """Dispatch the request by pulling its first fragment.

        Args:
            fragments: Async iterator returned by the model service.

        Returns:
            A ChunkSequence that replays the first fragment, then the rest.

        Raises:
            ModelRequestError: If the request fails before any fragment arrives.
        """
        iterator = aiter(fragments)
        try:
            head = await anext(iterator)
        except StopAsyncIteration:
            return cls(iterator, head=None)
        except ModelRequestError:
            raise
        except Exception as e:
            raise ModelRequestError(f"Model request failed: {e}", cause=e) from e
        return cls(iterator, head=head)

    def __aiter__(self) -> AsyncIterator[str]:
        if self._consumed:
            raise RuntimeError("ChunkSequence can only be consumed once")
        self._consumed = True
        return self._iterate()

    async def _iterate(self) -> AsyncGenerator[str]:
        if self._head:
            self.received += 1
            yield self._head
        self._head = None

        try:
            async for fragment in self._fragments:
                if not fragment:
                    continue
                self.received += 1
                yield fragment
        except StreamInterruptedError:
            raise
        except Exception as e:
            raise StreamInterruptedError(
                f"Response stream interrupted: {e}", fragments_received=self.received
            ) from e
