"""Streaming primitives for model responses.

Responsibilities:
    - ChunkSequence: lazy, single-use sequence of text fragments
    - StreamAssembler: appends fragments to a turn buffer and drives rendering
"""

from inquiry_analyst.streaming.assembler import StreamAssembler, StreamingTurn, TurnStatus
from inquiry_analyst.streaming.chunks import ChunkSequence

__all__ = ["ChunkSequence", "StreamAssembler", "StreamingTurn", "TurnStatus"]
