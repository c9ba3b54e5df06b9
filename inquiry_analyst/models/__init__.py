"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - AnalysisRequest: Initial analysis payload
    - StreamChunk: One Server-Sent Event of a streamed response
    - ExtractionResponse: Text extracted from an uploaded PDF
    - TranscriptTurn / TranscriptResponse: Visible conversation log
"""

from inquiry_analyst.models.schemas import (
    AnalysisRequest,
    ExtractionResponse,
    StreamChunk,
    StreamStatus,
    TranscriptResponse,
    TranscriptTurn,
)

__all__ = [
    "AnalysisRequest",
    "ExtractionResponse",
    "StreamChunk",
    "StreamStatus",
    "TranscriptResponse",
    "TranscriptTurn",
]
