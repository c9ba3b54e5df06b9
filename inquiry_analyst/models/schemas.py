from enum import Enum

from pydantic import BaseModel, Field, field_validator


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    GENERATING = "generating"
    COMPLETE = "complete"
    INTERRUPTED = "interrupted"
    ERROR = "error"


class AnalysisRequest(BaseModel):
    """Request payload for the initial analysis endpoint.

    Attributes:
        subject_text: Procedure text to analyze (pasted or extracted from a PDF).
    """

    subject_text: str = Field(..., min_length=1)

    @field_validator("subject_text", mode="before")
    @classmethod
    def reject_blank_subject(cls, v: str) -> str:
        """Treat whitespace-only text as empty, keeping the original text otherwise."""
        if isinstance(v, str) and not v.strip():
            return ""
        return v


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text fragment carried by this chunk.
        done: Whether this is the final chunk.
        status: Current processing status (generating, complete, interrupted, error).
        error: Error message if something went wrong.
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None


class ExtractionResponse(BaseModel):
    """Response after PDF text extraction.

    Attributes:
        filename: Name of the uploaded file.
        pages: Number of pages in the document.
        text: Extracted text, pages separated by a blank line.
        metadata: Document metadata (title, author, etc.).
    """

    filename: str
    pages: int = Field(ge=1)
    text: str
    metadata: dict[str, str] = Field(default_factory=dict)


class TranscriptTurn(BaseModel):
    """One entry of the visible conversation.

    Attributes:
        role: ``user`` or ``model``.
        text: Raw text of the turn (markdown for model turns).
        html: Rendered HTML for display.
        plain_text: Text used by the copy action.
        status: complete, streaming, interrupted or error.
        attachment: Name of the file attached to a user turn.
        error: Error message for failed or interrupted turns.
        copyable: Whether the copy action is available.
    """

    role: str
    text: str
    html: str
    plain_text: str
    status: str
    attachment: str | None = None
    error: str | None = None
    copyable: bool = False


class TranscriptResponse(BaseModel):
    """Current state of the conversation."""

    session_active: bool
    busy: bool
    turns: list[TranscriptTurn] = Field(default_factory=list)
