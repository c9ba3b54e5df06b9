"""Chat endpoints: initial analysis, follow-ups and transcript.

Responses to analysis and follow-up requests are Server-Sent Events, one
``StreamChunk`` per ``data:`` line. Problems found before dispatch are
returned as HTTP errors; model and stream failures arrive as a final chunk
with ``error`` set.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from inquiry_analyst.agent.workflow import AnalysisWorkflow, ResponseUpdates, TranscriptEntry
from inquiry_analyst.api.routes import read_upload
from inquiry_analyst.errors import (
    ExtractionError,
    InvalidMessageError,
    RequestInFlightError,
    SessionAlreadyStartedError,
    SessionNotStartedError,
)
from inquiry_analyst.models.schemas import (
    AnalysisRequest,
    TranscriptResponse,
    TranscriptTurn,
)
from inquiry_analyst.rendering.markdown import markdown_to_html, markdown_to_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

SSE_HEADERS = {"Cache-Control": "no-cache", "X-Accel-Buffering": "no"}


def get_workflow(request: Request) -> AnalysisWorkflow:
    """Return the workflow owned by the application."""
    return request.app.state.workflow


async def _event_stream(updates: ResponseUpdates) -> AsyncGenerator[str]:
    try:
        async for chunk in updates:
            yield f"data: {chunk.model_dump_json()}\n\n"
    finally:
        await updates.aclose()


def _streaming_response(updates: ResponseUpdates) -> StreamingResponse:
    # The background close also runs when the body was never iterated.
    return StreamingResponse(
        _event_stream(updates),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
        background=BackgroundTask(updates.aclose),
    )


@router.post("/analysis")
async def stream_analysis(
    payload: AnalysisRequest,
    workflow: AnalysisWorkflow = Depends(get_workflow),
) -> StreamingResponse:
    """Start the analysis of a procedure and stream the response.

    Raises:
        409: An analysis is already active or a request is in flight.
        422: Empty subject text.
    """
    try:
        updates = await workflow.start_analysis(payload.subject_text)
    except (SessionAlreadyStartedError, RequestInFlightError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except InvalidMessageError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        ) from e

    return _streaming_response(updates)


@router.post("/follow-up")
async def stream_follow_up(
    instruction: str = Form(""),
    file: UploadFile | None = File(None),
    workflow: AnalysisWorkflow = Depends(get_workflow),
) -> StreamingResponse:
    """Send a follow-up message, optionally with an attached PDF.

    Raises:
        400: The attachment is not a readable PDF.
        409: No analysis was started, or a request is in flight.
        413: The attachment exceeds the size limit.
        422: Neither an instruction nor an attachment was sent.
    """
    attachment = await read_upload(file) if file is not None and file.filename else None

    try:
        updates = await workflow.send_follow_up(instruction, attachment)
    except (SessionNotStartedError, RequestInFlightError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except InvalidMessageError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        ) from e
    except ExtractionError as e:
        logger.warning(f"Attachment extraction failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Erro ao processar o arquivo anexo: {e}",
        ) from e

    return _streaming_response(updates)


def _to_turn(entry: TranscriptEntry) -> TranscriptTurn:
    return TranscriptTurn(
        role=entry.role.value,
        text=entry.text,
        html=markdown_to_html(entry.text),
        plain_text=markdown_to_text(entry.text),
        status=entry.status,
        attachment=entry.attachment,
        error=entry.error,
        copyable=entry.copyable,
    )


@router.get("/transcript", response_model=TranscriptResponse)
async def get_transcript(
    workflow: AnalysisWorkflow = Depends(get_workflow),
) -> TranscriptResponse:
    """Return the visible conversation so far."""
    return TranscriptResponse(
        session_active=workflow.session.is_active,
        busy=workflow.busy,
        turns=[_to_turn(entry) for entry in workflow.transcript],
    )


@router.post("/reset")
async def reset_conversation(
    workflow: AnalysisWorkflow = Depends(get_workflow),
) -> dict[str, str]:
    """Discard the current conversation so a new analysis can start.

    Raises:
        409: A request is still in flight.
    """
    try:
        workflow.reset()
    except RequestInFlightError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return {"status": "reset"}
