"""PDF upload endpoint for text extraction.

Handles file upload, validation and extraction. The extracted text is
returned to the client, which uses it as the subject of an analysis.
"""

import logging

from fastapi import APIRouter, HTTPException, UploadFile, status

from inquiry_analyst.errors import ExtractionError
from inquiry_analyst.models.schemas import ExtractionResponse
from inquiry_analyst.parsing.pdf_extractor import MAX_FILE_SIZE, Document, extract_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

MAX_UPLOAD_SIZE = MAX_FILE_SIZE


def _validate_file_extension(filename: str | None) -> str:
    """Validate that file has .pdf extension.

    Args:
        filename: The uploaded filename.

    Returns:
        The validated filename.

    Raises:
        HTTPException: 400 if extension is invalid.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )

    if not filename.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are accepted",
        )

    return filename


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Args:
        file: The uploaded file.

    Returns:
        File content as bytes.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_UPLOAD_SIZE:
        size_mb = len(content) / (1024 * 1024)
        limit_mb = MAX_UPLOAD_SIZE / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:.0f}MB)",
        )

    return content


async def read_upload(file: UploadFile) -> Document:
    """Validate an uploaded PDF and load it as a Document."""
    filename = _validate_file_extension(file.filename)
    content = await _read_and_validate_size(file)
    return Document(filename=filename, content=content)


@router.post("/extract", response_model=ExtractionResponse)
async def extract_pdf(file: UploadFile) -> ExtractionResponse:
    """Upload a PDF and extract its text.

    Args:
        file: The uploaded PDF file (multipart/form-data).

    Returns:
        ExtractionResponse with filename, page count, text and metadata.

    Raises:
        400: Invalid file (not PDF, empty, corrupt, no pages).
        413: File exceeds the size limit.
    """
    document = await read_upload(file)

    try:
        extracted = await extract_text(document)
    except ExtractionError as e:
        logger.warning(f"PDF extraction error for {document.filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    return ExtractionResponse(
        filename=extracted.filename,
        pages=extracted.page_count,
        text=extracted.text,
        metadata=extracted.metadata,
    )
