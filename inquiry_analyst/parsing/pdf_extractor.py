"""PDF text extraction using pypdf.

Turns an uploaded PDF into ordered plain text, one string per page.
Pages are read in parallel batches and joined back in page order.
"""

import asyncio
import io
import logging
import os

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from inquiry_analyst.errors import ExtractionError

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = int(os.getenv("MAX_UPLOAD_MB", "10")) * 1024 * 1024
EXTRACTION_WORKERS = max(1, int(os.getenv("PDF_EXTRACTION_WORKERS", "4")))
PDF_MAGIC_BYTES = b"%PDF"
PAGE_SEPARATOR = "\n\n"


class Document(BaseModel):
    """A binary document uploaded by the user.

    Attributes:
        filename: Original file name.
        content: Raw bytes of the file.
    """

    filename: str
    content: bytes


class ExtractedText(BaseModel):
    """Plain text recovered from a document, ordered by source page.

    Attributes:
        filename: Name of the document the text came from.
        pages: One string per PDF page, in page order. Empty pages are kept.
        metadata: Document metadata (title, author, etc.).
    """

    filename: str
    pages: list[str] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def text(self) -> str:
        """All pages joined by a blank line, trimmed."""
        return PAGE_SEPARATOR.join(self.pages).strip()


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.

    Raises:
        ExtractionError: If validation fails.
    """
    if not file_content:
        raise ExtractionError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        limit_mb = MAX_FILE_SIZE / (1024 * 1024)
        raise ExtractionError(
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:.0f}MB)"
        )

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise ExtractionError("Invalid PDF: file does not start with PDF header")


def _open_reader(file_content: bytes) -> PdfReader:
    try:
        return PdfReader(io.BytesIO(file_content))
    except PdfReadError as e:
        raise ExtractionError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise ExtractionError(f"Failed to read PDF: {e}") from e


def _extract_metadata(reader: PdfReader) -> dict[str, str]:
    """Extract metadata from PDF reader.

    Args:
        reader: Initialized PdfReader instance.

    Returns:
        Dictionary of metadata fields that are present.
    """
    metadata: dict[str, str | None] = {}

    try:
        if reader.metadata:
            metadata["title"] = reader.metadata.get("/Title")
            metadata["author"] = reader.metadata.get("/Author")
            metadata["subject"] = reader.metadata.get("/Subject")
            metadata["creator"] = reader.metadata.get("/Creator")
            metadata["producer"] = reader.metadata.get("/Producer")

            creation_date = reader.metadata.get("/CreationDate")
            if creation_date:
                metadata["creation_date"] = str(creation_date)

            mod_date = reader.metadata.get("/ModDate")
            if mod_date:
                metadata["modification_date"] = str(mod_date)
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")

    return {k: str(v) for k, v in metadata.items() if v is not None}


def _page_tokens(page) -> list[str]:
    """Collect the text runs of a page in content-stream order.

    pypdf may flush several lines in one visitor call, so each call is
    split on line breaks; blank runs are dropped.
    """
    tokens: list[str] = []

    def visitor(text, cm, tm, font_dict, font_size) -> None:
        for line in text.splitlines():
            if token := line.strip():
                tokens.append(token)

    page.extract_text(visitor_text=visitor)
    return tokens


def _extract_batch(file_content: bytes, page_numbers: range) -> list[str]:
    """Extract the page strings for a contiguous range of pages.

    Each batch opens its own reader so worker threads share nothing
    but the immutable input bytes.
    """
    reader = _open_reader(file_content)
    page_texts: list[str] = []
    for index in page_numbers:
        try:
            page_texts.append(" ".join(_page_tokens(reader.pages[index])))
        except Exception as e:
            raise ExtractionError(f"Failed to extract text from page {index + 1}: {e}") from e
    return page_texts


def _page_batches(page_count: int, workers: int) -> list[range]:
    """Split ``range(page_count)`` into at most ``workers`` contiguous ranges."""
    workers = max(1, min(workers, page_count))
    size, remainder = divmod(page_count, workers)
    batches: list[range] = []
    start = 0
    for i in range(workers):
        end = start + size + (1 if i < remainder else 0)
        batches.append(range(start, end))
        start = end
    return batches


def _read_outline(file_content: bytes) -> tuple[int, dict[str, str]]:
    reader = _open_reader(file_content)
    try:
        page_count = len(reader.pages)
    except Exception as e:
        raise ExtractionError(f"Failed to read PDF pages: {e}") from e
    return page_count, _extract_metadata(reader)


async def extract_text(
    document: Document,
    workers: int = EXTRACTION_WORKERS,
) -> ExtractedText:
    """Extract ordered plain text from a PDF document.

    Args:
        document: The uploaded document.
        workers: Maximum number of page batches extracted concurrently.

    Returns:
        ExtractedText with one entry per page, in page order.

    Raises:
        ExtractionError: If the file is empty, too large, not a PDF, corrupt,
            has no pages, or any page fails to extract. Partial results are
            never returned.
    """
    _validate_pdf_bytes(document.content)

    page_count, metadata = await asyncio.to_thread(_read_outline, document.content)
    if page_count == 0:
        raise ExtractionError("PDF contains no pages")

    batches = _page_batches(page_count, workers)
    results = await asyncio.gather(
        *(asyncio.to_thread(_extract_batch, document.content, batch) for batch in batches)
    )
    pages = [page_text for batch_pages in results for page_text in batch_pages]

    extracted = ExtractedText(filename=document.filename, pages=pages, metadata=metadata)
    if not extracted.text:
        logger.warning(
            f"{document.filename} contains no extractable text (may be scanned/image-based)"
        )
    logger.info(f"Extracted {page_count} pages from {document.filename}")
    return extracted
