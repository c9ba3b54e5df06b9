"""PDF parsing utilities for document processing.

Turns uploaded PDFs into ordered plain text ready to be sent to the model,
either as the subject of an analysis or as a follow-up attachment.

Responsibilities:
    - Upload validation (size, PDF header)
    - Per-page text extraction with pypdf, fanned out over worker threads
    - Metadata extraction (title, author, dates)
"""

from inquiry_analyst.parsing.pdf_extractor import Document, ExtractedText, extract_text

__all__ = ["Document", "ExtractedText", "extract_text"]
