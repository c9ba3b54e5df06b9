"""Integration tests for the PDF extraction endpoint.

Uploads generated PDFs through the FastAPI app, no mocks.
"""

import pytest
from httpx import AsyncClient

from inquiry_analyst.api import routes
from inquiry_analyst.models.schemas import ExtractionResponse
from tests.pdf_factory import build_pdf


class TestExtractEndpoint:
    """Integration tests for POST /documents/extract."""

    async def test_extract_pdf_success(self, async_client: AsyncClient, sample_pdf: bytes) -> None:
        """Valid PDF returns filename, page count and text in page order."""
        response = await async_client.post(
            "/documents/extract",
            files={"file": ("inquerito.pdf", sample_pdf, "application/pdf")},
        )

        assert response.status_code == 200
        data = ExtractionResponse.model_validate(response.json())
        assert data.filename == "inquerito.pdf"
        assert data.pages == 3
        assert data.text.index("Inquerito Policial") < data.text.index("Relatorio final")
        assert data.metadata.get("title") == "Inquerito 123"

    async def test_uppercase_extension_accepted(
        self, async_client: AsyncClient, sample_pdf: bytes
    ) -> None:
        response = await async_client.post(
            "/documents/extract",
            files={"file": ("INQUERITO.PDF", sample_pdf, "application/pdf")},
        )

        assert response.status_code == 200

    async def test_rejects_non_pdf_extension(self, async_client: AsyncClient) -> None:
        """Non-PDF filename returns 400."""
        response = await async_client.post(
            "/documents/extract",
            files={"file": ("document.txt", b"Hello world", "text/plain")},
        )

        assert response.status_code == 400
        assert "Only PDF" in response.json()["detail"]

    async def test_rejects_empty_file(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/documents/extract",
            files={"file": ("empty.pdf", b"", "application/pdf")},
        )

        assert response.status_code == 400
        assert "Empty file" in response.json()["detail"]

    async def test_rejects_corrupt_pdf(self, async_client: AsyncClient) -> None:
        """File with .pdf extension but no PDF header returns 400."""
        response = await async_client.post(
            "/documents/extract",
            files={"file": ("corrupt.pdf", b"This is not a PDF", "application/pdf")},
        )

        assert response.status_code == 400
        assert "Invalid PDF" in response.json()["detail"]

    async def test_rejects_pdf_without_pages(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/documents/extract",
            files={"file": ("vazio.pdf", build_pdf([]), "application/pdf")},
        )

        assert response.status_code == 400
        assert "no pages" in response.json()["detail"]

    async def test_rejects_oversized_file(
        self,
        async_client: AsyncClient,
        sample_pdf: bytes,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Uploads over the size limit return 413."""
        monkeypatch.setattr(routes, "MAX_UPLOAD_SIZE", len(sample_pdf) - 1)

        response = await async_client.post(
            "/documents/extract",
            files={"file": ("inquerito.pdf", sample_pdf, "application/pdf")},
        )

        assert response.status_code == 413
