"""Pytest fixtures and shared test configuration.

Fixtures:
    - fake_backend: Scriptable stand-in for the model service
    - workflow: AnalysisWorkflow wired to the fake backend
    - async_client: HTTPX client for the API, sharing that workflow
    - sample_pdf / empty_page_pdf: In-memory PDF documents
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from inquiry_analyst.agent.workflow import AnalysisWorkflow
from inquiry_analyst.api.app import create_app
from tests.fakes import FakeBackend
from tests.pdf_factory import build_pdf


@pytest.fixture
def fake_backend() -> FakeBackend:
    """Backend with no scripted responses; tests append to ``scripts``."""
    return FakeBackend()


@pytest.fixture
def workflow(fake_backend: FakeBackend) -> AnalysisWorkflow:
    return AnalysisWorkflow(backend=fake_backend)


@pytest.fixture
async def async_client(workflow: AnalysisWorkflow) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=create_app(workflow))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_pdf() -> bytes:
    """Three-page PDF with distinct text on each page."""
    return build_pdf(
        [
            ["Inquerito Policial 123", "Comarca de Gloria"],
            ["Termo de depoimento"],
            ["Relatorio final"],
        ],
        title="Inquerito 123",
    )


@pytest.fixture
def empty_page_pdf() -> bytes:
    """PDF whose middle page has no text."""
    return build_pdf([["Primeira pagina"], [], ["Terceira pagina"]])
