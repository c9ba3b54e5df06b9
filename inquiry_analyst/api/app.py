"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
router registration and ownership of the analysis workflow.
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inquiry_analyst.agent.workflow import AnalysisWorkflow
from inquiry_analyst.api.chat import router as chat_router
from inquiry_analyst.api.routes import router as documents_router
from inquiry_analyst.prompts.composer import load_template
from inquiry_analyst.prompts.templates import ANALYSIS_TEMPLATE

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting Inquiry Analyst API...")
    yield
    # Shutdown
    logger.info("Shutting down Inquiry Analyst API...")


def _default_workflow() -> AnalysisWorkflow:
    template_path = os.getenv("ANALYSIS_TEMPLATE_PATH")
    template = load_template(template_path) if template_path else ANALYSIS_TEMPLATE
    return AnalysisWorkflow(template=template)


def create_app(workflow: AnalysisWorkflow | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        workflow: Workflow serving the conversation. A default one backed by
            the Agno model backend is created when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Inquiry Analyst API",
        description=(
            "Analysis of criminal pre-trial procedures with a language model. "
            "Extracts text from PDF documents, streams a structured analysis and "
            "supports follow-up messages with attached documents."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.state.workflow = workflow or _default_workflow()

    application.include_router(documents_router)
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "inquiry-analyst"}

    return application


app = create_app()
