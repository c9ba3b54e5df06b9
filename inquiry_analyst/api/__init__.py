"""FastAPI endpoints for the inquiry analyst.

HTTP and streaming routes with async request handling.
Uses Server-Sent Events for real-time response streaming.

Endpoints:
    - GET /health: Service health status
    - POST /documents/extract: PDF text extraction
    - POST /chat/analysis: Initial analysis (SSE)
    - POST /chat/follow-up: Follow-up message with optional PDF (SSE)
    - GET /chat/transcript: Visible conversation
    - POST /chat/reset: Discard the conversation
"""

from inquiry_analyst.api.app import app, create_app

__all__ = ["app", "create_app"]
