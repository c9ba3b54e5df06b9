"""Inquiry Analyst - streamed model analysis of criminal pre-trial procedures.

Combines FastAPI for HTTP streaming, Agno for the model conversation,
NiceGUI for visualization, pypdf for text extraction and Pydantic for data
validation.

Components:
    - parsing: PDF text extraction
    - prompts: analysis template and message composition
    - agent: model backend, conversation session and request orchestration
    - streaming: chunk sequences and incremental response assembly
    - rendering: markdown to HTML and plain text
    - api: HTTP endpoints and streaming responses
    - ui: Web interface
    - models: Request/response schemas
"""

__version__ = "0.1.0"
