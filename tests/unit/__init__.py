"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: PDF text extraction and page ordering
    - prompts/: Initial and follow-up message composition
    - streaming/: Chunk sequences and incremental assembly
    - agent/: Configuration, Agno backend, session and workflow
    - rendering/: Markdown to HTML and plain text

Uses mocks for the Agno agent and a scripted backend for conversations.
Leverages pytest-check for multiple assertions per test.
"""
