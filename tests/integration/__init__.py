"""Integration tests for components working together as a system.

Coverage:
    - Document extraction endpoint with generated PDFs
    - SSE analysis and follow-up endpoints
    - Transcript and reset endpoints
    - Live model response (when an API key is configured)
"""
