"""Test package for the inquiry analyst.

Structure:
    - unit/: Individual function and class tests
    - integration/: API tests through the ASGI app
    - pdf_factory: Generates small PDF documents in memory
    - fakes: Scripted stand-in for the model service

PDFs are generated per test instead of read from sample files. The model
service is replaced by FakeBackend everywhere except tests marked
requires_api_key. Leverages pytest with pytest-check for soft assertions.
"""
