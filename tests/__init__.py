"""Test package for Classory Assistant.

Structure:
    - unit/: Chunking, batching, extraction, client, store and service tests
    - integration/: Local API tests through the real FastAPI app

The remote ingestion / Q&A service is simulated with httpx.MockTransport.
Leverages pytest with pytest-check for soft assertions.
"""
