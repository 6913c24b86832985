"""Integration tests for the local API working end to end.

Requests go through the real FastAPI app with httpx ASGITransport; only the
remote ingestion / Q&A service is replaced by an in-memory fake.
"""
