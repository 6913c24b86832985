"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Text extraction and chunking logic
    - ingestion/: Batch partitioning, progress and abort-on-failure
    - client/: Configuration and remote API payloads
    - store/ and assistant/: Document bookkeeping and orchestration
"""
