"""
Data-access layer for the directory and review fixtures.

Responsibilities:
- Serve professionals, single professionals and review payloads as async fetches.
- Simulate network latency with a configurable delay.
- Memoise fetch results for a short TTL.
- Log failures and degrade to empty results instead of raising.
"""
