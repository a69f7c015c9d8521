# Middleware package init
"""
Hotel Listings Backend — Middleware Package
============================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so every log line and error body carries the ID
    - Logging captures response status and duration on the way back out
"""
