"""
Pokemon API — Middleware Package
==================================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID first so every log line and error body carries it
    - Logging measures everything downstream, including serialization
    - CORS is Starlette's CORSMiddleware (answers preflight requests)
"""
