# Middleware package init
"""
Page Relay — Middleware Package
=================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    - Request ID: correlation ID stored in a ContextVar, echoed as X-Request-ID
    - Logging: one access line per request with status and duration
    - CORS: Starlette's CORSMiddleware, answers OPTIONS preflight with 200
"""
