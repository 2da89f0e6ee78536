# Middleware package init
"""
Noteful Backend — Middleware Package
======================================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID stored in a ContextVar, echoed in X-Request-ID
       and added to every log record by RequestIDLogFilter
    2. Logging: one access line per request with status and duration
"""
