# Middleware package init
"""
TaskHub Backend — Middleware Package
======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error body carry
    the same correlation ID. Authentication is not middleware: it is the
    `require_identity` dependency, applied per route.
"""
