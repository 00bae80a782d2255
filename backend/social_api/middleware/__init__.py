# Middleware package init
"""
Social API: Middleware Package
==============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID: correlation ID for logging and the X-Request-ID header
    2. Logging: access line naming the handler and post id
"""
