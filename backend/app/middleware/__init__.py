# Middleware package init
"""
Elite Logistic Backend — Middleware Package
=============================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line can be correlated
    2. Logging: records method, path, status and duration with that ID
    3. GZip / CORS: applied by Starlette's stock middleware

Responses unwind in reverse order, so the request ID header is set last.
"""
