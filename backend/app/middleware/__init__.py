# Middleware package init
"""
Relay Hub Backend: Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → [Errors] → Route Handler

    1. Request ID first, so every later log line can carry it
    2. Logging measures everything below it, including the upstream call
    3. CORS is FastAPI's CORSMiddleware (answers browser preflights)
    4. Errors is innermost, so an unexpected 500 still passes back through
       CORS and Request ID and gets their headers

No rate limiting or authentication: the relay trusts its callers.
"""
