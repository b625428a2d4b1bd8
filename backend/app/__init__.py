"""
Relay Hub Backend: Application Package Initializer
=====================================================

What: Marks the `app` directory as a Python package.
Who:  Used by uvicorn (app.main:app), pytest, and the `relayhub` console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← presence checks, HTTP status
    ├─────────────────────────────────────┤
    │      Services (Upstream Relays)     │  ← build request, call, map errors
    ├─────────────────────────────────────┤
    │     Shared httpx.AsyncClient        │  ← connection pooling only
    └─────────────────────────────────────┘

    No persistence layer: every request is a single pass-through.
"""

__version__ = "1.0.0"
