"""
Page Relay — Application Package Initializer
==============================================

What: Marks the `pagerelay` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The relay follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Orchestration)       │  ← Page CRUD, reconciliation
    ├─────────────────────────────────────┤
    │   Block Transform (pure functions)  │  ← descriptor <-> upstream JSON
    ├─────────────────────────────────────┤
    │     Upstream Client (httpx)         │  ← Notion REST API
    └─────────────────────────────────────┘

    Nothing is persisted locally; the upstream workspace is the only store.
"""

__version__ = "1.0.0"
