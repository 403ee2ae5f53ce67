"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; errors share the BlogError envelope

Design Decisions:
    - Thin routes delegate to PostService (ADR: ExMA impureim sandwich)
"""
