"""Route Modules — one file per resource/concern (posts, health).

Invariants:
    - Each module defines its own APIRouter
    - Routes never sequence store/cache/index calls themselves (delegate to PostService)

Design Decisions:
    - Explicit registration in main.py over auto-discovery (ADR: ExMA anti-pattern)
"""
