"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; it never imports services/ or api/
    - Every client failure is mapped to a BlogError subclass at this boundary

Design Decisions:
    - Thin adapters over raw clients (ADR: ExMA single responsibility)
"""
