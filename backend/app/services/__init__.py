"""Services Layer — orchestration of store, cache and index behind one coordinator.

Invariants:
    - Services depend on core protocols only, never on concrete clients
    - Routes call services; services never import from api/

Design Decisions:
    - One coordinator (PostService) owns every cross-store ordering rule (ADR: ExMA locality)
"""
