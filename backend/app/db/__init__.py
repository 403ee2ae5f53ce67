"""Database Schema Package — SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - Engines and sessions live in infrastructure/database.py, never here
    - Alembic env.py imports Base from this package

Design Decisions:
    - asyncpg driver for PostgreSQL (ADR: native async, no thread pool overhead)
"""
