"""Database Infrastructure — declarative bases for the two stores.

Invariants:
    - One async engine per store per process (initialized via init_stores)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for local and test stores
"""
