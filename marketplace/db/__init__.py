"""Database Infrastructure - SQLAlchemy Base and standalone session factory.

Invariants:
    - Single async engine per process in the app (initialized via init_db)
    - All sessions are async (AsyncSession)
"""
