"""Infrastructure Layer - database access and cross-cutting concerns (logging).

Invariants:
    - Infrastructure never imports pricing or stats logic from core/
    - Database failures are mapped to DatabaseError before they reach routes
"""
