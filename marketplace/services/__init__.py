"""Services Layer - IO around the pure core: accounts, catalog, portfolio, tickets.

Invariants:
    - Services take an AsyncSession and a FixtureProvider; they never read headers
    - Demo principals are served from fixtures, verified users from the database

Design Decisions:
    - One service per resource for locality (no god objects)
"""
