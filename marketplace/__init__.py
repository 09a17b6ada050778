"""Academic NFT Marketplace - credential-discounted event tickets and gamified dashboards.

Invariants:
    - Package root holds only the version constant (no import side-effects)

Design Decisions:
    - Explicit imports only, no star exports
"""

__version__ = "1.0.0"
