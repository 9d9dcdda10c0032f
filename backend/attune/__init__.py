"""Attune — signal collapse and environment orchestration service.

Invariants:
    - Package root contains no executable code beyond the version constant

Design Decisions:
    - Explicit imports only, no star exports
"""

__version__ = "0.4.0"
