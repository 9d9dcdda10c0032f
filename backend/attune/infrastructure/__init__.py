"""Infrastructure Layer — persistence, device adapters, and cross-cutting concerns.

Invariants:
    - Store implementations satisfy core/repository_protocols.py structurally
    - All external calls wrapped with retry/timeout/error mapping
"""
