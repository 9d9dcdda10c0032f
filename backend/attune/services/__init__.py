"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services receive stores and adapters through their constructors
    - All IO (stores, device dispatch) is awaited here, never inside core/

Design Decisions:
    - One service per concern: decisions, orchestration, policy execution, anchor state
"""
