"""Core Layer — pure scheduling logic, no IO, no async, no logging.

Invariants:
    - No module in core/ imports from services/, schemas/, infrastructure/, or config
    - All functions are deterministic given the same pool, `now`, and config
    - State structs are caller-owned and mutated in place by free functions

Design Decisions:
    - Functional core separated from imperative shell (services/feed_service.py)
"""
