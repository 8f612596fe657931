"""Pydantic Schemas — validation for items entering the scheduler.

Invariants:
    - Schemas validate at the system boundary (records supplied by the host)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from core: the engine accepts any SchedulableItem, schemas are one implementation
"""
