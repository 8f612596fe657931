"""Services Layer — imperative shell around the scheduling core.

Invariants:
    - Services own clocks, item sources, and logging; core owns every decision

Design Decisions:
    - One service per feed: no shared state between feeds
"""
