"""Core Layer - pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, db/ or client/
    - All functions are pure and deterministic (time is passed in, never read)
"""
