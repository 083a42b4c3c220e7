"""Folio Admin Package - portfolio and work-experience management.

Invariants:
    - Package root contains no executable code (no import side-effects)
"""
