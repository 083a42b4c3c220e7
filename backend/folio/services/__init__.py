"""Services Layer - resource stores and the typed query/mutation API.

Invariants:
    - Stores own persistence; ResourceAPI owns validation and error tagging
    - Operations are an explicit table (no dynamic dispatch)
"""
