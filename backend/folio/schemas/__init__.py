"""Pydantic Schemas - request/response contracts for API endpoints.

Invariants:
    - Wire format is camelCase (imageUrl, startDate, createdAt); Python is snake_case
    - Input schemas check types only; content rules live in core/validation.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
