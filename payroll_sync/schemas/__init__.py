"""API Schemas — Pydantic models at the HTTP boundary.

Invariants:
    - JSON keys are camelCase (rssbNumber, createdAt); Python attributes stay snake_case
    - Field rules live in core/validation.py; schemas only call them
"""
