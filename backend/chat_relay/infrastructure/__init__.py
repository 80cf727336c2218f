"""Infrastructure Layer: external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external calls wrapped with error mapping onto core/errors.py

Design Decisions:
    - Thin wrappers over raw clients (ADR: single responsibility)
"""
