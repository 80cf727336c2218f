"""Services Layer: imperative shell around core/ pure logic.

Invariants:
    - Services await capabilities through core/repository_protocols.py types only
    - No service imports fastapi: HTTP concerns stay in api/

Design Decisions:
    - Capabilities injected via constructor (ADR: testable with fakes, no ambient globals)
"""
