"""Chat Relay Package: AI conversation relay with persistence and real-time delivery.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
