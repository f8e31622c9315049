"""Services — request handlers that turn validated input into one response envelope.

Invariants:
    - Services depend on core protocols, never on infrastructure directly
"""
