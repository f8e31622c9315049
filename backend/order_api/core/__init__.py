"""Core — pure domain logic: identifiers, errors, envelopes, validation, query options.

Invariants:
    - No FastAPI or SQLAlchemy imports (infrastructure plugs in through repository_protocols)
"""
