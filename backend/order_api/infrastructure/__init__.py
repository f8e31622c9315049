"""Infrastructure Layer — database sessions, document repository, logging setup.

Invariants:
    - Only this layer (and db/) imports SQLAlchemy engines and sessions
"""
