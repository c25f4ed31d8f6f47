"""Infrastructure Layer — providers, external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ (the dispatcher)
    - All external failures mapped to FilterServiceError subclasses

Design Decisions:
    - Concrete providers live here; the dispatcher only sees core/provider_protocol.py
"""
