"""API Layer — FastAPI routes, request-context dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Filter routes answer with provider payloads or plain-text errors

Design Decisions:
    - Thin routes delegate to services/handle_filters.py (ADR: ExMA impureim sandwich)
"""
