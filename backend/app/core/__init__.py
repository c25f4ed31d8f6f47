"""Core Layer — error hierarchy and the provider contract.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Nothing in core/ performs IO

Design Decisions:
    - Contracts live in core, implementations in infrastructure (ADR: ExMA impureim sandwich)
"""
