"""Filter Service Application Package — HTTP API for provider-managed filter artifacts.

Invariants:
    - Package root contains no executable code beyond the version constant

Design Decisions:
    - Explicit imports only, no star exports (ADR: ExMA no convention-over-config)
"""

__version__ = "1.0.0"
