"""Services Layer — request translation between the HTTP surface and the provider.

Invariants:
    - Services hold no state between requests
    - Services depend on core/provider_protocol.py, never on concrete providers

Design Decisions:
    - One module per resource (ADR: ExMA no god objects)
"""
