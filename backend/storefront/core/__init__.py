"""Core — pure domain rules, types, errors and boundary protocols.

Invariants:
    - No IO: nothing here opens a connection or awaits a store
    - Shell modules (infrastructure, services, api) depend on core, never the reverse
"""
