"""Services Layer — the generic entity pipeline and its per-entity descriptors.

Invariants:
    - One EntityHandler per entity family per request
    - Handlers never open sessions: store access goes through the repository

Design Decisions:
    - Descriptor-driven pipeline: customers and orders share every line of handler code
"""
