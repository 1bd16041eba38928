"""Infrastructure Layer — store connections, repositories, and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; core never imports from here
    - All store calls wrapped with rollback and error mapping

Design Decisions:
    - One session manager per store: stores share nothing, not even a pool
"""
