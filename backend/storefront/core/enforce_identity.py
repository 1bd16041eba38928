"""Identity Rules — pure checks on entity identity for replace requests.

Invariants:
    - check_identity_match never touches a store
    - A missing payload id is a mismatch (full-record replace must name its row)
"""

from storefront.core.errors import ErrorContext, IdentityMismatchError


def check_identity_match(
    path_id: int, payload_id: int | None, context: ErrorContext | None = None,
) -> None:
    """Raise IdentityMismatchError unless path and payload ids are equal."""
    if payload_id is None or path_id != payload_id:
        raise IdentityMismatchError(path_id, payload_id, context)
