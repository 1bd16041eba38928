"""Rule Runner — applies an entity's pure validation rules in order.

Invariants:
    - A Rule takes the payload's writable values and returns a message or None
    - Rules run in declaration order; the first violation wins
"""

from typing import Callable, Mapping

Rule = Callable[[Mapping], str | None]


def first_violation(rules: tuple[Rule, ...], values: Mapping) -> str | None:
    """Run rules in order, return the first violation message."""
    for rule in rules:
        message = rule(values)
        if message is not None:
            return message
    return None
