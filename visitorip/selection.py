"""
Candidate selection policies.

A selection policy receives the comma-split tokens of a forwarded header,
ordered left-to-right as each hop appended them, and returns the token to
validate (or None when there is nothing to pick).

Each proxy hop appends the address it observed to the right, so the last
token is the one written by the trusted edge load balancer. Tokens further
left may be supplied by the client. A fixed index is for deployments with a
known number of trusted intermediate hops.
"""

from typing import Callable, Optional, Sequence

SelectionPolicy = Callable[[Sequence[str]], Optional[str]]


def last_candidate(tokens: Sequence[str]) -> Optional[str]:
    """Return the rightmost token, or None for an empty sequence."""
    return tokens[-1] if tokens else None


class IndexSelection:
    """
    Select the token at a fixed 0-based position.

    Out-of-range positions fall back to the last token instead of failing.

    Example:
        >>> select = IndexSelection(0)
        >>> select(["1.2.3.4", " 5.6.7.8"])
        '1.2.3.4'
        >>> IndexSelection(5)(["1.2.3.4"])
        '1.2.3.4'
    """

    __slots__ = ("index",)

    def __init__(self, index: int):
        if isinstance(index, bool) or not isinstance(index, int):
            raise ValueError("index must be an integer")
        if index < 0:
            raise ValueError("index must be non-negative")
        self.index = index

    def __call__(self, tokens: Sequence[str]) -> Optional[str]:
        if self.index < len(tokens):
            return tokens[self.index]
        return last_candidate(tokens)

    def __eq__(self, other):
        if not isinstance(other, IndexSelection):
            return NotImplemented
        return self.index == other.index

    def __hash__(self):
        return hash((IndexSelection, self.index))

    def __repr__(self):
        return f"IndexSelection({self.index})"


def selection_for(index: Optional[int]) -> SelectionPolicy:
    """
    Build the selection policy for an optional index.

    Args:
        index: 0-based position, or None for the last token

    Returns:
        last_candidate when index is None, otherwise an IndexSelection
    """
    if index is None:
        return last_candidate
    return IndexSelection(index)
