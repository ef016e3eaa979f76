"""
Token allocation for hinge slots.

Every hinge owns exactly one token. The token is the key its slot is stored
under on every instance, so two hinges must never share one.

Tokens compare by identity only. The integer id is for diagnostics and for
ordering in reprs; it is never used as the slot key.
"""

import itertools
import threading
from typing import Optional


class Token:
    """Opaque slot key minted once per hinge."""

    __slots__ = ('id', 'label')

    def __init__(self, token_id: int, label: Optional[str] = None):
        self.id = token_id
        self.label = label

    def __repr__(self):
        if self.label:
            return f"Token({self.id}, {self.label!r})"
        return f"Token({self.id})"


class TokenAllocator:
    """
    Mints tokens with a monotonically increasing id.

    One allocator lives for the whole process (see ``mint_token``). Separate
    allocators are only useful in tests: ids may then repeat across
    allocators, but the tokens themselves are still distinct objects.

    Example:
        allocator = TokenAllocator()
        a = allocator.mint()
        b = allocator.mint("total")
        assert a is not b and a != b
    """

    def __init__(self, start: int = 0):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def mint(self, label: Optional[str] = None) -> Token:
        """
        Issue a fresh token.

        Args:
            label: Optional name shown in the token repr

        Returns:
            A token no other call has returned
        """
        with self._lock:
            token_id = next(self._counter)
        return Token(token_id, label)


_allocator = TokenAllocator()


def get_allocator() -> TokenAllocator:
    """Return the process-wide allocator."""
    return _allocator


def mint_token(label: Optional[str] = None) -> Token:
    """Mint a token from the process-wide allocator."""
    return _allocator.mint(label)
