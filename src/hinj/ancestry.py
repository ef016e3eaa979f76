"""
Ancestor lookup along instance parent links.

Nested instances are linked to their container with ``set_parent``. These
helpers walk that chain, nearest parent first.
"""

import logging
from typing import Any, Callable, Iterator, Optional, Union

from hinj.errors import AncestorNotFound
from hinj.instance import get_parent

logger = logging.getLogger(__name__)

OfType = Union[type, Callable[[Any], bool]]


def is_of_type(candidate: Any, of_type: OfType) -> bool:
    """
    Test ``candidate`` against a kind.

    Args:
        candidate: Instance to test
        of_type: A class (checked with ``isinstance``) or a one-argument predicate
    """
    if isinstance(of_type, type):
        return isinstance(candidate, of_type)
    return bool(of_type(candidate))


def iter_ancestors(instance: Any) -> Iterator[Any]:
    """Yield the parent chain of ``instance``, nearest first."""
    parent = get_parent(instance)
    while parent is not None:
        yield parent
        parent = get_parent(parent)


def find_ancestor(instance: Any, of_type: OfType, do_not_throw: bool = False) -> Optional[Any]:
    """
    Find the nearest ancestor of ``instance`` matching ``of_type``.

    ``do_not_throw`` only covers ``instance`` itself having no parent. Once
    the walk has moved past the direct parent, running out of parents always
    raises.

    Args:
        instance: Where to start; the instance itself is never a candidate
        of_type: A class or a one-argument predicate
        do_not_throw: Return None instead of raising when ``instance`` has no parent

    Returns:
        The matching ancestor, or None (see above)

    Raises:
        AncestorNotFound: If the chain ends without a match
    """
    current = instance
    honor_flag = do_not_throw
    while True:
        parent = get_parent(current)
        if parent is None:
            if honor_flag:
                return None
            raise AncestorNotFound(instance, of_type)
        if is_of_type(parent, of_type):
            return parent
        logger.debug(f"Ancestor {type(parent).__name__} does not match, walking up")
        # TODO: confirm whether do_not_throw should also cover deeper misses
        honor_flag = False
        current = parent
