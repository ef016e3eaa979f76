"""
Slot storage on instances.

An instance is any record a hinge reads from and writes to. Two shapes are
accepted:

- A mutable mapping: slots are items keyed by token.
- Any object with a ``__dict__``: slots live in a private dict kept under
  ``SLOTS_ATTR``. The dict is written through ``vars()`` so frozen dataclasses
  can carry slots too.

The core never creates or destroys instances. It only reads and writes slots
by token, and follows the parent link for ancestor lookup.
"""

import logging
from collections.abc import MutableMapping
from typing import Any, Optional

from hinj.tokens import Token, mint_token

logger = logging.getLogger(__name__)

SLOTS_ATTR = '__hinj_slots__'


class _AbsentType:
    """Type of the ``ABSENT`` marker. Only one instance exists."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'ABSENT'

    def __bool__(self):
        return False

    def __reduce__(self):
        return (_AbsentType, ())


# A slot that was never written reads as ABSENT. None is a normal value.
ABSENT = _AbsentType()

# Well-known slot holding the parent instance, set by whoever nests instances.
PARENT = mint_token('parent')


def is_absent(value: Any) -> bool:
    """True if ``value`` is the absence marker."""
    return value is ABSENT


def slots_of(instance: Any) -> MutableMapping:
    """
    Return the mapping that holds hinge slots for ``instance``.

    Args:
        instance: A mutable mapping or an object with a ``__dict__``

    Returns:
        The instance itself for mappings, otherwise its private slot dict

    Raises:
        TypeError: If the instance can hold neither items nor attributes
    """
    if isinstance(instance, MutableMapping):
        return instance

    try:
        namespace = vars(instance)
    except TypeError:
        raise TypeError(
            f"{type(instance).__name__} cannot hold hinge slots: "
            f"use a mutable mapping or an object with a __dict__"
        ) from None

    store = namespace.get(SLOTS_ATTR)
    if store is None:
        store = namespace[SLOTS_ATTR] = {}
    return store


def read_slot(instance: Any, token: Token) -> Any:
    """Read the slot for ``token``, or ``ABSENT`` if it was never written."""
    return slots_of(instance).get(token, ABSENT)


def write_slot(instance: Any, token: Token, value: Any) -> None:
    """Store ``value`` in the slot for ``token``."""
    slots_of(instance)[token] = value


def set_parent(child: Any, parent: Any) -> None:
    """Link ``child`` to the instance that contains it."""
    write_slot(child, PARENT, parent)


def get_parent(child: Any) -> Optional[Any]:
    """
    Return the parent linked to ``child``.

    A ``None`` child, an unset link and a link explicitly set to ``None`` all
    read as "no parent".
    """
    if child is None:
        return None
    parent = read_slot(child, PARENT)
    if parent is ABSENT:
        return None
    return parent
