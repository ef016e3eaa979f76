"""
Composable read/write slots for plain data records.

A hinge is a callable slot definition. Calling it with an instance reads the
slot; calling it with an instance and a value writes the slot and runs the
hinge's pipeline of registered stages.

Quick Start:
    >>> from hinj import hinge, set_parent, find_ancestor
    >>>
    >>> name = hinge("untitled")
    >>> shout = hinge().sync(lambda inst, value, token: value.upper())
    >>>
    >>> doc = {}
    >>> name(doc)
    'untitled'
    >>> shout(doc, "hello")
    'HELLO'

Composition:
    Stages run in registration order and all see the same value. Registering
    a hinge as a stage of another merges it: its ancestry is appended, its
    default is adopted if the outer hinge has none, and it runs as a
    subcommand so only the outermost command supplies a result.

    >>> save = hinge(lambda inst: "saved").sync(shout)
    >>> save.as_cmd()(doc, "x")
    'saved'

Async:
    ``async_`` registers a stage that returns an awaitable. From then on the
    hinge's pipeline returns awaitables and stages run strictly one after
    the other.

Modules:
    - tokens: unique slot keys
    - instance: slot storage, ABSENT marker, parent links
    - defaults: default-value specification
    - stages: classification of registration arguments
    - pipeline: sync/async stage composition
    - command: command adapter
    - hinge: the Hinge class
    - ancestry: ancestor lookup
    - config: framework configuration
"""

from hinj.tokens import Token, TokenAllocator, get_allocator, mint_token
from hinj.instance import (
    ABSENT,
    PARENT,
    is_absent,
    slots_of,
    read_slot,
    write_slot,
    set_parent,
    get_parent,
)
from hinj.defaults import DefaultSpec, NO_DEFAULT
from hinj.errors import HingeError, MissingCallable, NotAwaitable, AncestorNotFound
from hinj.stages import RawStage, HingeStage, GroupStage, resolve_stage, is_group
from hinj.pipeline import wait_detached
from hinj.command import Command
from hinj.hinge import Hinge, hinge
from hinj.ancestry import find_ancestor, iter_ancestors, is_of_type
from hinj.config import (
    set_debug_label,
    get_debug_label,
    set_debug_level,
    get_debug_level,
    reset_config,
)

__version__ = "0.1.0"

__all__ = [
    # Hinges
    'Hinge',
    'hinge',
    'Command',
    # Tokens
    'Token',
    'TokenAllocator',
    'get_allocator',
    'mint_token',
    # Instances
    'ABSENT',
    'PARENT',
    'is_absent',
    'slots_of',
    'read_slot',
    'write_slot',
    'set_parent',
    'get_parent',
    # Defaults
    'DefaultSpec',
    'NO_DEFAULT',
    # Stages
    'RawStage',
    'HingeStage',
    'GroupStage',
    'resolve_stage',
    'is_group',
    'wait_detached',
    # Ancestry
    'find_ancestor',
    'iter_ancestors',
    'is_of_type',
    # Errors
    'HingeError',
    'MissingCallable',
    'NotAwaitable',
    'AncestorNotFound',
    # Config
    'set_debug_label',
    'get_debug_label',
    'set_debug_level',
    'get_debug_level',
    'reset_config',
]
