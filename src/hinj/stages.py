"""
Stage resolution for pipeline registration.

``sync`` and ``async_`` accept three kinds of argument, resolved here into an
explicit variant before anything is composed:

- ``HingeStage``: another hinge. Runs as a subcommand of the caller.
- ``GroupStage``: a grouped aggregate exposing ``raw_pipeline``, ``ancestry``
  and ``default``. Its raw pipeline is the stage.
- ``RawStage``: a plain callable ``(instance, value, token) -> result``.

Hinge and group variants also carry the ancestry and default the caller
merges in. Anything that does not resolve to a callable raises
``MissingCallable`` at registration time.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Union, TYPE_CHECKING

from hinj.defaults import DefaultSpec, NO_DEFAULT
from hinj.errors import MissingCallable
from hinj.tokens import Token

if TYPE_CHECKING:
    from hinj.hinge import Hinge

logger = logging.getLogger(__name__)

RAW_PIPELINE_ATTR = 'raw_pipeline'


@dataclass(frozen=True)
class RawStage:
    fn: Callable

    @property
    def ancestry(self) -> List[Token]:
        return []

    @property
    def default(self) -> DefaultSpec:
        return NO_DEFAULT

    @property
    def merges(self) -> bool:
        return False


@dataclass(frozen=True)
class HingeStage:
    hinge: 'Hinge'
    fn: Callable = field(repr=False)

    @property
    def ancestry(self) -> List[Token]:
        return list(self.hinge.ancestry)

    @property
    def default(self) -> DefaultSpec:
        return self.hinge.default

    @property
    def merges(self) -> bool:
        return True


@dataclass(frozen=True)
class GroupStage:
    group: Any
    fn: Callable = field(repr=False)

    @property
    def ancestry(self) -> List[Token]:
        return list(getattr(self.group, 'ancestry', ()))

    @property
    def default(self) -> DefaultSpec:
        default = getattr(self.group, 'default', None)
        if default is None:
            return NO_DEFAULT
        if isinstance(default, DefaultSpec):
            return default
        # Groups may expose a plain starting value, like hinge(starting)
        return DefaultSpec.from_starting(default)

    @property
    def merges(self) -> bool:
        return True


Stage = Union[RawStage, HingeStage, GroupStage]


def _as_subcommand(fn: Any) -> Any:
    """Merged hinges never apply their own default: run them as subcommands."""
    as_cmd = getattr(fn, 'as_cmd', None)
    if as_cmd is not None:
        return as_cmd(True)
    return fn


def is_group(candidate: Any) -> bool:
    """True if ``candidate`` exposes the grouped-aggregate extraction point."""
    return hasattr(candidate, RAW_PIPELINE_ATTR)


def resolve_stage(candidate: Any) -> Stage:
    """
    Classify a registration argument.

    Args:
        candidate: Hinge, grouped aggregate, or callable

    Returns:
        The matching stage variant

    Raises:
        MissingCallable: If no callable remains after unwrapping
    """
    from hinj.hinge import Hinge

    if isinstance(candidate, Hinge):
        return HingeStage(candidate, _as_subcommand(candidate))

    if is_group(candidate):
        raw = getattr(candidate, RAW_PIPELINE_ATTR)
        # A group whose raw pipeline is itself a hinge still runs as a subcommand
        fn = _as_subcommand(raw) if raw is not None else None
        if not callable(fn):
            raise MissingCallable(candidate)
        logger.debug(f"Unwrapped group {type(candidate).__name__} to its raw pipeline")
        return GroupStage(candidate, fn)

    if not callable(candidate):
        raise MissingCallable(candidate)
    return RawStage(candidate)
