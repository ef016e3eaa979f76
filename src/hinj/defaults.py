"""
Default-value specification for hinges.

A default is either absent, a literal value, or a factory computed from the
instance. This mirrors ``dataclasses.field(default=..., default_factory=...)``:
at most one of ``value`` and ``factory`` is set.

Factories are called with as many of ``(instance, value)`` as their signature
accepts. In get mode ``value`` is ``ABSENT``; commands pass the value they
were invoked with.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from hinj.instance import ABSENT

logger = logging.getLogger(__name__)


def _positional_arity(factory: Callable) -> int:
    """Number of leading positional arguments (capped at 2) ``factory`` takes."""
    # Classes (list, dict, dataclasses) are called bare, like a dataclass default_factory
    if isinstance(factory, type):
        return 0
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        return 1

    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return 2
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return min(count, 2)


@dataclass(frozen=True)
class DefaultSpec:
    """
    What a hinge stores on first read of an empty slot.

    Attributes:
        value: Literal default, or ``ABSENT``
        factory: Callable computing the default, or None
    """
    value: Any = ABSENT
    factory: Optional[Callable] = None
    _arity: int = field(default=0, init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.factory is not None:
            if self.value is not ABSENT:
                raise ValueError("cannot specify both a default value and a default factory")
            if not callable(self.factory):
                raise TypeError(f"default factory must be callable, got {type(self.factory).__name__}")
            object.__setattr__(self, '_arity', _positional_arity(self.factory))

    @classmethod
    def from_starting(cls, starting: Any) -> 'DefaultSpec':
        """Build a spec from a single starting value: callables become factories."""
        if callable(starting):
            return cls(factory=starting)
        return cls(value=starting)

    @property
    def is_absent(self) -> bool:
        return self.factory is None and self.value is ABSENT

    @property
    def is_factory(self) -> bool:
        return self.factory is not None

    def resolve(self, instance: Any, value: Any = ABSENT) -> Any:
        """
        Produce the default for ``instance``.

        Args:
            instance: The instance the default is computed for
            value: Value the owning command was invoked with, if any

        Returns:
            The factory result, the literal value, or ``ABSENT``
        """
        if self.factory is None:
            return self.value
        args = (instance, value)[:self._arity]
        logger.debug(f"Computing default via {getattr(self.factory, '__qualname__', self.factory)!s}")
        return self.factory(*args)


NO_DEFAULT = DefaultSpec()
