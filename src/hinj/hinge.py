"""
Hinges: composable read/write slots on plain instances.

A hinge owns one token and reads or writes the slot stored under that token
on whatever instance it is called with:

    >>> total = hinge(0)
    >>> record = {}
    >>> total(record)
    0
    >>> total(record, 5)
    >>> total(record)
    5

Stages registered with ``sync``/``async_`` form the hinge's pipeline. Writing
a value runs the pipeline and returns its result. The first read of an empty
slot stores the default and runs the pipeline once for its side effects.

    >>> seen = []
    >>> doubled = hinge().sync(lambda inst, value, token: seen.append(value) or value * 2)
    >>> doubled(record, 21)
    42

Registering another hinge as a stage merges it: its ancestry is appended,
its default is adopted if this hinge has none, and it runs as a subcommand.
"""

import logging
from typing import Any, Callable, List, Optional

from hinj.command import Command
from hinj.config import get_debug_label, get_debug_level
from hinj.defaults import DefaultSpec
from hinj.instance import ABSENT, read_slot, write_slot
from hinj.pipeline import Pipeline, compose_async, compose_sync, run_discarded
from hinj.stages import resolve_stage
from hinj.tokens import Token, mint_token

logger = logging.getLogger(__name__)


class Hinge:
    """
    A named slot with a default and a pipeline of stages.

    Registration methods mutate the hinge and return it for chaining; there
    is no hidden copy. The token never changes.

    Attributes:
        token: Key of this hinge's slot on every instance
        default: What the first read of an empty slot stores
        pipeline: Composed stages, or None
        ancestry: Tokens of this hinge and of every hinge merged into it
        is_async: Set once any async stage is registered, never cleared
    """

    def __init__(
        self,
        default: Any = ABSENT,
        *,
        default_factory: Optional[Callable] = None,
        label: Optional[str] = None,
    ):
        self.token: Token = mint_token(label)
        self.default = DefaultSpec(value=default, factory=default_factory)
        self.pipeline: Optional[Pipeline] = None
        self.ancestry: List[Token] = [self.token]
        self.is_async: bool = False

    def __call__(self, instance: Any, value: Any = ABSENT, token: Optional[Token] = None) -> Any:
        """
        Read or write this hinge's slot on ``instance``.

        Args:
            instance: The instance to read from or write to
            value: Value to write; omit to read
            token: Slot to use instead of this hinge's own

        Returns:
            Set mode: the pipeline's result, or None without a pipeline.
            Get mode: the stored value, ``ABSENT`` if empty with no default.
        """
        token = self.token if token is None else token

        if value is not ABSENT:
            write_slot(instance, token, value)
            if self.pipeline is not None:
                return self.pipeline(instance, value, token)
            return None

        if read_slot(instance, token) is ABSENT and not self.default.is_absent:
            computed = self.default.resolve(instance)
            write_slot(instance, token, computed)
            if self.pipeline is not None:
                run_discarded(self.pipeline(instance, computed, token))
        return read_slot(instance, token)

    def _merge(self, stage) -> None:
        self.ancestry = [*self.ancestry, *stage.ancestry]
        if self.default.is_absent and not stage.default.is_absent:
            self.default = stage.default
        logger.debug(f"{self!r} merged {stage!r}")

    def sync(self, stage: Any) -> 'Hinge':
        """
        Register a synchronous stage.

        Args:
            stage: Callable ``(instance, value, token)``, another hinge, or a group

        Returns:
            This hinge

        Raises:
            MissingCallable: If ``stage`` does not resolve to a callable
        """
        resolved = resolve_stage(stage)
        if resolved.merges:
            self._merge(resolved)
        self.pipeline = compose_sync(self.pipeline, resolved.fn, self.is_async)
        return self

    def async_(self, stage: Any) -> 'Hinge':
        """
        Register an asynchronous stage; the hinge stays in async mode afterwards.

        The stage must return an awaitable when invoked, otherwise invoking
        the pipeline raises ``NotAwaitable``.

        Args:
            stage: Callable ``(instance, value, token)``, another hinge, or a group

        Returns:
            This hinge

        Raises:
            MissingCallable: If ``stage`` does not resolve to a callable
        """
        resolved = resolve_stage(stage)
        if resolved.merges:
            self._merge(resolved)
        self.pipeline = compose_async(self.pipeline, resolved.fn, self.is_async)
        if not self.is_async:
            logger.debug(f"{self!r} switched to async mode")
        self.is_async = True
        return self

    def debug(self, tag: Optional[str] = None, show_stack: bool = False) -> 'Hinge':
        """
        Register a stage that logs the stored value.

        Args:
            tag: Prefix for the log record; defaults to the configured label
            show_stack: Also log the invocation value and the call stack

        Returns:
            This hinge
        """
        own = self.token

        def log_state(instance, value, token):
            label = tag or get_debug_label()
            level = get_debug_level()
            logger.log(level, f"{label} {read_slot(instance, own)!r}")
            if show_stack:
                logger.log(level, f"{label} {value!r}", stack_info=True)

        return self.sync(log_state)

    def as_cmd(self, is_sub_command: bool = False) -> Command:
        """
        Adapt this hinge into a command.

        Args:
            is_sub_command: Suppress this hinge's default in the result

        Returns:
            Callable ``(instance, value=ABSENT, token=None)``
        """
        return Command(self, is_sub_command)

    def __repr__(self):
        mode = "async" if self.is_async else "sync"
        return f"<Hinge {self.token!r} {mode}>"


def hinge(starting: Any = ABSENT, label: Optional[str] = None) -> Hinge:
    """
    Create a hinge from a single starting value.

    Callables become default factories (called with the instance), anything
    else is a literal default. Omit ``starting`` for a hinge with no default.
    """
    spec = DefaultSpec.from_starting(starting)
    return Hinge(spec.value, default_factory=spec.factory, label=label)
