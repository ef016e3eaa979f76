"""
Command adapter.

A command runs a hinge's whole pipeline and then returns the hinge's default
as its result. A subcommand runs the same pipeline but returns ``ABSENT``:
when hinges are merged into each other only the outermost command supplies
the final value.
"""

import logging
from typing import Any, Optional, TYPE_CHECKING

from hinj.defaults import DefaultSpec, NO_DEFAULT
from hinj.instance import ABSENT
from hinj.pipeline import run_discarded
from hinj.tokens import Token

if TYPE_CHECKING:
    from hinj.hinge import Hinge

logger = logging.getLogger(__name__)


class Command:
    """
    Invocable wrapper around a hinge's pipeline.

    The pipeline and the async flag are read from the hinge on every call, so
    stages registered after the command was created still run.

    Attributes:
        hinge: The hinge whose pipeline runs
        is_sub_command: If True the hinge's default is suppressed
    """

    def __init__(self, hinge: 'Hinge', is_sub_command: bool = False):
        self.hinge = hinge
        self.is_sub_command = bool(is_sub_command)

    @property
    def effective_default(self) -> DefaultSpec:
        """The default this command resolves after the pipeline."""
        if self.is_sub_command:
            return NO_DEFAULT
        return self.hinge.default

    def __call__(self, instance: Any, value: Any = ABSENT, token: Optional[Token] = None) -> Any:
        token = self.hinge.token if token is None else token
        pipeline = self.hinge.pipeline
        default = self.effective_default

        # Mode is read per call, not fixed when the command was created
        if self.hinge.is_async:
            return self._run_async(pipeline, default, instance, value, token)

        if pipeline is not None:
            run_discarded(pipeline(instance, value, token))
        return default.resolve(instance, value)

    async def _run_async(self, pipeline, default, instance, value, token):
        if pipeline is not None:
            await pipeline(instance, value, token)
        return default.resolve(instance, value)

    def as_cmd(self, is_sub_command: bool = False) -> 'Command':
        """Re-wrap the underlying hinge, e.g. to turn a command into a subcommand."""
        return self.hinge.as_cmd(is_sub_command)

    def __repr__(self):
        kind = "subcommand" if self.is_sub_command else "command"
        return f"<{kind} of {self.hinge!r}>"
