"""Exceptions raised by hinges, pipelines and the ancestor resolver."""


class HingeError(Exception):
    """Base class for all hinj errors."""


class MissingCallable(HingeError, TypeError):
    """A stage resolved, after unwrapping, to something that cannot be called."""

    def __init__(self, stage):
        self.stage = stage
        super().__init__(f"Must be a function, got {type(stage).__name__}: {stage!r}")


class NotAwaitable(HingeError, TypeError):
    """An async stage returned a plain value instead of an awaitable."""

    def __init__(self, stage, result):
        self.stage = stage
        self.result = result
        name = getattr(stage, '__qualname__', None) or repr(stage)
        super().__init__(f"Must be awaitable: async stage {name} returned {type(result).__name__}")


class AncestorNotFound(HingeError, LookupError):
    """The parent chain ended before an instance of the requested kind was found."""

    def __init__(self, instance, of_type):
        self.instance = instance
        self.of_type = of_type
        kind = getattr(of_type, '__name__', None) or repr(of_type)
        super().__init__(f"Cannot find ancestor with type {kind}")
