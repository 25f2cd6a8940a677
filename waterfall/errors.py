"""
Errors raised when the waterfall engine is misused.

Declared failures never show up here: a dammed flow carries its payload in
its state. These exceptions signal programming mistakes at the call site.
"""


class WaterfallError(Exception):
    """Base class for all errors raised by the engine."""


class IncorrectDamArgumentError(WaterfallError, ValueError):
    """A flow was dammed with ``None``, which cannot describe a failure."""

    def __init__(self, message="You cannot dam a flow with None"):
        super().__init__(message)


class FlowTypeError(WaterfallError, TypeError):
    """A sub-flow factory returned something that is not a Flow."""

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"Sub-flow factory must return a Flow, got {type(value).__name__}"
        )


class ImportSpecError(WaterfallError, ValueError):
    """An import specification for a sub-flow has an unsupported shape."""


class ConfigError(WaterfallError, ValueError):
    """An unknown or invalid configuration option was supplied."""
