"""
Step - Units of caller logic evaluated by a waterfall, and the descriptor
middleware sees for each of them.
"""


class StepKind:
    """Enumeration of the bodies a flow evaluates."""
    CHAIN = "chain"
    WHEN_TRUTHY = "when_truthy"
    WHEN_FALSY = "when_falsy"
    DAM = "dam"
    ON_DAM = "on_dam"
    CHAIN_WF = "chain_wf"

    GUARDS = (WHEN_TRUTHY, WHEN_FALSY)


class Step:
    """
    Base class for reusable, class-based steps.

    An instance is callable and can be passed to ``Flow.chain`` like any
    function. Steps should be stateless; all state flows through the outflow.
    """

    def execute(self, outflow):
        """
        Execute the step logic.

        Args:
            outflow: Outflow of the running flow

        Returns:
            Any value (written to the target key, if one is given), or a
            Result. Returning ``Result.fail`` dams the flow.

        Raises:
            NotImplementedError: This method must be implemented by subclasses
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement execute()")

    def __call__(self, outflow):
        return self.execute(outflow)

    def __repr__(self):
        return f"{self.__class__.__name__}()"

    def __str__(self):
        return self.__class__.__name__


class StepCall:
    """Describes one body about to be evaluated. Handed to middleware."""

    def __init__(self, kind, body, flow, key=None):
        self.kind = kind
        self.body = body
        self.flow = flow
        self.key = key

    @property
    def name(self):
        return describe(self.body)

    def invoke(self, outflow):
        """
        Evaluate the body against ``outflow`` with the arguments of its kind.

        Failure handlers get ``(payload, outflow)``, sub-flow factories a
        read-only snapshot, every other body the outflow itself.
        """
        if self.kind == StepKind.ON_DAM:
            return evaluate(self.body, self.flow.block_payload, outflow)
        if self.kind == StepKind.CHAIN_WF:
            return evaluate(self.body, outflow.snapshot())
        return evaluate(self.body, outflow)

    def __repr__(self):
        return f"StepCall(kind={self.kind}, name={self.name}, key={self.key!r})"


def describe(body):
    """Human readable name for a body: function name, step class, or value repr."""
    if isinstance(body, Step):
        return str(body)
    if callable(body):
        return getattr(body, '__qualname__', None) or type(body).__name__
    return repr(body)


def evaluate(body, *args):
    """Call ``body`` with ``args`` if it is callable, otherwise return it as is."""
    if callable(body):
        return body(*args)
    return body
