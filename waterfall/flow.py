"""
Flow - A chain of guarded steps that short-circuits to failure handlers
once dammed.
"""

import logging
from collections.abc import Iterable, Mapping

from .config import get_config
from .errors import FlowTypeError, ImportSpecError, IncorrectDamArgumentError
from .outflow import MISSING, Outflow
from .result import Result
from .state import FlowState, falsy, truthy
from .step import StepCall, StepKind, describe

logger = logging.getLogger(__name__)


class Flow:
    """
    One ordered sequence of guarded steps.

    Every operation runs immediately, mutates this flow in place and returns
    it, so calls read top to bottom:

        (Flow({'user_id': 7})
            .when_truthy(lambda o: o.user_id)
            .dam("user_id is required")
            .chain(load_user, 'user')
            .on_dam(lambda payload, o: errors.append(payload)))

    The flow manages:
    - Open/blocked state (first dam wins, never reopens)
    - The outflow shared by every step
    - Embedded sub-flows and the keys imported from them
    - Middleware pipeline (LIFO order) around every evaluated body

    Subclasses override ``call`` to express their steps against ``self`` and
    ``reverse_flow`` to undo external effects when dammed.
    """

    def __init__(self, outflow=None, middleware=None, config=None):
        """
        Initialize a Flow.

        Args:
            outflow: Seed data (mapping, copied) or an Outflow to use as is
            middleware: Iterable of Middleware to register
            config: FlowConfig (default: the process-wide defaults)
        """
        self._outflow = outflow if isinstance(outflow, Outflow) else Outflow(outflow)
        self._state = FlowState()
        self._config = config if config is not None else get_config()
        self._middleware = list(middleware or [])
        self._pipeline = None
        self._pipeline_built = False
        self._executed_flows = []
        self._blocked_by = None
        self._dam_ready = False
        self._reversed = False
        self._has_flown = False

    def call(self):
        """Express the flow's own steps. Override in subclasses."""
        return self

    def reverse_flow(self):
        """Undo external effects when the flow is dammed. Override in subclasses."""

    def run(self):
        """
        Execute ``call`` and return the flow.

        Returns:
            self (terminal, ready to inspect or embed)
        """
        self._has_flown = True
        self.call()
        self._settle()
        return self

    @property
    def outflow(self):
        return self._outflow

    @property
    def status(self):
        return self._state.status

    @property
    def block_payload(self):
        """Payload the flow was dammed with, or None."""
        return self._state.payload

    @property
    def blocked_by(self):
        """The flow where the blocking originated (self or an embedded flow)."""
        return self._blocked_by

    @property
    def executed_flows(self):
        return tuple(self._executed_flows)

    @property
    def has_flown(self):
        return self._has_flown

    @property
    def config(self):
        return self._config

    def is_open(self):
        return self._state.is_open()

    def is_blocked(self):
        return self._state.is_blocked()

    def chain(self, step, key=None):
        """
        Run a step if the flow is open.

        Args:
            step: Callable receiving the outflow, or a constant value
            key: Outflow key the produced value is written to. When the step
                returns a Flow, the import specification for it instead.

        The step may return ``Result.fail(payload)`` to dam the flow,
        ``Result.ok(data)`` to produce ``data``, or a Flow to embed it.

        Returns:
            self (for method chaining)
        """
        self._begin()
        if self.is_blocked():
            return self._skip(StepKind.CHAIN, step)

        value = self._evaluate(StepKind.CHAIN, step, key=key)

        if value is self:
            return self
        if isinstance(value, Flow):
            return self._embed(value, _import_pairs(key))
        if isinstance(value, Result):
            if value.is_failure():
                return self._declare(value.error)
            value = value.data
        if key is not None:
            self._outflow[key] = value
        return self

    def when_truthy(self, predicate):
        """
        Guard: dam the flow unless the predicate result is truthy.

        Follow with ``dam`` to supply the payload.

        Returns:
            self (for method chaining)
        """
        return self._guard(StepKind.WHEN_TRUTHY, predicate, falsy)

    def when_falsy(self, predicate):
        """
        Guard: dam the flow unless the predicate result is falsy.

        Follow with ``dam`` to supply the payload.

        Returns:
            self (for method chaining)
        """
        return self._guard(StepKind.WHEN_FALSY, predicate, truthy)

    def dam(self, expression):
        """
        Supply the payload for the guard called just before.

        Only evaluated when that guard dammed the flow on this very call;
        otherwise a no-op.

        Args:
            expression: Callable receiving the outflow, or a constant payload

        Raises:
            IncorrectDamArgumentError: If the payload evaluates to None

        Returns:
            self (for method chaining)
        """
        if not self._dam_ready:
            self._begin()
            return self._skip(StepKind.DAM, expression)

        self._has_flown = True
        self._dam_ready = False
        payload = self._evaluate(StepKind.DAM, expression)
        if payload is None:
            raise IncorrectDamArgumentError()
        self._state.fill(payload)
        logger.debug("%r dammed with %r", self, payload)
        self._unwind()
        return self

    def on_dam(self, handler):
        """
        Run a failure handler if the flow is dammed.

        Args:
            handler: Callable receiving ``(payload, outflow)``

        Returns:
            self (for method chaining)
        """
        self._begin()
        if self.is_open():
            return self._skip(StepKind.ON_DAM, handler)
        self._evaluate(StepKind.ON_DAM, handler)
        return self

    def block(self, payload):
        """
        Dam the flow directly. No-op if it is already dammed.

        Raises:
            IncorrectDamArgumentError: If payload is None

        Returns:
            self (for method chaining)
        """
        self._begin()
        return self._declare(payload)

    def chain_wf(self, factory, imports=None):
        """
        Embed a sub-flow if the flow is open.

        Args:
            factory: Callable receiving a read-only snapshot of the outflow
                and returning a Flow. A flow that has not run yet is run.
            imports: Keys to copy from the sub-flow's outflow: a key, an
                iterable of keys (same name on both sides) or a mapping
                ``{parent_key: sub_key}``. Absent sub keys are skipped.

        A dammed sub-flow dams this flow with the same payload.

        Raises:
            FlowTypeError: If the factory does not return a Flow
            ImportSpecError: If ``imports`` has an unsupported shape

        Returns:
            self (for method chaining)
        """
        self._begin()
        if self.is_blocked():
            return self._skip(StepKind.CHAIN_WF, factory)

        pairs = _import_pairs(imports)
        sub = self._evaluate(StepKind.CHAIN_WF, factory, key=imports)
        if not isinstance(sub, Flow):
            raise FlowTypeError(sub)
        return self._embed(sub, pairs)

    def use_middleware(self, middleware):
        """
        Add middleware to the flow.
        Middleware executes in LIFO order (reverse of registration).

        Returns:
            self (for method chaining)
        """
        self._middleware.append(middleware)
        self._pipeline_built = False  # Invalidate cached pipeline
        return self

    def clear_middleware(self):
        self._middleware.clear()
        self._pipeline_built = False
        return self

    def middleware_count(self):
        return len(self._middleware)

    def _begin(self):
        self._has_flown = True
        self._settle()

    def _settle(self):
        # A guard left blocked without a dam: its payload stays None
        if self._dam_ready:
            self._dam_ready = False
            self._unwind()

    def _skip(self, kind, body):
        if self._config.log_skipped:
            logger.debug("Skipping %s %s on %s flow", kind, describe(body), self.status)
        return self

    def _guard(self, kind, predicate, dams_when):
        self._begin()
        if self.is_blocked():
            return self._skip(kind, predicate)

        outcome = self._evaluate(kind, predicate)
        if dams_when(outcome) and self._state.trip():
            # Unwinding waits for the payload from the following dam
            self._blocked_by = self
            self._dam_ready = True
        return self

    def _declare(self, payload):
        if payload is None:
            raise IncorrectDamArgumentError()
        return self._block(payload, self)

    def _block(self, payload, origin):
        if self._state.block(payload):
            logger.debug("%r dammed with %r", self, payload)
            self._blocked_by = origin
            self._unwind()
        return self

    def _unwind(self):
        if self._config.reversible_flow:
            self._reverse_flows()

    def _reverse_flows(self):
        if self._reversed:
            return
        self._reversed = True
        logger.debug("Reversing %r", self)
        self.reverse_flow()
        for flow in reversed(self._executed_flows):
            flow._reverse_flows()

    def _embed(self, sub, pairs):
        if not sub.has_flown:
            sub.run()
        sub._settle()
        self._executed_flows.append(sub)

        for parent_key, sub_key in pairs:
            value = sub.outflow.get(sub_key, MISSING)
            if value is MISSING:
                logger.debug("Sub-flow %r has no %r to import", sub, sub_key)
                continue
            self._outflow[parent_key] = value

        logger.debug("Embedded %r into %r", sub, self)
        if sub.is_blocked():
            self._block(sub.block_payload, sub.blocked_by or sub)
        return self

    def _evaluate(self, kind, body, key=None):
        if not self._pipeline_built:
            self._pipeline = self._build_pipeline()
            self._pipeline_built = True

        call = StepCall(kind, body, self, key)
        return self._pipeline(call, self._outflow)

    def _build_pipeline(self):
        """
        Build the middleware pipeline.
        Middleware wraps in LIFO order (reverse of registration).

        Returns:
            Function that evaluates a body against the outflow it is given
        """
        def execute_body(call, outflow):
            return call.invoke(outflow)

        pipeline = execute_body
        for middleware in reversed(self._middleware):
            pipeline = self._create_middleware_wrapper(middleware, pipeline)
        return pipeline

    def _create_middleware_wrapper(self, middleware, next_pipeline):
        def wrapper(call, outflow):
            return middleware.execute(
                call,
                outflow,
                lambda ctx: next_pipeline(call, ctx)
            )
        return wrapper

    def __repr__(self):
        return (f"{self.__class__.__name__}(status={self.status}, "
                f"outflow={list(self._outflow.keys())}, "
                f"middleware={len(self._middleware)})")


def _import_pairs(imports):
    """Normalise an import specification into ``[(parent_key, sub_key), ...]``."""
    if imports is None:
        return []
    if isinstance(imports, (str, bytes)):
        return [(imports, imports)]
    if isinstance(imports, Mapping):
        return list(imports.items())
    if isinstance(imports, Iterable):
        pairs = []
        for name in imports:
            try:
                hash(name)
            except TypeError:
                raise ImportSpecError(f"Import keys must be hashable, got {name!r}") from None
            pairs.append((name, name))
        return pairs
    raise ImportSpecError(
        f"Imports must be a key, an iterable of keys or a mapping, got {type(imports).__name__}"
    )
