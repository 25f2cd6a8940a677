"""
Middleware - Cross-cutting behaviour wrapped around every body a flow evaluates.
"""

import logging
import time

_logger = logging.getLogger(__name__)


class Middleware:
    """
    Base class for middleware that wraps body evaluation.

    Middleware executes in LIFO order (reverse of registration), like gift
    wrapping. Skipped bodies never reach middleware.
    """

    def execute(self, call, outflow, next_callable):
        """
        Execute the middleware logic.

        Args:
            call: StepCall describing the body (kind, name, key, flow)
            outflow: Outflow the body will read
            next_callable: Function to call to continue (must be called). The
                outflow passed to it is the one the body receives.

        Returns:
            The value returned by next_callable (or a replacement)

        Example:
            def execute(self, call, outflow, next_callable):
                print(f"Before {call.name}")
                value = next_callable(outflow)
                print(f"After {call.name}")
                return value
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement execute()")

    def __repr__(self):
        return f"{self.__class__.__name__}()"

    def __str__(self):
        return self.__class__.__name__


class LoggingMiddleware(Middleware):
    """Log every evaluated body before and after it runs."""

    def __init__(self, logger=None, level=logging.INFO):
        """
        Args:
            logger: Logger to write to (default: the waterfall.middleware logger)
            level: Level of the emitted records
        """
        self.logger = logger if logger is not None else _logger
        self.level = level

    def execute(self, call, outflow, next_callable):
        self.logger.log(self.level, "Starting %s %s", call.kind, call.name)
        value = next_callable(outflow)
        self.logger.log(self.level, "Completed %s %s", call.kind, call.name)
        return value


class TimingMiddleware(Middleware):
    """
    Record the wall-clock time of each evaluated body.

    Timings are keyed by ``"<kind>:<name>"`` and kept in milliseconds.
    """

    def __init__(self):
        self.timings = {}

    def execute(self, call, outflow, next_callable):
        start = time.perf_counter()
        try:
            return next_callable(outflow)
        finally:
            elapsed = (time.perf_counter() - start) * 1000
            self.timings.setdefault(f"{call.kind}:{call.name}", []).append(elapsed)

    def get_report(self):
        """Return one summary entry per timed body, sorted by name."""
        report = []
        for name, times in sorted(self.timings.items()):
            report.append({
                'step': name,
                'avg_ms': sum(times) / len(times),
                'min_ms': min(times),
                'max_ms': max(times),
                'total_ms': sum(times),
                'calls': len(times),
            })
        return report

    def log_report(self, logger=None, level=logging.INFO):
        """Write the report to a logger, one line per body."""
        log = logger if logger is not None else _logger
        for entry in self.get_report():
            log.log(level, "%-40s avg: %8.2fms  min: %8.2fms  max: %8.2fms  calls: %d",
                    entry['step'], entry['avg_ms'], entry['min_ms'], entry['max_ms'],
                    entry['calls'])

    def reset(self):
        self.timings.clear()
