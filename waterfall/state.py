"""
FlowState - Open/blocked state machine of a waterfall, plus the truthiness
rule every guard applies to predicate results.
"""

from .outflow import MISSING
from .result import Result


class FlowStatus:
    """Enumeration of flow states."""
    OPEN = "open"         # Steps execute
    BLOCKED = "blocked"   # Steps are skipped, only failure handlers run


_UNSET = object()


def falsy(value):
    """
    Return True if a predicate result counts as false.

    Only ``None``, ``False``, ``MISSING`` and a failed ``Result`` are falsy.
    Everything else is truthy, including ``0``, ``""`` and empty collections.
    """
    if value is None or value is False or value is MISSING:
        return True
    if isinstance(value, Result):
        return value.is_failure()
    return False


def truthy(value):
    """Return True if a predicate result counts as true. See ``falsy``."""
    return not falsy(value)


class FlowState:
    """
    Tracks whether a flow is open or blocked, and the payload it was blocked with.

    The first block wins: once blocked, the state never reopens and later
    block attempts are discarded so the original cause is preserved.
    """

    def __init__(self):
        self._status = FlowStatus.OPEN
        self._payload = _UNSET

    @property
    def status(self):
        return self._status

    @property
    def payload(self):
        """Payload recorded when blocking, or None."""
        return None if self._payload is _UNSET else self._payload

    @property
    def payload_pending(self):
        """True while blocked and still waiting for a payload."""
        return self._status == FlowStatus.BLOCKED and self._payload is _UNSET

    def is_open(self):
        return self._status == FlowStatus.OPEN

    def is_blocked(self):
        return self._status == FlowStatus.BLOCKED

    def block(self, payload):
        """
        Block with ``payload`` if currently open.

        Returns:
            True if this call performed the transition, False if already blocked
        """
        if not self.trip():
            return False
        self._payload = payload
        return True

    def trip(self):
        """
        Block without a payload; a later ``fill`` supplies it.

        Returns:
            True if this call performed the transition, False if already blocked
        """
        if self._status == FlowStatus.BLOCKED:
            return False
        self._status = FlowStatus.BLOCKED
        return True

    def fill(self, payload):
        """
        Record the payload of a blocking event that has none yet.

        Returns:
            True if the payload was recorded
        """
        if not self.payload_pending:
            return False
        self._payload = payload
        return True

    def __repr__(self):
        return f"FlowState(status={self._status}, payload={self.payload!r})"
