"""
Result - Explicit outcome a step body may return.
"""


class Result:
    """
    Tagged step outcome: either data for the step's target key, or the
    payload the flow is dammed with.

    Steps only need a Result when they declare a failure; a plain return
    value is already a success. Guards read a failed Result as falsy.
    """

    def __init__(self, success, error=None, data=None):
        """
        Args:
            success: False marks a declared failure
            error: Dam payload carried by a failure
            data: Value a success hands to the step's target key
        """
        self.success = success
        self.error = error
        self.data = data

    @staticmethod
    def ok(data=None):
        """Success carrying ``data`` for the step's target key."""
        return Result(True, data=data)

    @staticmethod
    def fail(error, data=None):
        """
        Declared failure. ``Flow.chain`` dams the flow with ``error``.

        Args:
            error: Dam payload (must not be None)
            data: Extra diagnostics kept on the Result only
        """
        return Result(False, error=error, data=data)

    def is_success(self):
        return self.success

    def is_failure(self):
        return not self.success

    def __bool__(self):
        return self.success

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return (self.success, self.error, self.data) == (other.success, other.error, other.data)

    __hash__ = None

    def __repr__(self):
        if self.success:
            return f"Result.ok(data={self.data!r})"
        return f"Result.fail(error={self.error!r}, data={self.data!r})"

    def __str__(self):
        if self.success:
            return "Success"
        return f"Failure: {self.error}"
