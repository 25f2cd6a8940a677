"""
FlowConfig - Engine options shared by flows.

Flows take an explicit ``config=`` or pick up the process-wide defaults that
are current when they are constructed.
"""

from .errors import ConfigError


class FlowConfig:
    """
    Options controlling engine behaviour.

    Attributes:
        reversible_flow: Run ``reverse_flow`` hooks when a flow is dammed
        log_skipped: Log every skipped body at DEBUG level
    """

    OPTIONS = ('reversible_flow', 'log_skipped')

    def __init__(self, reversible_flow=True, log_skipped=False):
        self.reversible_flow = reversible_flow
        self.log_skipped = log_skipped

    def replace(self, **options):
        """
        Return a copy with the given options changed.

        Raises:
            ConfigError: If an option name is unknown
        """
        _check_options(options)
        values = self.to_dict()
        values.update(options)
        return FlowConfig(**values)

    def to_dict(self):
        return {name: getattr(self, name) for name in self.OPTIONS}

    def __eq__(self, other):
        if not isinstance(other, FlowConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"FlowConfig({fields})"


_defaults = FlowConfig()


def _check_options(options):
    unknown = sorted(set(options) - set(FlowConfig.OPTIONS))
    if unknown:
        raise ConfigError(f"Unknown flow option(s): {', '.join(unknown)}")


def get_config():
    """Return the process-wide default configuration."""
    return _defaults


def configure(**options):
    """
    Change the process-wide defaults used by flows created afterwards.

    Example:
        configure(reversible_flow=False)

    Returns:
        The new default FlowConfig
    """
    global _defaults
    _defaults = _defaults.replace(**options)
    return _defaults


def reset_config():
    """Restore the built-in defaults."""
    global _defaults
    _defaults = FlowConfig()
    return _defaults
