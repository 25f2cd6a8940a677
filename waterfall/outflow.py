"""
Outflow - Ordered result store that flows through every step of a waterfall.
"""

from collections.abc import Mapping
from types import MappingProxyType


class _Missing:
    """Marker for a key that is absent from an outflow."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "MISSING"


MISSING = _Missing()


class Outflow:
    """
    Insertion-ordered key/value store holding the intermediate results of a flow.
    Every step, guard and failure handler reads from it; steps may write to it.

    Reads are speculative: ``get`` and attribute access never raise for a
    missing key. Item access (``outflow[key]``) follows the usual mapping
    contract and raises ``KeyError``.
    """

    def __init__(self, data=None):
        """
        Initialize the Outflow with optional seed data.

        Args:
            data: Mapping of initial values (optional, copied)
        """
        object.__setattr__(self, '_data', dict(data) if data is not None else {})

    def get(self, key, default=None):
        """
        Get a value from the outflow.

        Args:
            key: The key to retrieve
            default: Returned when the key is absent. Pass ``MISSING`` to tell
                an absent key apart from a stored ``None``.

        Returns:
            The value associated with the key, or default if not found
        """
        return self._data.get(key, default)

    def set(self, key, value):
        """
        Insert or overwrite a value.

        Returns:
            self (for method chaining)
        """
        self._data[key] = value
        return self

    def update(self, values):
        """Insert or overwrite every pair of ``values``."""
        self._data.update(values)
        return self

    def has(self, key):
        return key in self._data

    def remove(self, key):
        """
        Remove a key if present.

        Returns:
            self (for method chaining)
        """
        self._data.pop(key, None)
        return self

    def clear(self):
        self._data.clear()
        return self

    def keys(self):
        return self._data.keys()

    def values(self):
        return self._data.values()

    def items(self):
        return self._data.items()

    def to_dict(self):
        """Return a copy of the internal data dictionary."""
        return self._data.copy()

    def snapshot(self):
        """Return a read-only view over a copy of the current data."""
        return MappingProxyType(self._data.copy())

    def __getitem__(self, key):
        return self._data[key]

    def __setitem__(self, key, value):
        self._data[key] = value

    def __contains__(self, key):
        return key in self._data

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)

    def __eq__(self, other):
        if isinstance(other, Outflow):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    __hash__ = None

    def __getattr__(self, name):
        # Only reached for names that are not real attributes
        if name.startswith('__') or name == '_data':
            raise AttributeError(name)
        return self._data.get(name)

    def __setattr__(self, name, value):
        self._data[name] = value

    def __repr__(self):
        return f"Outflow({self._data})"

    def __str__(self):
        return str(self._data)
