"""
Present/absent value wrapper.

Options are assembled from defaults, the user config and console overrides.
``Some(0.0)`` is a configured value, ``NOTHING`` means "not configured yet";
plain ``None`` checks cannot tell a falsy setting from a missing one.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from .errors import IncompleteOptionsError

T = TypeVar('T')


class Option(Generic[T]):
    """Base for Some and Nothing. Use ``Option.of`` to wrap a nullable value."""

    __slots__ = ()

    @property
    def is_some(self) -> bool:
        raise NotImplementedError

    @property
    def is_none(self) -> bool:
        return not self.is_some

    @property
    def value(self) -> T:
        raise NotImplementedError

    def value_or(self, default: T) -> T:
        return self.value if self.is_some else default

    @staticmethod
    def of(value: Optional[T]) -> 'Option[T]':
        """Wrap value, treating only None as absent."""
        if value is None:
            return NOTHING
        return Some(value)


class Some(Option[T]):
    """A present value."""

    __slots__ = ('_value',)

    def __init__(self, value: T):
        self._value = value

    @property
    def is_some(self) -> bool:
        return True

    @property
    def value(self) -> T:
        return self._value

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Some) and self._value == other._value

    def __hash__(self):
        return hash(('Some', self._value))

    def __repr__(self) -> str:
        return f"Some({self._value!r})"


class Nothing(Option[Any]):
    """The absent value. Use the ``NOTHING`` singleton."""

    __slots__ = ()
    _instance: Optional['Nothing'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_some(self) -> bool:
        return False

    @property
    def value(self):
        raise IncompleteOptionsError("Value accessed on an empty Option")

    def __repr__(self) -> str:
        return "NOTHING"


NOTHING = Nothing()


__all__ = ['Option', 'Some', 'Nothing', 'NOTHING']
