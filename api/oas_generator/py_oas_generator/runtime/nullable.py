"""
Three-state nullable values for generated models.

A nullable property on the wire can be absent, present with ``null`` or present
with a value. Python's ``None`` only covers two of those, so generated models
store nullable properties in a :class:`Nullable` wrapper and use the
:data:`UNSET` sentinel as the default for anything that was not supplied.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping, MutableMapping
from typing import Any, Final, Generic, TypeVar

T = TypeVar("T")


class _UnsetType:
    """Type of the :data:`UNSET` sentinel."""

    _instance: _UnsetType | None = None

    def __new__(cls) -> _UnsetType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __copy__(self) -> _UnsetType:
        return self

    def __deepcopy__(self, _memo: dict[int, Any]) -> _UnsetType:
        return self

    def __reduce__(self) -> str:
        return "UNSET"


Unset = _UnsetType
UNSET: Final = _UnsetType()


def is_unset(value: Any) -> bool:  # noqa: ANN401
    """Check whether a value is the UNSET sentinel."""
    return value is UNSET


class NullableState(enum.Enum):
    """The three states a nullable value can be in."""

    UNSET = "unset"
    NULL = "null"
    VALUE = "value"


class Nullable(Generic[T]):
    """A value that distinguishes "absent" from "explicitly null" from "present".

    Examples:
        >>> field = Nullable[str]()
        >>> field.is_set()
        False
        >>> field.set_nil()
        >>> field.is_set(), field.get()
        (True, None)
        >>> field.set("abc")
        >>> field.get()
        'abc'
    """

    __slots__ = ("_state", "_value")

    def __init__(self, value: T | None | _UnsetType = UNSET) -> None:
        self._state = NullableState.UNSET
        self._value: T | None = None
        if value is not UNSET:
            self.set(value)  # type: ignore[arg-type]

    @classmethod
    def null(cls) -> Nullable[T]:
        """Create a wrapper holding an explicit null."""
        return cls(None)

    @property
    def state(self) -> NullableState:
        return self._state

    def set(self, value: T | None) -> None:
        """Assign a value; ``None`` is stored as an explicit null."""
        if value is None:
            self.set_nil()
            return
        self._value = value
        self._state = NullableState.VALUE

    def set_nil(self) -> None:
        """Mark the value as explicitly null."""
        self._value = None
        self._state = NullableState.NULL

    def unset(self) -> None:
        """Forget the value and the fact that it was ever assigned."""
        self._value = None
        self._state = NullableState.UNSET

    def get(self) -> T | None:
        """Return the value, or None when unset or explicitly null.

        Use :meth:`is_set` to tell those two cases apart.
        """
        return self._value

    def get_ok(self) -> tuple[T | None, bool]:
        """Return ``(value, is_set)``."""
        return self._value, self.is_set()

    def is_set(self) -> bool:
        return self._state is not NullableState.UNSET

    def is_null(self) -> bool:
        return self._state is NullableState.NULL

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        key: str,
        decode: Callable[[Any], T] | None = None,
    ) -> Nullable[T]:
        """Build a wrapper from a raw decoded JSON object.

        Presence of the key is checked on the mapping itself, so a missing key
        stays unset while ``"key": null`` becomes an explicit null.

        Args:
            payload: The raw decoded JSON object.
            key: Wire name of the property.
            decode: Optional converter applied to non-null values.

        Returns:
            The wrapper in the state found in the payload.
        """
        wrapper: Nullable[T] = cls()
        if key not in payload:
            return wrapper
        raw = payload[key]
        if raw is None:
            wrapper.set_nil()
        else:
            wrapper.set(decode(raw) if decode else raw)
        return wrapper

    def emit(
        self,
        payload: MutableMapping[str, Any],
        key: str,
        encode: Callable[[T], Any] | None = None,
    ) -> None:
        """Write the value into a JSON object, omitting the key when unset."""
        if self._state is NullableState.UNSET:
            return
        if self._state is NullableState.NULL:
            payload[key] = None
            return
        payload[key] = encode(self._value) if encode else self._value  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Nullable):
            return NotImplemented
        return self._state is other._state and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._state, self._value))

    def __repr__(self) -> str:
        if self._state is NullableState.VALUE:
            return f"Nullable({self._value!r})"
        return f"Nullable.{self._state.name}"


def coerce_nullable(value: Any) -> Nullable[Any]:  # noqa: ANN401
    """Wrap a constructor argument in a Nullable.

    ``UNSET`` gives an unset wrapper, ``None`` an explicit null, an existing
    wrapper is copied, anything else becomes a value.
    """
    if isinstance(value, Nullable):
        copy: Nullable[Any] = Nullable()
        if value.is_null():
            copy.set_nil()
        elif value.is_set():
            copy.set(value.get())
        return copy
    return Nullable(value)
