"""Observable state infrastructure

`State` subclasses declare their attributes with `Field` descriptors. Assigning
a field, or mutating a list/dict/set stored in one, records the field name in
`changes` and notifies the watchers registered for it.
"""

import collections
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")

MISSING = object()

_MUTATING_METHODS = frozenset(
    {
        "add",
        "append",
        "clear",
        "difference_update",
        "discard",
        "extend",
        "insert",
        "intersection_update",
        "pop",
        "popitem",
        "remove",
        "reverse",
        "setdefault",
        "sort",
        "symmetric_difference_update",
        "update",
    }
)


class Observable:
    """Proxy around a mutable container that reports in-place mutations"""

    def __init__(self, value: Any, callback: Callable[[], None]) -> None:
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_callback", callback)

    @property
    def value(self) -> Any:
        """The wrapped container"""
        return self._value

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._value, name)
        if name not in _MUTATING_METHODS or not callable(attr):
            return attr

        def mutate(*args, **kwargs):
            result = attr(*args, **kwargs)
            self._callback()
            return result

        return mutate

    def __getitem__(self, key):
        return self._value[key]

    def __setitem__(self, key, value) -> None:
        self._value[key] = value
        self._callback()

    def __delitem__(self, key) -> None:
        del self._value[key]
        self._callback()

    def __len__(self) -> int:
        return len(self._value)

    def __iter__(self):
        return iter(self._value)

    def __contains__(self, item) -> bool:
        return item in self._value

    def __bool__(self) -> bool:
        return bool(self._value)

    def __eq__(self, other) -> bool:
        if isinstance(other, Observable):
            other = other.value
        return self._value == other

    def __ne__(self, other) -> bool:
        return not self == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Observable({self._value!r})"


class Field(Generic[T]):
    """Descriptor for a tracked state attribute

    The default is either a plain value or a zero-argument factory
    (e.g. `Field[list[int]](list)`).
    """

    def __init__(self, default: Any) -> None:
        self._default = default
        self._name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = name

    def __get__(self, instance: "State | None", owner: type) -> T:
        if instance is None:
            return self  # type: ignore[return-value]
        values = instance.__dict__.setdefault("_values", {})
        if self._name not in values:
            default = self._default() if callable(self._default) else self._default
            values[self._name] = self._wrap(instance, default)
        return values[self._name]

    def __set__(self, instance: "State", value: T) -> None:
        old_value = self.__get__(instance, type(instance))
        instance.__dict__["_values"][self._name] = self._wrap(instance, value)
        if old_value != value:
            instance._changed(self._name)  # pylint: disable=protected-access

    def _wrap(self, instance: "State", value: Any) -> Any:
        if isinstance(value, Observable):
            value = value.value
        if isinstance(value, (list, dict, set)):
            name = self._name
            # pylint: disable-next=protected-access
            return Observable(value, lambda: instance._changed(name))
        return value


class State:
    """Base class for observable state objects"""

    def __init__(self) -> None:
        self._changes: set[str] = set()
        self._watchers: dict[str, list[Callable[[], None]]] = (
            collections.defaultdict(list)
        )

    def _changed(self, name: str) -> None:
        self._changes.add(name)
        for callback in self._watchers[name]:
            callback()

    @property
    def changes(self) -> set[str]:
        """Get the set of field names that have changed."""
        return self._changes.copy()

    def clear_changes(self) -> None:
        """Clear the changes set."""
        self._changes.clear()

    def register_watcher(self, name: str, callback: Callable[[], None]) -> None:
        """Register a callback to be notified when a field changes"""
        self._watchers[name].append(callback)
