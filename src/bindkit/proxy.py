"""NotifyingProxy — add property change notification to an object that has none.

The proxy exposes a fixed set of fields of the wrapped object. Reads and
writes go through a schema of accessors built once at construction; each
write is pushed to the wrapped object and then announced on
property_changed with the field name.

The set of fields cannot change after construction, but their values can.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any, Callable

from bindkit.errors import InvalidArgumentError
from bindkit.notifier import Event


@dataclasses.dataclass(frozen=True)
class FieldAccessor:
    getter: Callable[[], Any]
    setter: Callable[[Any], None]


def attribute_accessor(obj: object, name: str) -> FieldAccessor:
    """Accessor reading and writing the attribute `name` of obj."""
    return FieldAccessor(
        getter=lambda: getattr(obj, name),
        setter=lambda value: setattr(obj, name, value),
    )


def writable_fields(obj: object) -> list[str]:
    """Public, writable data fields of obj.

    Dataclass fields for dataclasses (none when frozen); otherwise public
    instance attributes that are not callables, followed by properties with
    a setter.
    """
    if dataclasses.is_dataclass(obj):
        if type(obj).__dataclass_params__.frozen:
            return []
        return [f.name for f in dataclasses.fields(obj)]

    names: list[str] = []
    for name, value in getattr(obj, "__dict__", {}).items():
        if not name.startswith("_") and not callable(value):
            names.append(name)
    for klass in type(obj).__mro__:
        for name, attr in vars(klass).items():
            if (
                isinstance(attr, property)
                and attr.fset is not None
                and not name.startswith("_")
                and name not in names
            ):
                names.append(name)
    return names


class NotifyingProxy:
    """Wraps an object and announces every field write.

    Usage:
        settings = Settings(theme="dark")
        proxy = NotifyingProxy(settings)
        proxy.property_changed.subscribe(lambda sender, name: print(name))

        proxy.theme = "light"   # settings.theme == "light", prints "theme"
        proxy.missing = 1       # AttributeError — fields are fixed

    fields may be a list of attribute names or a mapping of name to
    FieldAccessor for values that are not plain attributes. When omitted,
    writable_fields(wrapped) is used.
    """

    __slots__ = ("_wrapped", "_schema", "property_changed")

    def __init__(
        self,
        wrapped: object,
        fields: Iterable[str] | Mapping[str, FieldAccessor] | None = None,
    ) -> None:
        if wrapped is None:
            raise InvalidArgumentError("wrapped must not be None")

        if fields is None:
            fields = writable_fields(wrapped)
        if isinstance(fields, Mapping):
            schema = dict(fields)
        else:
            schema = {name: attribute_accessor(wrapped, name) for name in fields}

        for name in schema:
            if not name or name.startswith("_"):
                raise InvalidArgumentError(f"invalid field name {name!r}")

        object.__setattr__(self, "_wrapped", wrapped)
        object.__setattr__(self, "_schema", schema)
        object.__setattr__(self, "property_changed", Event())

    @property
    def wrapped(self) -> object:
        return self._wrapped

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not slots or class attributes.
        if name.startswith("_"):
            raise AttributeError(name)
        accessor = self._schema.get(name)
        if accessor is None:
            raise AttributeError(f"{type(self).__name__} has no field {name!r}")
        return accessor.getter()

    def __setattr__(self, name: str, value: Any) -> None:
        accessor = self._schema.get(name)
        if accessor is None:
            raise AttributeError(f"{type(self).__name__} has no field {name!r}")
        accessor.setter(value)
        self.property_changed.emit(self, name)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} fields cannot be deleted")

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._schema))

    def __repr__(self) -> str:
        return f"NotifyingProxy({self._wrapped!r}, fields={list(self._schema)})"
