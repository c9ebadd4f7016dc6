"""Entity contract shared by all GPX document types.

Every entity is an attrs frozen class mixing in ``Entity`` and registering its
``EntityBinding`` with ``bind``. That gives it ``of``, ``builder``, ``reader``,
``writer`` and ``write`` without the binding engine knowing anything about
the concrete shape.
"""

from collections.abc import Iterable
from typing import Any, ClassVar, Generic, Self, TypeVar

from gpxbind.binding import EntityBinding, EntityReader, EntityWriter, TokenSink

E = TypeVar("E")


class Entity:
    """Mixin for immutable document entities."""

    __slots__ = ()

    _binding: ClassVar[EntityBinding]
    Builder: ClassVar[type["EntityBuilder"]]

    @classmethod
    def bind(cls, binding: EntityBinding) -> EntityBinding:
        """Register the canonical XML binding for this entity type."""
        cls._binding = binding
        cls.Builder.entity_type = cls
        return binding

    @classmethod
    def of(cls, *args: Any, **kwargs: Any) -> Self:
        """Create an entity directly; same parameters as the constructor."""
        return cls(*args, **kwargs)

    @classmethod
    def builder(cls) -> "EntityBuilder":
        return cls.Builder()

    @classmethod
    def reader(cls) -> EntityReader[Self]:
        return cls._binding.reader

    @classmethod
    def writer(cls) -> EntityWriter[Self]:
        return cls._binding.writer

    def write(self, sink: TokenSink) -> None:
        """Emit this entity as one element into ``sink``."""
        type(self)._binding.writer.write(sink, self)


class EntityBuilder(Generic[E]):
    """Mutable staging area producing one immutable entity.

    Concrete builders expose one fluent setter per field and ``add_*``
    methods for repeated fields. Builders are short-lived, thread-confined
    scratch space; ``build`` may be called repeatedly and every result is
    independent of later builder changes.
    """

    entity_type: ClassVar[type]

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def _set(self, name: str, value: Any) -> Self:
        self._values[name] = value
        return self

    def _replace(self, name: str, items: Iterable[Any] | None) -> Self:
        # Own copy, so later add_* calls never touch the caller's list
        self._values[name] = None if items is None else list(items)
        return self

    def _append(self, name: str, item: Any) -> Self:
        if item is None:
            raise TypeError(f"cannot add None to {name}")
        items = self._values.get(name)
        if items is None:
            items = self._values[name] = []
        items.append(item)
        return self

    def _append_built(
        self,
        name: str,
        item: Any,
        item_type: type[Entity],
    ) -> Self:
        """Append an entity, or build one by passing a fresh builder to ``item``."""
        if callable(item):
            builder = item_type.builder()
            item(builder)
            item = builder.build()
        return self._append(name, item)

    def build(self) -> E:
        return self.entity_type(**self._values)
