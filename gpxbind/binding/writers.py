"""Field and entity writers: the dual of the readers.

Each field writer knows how to emit one entity value; the ``EntityWriter``
binds field writers to accessors and wraps their output in a single element.
Absent values (None) and empty sequences emit nothing.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any, Generic, Protocol, TypeVar

from attrs import define, field

from .tokens import TokenSink

T = TypeVar("T")
E = TypeVar("E")


class ElementWriter(Protocol[T]):
    """Writes one value as a complete element named ``name``."""

    name: str

    def write(self, sink: TokenSink, value: T) -> None:
        ...


@define(frozen=True, slots=True)
class TextWriter(Generic[T]):
    """Writes ``<name>format(value)</name>``."""

    name: str
    format: Callable[[T], str] = str

    def write(self, sink: TokenSink, value: T) -> None:
        sink.start(self.name)
        sink.text(self.format(value))
        sink.end(self.name)


def text_writer(tag: str, format: Callable[[Any], str] = str) -> TextWriter:
    """Writer for a single text element, for use inside ``emit_list``."""
    return TextWriter(tag, format)


# === Field writers ===


class FieldWriter(Protocol):
    """Emits one entity value, either as start-tag attributes or as children."""

    def attributes(self, value: Any) -> dict[str, str]:
        ...

    def write(self, sink: TokenSink, value: Any) -> None:
        ...


@define(frozen=True, slots=True)
class EmitElement:
    """One child element if the value is present."""

    writer: ElementWriter

    def attributes(self, value: Any) -> dict[str, str]:
        return {}

    def write(self, sink: TokenSink, value: Any) -> None:
        if value is not None:
            self.writer.write(sink, value)


@define(frozen=True, slots=True)
class EmitList:
    """One child element per item, in sequence order."""

    writer: ElementWriter

    def attributes(self, value: Iterable[Any]) -> dict[str, str]:
        return {}

    def write(self, sink: TokenSink, value: Iterable[Any]) -> None:
        for item in value:
            self.writer.write(sink, item)


@define(frozen=True, slots=True)
class EmitAttribute:
    """Attribute on the entity's start tag if the value is present."""

    name: str
    format: Callable[[Any], str] = str

    def attributes(self, value: Any) -> dict[str, str]:
        if value is None:
            return {}
        return {self.name: self.format(value)}

    def write(self, sink: TokenSink, value: Any) -> None:
        pass


def emit_scalar(tag: str) -> EmitElement:
    return EmitElement(TextWriter(tag))


def emit_converted(tag: str, format: Callable[[Any], str]) -> EmitElement:
    return EmitElement(TextWriter(tag, format))


def emit_list(writer: ElementWriter) -> EmitList:
    return EmitList(writer)


def emit_nested(writer: ElementWriter) -> EmitElement:
    return EmitElement(writer)


def emit_attribute(name: str, format: Callable[[Any], str] = str) -> EmitAttribute:
    return EmitAttribute(name, format)


# === Entity writer ===


@define(frozen=True, slots=True)
class FieldWrite:
    """A field writer bound to the accessor that extracts its value."""

    accessor: Callable[[Any], Any]
    emitter: FieldWriter


@define(frozen=True, slots=True)
class EntityWriter(Generic[E]):
    """Writes an entity as ``<name attrs...>fields...</name>``.

    Children are emitted in the declared field order.
    """

    name: str
    fields: tuple[FieldWrite, ...] = field(converter=tuple)

    def write(
        self,
        sink: TokenSink,
        value: E,
        attributes: Mapping[str, str] | None = None,
    ) -> None:
        """Emit ``value``; extra ``attributes`` are appended to the start tag."""
        values = [(f.emitter, f.accessor(value)) for f in self.fields]

        start_attributes: dict[str, str] = {}
        for emitter, item in values:
            start_attributes.update(emitter.attributes(item))
        if attributes:
            start_attributes.update(attributes)

        sink.start(self.name, start_attributes)
        for emitter, item in values:
            emitter.write(sink, item)
        sink.end(self.name)
