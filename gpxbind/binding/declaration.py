"""Declare an entity's XML mapping once and derive its reader and writer.

Usage:
    LINK = EntityBinding("link", Link, [
        attribute("href", required=True),
        text("text"),
        text("type"),
    ])
    link = LINK.reader.read(source)
    LINK.writer.write(sink, link)

Each declaration names the entity attribute and, where it differs, the XML
tag. Because both sides come from the same list, element order and field
coverage of reader and writer cannot drift apart.
"""

from collections.abc import Callable
from operator import attrgetter
from typing import Any, Generic, TypeVar

from attrs import Factory, define, evolve, field

from .readers import (
    EntityReader,
    FieldSpec,
    attribute_field,
    converted_field,
    list_field,
    nested_field,
    scalar_field,
    text_reader,
)
from .writers import (
    EntityWriter,
    FieldWrite,
    FieldWriter,
    emit_attribute,
    emit_converted,
    emit_list,
    emit_nested,
    emit_scalar,
    text_writer,
)

E = TypeVar("E")


@define(frozen=True, slots=True)
class Field:
    """One entity attribute with its read and write behaviour."""

    attr: str
    spec: FieldSpec
    emitter: FieldWriter


def text(attr: str, tag: str | None = None) -> Field:
    """Optional string child element."""
    tag = tag or attr
    return Field(attr, scalar_field(tag), emit_scalar(tag))


def converted(
    attr: str,
    parse: Callable[[str], Any],
    format: Callable[[Any], str] = str,
    tag: str | None = None,
) -> Field:
    """Optional typed child element; ``format`` must invert ``parse``."""
    tag = tag or attr
    return Field(attr, converted_field(tag, parse), emit_converted(tag, format))


def attribute(
    attr: str,
    parse: Callable[[str], Any] | None = None,
    format: Callable[[Any], str] = str,
    name: str | None = None,
    required: bool = False,
) -> Field:
    """Attribute of the entity's own element."""
    name = name or attr
    return Field(
        attr, attribute_field(name, parse, required), emit_attribute(name, format)
    )


def nested(attr: str, binding: "EntityBinding", required: bool = False) -> Field:
    """Single sub-entity."""
    return Field(
        attr, nested_field(binding.reader, required), emit_nested(binding.writer)
    )


def elements(attr: str, binding: "EntityBinding") -> Field:
    """Ordered sequence of sub-entities."""
    return Field(attr, list_field(binding.reader), emit_list(binding.writer))


def texts(
    attr: str,
    tag: str,
    parse: Callable[[str], Any] | None = None,
    format: Callable[[Any], str] = str,
) -> Field:
    """Ordered sequence of scalar child elements."""
    return Field(
        attr, list_field(text_reader(tag, parse)), emit_list(text_writer(tag, format))
    )


def _reader(binding: "EntityBinding") -> EntityReader:
    names = [f.attr for f in binding.fields]
    entity_type = binding.entity_type

    def assemble(*values: Any) -> Any:
        return entity_type(**dict(zip(names, values, strict=True)))

    return EntityReader(binding.name, [f.spec for f in binding.fields], assemble=assemble)


def _writer(binding: "EntityBinding") -> EntityWriter:
    return EntityWriter(
        binding.name, [FieldWrite(attrgetter(f.attr), f.emitter) for f in binding.fields]
    )


@define(frozen=True, slots=True)
class EntityBinding(Generic[E]):
    """Complete XML mapping of one entity type under one element name."""

    name: str
    entity_type: type[E]
    fields: tuple[Field, ...] = field(converter=tuple)
    reader: EntityReader[E] = field(
        init=False, default=Factory(_reader, takes_self=True), eq=False, repr=False
    )
    writer: EntityWriter[E] = field(
        init=False, default=Factory(_writer, takes_self=True), eq=False, repr=False
    )

    def renamed(self, name: str) -> "EntityBinding[E]":
        """Same mapping under a different element name."""
        return evolve(self, name=name)
