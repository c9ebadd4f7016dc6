"""Declarative XML binding engine.

Entity types declare their mapping once with ``EntityBinding``; the engine
derives a recursive-descent reader over a ``TokenSource`` and a matching
writer into a ``TokenSink``.
"""

from .declaration import (
    EntityBinding,
    Field,
    attribute,
    converted,
    elements,
    nested,
    text,
    texts,
)
from .errors import (
    GPXError,
    SinkError,
    SourceError,
    StructuralError,
    ValidationError,
)
from .readers import (
    EntityReader,
    TextReader,
    attribute_field,
    convert,
    converted_field,
    list_field,
    nested_field,
    scalar_field,
    text_reader,
)
from .tokens import (
    EndElement,
    ListTokenSink,
    StartElement,
    Text,
    Token,
    TokenSink,
    TokenSource,
    XMLTokenSink,
)
from .writers import (
    EntityWriter,
    FieldWrite,
    TextWriter,
    emit_attribute,
    emit_converted,
    emit_list,
    emit_nested,
    emit_scalar,
    text_writer,
)

__all__ = [
    # Declarations
    "EntityBinding",
    "Field",
    "attribute",
    "convert",
    "converted",
    "elements",
    "nested",
    "text",
    "texts",
    # Errors
    "GPXError",
    "SinkError",
    "SourceError",
    "StructuralError",
    "ValidationError",
    # Readers
    "EntityReader",
    "TextReader",
    "attribute_field",
    "converted_field",
    "list_field",
    "nested_field",
    "scalar_field",
    "text_reader",
    # Tokens
    "EndElement",
    "ListTokenSink",
    "StartElement",
    "Text",
    "Token",
    "TokenSink",
    "TokenSource",
    "XMLTokenSink",
    # Writers
    "EntityWriter",
    "FieldWrite",
    "TextWriter",
    "emit_attribute",
    "emit_converted",
    "emit_list",
    "emit_nested",
    "emit_scalar",
    "text_writer",
]
