"""Field and entity readers: recursive descent over a token source.

An ``EntityReader`` is configured with its tag, an ordered tuple of field
specifications and an assembly function. Field specifications wrap element
readers (``TextReader`` or a nested ``EntityReader``) with a cardinality:

- ``scalar_field(tag)``: optional text child
- ``converted_field(tag, parse)``: optional text child converted by ``parse``
- ``list_field(reader)``: zero or more children, kept in document order
- ``nested_field(reader, required=False)``: one sub-entity
- ``attribute_field(name, parse=None, required=False)``: attribute of the
  entity's own start tag

Children that match no field are skipped together with their subtree.
"""

from collections.abc import Callable
from typing import Any, Generic, Protocol, TypeVar

from attrs import Factory, define, field
from toolz import curry, identity

from gpxbind.config import get_logger

from .errors import GPXError, StructuralError, ValidationError
from .tokens import EndElement, StartElement, Text, TokenSource

T = TypeVar("T")
E = TypeVar("E")
V = TypeVar("V")

logger = get_logger(__name__)


# === Token helpers ===


def expect_start(source: TokenSource, name: str) -> StartElement:
    """Consume the start tag ``name``, skipping leading whitespace text."""
    token = source.next()
    while isinstance(token, Text) and not token.content.strip():
        token = source.next()

    match token:
        case StartElement(name=found) if found == name:
            return token
        case StartElement(name=found):
            raise StructuralError(f"expected <{name}>, found <{found}>")
        case EndElement(name=found):
            raise StructuralError(f"expected <{name}>, found </{found}>")
        case Text(content=content):
            raise StructuralError(f"expected <{name}>, found text {content!r}")


def skip_element(start: StartElement, source: TokenSource) -> None:
    """Consume the rest of an element whose start tag was already read."""
    depth = 1
    while depth:
        match source.next():
            case StartElement():
                depth += 1
            case EndElement():
                depth -= 1


@curry
def convert(tag: str, parse: Callable[[str], V], text: str) -> V:
    """Apply ``parse`` to stripped text, reporting failures as ValidationError."""
    try:
        return parse(text.strip())
    except ValidationError:
        raise
    except (ValueError, TypeError) as e:
        raise ValidationError(tag, text, str(e)) from e


def _converter(tag: str, parse: Callable[[str], Any] | None) -> Callable[[str], Any]:
    return identity if parse is None else convert(tag, parse)


# === Element readers ===


class ElementReader(Protocol[T]):
    """Reads one complete element named ``name``."""

    name: str

    def read(self, source: TokenSource) -> T:
        """Read the element starting at the next token."""
        ...

    def read_element(self, start: StartElement, source: TokenSource) -> T:
        """Read the element whose start tag has already been consumed."""
        ...


@define(frozen=True, slots=True)
class TextReader(Generic[T]):
    """Reads a text-only element, optionally converting its content."""

    name: str
    parse: Callable[[str], T] | None = None
    _convert: Callable[[str], T] = field(
        init=False,
        default=Factory(lambda self: _converter(self.name, self.parse), takes_self=True),
        eq=False,
        repr=False,
    )

    def read(self, source: TokenSource) -> T:
        return self.read_element(expect_start(source, self.name), source)

    def read_element(self, start: StartElement, source: TokenSource) -> T:
        try:
            return self._convert(self._read_text(source))
        except GPXError as e:
            raise e.within(self.name)

    def _read_text(self, source: TokenSource) -> str:
        parts = []
        while True:
            match source.next():
                case Text(content=content):
                    parts.append(content)
                case EndElement(name=name) if name == self.name:
                    return "".join(parts)
                case EndElement(name=name):
                    raise StructuralError(f"expected </{self.name}>, found </{name}>")
                case StartElement(name=name):
                    raise StructuralError(f"unexpected element <{name}> in text element")


def text_reader(tag: str, parse: Callable[[str], Any] | None = None) -> TextReader:
    """Reader for a single text element, for use inside ``list_field``."""
    return TextReader(tag, parse)


# === Field specifications ===


class FieldSpec(Protocol):
    """How one positional value of an entity is collected while reading."""

    # Child element consumed by this field, None for attribute fields
    tag: str | None
    repeatable: bool

    def initial(self, start: StartElement) -> Any:
        """Value before any child is seen."""
        ...

    def accumulate(self, current: Any, start: StartElement, source: TokenSource) -> Any:
        """Consume one matching child and return the updated value."""
        ...

    def finish(self, current: Any) -> Any:
        """Final value handed to the assembly function."""
        ...


@define(frozen=True, slots=True)
class SingleField:
    """At most one child element; absent yields None."""

    reader: ElementReader
    required: bool = False
    repeatable = False

    @property
    def tag(self) -> str:
        return self.reader.name

    def initial(self, start: StartElement) -> Any:
        return None

    def accumulate(self, current: Any, start: StartElement, source: TokenSource) -> Any:
        return self.reader.read_element(start, source)

    def finish(self, current: Any) -> Any:
        if current is None and self.required:
            raise StructuralError(f"missing required element <{self.tag}>")
        return current


@define(frozen=True, slots=True)
class ListField:
    """Zero or more child elements in document order."""

    reader: ElementReader
    repeatable = True

    @property
    def tag(self) -> str:
        return self.reader.name

    def initial(self, start: StartElement) -> list:
        return []

    def accumulate(self, current: list, start: StartElement, source: TokenSource) -> list:
        current.append(self.reader.read_element(start, source))
        return current

    def finish(self, current: list) -> tuple:
        return tuple(current)


@define(frozen=True, slots=True)
class AttributeField:
    """Attribute of the entity's own start tag."""

    name: str
    parse: Callable[[str], Any] | None = None
    required: bool = False
    _convert: Callable[[str], Any] = field(
        init=False,
        default=Factory(lambda self: _converter(f"@{self.name}", self.parse), takes_self=True),
        eq=False,
        repr=False,
    )
    tag = None
    repeatable = False

    def initial(self, start: StartElement) -> Any:
        text = start.attributes.get(self.name)
        if text is None:
            if self.required:
                raise StructuralError(f"missing required attribute {self.name!r}")
            return None
        return self._convert(text)

    def accumulate(self, current: Any, start: StartElement, source: TokenSource) -> Any:
        raise StructuralError(f"attribute {self.name!r} cannot match child elements")

    def finish(self, current: Any) -> Any:
        return current


def scalar_field(tag: str) -> SingleField:
    return SingleField(TextReader(tag))


def converted_field(tag: str, parse: Callable[[str], Any]) -> SingleField:
    return SingleField(TextReader(tag, parse))


def list_field(reader: ElementReader) -> ListField:
    return ListField(reader)


def nested_field(reader: ElementReader, required: bool = False) -> SingleField:
    return SingleField(reader, required)


def attribute_field(
    name: str, parse: Callable[[str], Any] | None = None, required: bool = False
) -> AttributeField:
    return AttributeField(name, parse, required)


# === Entity reader ===


@define(frozen=True, slots=True)
class EntityReader(Generic[E]):
    """Reads one entity element by composing field specifications.

    The assembly function receives one positional value per field, in
    declaration order: None for absent single fields, tuples for list fields.
    """

    name: str
    fields: tuple[FieldSpec, ...] = field(converter=tuple)
    assemble: Callable[..., E] = field(kw_only=True)

    def read(self, source: TokenSource) -> E:
        return self.read_element(expect_start(source, self.name), source)

    def read_element(self, start: StartElement, source: TokenSource) -> E:
        try:
            return self._read(start, source)
        except GPXError as e:
            raise e.within(self.name)

    def _read(self, start: StartElement, source: TokenSource) -> E:
        values = [spec.initial(start) for spec in self.fields]
        seen = [False] * len(self.fields)

        while True:
            match token := source.next():
                case EndElement(name=name) if name == self.name:
                    break
                case EndElement(name=name):
                    raise StructuralError(f"expected </{self.name}>, found </{name}>")
                case Text():
                    continue
                case StartElement(name=name):
                    index = self._slot(name, seen)
                    if index is None:
                        logger.debug(f"Skipping unrecognized element <{name}> in <{self.name}>")
                        skip_element(token, source)
                        continue
                    values[index] = self.fields[index].accumulate(
                        values[index], token, source
                    )
                    seen[index] = True

        results = [
            spec.finish(value) for spec, value in zip(self.fields, values, strict=True)
        ]
        try:
            return self.assemble(*results)
        except GPXError:
            raise
        except (ValueError, TypeError) as e:
            raise StructuralError(f"cannot assemble <{self.name}>: {e}") from e

    def _slot(self, name: str, seen: list[bool]) -> int | None:
        """Index of the first matching field that can still take a child."""
        matched = False
        for index, spec in enumerate(self.fields):
            if spec.tag != name:
                continue
            matched = True
            if spec.repeatable or not seen[index]:
                return index
        if matched:
            raise StructuralError(f"duplicate element <{name}>")
        return None
