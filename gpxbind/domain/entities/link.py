"""Link to an external resource with additional information."""

from attrs import define, field, validators

from gpxbind.binding import EntityBinding, attribute, text

from .base import Entity, EntityBuilder
from .shared import optional_str


@define(frozen=True, slots=True)
class Link(Entity):
    """Hyperlink attached to tracks, routes, waypoints and metadata."""

    href: str = field(validator=validators.instance_of(str))
    text: str | None = field(default=None, validator=optional_str)
    type: str | None = field(default=None, validator=optional_str)

    class Builder(EntityBuilder["Link"]):
        def href(self, href: str) -> "Link.Builder":
            return self._set("href", href)

        def text(self, text: str | None) -> "Link.Builder":
            return self._set("text", text)

        def type(self, type: str | None) -> "Link.Builder":
            return self._set("type", type)


LINK = Link.bind(
    EntityBinding(
        "link",
        Link,
        [
            attribute("href", required=True),
            text("text"),
            text("type"),
        ],
    )
)
