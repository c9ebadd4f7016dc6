"""Error taxonomy for the XML binding engine.

Every failure raised while reading or writing carries the element path from
the document root to the offending element. Readers extend the path as the
error travels outward through nested entities, so the caller of a top-level
parse sees ``gpx/trk/number`` rather than just ``number``.
"""


class GPXError(Exception):
    """Base class for all binding failures."""

    def __init__(self, message: str, path: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def within(self, tag: str) -> "GPXError":
        """Prefix the element path with an enclosing tag and return self."""
        self.path = (tag, *self.path)
        return self

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{'/'.join(self.path)}: {self.message}"


class StructuralError(GPXError):
    """Token stream does not match the expected tag/nesting shape."""


class ValidationError(GPXError, ValueError):
    """A scalar's text failed conversion or its domain constraint."""

    def __init__(
        self,
        tag: str,
        text: str,
        reason: str = "",
        path: tuple[str, ...] = (),
    ) -> None:
        # Attribute tags are passed as "@name"
        target = f"attribute {tag[1:]!r}" if tag.startswith("@") else f"<{tag}>"
        message = f"invalid value {text!r} for {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, path)
        self.tag = tag
        self.text = text
        self.reason = reason


class SourceError(GPXError):
    """The token source could not produce well-formed tokens."""


class SinkError(GPXError):
    """The token sink rejected a write."""
