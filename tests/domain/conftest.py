"""Domain test helpers - write entities to tokens and read them back."""

import pytest

from gpxbind.binding import ListTokenSink, TokenSource


@pytest.fixture
def reparse():
    """Write an entity through its binding and read the tokens back."""

    def _reparse(entity, reader=None):
        sink = ListTokenSink()
        entity.write(sink)
        return (reader or type(entity).reader()).read(sink.source())

    return _reparse


@pytest.fixture
def read_xml():
    """Read an entity of the given type from XML text."""

    def _read(entity_type, document: str):
        return entity_type.reader().read(TokenSource.from_string(document))

    return _read
