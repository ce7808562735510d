"""Tests for the process-wide default registry."""

import pytest

import open_compressed as oc
from open_compressed import NotInitializedError, Settings


@pytest.fixture(autouse=True)
def fresh_default_registry():
    oc.reset()
    yield
    oc.reset()


def test_default_registry_lifecycle(write_file):
    path = write_file("notes.txt", b"one\ntwo\nthree")
    registry = oc.init(Settings())
    assert oc.get_registry() is registry
    assert oc.init() is registry

    fd = oc.open(path)
    assert oc.peek(fd, 3) == b"one"
    assert oc.read_line(fd, 100) == b"one\n"
    assert oc.read_exact(fd, 4) == b"two\n"
    assert oc.read_exact(fd, 100) == b"three"
    oc.close(fd)

    oc.finish()
    oc.finish()
    with pytest.raises(NotInitializedError):
        oc.open(path)


def test_read_raw_on_default_registry(write_file):
    path = write_file("notes.txt", b"abcdef")
    oc.init(Settings())
    fd = oc.open(path)
    assert oc.read_raw(fd, 4) == b"abcd"
    oc.close(fd)


def test_reset_finishes_registry(write_file):
    registry = oc.init(Settings())
    oc.reset()
    assert not registry.initialized
    assert oc.get_registry() is not registry
