"""Pytest configuration and shared fixtures."""

import gzip
import os

import pytest
from click.testing import CliRunner

from open_compressed import Registry, Settings
from open_compressed.cli import cli
from open_compressed.config import MAX_FDS_ENV, PROGRAM_ENV


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep OPEN_COMPRESSED_* overrides from leaking into tests."""
    for var in {*PROGRAM_ENV.values(), MAX_FDS_ENV}:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def registry():
    """Initialized registry with default settings, finished after the test."""
    reg = Registry(settings=Settings())
    reg.init()
    yield reg
    reg.finish()


@pytest.fixture
def write_file(tmp_path):
    """Write ``data`` to ``tmp_path / name`` and return the path as str."""

    def _write(name: str, data: bytes) -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)

    return _write


@pytest.fixture
def write_gz(write_file):
    def _write(name: str, data: bytes) -> str:
        return write_file(name, gzip.compress(data))

    return _write


class StdinPipe:
    """Pipe temporarily installed as descriptor 0."""

    def __init__(self):
        self._saved = os.dup(0)
        read_fd, self._write_fd = os.pipe()
        os.dup2(read_fd, 0)
        os.close(read_fd)

    def write(self, data: bytes) -> None:
        os.write(self._write_fd, data)

    def close(self) -> None:
        if self._write_fd is not None:
            os.close(self._write_fd)
            self._write_fd = None

    def restore(self) -> None:
        self.close()
        os.dup2(self._saved, 0)
        os.close(self._saved)


@pytest.fixture
def stdin_pipe():
    """Replace descriptor 0 with a pipe the test can feed.

    Closing descriptor 0 inside a test is safe; the original standard input
    is restored afterwards.
    """
    pipe = StdinPipe()
    yield pipe
    pipe.restore()


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args.

    Usage:
        result = invoke(["cat", "file.gz"])
        result.stdout_bytes  # decompressed bytes
    """

    def _invoke(args):
        return cli_runner.invoke(cli, args)

    return _invoke
