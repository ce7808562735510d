"""Tests for the validated Popen wrapper and the decompressor spawn."""

import os
import subprocess
import sys

import pytest

from open_compressed import Settings, StreamIOError
from open_compressed.process_utils import (
    _normalize_command,
    popen_with_validation,
    spawn_decompressor,
)

from tests.helpers import read_all, requires_gzip


def test_normalize_command_rejects_empty():
    with pytest.raises(ValueError):
        _normalize_command([])


def test_normalize_command_rejects_blank_argument():
    with pytest.raises(ValueError):
        _normalize_command(["gzip", "  "])


def test_normalize_command_rejects_non_strings():
    with pytest.raises(TypeError):
        _normalize_command(["gzip", 3])


def test_normalize_command_accepts_paths(tmp_path):
    assert _normalize_command(["gzip", tmp_path]) == ["gzip", str(tmp_path)]


def test_popen_with_validation_runs_command():
    proc = popen_with_validation(
        [sys.executable, "-c", "print('ok')"], stdout=subprocess.PIPE
    )
    out, _ = proc.communicate(timeout=10)
    assert out.strip() == b"ok"


@requires_gzip
def test_spawn_decompressor_writes_to_pipe(write_gz):
    path = write_gz("hello.gz", b"hello\n" * 1000)
    read_fd, write_fd = os.pipe()
    try:
        child = spawn_decompressor(path, ".gz", write_fd, Settings())
        os.close(write_fd)
        assert read_all(read_fd) == b"hello\n" * 1000
        assert child.wait(timeout=10) == 0
    finally:
        os.close(read_fd)


def test_spawn_decompressor_custom_command(write_gz):
    """Any argv prefix works; the file name is appended as last argument."""
    path = write_gz("data.gz", b"payload")
    code = "import gzip, sys; sys.stdout.buffer.write(gzip.open(sys.argv[1]).read())"
    decompressors = Settings().decompressors
    decompressors[".gz"] = [sys.executable, "-c", code]
    settings = Settings(decompressors=decompressors)

    read_fd, write_fd = os.pipe()
    try:
        child = spawn_decompressor(path, ".gz", write_fd, settings)
        os.close(write_fd)
        assert read_all(read_fd) == b"payload"
        assert child.wait(timeout=10) == 0
    finally:
        os.close(read_fd)


def test_spawn_decompressor_child_stdin_is_empty(write_file):
    """The child must not share our standard input."""
    path = write_file("x.gz", b"")
    code = "import sys; sys.stdout.buffer.write(sys.stdin.buffer.read() or b'empty')"
    decompressors = Settings().decompressors
    decompressors[".gz"] = [sys.executable, "-c", code]

    read_fd, write_fd = os.pipe()
    try:
        child = spawn_decompressor(
            path, ".gz", write_fd, Settings(decompressors=decompressors)
        )
        os.close(write_fd)
        assert read_all(read_fd) == b"empty"
        child.wait(timeout=10)
    finally:
        os.close(read_fd)


def test_spawn_decompressor_missing_program(write_file, capsys):
    path = write_file("x.gz", b"")
    decompressors = Settings().decompressors
    decompressors[".gz"] = ["no-such-decompressor-for-tests", "-d", "-c"]

    read_fd, write_fd = os.pipe()
    try:
        with pytest.raises(StreamIOError):
            spawn_decompressor(
                path, ".gz", write_fd, Settings(decompressors=decompressors)
            )
    finally:
        os.close(read_fd)
        os.close(write_fd)
    assert "Error: exec no-such-decompressor-for-tests -d -c:" in capsys.readouterr().err
