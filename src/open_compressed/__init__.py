"""open-compressed: read plain and compressed files through one descriptor API."""

from .api import (
    close,
    finish,
    get_registry,
    init,
    open,
    peek,
    read_exact,
    read_line,
    read_raw,
    reset,
)
from .config import Settings, load_settings
from .errors import (
    AlreadyClosedError,
    BufferNotAllocatedError,
    InvalidDescriptorError,
    IsDirectoryError,
    NotFoundError,
    NotInitializedError,
    OpenCompressedError,
    StreamIOError,
    TooManyOpenFilesError,
)
from .reader import BUFFER_SIZE, iter_lines
from .registry import Registry
from .suffix import SUFFIXES, classify_suffix, resolve

__all__ = [
    "BUFFER_SIZE",
    "SUFFIXES",
    "AlreadyClosedError",
    "BufferNotAllocatedError",
    "InvalidDescriptorError",
    "IsDirectoryError",
    "NotFoundError",
    "NotInitializedError",
    "OpenCompressedError",
    "Registry",
    "Settings",
    "StreamIOError",
    "TooManyOpenFilesError",
    "__version__",
    "classify_suffix",
    "close",
    "finish",
    "get_registry",
    "init",
    "iter_lines",
    "load_settings",
    "open",
    "peek",
    "read_exact",
    "read_line",
    "read_raw",
    "reset",
    "resolve",
]

__version__ = "0.0.1"
