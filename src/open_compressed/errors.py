"""Exceptions raised by the registry, the opener and the readers.

End of stream is never an exception: the read primitives report it by
returning fewer bytes (or ``b""``). Everything here is either an open
failure or a usage error.
"""


class OpenCompressedError(Exception):
    """Base class for open-compressed errors."""

    pass


class IsDirectoryError(OpenCompressedError):
    """Path exists but is a directory."""

    pass


class NotFoundError(OpenCompressedError):
    """Neither the literal name nor any suffixed variant exists."""

    pass


class StreamIOError(OpenCompressedError):
    """Unexpected failure of stat, pipe, spawn or open."""

    pass


class TooManyOpenFilesError(OpenCompressedError):
    """Descriptor would fall outside the registry's slot range."""

    pass


class AlreadyClosedError(OpenCompressedError):
    """Standard input was explicitly closed and cannot be reopened."""

    pass


class InvalidDescriptorError(OpenCompressedError):
    """Descriptor is negative or not below ``max_descriptors``."""

    pass


class BufferNotAllocatedError(OpenCompressedError):
    """Descriptor was never opened through the registry."""

    pass


class NotInitializedError(OpenCompressedError):
    """Registry used before ``init()`` or after ``finish()``."""

    pass


__all__ = [
    "AlreadyClosedError",
    "BufferNotAllocatedError",
    "InvalidDescriptorError",
    "IsDirectoryError",
    "NotFoundError",
    "NotInitializedError",
    "OpenCompressedError",
    "StreamIOError",
    "TooManyOpenFilesError",
]
