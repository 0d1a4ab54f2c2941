"""Named byte sources and directory containers."""

from .byte_source import (
    BytesResource,
    DetachStrategy,
    FileResource,
    NamedByteSource,
    RenamedResource,
    SpooledResource,
    detach,
    detach_all,
    renamed,
)
from .container import DirectoryContainer, PublishedDirectory

__all__ = [
    "BytesResource",
    "DetachStrategy",
    "FileResource",
    "NamedByteSource",
    "RenamedResource",
    "SpooledResource",
    "detach",
    "detach_all",
    "renamed",
    "DirectoryContainer",
    "PublishedDirectory",
]
