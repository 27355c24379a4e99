"""
    Provides filesystem-style access to a remote drive.

    In general, one should use the StorageController to get an adapter. The adapter
    knows how to perform the usual file operations (existence checks, reading,
    writing, listing, moving, copying, deleting and metadata lookups) against the
    remote drive without the caller knowing anything about the remote API.

    A few conventions apply to every adapter:

    - Paths are normalized before use: surrounding whitespace is dropped, back-slashes
      become forward slashes and leading/trailing slashes are removed, so "/docs/a.txt"
      and "docs\\a.txt" refer to the same file. The root of the drive is "".

    - Attributes (FileAttributes and DirectoryAttributes) are snapshots taken when the
      call was made. Fields the backend did not report are None.

    - Listings are lazy: nothing is requested until the listing is iterated, and a
      listing can only be iterated once.

    - Failures are always raised as a StorageError subclass naming the operation and
      the path(s) involved; the error from the remote client is kept as __cause__.
"""
from .attributes import StorageAttributes, FileAttributes, DirectoryAttributes
from .base import FilesystemAdapter, WriteConfig, Visibility
from .core import StorageController
from .errors import (
    StorageError,
    CorruptedPathDetected,
    PathTraversalDetected,
    UnableToCheckExistence,
    UnableToWriteFile,
    UnableToReadFile,
    UnableToDeleteFile,
    UnableToDeleteDirectory,
    UnableToCreateDirectory,
    UnableToSetVisibility,
    UnableToMoveFile,
    UnableToCopyFile,
    UnableToRetrieveMetadata,
    UnableToListContents,
)
from .listing import DirectoryListing
from .mime import MimeTypeDetector, ExtensionMimeTypeDetector
from .paths import PathNormalizer, WhitespacePathNormalizer
from .streams import StreamOpener, HttpStreamOpener
from .yandex import YandexDiskAdapter
