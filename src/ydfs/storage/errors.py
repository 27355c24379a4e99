from __future__ import annotations
import typing as t

from ydfs.exc import YDFSError


class StorageError(YDFSError):
    """Error class specifically for storage errors."""

    def __init__(self, msg, code, is_recoverable: bool = False):
        super().__init__(msg, "STORAGE", code, is_recoverable=is_recoverable)


def _recoverable(previous: t.Optional[BaseException]) -> bool:
    return bool(getattr(previous, 'is_recoverable', False))


def _with_reason(msg: str, reason: str) -> str:
    return f"{msg}. {reason}" if reason else msg


class CorruptedPathDetected(StorageError):

    def __init__(self, location: str):
        super().__init__(f"Corrupted path detected: {location!r}", 1010)
        self.location = location


class PathTraversalDetected(StorageError):

    def __init__(self, location: str):
        super().__init__(f"Path traversal detected: {location!r}", 1011)
        self.location = location


class LocationError(StorageError):
    """Failure of an operation on a single location."""

    code: int = 1000
    message: str = "Unable to process location"

    def __init__(self, location: str, reason: str = "", is_recoverable: bool = False):
        super().__init__(_with_reason(f"{self.message}: {location}", reason), self.code, is_recoverable)
        self.location = location
        self.reason = reason

    @classmethod
    def at_location(cls, location: str, reason: str = "", previous: t.Optional[BaseException] = None):
        return cls(location, reason, _recoverable(previous))


class UnableToCheckExistence(LocationError):
    code = 1100
    message = "Unable to check existence for"


class UnableToWriteFile(LocationError):
    code = 1200
    message = "Unable to write file at location"


class UnableToReadFile(LocationError):
    code = 1300
    message = "Unable to read file from location"


class UnableToDeleteFile(LocationError):
    code = 1400
    message = "Unable to delete file located at"


class UnableToDeleteDirectory(LocationError):
    code = 1410
    message = "Unable to delete directory located at"


class UnableToCreateDirectory(LocationError):
    code = 1500
    message = "Unable to create a directory at"


class UnableToSetVisibility(LocationError):
    code = 1900
    message = "Unable to set visibility for file"


class TransferError(StorageError):
    """Failure of an operation between two locations."""

    code: int = 1000
    verb: str = "transfer"

    def __init__(self, source: str, destination: str, reason: str = "", is_recoverable: bool = False):
        super().__init__(
            _with_reason(f"Unable to {self.verb} file from {source} to {destination}", reason),
            self.code,
            is_recoverable
        )
        self.source = source
        self.destination = destination
        self.reason = reason

    @classmethod
    def from_location_to(cls, source: str, destination: str, reason: str = "", previous: t.Optional[BaseException] = None):
        return cls(source, destination, reason, _recoverable(previous))


class UnableToMoveFile(TransferError):
    code = 1600
    verb = "move"


class UnableToCopyFile(TransferError):
    code = 1700
    verb = "copy"


class UnableToRetrieveMetadata(StorageError):

    LAST_MODIFIED = "last_modified"
    FILE_SIZE = "file_size"
    MIME_TYPE = "mime_type"
    VISIBILITY = "visibility"
    EXISTENCE = "existence"

    def __init__(self, location: str, metadata_type: str, reason: str = "", is_recoverable: bool = False):
        super().__init__(
            _with_reason(f"Unable to retrieve the {metadata_type} for file at location: {location}", reason),
            1800,
            is_recoverable
        )
        self.location = location
        self.metadata_type = metadata_type
        self.reason = reason

    @classmethod
    def create(cls, location: str, metadata_type: str, reason: str = "", previous: t.Optional[BaseException] = None):
        return cls(location, metadata_type, reason, _recoverable(previous))

    @classmethod
    def last_modified(cls, location: str, reason: str = "", previous: t.Optional[BaseException] = None):
        return cls.create(location, cls.LAST_MODIFIED, reason, previous)

    @classmethod
    def file_size(cls, location: str, reason: str = "", previous: t.Optional[BaseException] = None):
        return cls.create(location, cls.FILE_SIZE, reason, previous)

    @classmethod
    def existence(cls, location: str, reason: str = "", previous: t.Optional[BaseException] = None):
        return cls.create(location, cls.EXISTENCE, reason, previous)


class UnableToListContents(StorageError):

    def __init__(self, location: str, deep: bool, reason: str = "", is_recoverable: bool = False):
        listing = "deep" if deep else "shallow"
        super().__init__(_with_reason(f"Unable to list contents for '{location}', {listing} listing", reason), 2000, is_recoverable)
        self.location = location
        self.deep = deep
        self.reason = reason

    @classmethod
    def at_location(cls, location: str, deep: bool, reason: str = "", previous: t.Optional[BaseException] = None):
        return cls(location, deep, reason, _recoverable(previous))
