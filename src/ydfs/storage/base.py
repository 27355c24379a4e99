from __future__ import annotations
import typing as t

from ydfs.client import Payload
from .attributes import FileAttributes
from .listing import DirectoryListing


class Visibility:
    """Visibility values understood by the adapter contract."""

    PUBLIC = "public"
    PRIVATE = "private"


class WriteConfig:
    """Immutable bag of options passed along with write-like operations.

        Adapters are free to ignore options they do not understand.
    """

    def __init__(self, options: t.Optional[t.Mapping[str, t.Any]] = None):
        self._options = dict(options or {})

    def __repr__(self):
        return f"WriteConfig({self._options!r})"

    def __eq__(self, other):
        return isinstance(other, WriteConfig) and other._options == self._options

    def __contains__(self, key: str) -> bool:
        return key in self._options

    def get(self, key: str, default=None):
        return self._options.get(key, default)

    def extend(self, options: t.Mapping[str, t.Any]) -> WriteConfig:
        """Build a new config with the given options overriding these ones."""
        return WriteConfig({**self._options, **options})

    def with_defaults(self, defaults: t.Mapping[str, t.Any]) -> WriteConfig:
        """Build a new config where missing options are taken from defaults."""
        return WriteConfig({**defaults, **self._options})

    def to_dict(self) -> dict:
        return dict(self._options)


class FilesystemAdapter:
    """Contract every storage adapter fulfills.

        Paths may be given in any form the adapter's path normalizer accepts. Failures
        are raised as subclasses of StorageError, never as backend-specific errors.
    """

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Release any connections held by the adapter."""
        pass

    def file_exists(self, path: str) -> bool:
        raise NotImplementedError

    def directory_exists(self, path: str) -> bool:
        raise NotImplementedError

    def write(self, path: str, contents: t.Union[str, Payload], config: t.Optional[WriteConfig] = None):
        raise NotImplementedError

    def write_stream(self, path: str, contents: Payload, config: t.Optional[WriteConfig] = None):
        raise NotImplementedError

    def read(self, path: str) -> bytes:
        raise NotImplementedError

    def read_stream(self, path: str) -> t.BinaryIO:
        """Open a binary stream for the file; the caller is responsible for closing it."""
        raise NotImplementedError

    def delete(self, path: str):
        raise NotImplementedError

    def delete_directory(self, path: str):
        raise NotImplementedError

    def create_directory(self, path: str, config: t.Optional[WriteConfig] = None):
        raise NotImplementedError

    def set_visibility(self, path: str, visibility: str):
        raise NotImplementedError

    def visibility(self, path: str) -> FileAttributes:
        raise NotImplementedError

    def mime_type(self, path: str) -> FileAttributes:
        raise NotImplementedError

    def last_modified(self, path: str) -> FileAttributes:
        raise NotImplementedError

    def file_size(self, path: str) -> FileAttributes:
        raise NotImplementedError

    def list_contents(self, path: str, deep: bool = False) -> DirectoryListing:
        raise NotImplementedError

    def move(self, source: str, destination: str, config: t.Optional[WriteConfig] = None):
        raise NotImplementedError

    def copy(self, source: str, destination: str, config: t.Optional[WriteConfig] = None):
        raise NotImplementedError
