"""Filesystem adapter for Yandex Disk."""
from __future__ import annotations
import datetime
import typing as t

import zrlog

from ydfs.client import RemoteStorageClient, RemoteAPIError, BadRequestError, Payload
from .attributes import StorageAttributes, FileAttributes, DirectoryAttributes, TYPE_DIRECTORY
from .base import FilesystemAdapter, WriteConfig
from .errors import (
    StorageError,
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


LISTING_FIELDS = ['_embedded.items.path', '_embedded.items.type']


def parse_timestamp(value: t.Optional[str]) -> t.Optional[int]:
    """Convert an ISO-8601 timestamp into seconds since the epoch."""
    if not value:
        return None
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    dt = datetime.datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return int(dt.timestamp())


class YandexDiskAdapter(FilesystemAdapter):
    """Maps filesystem operations onto a Yandex Disk client.

        Every operation normalizes its path(s) first and then makes a single call to
        the client (reading makes two: one for the download link and one to open it).
        Errors from the client are re-raised as the StorageError matching the
        operation, with the original error as the cause. The one exception is
        file_exists(), which answers False when the backend rejects the request.

        The backend has no concept of visibility and does not distinguish files from
        directories when checking existence or deleting.
    """

    def __init__(self,
                 client: RemoteStorageClient,
                 mime_type_detector: t.Optional[MimeTypeDetector] = None,
                 path_normalizer: t.Optional[PathNormalizer] = None,
                 stream_opener: t.Optional[StreamOpener] = None):
        self._client = client
        self._mime_type_detector = mime_type_detector or ExtensionMimeTypeDetector()
        self._normalizer = path_normalizer or WhitespacePathNormalizer()
        self._stream_opener = stream_opener or HttpStreamOpener()
        self._log = zrlog.get_logger('ydfs.storage.yandex')

    def close(self):
        for resource in (self._client, self._stream_opener):
            close = getattr(resource, 'close', None)
            if close is not None:
                close()

    def _failure(self, error: StorageError) -> StorageError:
        self._log.warning(str(error))
        return error

    def file_exists(self, path: str) -> bool:
        path = self._normalizer.normalize_path(path)
        try:
            self._client.list_content(path, ['_embedded.items.path'], limit=1)
            return True
        except (BadRequestError, UnableToCheckExistence) as ex:
            self._log.debug(f"Existence check for [{path}] failed, reporting missing: {ex}")
            return False
        except RemoteAPIError as ex:
            raise self._failure(UnableToRetrieveMetadata.existence(path, str(ex), ex)) from ex

    def directory_exists(self, path: str) -> bool:
        return self.file_exists(path)

    def write(self, path: str, contents: t.Union[str, Payload], config: t.Optional[WriteConfig] = None):
        self._upload(path, contents)

    def write_stream(self, path: str, contents: Payload, config: t.Optional[WriteConfig] = None):
        self._upload(path, contents)

    def _upload(self, path: str, contents: t.Union[str, Payload]):
        path = self._normalizer.normalize_path(path)
        if isinstance(contents, str):
            contents = contents.encode('utf-8')
        try:
            self._client.upload(path, contents, True)
        except RemoteAPIError as ex:
            raise self._failure(UnableToWriteFile.at_location(path, str(ex), ex)) from ex

    def read(self, path: str) -> bytes:
        path = self._normalizer.normalize_path(path)
        with self.read_stream(path) as stream:
            try:
                return stream.read()
            except (RemoteAPIError, OSError) as ex:
                raise self._failure(UnableToReadFile.at_location(path, str(ex), ex)) from ex

    def read_stream(self, path: str) -> t.BinaryIO:
        path = self._normalizer.normalize_path(path)
        try:
            location = self._client.get_download_url(path, ['href'])
        except RemoteAPIError as ex:
            raise self._failure(UnableToReadFile.at_location(path, str(ex), ex)) from ex
        href = (location or {}).get('href')
        if not href:
            raise self._failure(UnableToReadFile.at_location(path, "No download link was returned"))
        try:
            return self._stream_opener.open(href)
        except (RemoteAPIError, OSError) as ex:
            raise self._failure(UnableToReadFile.at_location(path, str(ex), ex)) from ex

    def delete(self, path: str):
        path = self._normalizer.normalize_path(path)
        try:
            self._client.remove(path)
        except RemoteAPIError as ex:
            raise self._failure(UnableToDeleteFile.at_location(path, str(ex), ex)) from ex

    def delete_directory(self, path: str):
        path = self._normalizer.normalize_path(path)
        try:
            self._client.remove(path)
        except RemoteAPIError as ex:
            raise self._failure(UnableToDeleteDirectory.at_location(path, str(ex), ex)) from ex

    def create_directory(self, path: str, config: t.Optional[WriteConfig] = None):
        path = self._normalizer.normalize_path(path)
        try:
            self._client.add_directory(path)
        except RemoteAPIError as ex:
            raise self._failure(UnableToCreateDirectory.at_location(path, str(ex), ex)) from ex

    def set_visibility(self, path: str, visibility: str):
        raise UnableToSetVisibility.at_location(path, f"{self.__class__.__name__} does not support visibility controls")

    def visibility(self, path: str) -> FileAttributes:
        return FileAttributes(self._normalizer.normalize_path(path))

    def mime_type(self, path: str) -> FileAttributes:
        path = self._normalizer.normalize_path(path)
        return FileAttributes(path, mime_type=self._mime_type_detector.detect_mime_type_from_path(path))

    def last_modified(self, path: str) -> FileAttributes:
        path = self._normalizer.normalize_path(path)
        try:
            data = self._client.list_content(path, ['modified'])
            timestamp = parse_timestamp(data.get('modified'))
        except (RemoteAPIError, ValueError) as ex:
            raise self._failure(UnableToRetrieveMetadata.last_modified(path, str(ex), ex)) from ex
        return FileAttributes(path, last_modified=timestamp)

    def file_size(self, path: str) -> FileAttributes:
        path = self._normalizer.normalize_path(path)
        try:
            size = self._client.list_content(path, ['size']).get('size')
            return FileAttributes(path, file_size=int(size) if size is not None else None)
        except (RemoteAPIError, TypeError, ValueError) as ex:
            raise self._failure(UnableToRetrieveMetadata.file_size(path, str(ex), ex)) from ex

    def list_contents(self, path: str, deep: bool = False) -> DirectoryListing:
        path = self._normalizer.normalize_path(path)
        return DirectoryListing(self._list_contents(path, deep))

    def _list_contents(self, path: str, deep: bool) -> t.Iterator[StorageAttributes]:
        prefix = None
        for entry in self._iterate_folder_contents(path, deep):
            if prefix is None:
                prefix = self._client.get_path_prefix()
            try:
                attributes = self._normalize_response(entry, prefix)
            except (KeyError, TypeError, ValueError) as ex:
                raise self._failure(UnableToListContents.at_location(path, deep, f"Malformed entry {entry!r}", ex)) from ex
            # The backend may report the listed directory among its own entries
            if attributes.path == path:
                continue
            yield attributes

    def _iterate_folder_contents(self, path: str, deep: bool) -> t.Iterator[dict]:
        try:
            data = self._client.list_content(path, LISTING_FIELDS, deep=deep)
        except RemoteAPIError as ex:
            raise self._failure(UnableToListContents.at_location(path, deep, str(ex), ex)) from ex
        yield from (data.get('_embedded') or {}).get('items') or []

    def _normalize_response(self, entry: dict, prefix: str) -> StorageAttributes:
        raw_path = entry['path']
        if prefix and raw_path.startswith(prefix):
            raw_path = raw_path[len(prefix):]
        path = self._normalizer.normalize_path(raw_path)
        timestamp = parse_timestamp(entry.get('modified'))
        if entry.get('type') == TYPE_DIRECTORY:
            return DirectoryAttributes(path, last_modified=timestamp)
        size = entry.get('size')
        return FileAttributes(
            path,
            file_size=int(size) if size is not None else None,
            last_modified=timestamp,
            mime_type=self._mime_type_detector.detect_mime_type_from_path(path)
        )

    def move(self, source: str, destination: str, config: t.Optional[WriteConfig] = None):
        source = self._normalizer.normalize_path(source)
        destination = self._normalizer.normalize_path(destination)
        try:
            self._client.move(source, destination)
        except RemoteAPIError as ex:
            raise self._failure(UnableToMoveFile.from_location_to(source, destination, str(ex), ex)) from ex

    def copy(self, source: str, destination: str, config: t.Optional[WriteConfig] = None):
        source = self._normalizer.normalize_path(source)
        destination = self._normalizer.normalize_path(destination)
        try:
            self._client.copy(source, destination)
        except RemoteAPIError as ex:
            raise self._failure(UnableToCopyFile.from_location_to(source, destination, str(ex), ex)) from ex
