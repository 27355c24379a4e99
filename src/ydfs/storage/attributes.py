"""Metadata snapshots of files and directories."""
from __future__ import annotations
import dataclasses
import typing as t


TYPE_FILE = "file"
TYPE_DIRECTORY = "dir"


@dataclasses.dataclass(frozen=True)
class StorageAttributes:
    """Common base of FileAttributes and DirectoryAttributes.

        Values are read-only snapshots of what the backend reported when they were
        built; they are never refreshed.
    """

    path: str

    @property
    def type(self) -> str:
        raise NotImplementedError

    def is_file(self) -> bool:
        return self.type == TYPE_FILE

    def is_dir(self) -> bool:
        return self.type == TYPE_DIRECTORY

    def with_path(self, path: str) -> StorageAttributes:
        return dataclasses.replace(self, path=path)

    def to_dict(self) -> dict:
        data = {'type': self.type}
        data.update(dataclasses.asdict(self))
        return data

    @staticmethod
    def from_dict(data: dict) -> StorageAttributes:
        if data.get('type') == TYPE_DIRECTORY:
            return DirectoryAttributes(
                path=data['path'],
                visibility=data.get('visibility'),
                last_modified=data.get('last_modified'),
            )
        return FileAttributes(
            path=data['path'],
            file_size=data.get('file_size'),
            visibility=data.get('visibility'),
            last_modified=data.get('last_modified'),
            mime_type=data.get('mime_type'),
        )


@dataclasses.dataclass(frozen=True)
class FileAttributes(StorageAttributes):

    file_size: t.Optional[int] = None
    visibility: t.Optional[str] = None
    last_modified: t.Optional[int] = None
    mime_type: t.Optional[str] = None

    def __post_init__(self):
        if self.file_size is not None and self.file_size < 0:
            raise ValueError(f"File size cannot be negative [{self.file_size}]")

    @property
    def type(self) -> str:
        return TYPE_FILE


@dataclasses.dataclass(frozen=True)
class DirectoryAttributes(StorageAttributes):

    visibility: t.Optional[str] = None
    last_modified: t.Optional[int] = None

    @property
    def type(self) -> str:
        return TYPE_DIRECTORY
