from __future__ import annotations
import typing as t

from .attributes import StorageAttributes


class DirectoryListing:
    """Lazy, single-use sequence of listing entries.

        Nothing is fetched until the listing is iterated and each entry is produced as
        it is consumed. Once exhausted the listing stays exhausted; list the directory
        again to get a fresh one.
    """

    def __init__(self, entries: t.Iterable[StorageAttributes]):
        self._entries = iter(entries)

    def __iter__(self) -> t.Iterator[StorageAttributes]:
        return self

    def __next__(self) -> StorageAttributes:
        return next(self._entries)

    def filter(self, predicate: t.Callable[[StorageAttributes], bool]) -> DirectoryListing:
        return DirectoryListing(x for x in self._entries if predicate(x))

    def map(self, callback: t.Callable[[StorageAttributes], t.Any]) -> DirectoryListing:
        return DirectoryListing(callback(x) for x in self._entries)

    def sort_by_path(self) -> DirectoryListing:
        """Sort entries by path; this consumes the whole underlying listing."""
        return DirectoryListing(sorted(self._entries, key=lambda x: x.path))

    def files(self) -> DirectoryListing:
        return self.filter(lambda x: x.is_file())

    def directories(self) -> DirectoryListing:
        return self.filter(lambda x: x.is_dir())

    def to_list(self) -> list[StorageAttributes]:
        return list(self._entries)
