from __future__ import annotations
import typing as t


Payload = t.Union[bytes, bytearray, memoryview, t.BinaryIO, t.Iterable[bytes]]


class RemoteStorageClient(t.Protocol):
    """Gateway to a remote drive.

        Paths given to a client are already normalized by the caller. Every method
        may raise a RemoteAPIError; a BadRequestError signals a request the backend
        considers malformed (including a missing resource).
    """

    def list_content(self,
                     path: str,
                     fields: t.Sequence[str] = (),
                     deep: bool = False,
                     limit: t.Optional[int] = None) -> dict:
        """Retrieve metadata for a resource, including its items if it is a directory.

            With a limit, at most that many items are returned in a single request.
        """
        ...

    def upload(self, path: str, payload: Payload, overwrite: bool = False) -> None:
        ...

    def remove(self, path: str) -> None:
        ...

    def add_directory(self, path: str) -> None:
        ...

    def move(self, source: str, destination: str) -> None:
        ...

    def copy(self, source: str, destination: str) -> None:
        ...

    def get_download_url(self, path: str, fields: t.Sequence[str] = ()) -> dict:
        """Obtain a short-lived direct download link; the result has an `href` key."""
        ...

    def get_path_prefix(self) -> str:
        """Prefix the backend adds to paths it reports."""
        ...
