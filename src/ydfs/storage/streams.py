"""Opening byte streams on direct download links."""
import io
import typing as t

import requests

from ydfs.client.errors import error_from_response, wrap_request_errors


class StreamOpener(t.Protocol):

    def open(self, url: str) -> t.BinaryIO:
        ...


class ResponseStream(io.RawIOBase):
    """Read-only raw stream over the body of a streamed HTTP response.

        Closing the stream releases the underlying connection.
    """

    def __init__(self, response: requests.Response):
        super().__init__()
        self._response = response
        self._pending = b''

    def readable(self) -> bool:
        return True

    @wrap_request_errors
    def readinto(self, b) -> int:
        # Decoded content can be longer than the amount asked for
        data = self._pending or self._response.raw.read(len(b), decode_content=True)
        n = min(len(b), len(data))
        b[:n] = data[:n]
        self._pending = data[n:]
        return n

    def close(self):
        if not self.closed:
            self._response.close()
        super().close()


class HttpStreamOpener:
    """Opens download links with requests, streaming the body on demand."""

    def __init__(self,
                 session: t.Optional[requests.Session] = None,
                 timeout: float = 30,
                 buffer_size: int = io.DEFAULT_BUFFER_SIZE):
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._buffer_size = buffer_size

    @wrap_request_errors
    def open(self, url: str) -> t.BinaryIO:
        response = self._session.get(url, stream=True, timeout=self._timeout)
        if response.status_code >= 400:
            error = error_from_response(response)
            response.close()
            raise error
        return io.BufferedReader(ResponseStream(response), self._buffer_size)

    def close(self):
        self._session.close()
