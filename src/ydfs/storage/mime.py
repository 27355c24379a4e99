import mimetypes
import posixpath
import typing as t


class MimeTypeDetector(t.Protocol):

    def detect_mime_type_from_path(self, path: str) -> t.Optional[str]:
        ...


class ExtensionMimeTypeDetector:
    """Guesses the mime type from the file extension alone."""

    def __init__(self, overrides: t.Optional[t.Mapping[str, str]] = None):
        self._overrides = {
            ext.lower().lstrip('.'): mime_type
            for ext, mime_type in (overrides or {}).items()
        }

    def detect_mime_type_from_path(self, path: str) -> t.Optional[str]:
        _, ext = posixpath.splitext(path)
        if not ext:
            return None
        ext = ext.lower().lstrip('.')
        if ext in self._overrides:
            return self._overrides[ext]
        mime_type, _ = mimetypes.guess_type(f"file.{ext}", strict=False)
        return mime_type
