"""Path normalization."""
import typing as t
import unicodedata

from .errors import CorruptedPathDetected, PathTraversalDetected


class PathNormalizer(t.Protocol):

    def normalize_path(self, path: str) -> str:
        ...


class WhitespacePathNormalizer:
    """Normalizes paths to a relative, forward-slash form.

        - surrounding whitespace is removed
        - back-slashes become forward slashes
        - empty and "." segments are dropped, ".." removes the previous segment
        - the result has no leading or trailing slash (the root is "")

        Paths containing control or other non-printable characters are rejected, as
        are paths whose ".." segments would climb above the root. Normalizing a
        normalized path returns it unchanged.
    """

    def normalize_path(self, path: str) -> str:
        path = path.strip().replace('\\', '/')
        self._reject_funky_whitespace(path)
        parts = []
        for part in path.split('/'):
            if part == '' or part == '.':
                continue
            if part == '..':
                if not parts:
                    raise PathTraversalDetected(path)
                parts.pop()
            else:
                parts.append(part)
        return '/'.join(parts)

    @staticmethod
    def _reject_funky_whitespace(path: str):
        if any(unicodedata.category(c).startswith('C') for c in path):
            raise CorruptedPathDetected(path)
