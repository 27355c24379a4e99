"""Filesystem-style access to a Yandex Disk drive."""
from .exc import YDFSError

__version__ = "0.1.0"
