"""
    Remote storage clients.

    A client is the only part of ydfs that talks to the network. It takes paths that
    have already been normalized, performs exactly one logical API operation per call
    and raises a RemoteAPIError (or one of its subclasses) when the backend refuses or
    cannot be reached.
"""
from .base import RemoteStorageClient, Payload
from .errors import RemoteAPIError, BadRequestError, NotFoundError
from .yandex import YandexDiskClient
