"""Errors raised by remote storage clients."""
import functools
import typing as t

import requests
import urllib3.exceptions

from ydfs.exc import YDFSError


class RemoteAPIError(YDFSError):
    """Any failure talking to the remote storage API."""

    def __init__(self,
                 msg: str,
                 code: int = 2000,
                 is_recoverable: bool = False,
                 status_code: t.Optional[int] = None,
                 error_code: t.Optional[str] = None,
                 description: t.Optional[str] = None):
        super().__init__(msg, "YDAPI", code, is_recoverable=is_recoverable)
        self.status_code = status_code
        self.error_code = error_code
        self.description = description


class BadRequestError(RemoteAPIError):
    """The remote API rejected the request (4xx)."""
    pass


class NotFoundError(BadRequestError):
    """The requested resource does not exist (404)."""
    pass


def error_from_response(response: requests.Response) -> RemoteAPIError:
    """Build the appropriate error for a failed HTTP response."""
    error_code = None
    description = None
    try:
        body = response.json()
        if isinstance(body, dict):
            error_code = body.get('error')
            description = body.get('description') or body.get('message')
    except ValueError:
        pass
    msg = f"HTTP {response.status_code}"
    if error_code:
        msg += f" {error_code}"
    if description:
        msg += f": {description}"
    kwargs = {
        'status_code': response.status_code,
        'error_code': error_code,
        'description': description,
    }
    if response.status_code == 404:
        return NotFoundError(msg, 2404, **kwargs)
    if 400 <= response.status_code < 500:
        return BadRequestError(msg, 2400, is_recoverable=response.status_code in (423, 429), **kwargs)
    return RemoteAPIError(msg, 2500, is_recoverable=response.status_code >= 500, **kwargs)


def wrap_request_errors(cb):
    """Converts transport errors from requests into RemoteAPIErrors."""

    @functools.wraps(cb)
    def _inner(*args, **kwargs):
        try:
            return cb(*args, **kwargs)
        except RemoteAPIError:
            raise
        except requests.Timeout as ex:
            raise RemoteAPIError(f"Connection timeout error: {ex.__class__.__name__}: {str(ex)}", 2001, True) from ex
        except requests.ConnectionError as ex:
            raise RemoteAPIError(f"Connection error: {ex.__class__.__name__}: {str(ex)}", 2002, True) from ex
        except (requests.RequestException, urllib3.exceptions.HTTPError) as ex:
            raise RemoteAPIError(f"Request error: {ex.__class__.__name__}: {str(ex)}", 2003) from ex
        except ValueError as ex:
            raise RemoteAPIError(f"Invalid response: {str(ex)}", 2004) from ex

    return _inner
