"""Client for the Yandex Disk REST API."""
import typing as t

import requests
import zrlog

from .base import Payload
from .errors import RemoteAPIError, error_from_response, wrap_request_errors


DEFAULT_BASE_URL = "https://cloud-api.yandex.net/v1/disk"


def _field_names(fields: t.Iterable[str]) -> list[str]:
    names = []
    for field in fields:
        names.extend(x.strip() for x in field.split(',') if x.strip())
    return names


def _fields_param(names: list[str], *required: str) -> t.Optional[str]:
    if not names:
        return None
    return ','.join(names + [x for x in required if x not in names])


def _flag(value: bool) -> str:
    return 'true' if value else 'false'


class YandexDiskClient:
    """Thin wrapper over the Yandex Disk REST API.

        Paths are given relative to the root of the drive and are sent as `disk:/...`.
        Operations the API completes asynchronously (HTTP 202) are returned from as
        soon as they are accepted.
    """

    PATH_PREFIX = "disk:"

    def __init__(self,
                 token: str,
                 base_url: t.Optional[str] = None,
                 timeout: float = 30,
                 page_size: int = 1000,
                 permanent_delete: bool = False,
                 session: t.Optional[requests.Session] = None):
        self._token = token
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip('/ ')
        self._timeout = timeout
        self._page_size = page_size
        self._permanent_delete = permanent_delete
        self._session = session if session is not None else requests.Session()
        self._log = zrlog.get_logger('ydfs.client.yandex')

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self._session.close()

    def get_path_prefix(self) -> str:
        return self.PATH_PREFIX

    def api_path(self, path: str) -> str:
        """Convert a drive path into the form the API expects."""
        if path.startswith(self.PATH_PREFIX):
            return path
        return f"{self.PATH_PREFIX}/{path.lstrip('/')}"

    def _make_raw_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        headers = kwargs.pop('headers', None) or {}
        if endpoint.startswith('http'):
            full_url = endpoint
        else:
            full_url = f"{self._base_url}/{endpoint}"
            headers['Authorization'] = f'OAuth {self._token}'
        self._log.debug(f"{method} {full_url}")
        response = self._session.request(method, full_url, headers=headers, timeout=self._timeout, **kwargs)
        if response.status_code >= 400:
            error = error_from_response(response)
            response.close()
            raise error
        if response.status_code == 202:
            self._log.debug(f"{method} {full_url} accepted for asynchronous processing")
        return response

    def _make_json_request(self, method: str, endpoint: str, **kwargs) -> dict:
        response = self._make_raw_request(method, endpoint, **kwargs)
        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    @wrap_request_errors
    def list_content(self,
                     path: str,
                     fields: t.Sequence[str] = (),
                     deep: bool = False,
                     limit: t.Optional[int] = None) -> dict:
        """Retrieve the metadata of a resource.

            Directory items are paged through until all of them are collected, unless
            the requested fields leave the items out or a limit is given. When deep is
            set, the items of every sub-directory are appended as well.
        """
        names = _field_names(fields)
        with_items = deep or not names or any(x.startswith('_embedded.items') for x in names)
        required = []
        if with_items and limit is None:
            required.append('_embedded.total')
        if deep:
            required.extend(['_embedded.items.path', '_embedded.items.type'])
        params = {
            'path': self.api_path(path),
            'limit': limit or self._page_size,
        }
        field_str = _fields_param(names, *required)
        if field_str:
            params['fields'] = field_str
        data = self._make_json_request('GET', 'resources', params=params)
        embedded = data.get('_embedded')
        if embedded is None or not with_items:
            return data
        items = list(embedded.get('items') or [])
        total = embedded.get('total') if limit is None else None
        while total is not None and len(items) < total:
            page = self._make_json_request('GET', 'resources', params={**params, 'offset': len(items)})
            page_items = (page.get('_embedded') or {}).get('items') or []
            if not page_items:
                break
            items.extend(page_items)
        if deep:
            for item in list(items):
                if item.get('type') == 'dir':
                    if not item.get('path'):
                        raise RemoteAPIError(f"Invalid response: directory item without a path under [{path}]", 2004)
                    sub_data = self.list_content(item['path'], fields, True, limit)
                    items.extend((sub_data.get('_embedded') or {}).get('items') or [])
        embedded['items'] = items
        return data

    @wrap_request_errors
    def upload(self, path: str, payload: Payload, overwrite: bool = False) -> None:
        link = self._make_json_request('GET', 'resources/upload', params={
            'path': self.api_path(path),
            'overwrite': _flag(overwrite),
        })
        if not link.get('href'):
            raise RemoteAPIError(f"Invalid response: no upload link for [{path}]", 2004)
        self._make_raw_request('PUT', link['href'], data=payload).close()

    @wrap_request_errors
    def remove(self, path: str) -> None:
        self._make_raw_request('DELETE', 'resources', params={
            'path': self.api_path(path),
            'permanently': _flag(self._permanent_delete),
        }).close()

    @wrap_request_errors
    def add_directory(self, path: str) -> None:
        self._make_raw_request('PUT', 'resources', params={'path': self.api_path(path)}).close()

    @wrap_request_errors
    def move(self, source: str, destination: str, overwrite: bool = False) -> None:
        self._make_raw_request('POST', 'resources/move', params={
            'from': self.api_path(source),
            'path': self.api_path(destination),
            'overwrite': _flag(overwrite),
        }).close()

    @wrap_request_errors
    def copy(self, source: str, destination: str, overwrite: bool = False) -> None:
        self._make_raw_request('POST', 'resources/copy', params={
            'from': self.api_path(source),
            'path': self.api_path(destination),
            'overwrite': _flag(overwrite),
        }).close()

    @wrap_request_errors
    def get_download_url(self, path: str, fields: t.Sequence[str] = ()) -> dict:
        params = {'path': self.api_path(path)}
        field_str = _fields_param(_field_names(fields), 'href')
        if field_str:
            params['fields'] = field_str
        return self._make_json_request('GET', 'resources/download', params=params)
