from autoinject import injector
import zirconium as zr
import zrlog

from ydfs.client import YandexDiskClient
from ydfs.exc import YDFSError
from .mime import ExtensionMimeTypeDetector
from .streams import HttpStreamOpener
from .yandex import YandexDiskAdapter


@injector.injectable_global
class StorageController:
    """Builds adapters from the application configuration.

        [ydfs.yandex]
        token = "..."               # OAuth token, required
        base_url = "https://cloud-api.yandex.net/v1/disk"
        timeout = 30
        page_size = 1000
        permanent_delete = false

        [ydfs.mime_types]
        log = "text/plain"          # extension overrides
    """

    config: zr.ApplicationConfig = None

    @injector.construct
    def __init__(self):
        self._log = zrlog.get_logger('ydfs.storage')

    def build_client(self) -> YandexDiskClient:
        token = self.config.as_str(('ydfs', 'yandex', 'token'), default=None)
        if not token:
            raise YDFSError("Missing Yandex Disk token", "CONFIG", 1000)
        base_url = self.config.as_str(('ydfs', 'yandex', 'base_url'), default=None)
        self._log.debug(f"Building Yandex Disk client for [{base_url or 'default endpoint'}]")
        return YandexDiskClient(
            token=token,
            base_url=base_url,
            timeout=float(self.config.get(('ydfs', 'yandex', 'timeout'), default=30)),
            page_size=int(self.config.get(('ydfs', 'yandex', 'page_size'), default=1000)),
            permanent_delete=self.config.as_bool(('ydfs', 'yandex', 'permanent_delete'), default=False),
        )

    def get_adapter(self) -> YandexDiskAdapter:
        return YandexDiskAdapter(
            self.build_client(),
            mime_type_detector=ExtensionMimeTypeDetector(self.config.as_dict(('ydfs', 'mime_types'), default=None)),
            stream_opener=HttpStreamOpener(timeout=float(self.config.get(('ydfs', 'yandex', 'timeout'), default=30))),
        )
