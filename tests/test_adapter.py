import io
import unittest as ut

from ydfs.client import RemoteAPIError, BadRequestError, NotFoundError
from ydfs.storage import (
    YandexDiskAdapter,
    FileAttributes,
    WriteConfig,
    Visibility,
    UnableToCheckExistence,
    UnableToWriteFile,
    UnableToReadFile,
    UnableToDeleteFile,
    UnableToDeleteDirectory,
    UnableToCreateDirectory,
    UnableToSetVisibility,
    UnableToMoveFile,
    UnableToCopyFile,
    UnableToRetrieveMetadata,
    CorruptedPathDetected,
)

from tests.fakes import FakeDiskClient, FakeStreamOpener, TrackingStream


class TestYandexDiskAdapter(ut.TestCase):

    def setUp(self):
        self.client = FakeDiskClient()
        self.opener = FakeStreamOpener()
        self.adapter = YandexDiskAdapter(self.client, stream_opener=self.opener)

    def test_file_exists(self):
        self.assertTrue(self.adapter.file_exists(" /docs/a.txt "))
        self.assertEqual(self.client.calls, [('list_content', 'docs/a.txt', ['_embedded.items.path'], False, 1)])

    def test_directory_exists(self):
        self.assertTrue(self.adapter.directory_exists("/docs/"))
        self.assertEqual(self.client.calls[0][1], 'docs')

    def test_file_exists_bad_request(self):
        self.client.fail('list_content', BadRequestError("HTTP 400", 2400, status_code=400))
        self.assertFalse(self.adapter.file_exists("/docs/a.txt"))
        self.assertFalse(self.adapter.directory_exists("/docs/a.txt"))

    def test_file_exists_not_found(self):
        self.client.fail('list_content', NotFoundError("HTTP 404 DiskNotFoundError", 2404, status_code=404))
        self.assertFalse(self.adapter.file_exists("/missing.txt"))

    def test_file_exists_existence_failure(self):
        self.client.fail('list_content', UnableToCheckExistence.at_location("missing.txt"))
        self.assertFalse(self.adapter.file_exists("/missing.txt"))

    def test_file_exists_other_failure(self):
        error = RemoteAPIError("HTTP 503", 2500, True, status_code=503)
        self.client.fail('list_content', error)
        with self.assertRaises(UnableToRetrieveMetadata) as h:
            self.adapter.file_exists("/docs/a.txt")
        self.assertEqual(h.exception.location, 'docs/a.txt')
        self.assertEqual(h.exception.metadata_type, UnableToRetrieveMetadata.EXISTENCE)
        self.assertIs(h.exception.__cause__, error)
        self.assertTrue(h.exception.is_recoverable)

    def test_write(self):
        self.adapter.write("/docs/a.txt", b"hello", WriteConfig({'visibility': Visibility.PUBLIC}))
        self.assertEqual(self.client.calls, [('upload', 'docs/a.txt', b"hello", True)])

    def test_write_string(self):
        self.adapter.write("docs/a.txt", "héllo")
        self.assertEqual(self.client.calls[0][2], "héllo".encode('utf-8'))

    def test_write_stream(self):
        src = io.BytesIO(b"streamed")
        self.adapter.write_stream("docs\\b.bin", src)
        self.assertEqual(self.client.calls, [('upload', 'docs/b.bin', src, True)])

    def test_write_failure(self):
        error = BadRequestError("HTTP 409 DiskPathDoesntExistsError", 2400, status_code=409)
        self.client.fail('upload', error)
        for method in (self.adapter.write, self.adapter.write_stream):
            with self.subTest(method=method.__name__):
                with self.assertRaises(UnableToWriteFile) as h:
                    method("/nowhere/a.txt", b"data")
                self.assertEqual(h.exception.location, 'nowhere/a.txt')
                self.assertIn("DiskPathDoesntExistsError", h.exception.reason)
                self.assertIs(h.exception.__cause__, error)

    def test_read(self):
        stream = TrackingStream(b"file contents")
        self.opener.streams["https://downloader.example/docs/a.txt"] = stream
        self.assertEqual(self.adapter.read("/docs/a.txt"), b"file contents")
        self.assertEqual(stream.close_count, 1)
        self.assertEqual(self.client.calls, [('get_download_url', 'docs/a.txt', ['href'])])

    def test_read_drain_failure_closes_stream(self):
        stream = TrackingStream(b"data", fail_on_read=True)
        self.opener.streams["https://downloader.example/docs/a.txt"] = stream
        with self.assertRaises(UnableToReadFile) as h:
            self.adapter.read("/docs/a.txt")
        self.assertEqual(h.exception.location, 'docs/a.txt')
        self.assertIsInstance(h.exception.__cause__, OSError)
        self.assertEqual(stream.close_count, 1)

    def test_read_open_failure(self):
        error = NotFoundError("HTTP 404", 2404, status_code=404)
        self.opener.error = error
        with self.assertRaises(UnableToReadFile) as h:
            self.adapter.read("/x.bin")
        self.assertEqual(h.exception.location, 'x.bin')
        self.assertIs(h.exception.__cause__, error)
        self.assertEqual(self.opener.opened, ["https://downloader.example/x.bin"])
        self.assertEqual(self.opener.streams, {})

    def test_read_download_url_failure(self):
        self.client.fail('get_download_url', NotFoundError("HTTP 404", 2404, status_code=404))
        with self.assertRaises(UnableToReadFile):
            self.adapter.read("/x.bin")
        self.assertEqual(self.opener.opened, [])

    def test_read_missing_link(self):
        self.client.get_download_url = lambda path, fields=(): {}
        with self.assertRaises(UnableToReadFile):
            self.adapter.read_stream("/x.bin")
        self.assertEqual(self.opener.opened, [])

    def test_read_stream_returns_open_stream(self):
        stream = self.adapter.read_stream("/docs/a.txt")
        self.assertFalse(stream.closed)
        self.assertEqual(stream.close_count, 0)
        stream.close()

    def test_delete(self):
        self.adapter.delete("/docs/a.txt")
        self.adapter.delete_directory("/docs/")
        self.assertEqual(self.client.calls, [('remove', 'docs/a.txt'), ('remove', 'docs')])

    def test_delete_failures(self):
        self.client.fail('remove', BadRequestError("HTTP 403", 2400, status_code=403))
        with self.assertRaises(UnableToDeleteFile) as h:
            self.adapter.delete("/docs/a.txt")
        self.assertEqual(h.exception.location, 'docs/a.txt')
        with self.assertRaises(UnableToDeleteDirectory) as h:
            self.adapter.delete_directory("/docs")
        self.assertEqual(h.exception.location, 'docs')

    def test_create_directory(self):
        self.adapter.create_directory("/docs/new/", WriteConfig())
        self.assertEqual(self.client.calls, [('add_directory', 'docs/new')])

    def test_create_directory_failure(self):
        self.client.fail('add_directory', BadRequestError("HTTP 409 DiskPathPointsToExistentDirectoryError", 2400, status_code=409))
        with self.assertRaises(UnableToCreateDirectory) as h:
            self.adapter.create_directory("/docs")
        self.assertEqual(h.exception.location, 'docs')

    def test_set_visibility(self):
        for path in ("/docs/a.txt", "", "bad\x00path"):
            for visibility in (Visibility.PUBLIC, Visibility.PRIVATE, "anything"):
                with self.subTest(path=path, visibility=visibility):
                    with self.assertRaises(UnableToSetVisibility) as h:
                        self.adapter.set_visibility(path, visibility)
                    self.assertIn("does not support visibility", str(h.exception))
        self.assertEqual(self.client.calls, [])

    def test_visibility(self):
        attrs = self.adapter.visibility("/docs/a.txt")
        self.assertEqual(attrs, FileAttributes('docs/a.txt'))
        self.assertIsNone(attrs.visibility)
        self.assertEqual(self.client.calls, [])

    def test_mime_type(self):
        self.client.fail('list_content', RemoteAPIError("unreachable", 2002, True))
        attrs = self.adapter.mime_type("/docs/a.txt")
        self.assertEqual(attrs.path, 'docs/a.txt')
        self.assertEqual(attrs.mime_type, 'text/plain')
        self.assertIsNone(attrs.file_size)
        self.assertIsNone(attrs.last_modified)
        self.assertEqual(self.client.calls, [])

    def test_last_modified(self):
        self.client.listings['docs/a.txt'] = {'modified': '2024-01-02T03:04:05+00:00'}
        attrs = self.adapter.last_modified("/docs/a.txt")
        self.assertEqual(attrs, FileAttributes('docs/a.txt', last_modified=1704164645))
        self.assertEqual(self.client.calls, [('list_content', 'docs/a.txt', ['modified'], False)])

    def test_last_modified_with_offset(self):
        self.client.listings['docs/a.txt'] = {'modified': '2024-01-02T03:04:05+03:00'}
        self.assertEqual(self.adapter.last_modified("docs/a.txt").last_modified, 1704153845)

    def test_last_modified_missing(self):
        self.assertIsNone(self.adapter.last_modified("docs/a.txt").last_modified)

    def test_last_modified_failure(self):
        self.client.fail('list_content', NotFoundError("HTTP 404", 2404, status_code=404))
        with self.assertRaises(UnableToRetrieveMetadata) as h:
            self.adapter.last_modified("/docs/a.txt")
        self.assertEqual(h.exception.metadata_type, UnableToRetrieveMetadata.LAST_MODIFIED)

    def test_file_size(self):
        self.client.listings['docs/a.txt'] = {'size': 10}
        self.assertEqual(self.adapter.file_size("/docs/a.txt"), FileAttributes('docs/a.txt', file_size=10))
        self.assertEqual(self.client.calls, [('list_content', 'docs/a.txt', ['size'], False)])

    def test_file_size_failure(self):
        self.client.fail('list_content', NotFoundError("HTTP 404", 2404, status_code=404))
        with self.assertRaises(UnableToRetrieveMetadata) as h:
            self.adapter.file_size("/docs/a.txt")
        self.assertEqual(h.exception.metadata_type, UnableToRetrieveMetadata.FILE_SIZE)
        self.assertEqual(h.exception.location, 'docs/a.txt')

    def test_move(self):
        self.adapter.move("/a/f.txt", "/b/f.txt", WriteConfig())
        self.assertEqual(self.client.calls, [('move', 'a/f.txt', 'b/f.txt')])

    def test_move_failure(self):
        error = BadRequestError("HTTP 400", 2400, status_code=400)
        self.client.fail('move', error)
        with self.assertRaises(UnableToMoveFile) as h:
            self.adapter.move("/a/f.txt", "/b/f.txt", WriteConfig())
        self.assertEqual(h.exception.source, 'a/f.txt')
        self.assertEqual(h.exception.destination, 'b/f.txt')
        self.assertIn('a/f.txt', str(h.exception))
        self.assertIn('b/f.txt', str(h.exception))
        self.assertIs(h.exception.__cause__, error)

    def test_copy(self):
        self.adapter.copy(" a/f.txt", "b//f.txt")
        self.assertEqual(self.client.calls, [('copy', 'a/f.txt', 'b/f.txt')])

    def test_copy_failure(self):
        self.client.fail('copy', RemoteAPIError("Connection error", 2002, True))
        with self.assertRaises(UnableToCopyFile) as h:
            self.adapter.copy("/a/f.txt", "/b/f.txt")
        self.assertEqual((h.exception.source, h.exception.destination), ('a/f.txt', 'b/f.txt'))
        self.assertTrue(h.exception.is_recoverable)

    def test_corrupted_path_never_reaches_client(self):
        with self.assertRaises(CorruptedPathDetected):
            self.adapter.write("docs/\x07a.txt", b"data")
        self.assertEqual(self.client.calls, [])

    def test_normalized_paths_are_stable(self):
        for path in (" /docs/a.txt", "docs\\a.txt", "./docs//a.txt/"):
            with self.subTest(path=path):
                self.client.calls.clear()
                self.adapter.delete(path)
                first = self.client.calls[0][1]
                self.adapter.delete(first)
                self.assertEqual(self.client.calls[1][1], first)
