"""
Test Container Header
=====================

Unit tests for reading dictionary version headers.
"""

import unittest
import tempfile
import shutil
from pathlib import Path

from dictionary_pack import (
    FileAddress,
    read_header,
    write_header,
    get_content_version,
    UnsupportedFormat,
    IOFailure,
    UnreadableContainer,
)
from dictionary_pack.container import build_header


class TestContainerHeader(unittest.TestCase):
    """Test cases for the container header reader."""

    def setUp(self):
        """Set up test environment."""
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Clean up test environment."""
        shutil.rmtree(self.test_dir)

    def test_write_then_read(self):
        path = self.test_dir / 'main.dict'
        write_header(path, {'version': '42', 'locale': 'en_US'}, body=b'\x01\x02\x03')

        header = read_header(path)
        self.assertEqual(header.version, 42)
        self.assertEqual(header.attributes['locale'], 'en_US')
        self.assertEqual(get_content_version(FileAddress.make_from_file(path)), 42)

    def test_header_at_offset(self):
        path = self.test_dir / 'bundle.bin'
        header_bytes = build_header({'version': '7'})
        path.write_bytes(b'padding!' + header_bytes + b'body')

        address = FileAddress(path, 8, len(header_bytes) + 4)
        self.assertEqual(get_content_version(address), 7)

    def test_missing_version_is_unversioned(self):
        path = self.test_dir / 'noversion.dict'
        write_header(path, {'locale': 'fr'})
        self.assertEqual(read_header(path).version, -1)

        write_header(path, {'version': 'abc'})
        self.assertEqual(read_header(path).version, -1)

    def test_garbage_is_unsupported(self):
        path = self.test_dir / 'garbage.dict'
        path.write_bytes(b'this is not a dictionary at all')

        with self.assertRaises(UnsupportedFormat):
            read_header(path)
        self.assertEqual(get_content_version(FileAddress.make_from_file(path)), -1)

    def test_truncated_file_is_unsupported(self):
        path = self.test_dir / 'short.dict'
        path.write_bytes(build_header({'version': '3'})[:-3])

        with self.assertRaises(UnsupportedFormat):
            read_header(path)

    def test_old_format_is_unsupported(self):
        path = self.test_dir / 'legacy.dict'
        write_header(path, {'version': '3'}, format_version=1)

        with self.assertRaises(UnreadableContainer):
            read_header(path)

    def test_missing_file_is_io_failure(self):
        with self.assertRaises(IOFailure):
            read_header(self.test_dir / 'missing.dict')

    def test_file_address(self):
        path = self.test_dir / 'x.dict'
        path.write_bytes(b'12345')

        address = FileAddress.make_from_file(path)
        self.assertEqual(address.length, 5)
        self.assertEqual(address.offset, 0)
        self.assertGreater(address.last_modified_millis(), 0)
        self.assertIsNone(FileAddress.make_from_file(self.test_dir))

        self.assertTrue(address.delete_underlying_file())
        self.assertFalse(path.exists())


if __name__ == '__main__':
    unittest.main()
