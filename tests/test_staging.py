"""
Test Staging
============

Unit tests for moving staged dictionaries into the cache.
"""

import os
import unittest
import tempfile
import shutil
from pathlib import Path

from dictionary_pack import (
    DirectoryLayout,
    StagingPromoter,
    parse_staging_file_name,
    MalformedStagingName,
)


def snapshot(root: Path) -> dict:
    return {
        str(path.relative_to(root)): path.read_bytes() if path.is_file() else None
        for path in sorted(root.rglob('*'))
    }


class TestStaging(unittest.TestCase):
    """Test cases for staging promotion."""

    def setUp(self):
        """Set up test environment."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.layout = DirectoryLayout(self.test_dir)
        self.promoter = StagingPromoter(self.layout)

    def tearDown(self):
        """Clean up test environment."""
        shutil.rmtree(self.test_dir)

    def test_parse_staging_file_name(self):
        self.assertEqual(parse_staging_file_name('en_US___main%00003aen_us'), ('en_US', 'main%00003aen_us'))
        self.assertEqual(parse_staging_file_name('en%00002dUS___main%00003aen'), ('en-US', 'main%00003aen'))

        with self.assertRaises(MalformedStagingName) as context:
            parse_staging_file_name('main%00003aen')
        self.assertTrue(context.exception.missing_separator)

        for bad in ['en___main___x', 'en___', '___main', 'en%0___main']:
            with self.subTest(bad=bad):
                with self.assertRaises(MalformedStagingName) as context:
                    parse_staging_file_name(bad)
                self.assertFalse(context.exception.missing_separator)

    def test_promote_moves_file_to_cache(self):
        staged = self.layout.staging_file_name('main:en_us', 'en_US')
        staged.write_bytes(b'payload')

        promoted = self.promoter.promote_all_staged()

        cache_file = self.layout.cache_file_name('main:en_us', 'en_US')
        self.assertEqual(promoted, [cache_file])
        self.assertEqual(cache_file.read_bytes(), b'payload')
        self.assertFalse(staged.exists())
        self.assertEqual(self.layout.get_staging_file_list(), [])

    def test_promote_escaped_locale(self):
        staged = self.layout.staging_file_name('main:en_us', 'en-US')
        staged.write_bytes(b'payload')

        self.promoter.promote_all_staged()

        self.assertEqual(self.layout.cache_file_name('main:en_us', 'en-US').read_bytes(), b'payload')

    def test_promote_overwrites_previous_cache_file(self):
        cache_file = self.layout.cache_file_name('main:fr', 'fr')
        cache_file.write_bytes(b'old')
        self.layout.staging_file_name('main:fr', 'fr').write_bytes(b'new')

        self.promoter.promote_all_staged()

        self.assertEqual(cache_file.read_bytes(), b'new')

    def test_promote_is_idempotent(self):
        self.layout.staging_file_name('main:fr', 'fr').write_bytes(b'fr')
        self.layout.staging_file_name('main:de', 'de').write_bytes(b'de')

        self.assertEqual(len(self.promoter.promote_all_staged()), 2)
        before = snapshot(self.test_dir)
        self.assertEqual(self.promoter.promote_all_staged(), [])
        self.assertEqual(snapshot(self.test_dir), before)

    def test_promote_with_no_staging_directory(self):
        self.assertEqual(self.promoter.promote_all_staged(), [])
        self.assertEqual(list(self.test_dir.iterdir()), [])

    def test_file_without_separator_is_kept(self):
        self.layout.staging_root().mkdir(parents=True)
        stray = self.layout.staging_root() / 'main%00003aen'
        stray.write_bytes(b'x')

        with self.assertLogs(level='ERROR') as logs:
            self.promoter.promote_all_staged()

        self.assertTrue(stray.exists())
        self.assertTrue(any('separator' in message for message in logs.output))

    def test_file_with_three_parts_is_deleted(self):
        self.layout.staging_root().mkdir(parents=True)
        malformed = self.layout.staging_root() / 'en___main%00003aen___extra'
        malformed.write_bytes(b'x')

        with self.assertLogs(level='ERROR'):
            self.promoter.promote_all_staged()

        self.assertFalse(malformed.exists())
        self.assertEqual(self.layout.get_cached_directory_list(), [])

    def test_rename_failure_leaves_staging_file(self):
        staged = self.layout.staging_file_name('main:it', 'it')
        staged.write_bytes(b'x')
        # A non-empty directory in the way of the destination
        blocker = self.layout.cache_file_name('main:it', 'it')
        blocker.mkdir()
        (blocker / 'inner').write_bytes(b'')

        with self.assertLogs(level='ERROR') as logs:
            promoted = self.promoter.promote_all_staged()

        self.assertEqual(promoted, [])
        self.assertTrue(staged.exists())
        self.assertTrue(any('Failed to rename' in message for message in logs.output))


if __name__ == '__main__':
    unittest.main()
