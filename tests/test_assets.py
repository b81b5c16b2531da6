"""
Test Assets
===========

Unit tests for looking up bundled dictionaries.
"""

import unittest
import tempfile
import shutil
from pathlib import Path

from dictionary_pack import AssetBundle, Locale, write_header


class TestAssetBundle(unittest.TestCase):
    """Test cases for bundled resource lookup."""

    def setUp(self):
        """Set up test environment."""
        self.test_dir = Path(tempfile.mkdtemp())
        self.bundle = AssetBundle(self.test_dir)

    def tearDown(self):
        """Clean up test environment."""
        shutil.rmtree(self.test_dir)

    def add(self, name: str, version: int = 1) -> Path:
        path = self.test_dir / name
        write_header(path, {'version': str(version)})
        return path

    def test_region_is_tried_before_language(self):
        en_us = self.add('main_en_us')
        en = self.add('main_en')

        self.assertEqual(self.bundle.get_main_dictionary_resource_if_available(Locale.from_string('en_US')), en_us)
        self.assertEqual(self.bundle.get_main_dictionary_resource_if_available(Locale.from_string('en_GB')), en)
        self.assertEqual(self.bundle.get_main_dictionary_resource_if_available(Locale.from_string('en')), en)

    def test_script_stays_in_region_name(self):
        zh_hant_tw = self.add('main_zh_hant_tw')
        zh_tw = self.add('main_zh_tw')

        self.assertEqual(self.bundle.get_main_dictionary_resource_if_available(Locale.from_string('zh_Hant_TW')),
                         zh_hant_tw)
        self.assertEqual(self.bundle.get_main_dictionary_resource_if_available(Locale.from_string('zh_TW')), zh_tw)

    def test_default_main_dictionary_fallback(self):
        default = self.add('main')
        fr = self.add('main_fr')

        self.assertEqual(self.bundle.get_main_dictionary_resource(Locale.from_string('fr_CA')), fr)
        self.assertEqual(self.bundle.get_main_dictionary_resource(Locale.from_string('it')), default)
        self.assertIsNone(self.bundle.get_main_dictionary_resource_if_available(Locale.from_string('it')))

    def test_no_default_main_dictionary(self):
        self.assertIsNone(self.bundle.get_main_dictionary_resource(Locale.from_string('it')))

    def test_is_dictionary_available(self):
        self.add('main_de')
        self.add('main')

        self.assertTrue(self.bundle.is_dictionary_available(Locale.from_string('de')))
        self.assertTrue(self.bundle.is_dictionary_available(Locale.from_string('de_AT')))
        # The default dictionary does not count
        self.assertFalse(self.bundle.is_dictionary_available(Locale.from_string('it')))

    def test_build_suffix(self):
        bundle = AssetBundle(self.test_dir, dict_suffix='_v2')
        tagged = self.add('main_es_v2')
        self.add('main_pt')

        self.assertEqual(bundle.get_main_dictionary_resource_if_available(Locale.from_string('es')), tagged)
        self.assertFalse(bundle.is_dictionary_available(Locale.from_string('pt')))
        self.assertEqual(bundle.locales(), ['es'])

    def test_declared_locales(self):
        self.add('main_de')
        bundle = AssetBundle(self.test_dir, declared_locales=['fr', 'de'])

        self.assertEqual(bundle.locales(), ['fr', 'de'])
        self.assertEqual(self.bundle.locales(), ['de'])

    def test_load_fallback_resource(self):
        path = self.add('main_nl')

        address = self.bundle.load_fallback_resource(path)

        self.assertEqual(address.path, path)
        self.assertEqual(address.length, path.stat().st_size)
        self.assertIsNone(self.bundle.load_fallback_resource(self.test_dir / 'main_xx'))


if __name__ == '__main__':
    unittest.main()
