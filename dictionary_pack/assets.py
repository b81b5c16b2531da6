"""
Assets Module
=============

Built-in dictionaries shipped with the application, stored as plain files in
an asset directory and named 'main_<language>[_<region>]<suffix>'.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from config import MAIN_DICT_PREFIX, DEFAULT_MAIN_DICT
from .container import FileAddress
from .locale_utils import Locale


class AssetBundle:
    """
    Looks up bundled main dictionaries by locale.
    """

    def __init__(self, asset_dir: Union[str, Path], declared_locales: Optional[Iterable[str]] = None,
                 dict_suffix: str = ''):
        self.asset_dir = Path(asset_dir)
        self.dict_suffix = dict_suffix
        self._declared_locales = list(declared_locales) if declared_locales is not None else None

    def locales(self) -> List[str]:
        """
        Locales the bundle declares.

        Without an explicit declaration they are derived from the main dictionary
        resource names found in the asset directory.
        """
        if self._declared_locales is not None:
            return list(self._declared_locales)
        if not self.asset_dir.is_dir():
            return []
        locales = []
        try:
            for path in sorted(self.asset_dir.iterdir()):
                name = path.name
                if not path.is_file() or not name.startswith(MAIN_DICT_PREFIX):
                    continue
                if self.dict_suffix:
                    if not name.endswith(self.dict_suffix):
                        continue
                    name = name[:-len(self.dict_suffix)]
                locale_key = name[len(MAIN_DICT_PREFIX):]
                if locale_key:
                    locales.append(locale_key)
        except OSError as e:
            logging.warning(f"Could not list asset directory {self.asset_dir}: {e}")
        return locales

    def get_identifier(self, name: str) -> Optional[Path]:
        path = self.asset_dir / name
        return path if path.is_file() else None

    def get_main_dictionary_resource_if_available(self, locale: Locale) -> Optional[Path]:
        """
        Returns the bundled main dictionary for a locale, or None.

        Tries main_<language>_<region> first, then main_<language>. A locale with
        a script keeps it in the first name (main_zh_hant_tw), so its resource
        names back to the same locale.
        """
        if locale.region:
            resource = self.get_identifier(MAIN_DICT_PREFIX + str(locale).lower() + self.dict_suffix)
            if resource is not None:
                return resource
        return self.get_identifier(MAIN_DICT_PREFIX + locale.language + self.dict_suffix)

    def get_main_dictionary_resource(self, locale: Locale) -> Optional[Path]:
        """Like get_main_dictionary_resource_if_available, falling back to the default main dictionary."""
        resource = self.get_main_dictionary_resource_if_available(locale)
        if resource is not None:
            return resource
        return self.get_identifier(DEFAULT_MAIN_DICT + self.dict_suffix)

    def is_dictionary_available(self, locale: Locale) -> bool:
        return self.get_main_dictionary_resource_if_available(locale) is not None

    def load_fallback_resource(self, resource: Path) -> Optional[FileAddress]:
        return FileAddress.make_from_file(resource)
