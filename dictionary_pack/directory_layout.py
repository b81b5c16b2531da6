"""
Directory Layout Module
=======================

Canonical locations of dictionary files under an application-private storage root:

- <root>/dicts/<escaped locale>/<escaped id>   cached word lists, one directory per locale
- <root>/staging/<escaped locale___id>          files waiting to be moved into the cache
- <root>/tmp/                                   scratch space for uncommitted files
- <root>/<locale>___<anything>.dict             leftover, never-installed downloads
"""

import logging
from pathlib import Path
from typing import List, Union

from config import (
    CACHE_DIR_NAME,
    STAGING_DIR_NAME,
    TEMP_DIR_NAME,
    TEMP_DICT_FILE_SUB,
    DICT_FILE_EXTENSION,
)
from .errors import DirectoryCreateFailure
from .name_codec import replace_file_name_dangerous_characters


def _list_directory(directory: Path, directories: bool = False) -> List[Path]:
    """Immediate files (or subdirectories) of a directory, skipping entries that cannot be inspected."""
    try:
        if not directory.is_dir():
            return []
        entries = sorted(directory.iterdir())
    except OSError as e:
        logging.warning(f"Could not list directory {directory}: {e}")
        return []

    result = []
    for path in entries:
        try:
            wanted = path.is_dir() if directories else path.is_file()
        except OSError as e:
            logging.warning(f"Skipping {path}: {e}")
            continue
        if wanted:
            result.append(path)
    return result


class DirectoryLayout:
    """
    Computes paths for the cache, staging and temp areas of one storage root.
    """

    def __init__(self, storage_root: Union[str, Path]):
        self.storage_root = Path(storage_root)

    def cache_root(self) -> Path:
        return self.storage_root / CACHE_DIR_NAME

    def staging_root(self) -> Path:
        return self.storage_root / STAGING_DIR_NAME

    def temp_root(self) -> Path:
        return self.storage_root / TEMP_DIR_NAME

    def ensure_directories(self):
        """
        Create the storage root and its three areas.

        Raises:
            DirectoryCreateFailure: if any of them cannot be created
        """
        for directory in (self.cache_root(), self.staging_root(), self.temp_root()):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DirectoryCreateFailure(f"Could not create {directory}: {e}") from e

    def _ensure_directory(self, directory: Path, what: str):
        # Absence shows up later as an empty scan, so a failure here is only logged
        if directory.is_dir():
            return
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logging.error(f"Could not create the directory for {what}: {e}")

    def cache_dir_for_locale(self, locale_key: str) -> Path:
        """
        Find out the cache directory associated with a specific locale, creating it if absent.
        """
        directory = self.cache_root() / replace_file_name_dangerous_characters(locale_key)
        self._ensure_directory(directory, f"locale {locale_key}")
        return directory

    def cache_file_name(self, word_list_id: str, locale_key: str) -> Path:
        """
        Generates a file name for the id and locale passed as arguments.

        The file name is unique for any id/locale pair: the escaped id inside a
        directory named after the escaped locale.

        Args:
            word_list_id: Id of the dictionary, e.g. 'main:en_us'
            locale_key: Locale string, e.g. 'en_US'

        Returns:
            Path of the cached file
        """
        return self.cache_dir_for_locale(locale_key) / replace_file_name_dangerous_characters(word_list_id)

    def staging_file_name(self, word_list_id: str, locale_key: str) -> Path:
        # e.g. id='main:en_us', locale='en_US' -> staging/en_US___main%00003aen_us
        staging_root = self.staging_root()
        self._ensure_directory(staging_root, "staging")
        file_name = replace_file_name_dangerous_characters(locale_key + TEMP_DICT_FILE_SUB + word_list_id)
        return staging_root / file_name

    def unused_file_name(self, locale_key: str, token: str) -> Path:
        """Name for a leftover download of locale_key, as the update path writes them."""
        return self.storage_root / (
            replace_file_name_dangerous_characters(locale_key) + TEMP_DICT_FILE_SUB
            + replace_file_name_dangerous_characters(token) + DICT_FILE_EXTENSION
        )

    def get_cached_directory_list(self) -> List[Path]:
        """One cache directory per distinct locale."""
        return _list_directory(self.cache_root(), directories=True)

    def list_files(self, directory: Path) -> List[Path]:
        return _list_directory(directory)

    def get_cached_word_lists(self, locale_key: str) -> List[Path]:
        return self.list_files(self.cache_root() / replace_file_name_dangerous_characters(locale_key))

    def get_staging_file_list(self) -> List[Path]:
        return _list_directory(self.staging_root())

    def get_unused_dictionary_list(self) -> List[Path]:
        return [
            path for path in _list_directory(self.storage_root)
            if path.name.endswith(DICT_FILE_EXTENSION)
            and TEMP_DICT_FILE_SUB in path.name
        ]
