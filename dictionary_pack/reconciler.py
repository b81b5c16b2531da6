"""
Reconciler Module
=================

Builds the list of dictionaries present for each locale by scanning, in order:

1. the per-locale cache directories
2. leftover downloads directly under the storage root
3. the bundled assets
4. the enabled locales, as placeholders with version -1

Candidates are merged so that exactly one record survives per locale: the one
with the highest version, the first seen one on ties. The scan order is part
of the contract because of that tie rule.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from config import TEMP_DICT_FILE_SUB, NOT_A_VERSION_NUMBER, MAIN_DICT_PREFIX, WordListCategory
from .assets import AssetBundle
from .container import DictionaryHeader, FileAddress, get_dictionary_file_header_or_none
from .dictionary_info import DictionaryRecord, RecordResult
from .directory_layout import DirectoryLayout
from .errors import MalformedEscape
from .locale_utils import Locale, WordListId, get_main_dict_id
from .name_codec import get_word_list_id_from_file_name

LOCALE_ATTRIBUTE = 'locale'


def add_or_update_record(records: List[DictionaryRecord], new_record: DictionaryRecord) -> bool:
    """
    Merge a candidate into the list, keeping the highest version per locale.

    Returns:
        True if the candidate was kept
    """
    for index, existing in enumerate(records):
        if existing.locale == new_record.locale:
            if new_record.version <= existing.version:
                return False
            records[index] = new_record
            return True
    records.append(new_record)
    return True


def default_locale_description(locale: Locale) -> str:
    return str(locale)


def _read_header(file_address: FileAddress) -> Optional[DictionaryHeader]:
    return get_dictionary_file_header_or_none(file_address.path, file_address.offset, file_address.length)


class MetadataReconciler:
    """
    Scans every dictionary source of a storage root and merges the results.
    """

    def __init__(self, layout: DirectoryLayout,
                 asset_bundle: Optional[AssetBundle] = None,
                 enabled_locales: Optional[Callable[[], Iterable[str]]] = None,
                 describe_locale: Callable[[Locale], str] = default_locale_description,
                 header_reader: Callable[[FileAddress], Optional[DictionaryHeader]] = _read_header):
        self.layout = layout
        self.asset_bundle = asset_bundle
        self.enabled_locales = enabled_locales
        self.describe_locale = describe_locale
        self.header_reader = header_reader

    def _content_locale(self, header: DictionaryHeader, fallback: Locale) -> Locale:
        locale_string = header.attributes.get(LOCALE_ATTRIBUTE)
        if locale_string:
            return Locale.from_string(locale_string)
        return fallback

    def create_record_from_file_address(self, file_address: Optional[FileAddress], word_list_id: str,
                                        locale: Locale) -> RecordResult:
        """
        Record for a cached or bundled file.

        The filename is not kept: the file is already where it belongs. A file
        without a readable, versioned header yields no record.
        """
        if file_address is None:
            return RecordResult.absent(f"no file for {word_list_id}")
        header = self.header_reader(file_address)
        if header is None:
            return RecordResult.malformed(f"unreadable header in {file_address.path}")
        if header.version == NOT_A_VERSION_NUMBER:
            return RecordResult.malformed(f"unversioned dictionary {file_address.path}")
        content_locale = self._content_locale(header, locale)
        return RecordResult.found(DictionaryRecord(
            id=word_list_id,
            locale=content_locale,
            description=self.describe_locale(content_locale),
            filename=None,
            filesize=file_address.length,
            modified_time_millis=file_address.last_modified_millis(),
            version=header.version,
        ))

    def create_record_for_uncached_file(self, file_address: Optional[FileAddress], locale: Locale) -> RecordResult:
        """
        Record for a leftover download.

        A corrupted or legacy file is deleted and yields no record.
        """
        if file_address is None:
            return RecordResult.absent(f"no leftover file for {locale}")
        header = self.header_reader(file_address)
        version = header.version if header is not None else NOT_A_VERSION_NUMBER
        if version == NOT_A_VERSION_NUMBER:
            # Purge the legacy/corrupted unused dictionary
            file_address.delete_underlying_file()
            logging.info(f"Deleted unusable leftover dictionary {file_address.path}")
            return RecordResult.malformed(f"unversioned leftover {file_address.path}")
        return RecordResult.found(DictionaryRecord(
            id=get_main_dict_id(locale),
            locale=locale,
            description=self.describe_locale(locale),
            # Just the file name, not the full path
            filename=file_address.path.name,
            filesize=file_address.length,
            modified_time_millis=file_address.last_modified_millis(),
            version=version,
        ))

    def create_record_from_locale(self, locale: Locale) -> DictionaryRecord:
        """Placeholder for an enabled locale, never overrides a real record."""
        return DictionaryRecord(
            id=get_main_dict_id(locale),
            locale=locale,
            description=self.describe_locale(locale),
            filename=None,
            filesize=0,
            modified_time_millis=0,
            version=NOT_A_VERSION_NUMBER,
        )

    def _scan_cache(self, records: List[DictionaryRecord]):
        for directory in self.layout.get_cached_directory_list():
            try:
                self._scan_cache_directory(directory, records)
            except OSError as e:
                logging.warning(f"Skipping cache directory {directory}: {e}")

    def _scan_cache_directory(self, directory: Path, records: List[DictionaryRecord]):
        try:
            locale_string = get_word_list_id_from_file_name(directory.name)
        except MalformedEscape as e:
            logging.warning(f"Skipping cache directory {directory}: {e}")
            return
        directory_locale = Locale.from_string(locale_string)

        for dict_file in self.layout.list_files(directory):
            try:
                word_list_id = get_word_list_id_from_file_name(dict_file.name)
            except MalformedEscape as e:
                logging.warning(f"Skipping cached file {dict_file}: {e}")
                continue
            parsed_id = WordListId.parse(word_list_id)
            if parsed_id is None or parsed_id.category is not WordListCategory.MAIN:
                continue
            result = self.create_record_from_file_address(
                FileAddress.make_from_file(dict_file), word_list_id, parsed_id.locale)
            if not result.is_found:
                logging.debug(f"Ignoring cached file: {result.reason}")
                continue
            # A less specific dictionary, e.g. 'en' filed for 'en_US', is usable
            # for that locale but is not listed under it
            if result.record.locale != directory_locale:
                continue
            add_or_update_record(records, result.record)

    def _scan_unused(self, records: List[DictionaryRecord]):
        for dictionary_file in self.layout.get_unused_dictionary_list():
            file_name = dictionary_file.name
            index = file_name.find(TEMP_DICT_FILE_SUB)
            if index == -1:
                continue
            try:
                locale_string = get_word_list_id_from_file_name(file_name[:index])
            except MalformedEscape as e:
                logging.warning(f"Skipping leftover file {dictionary_file}: {e}")
                continue
            result = self.create_record_for_uncached_file(
                FileAddress.make_from_file(dictionary_file), Locale.from_string(locale_string))
            if result.is_found:
                add_or_update_record(records, result.record)

    def _scan_assets(self, records: List[DictionaryRecord]):
        if self.asset_bundle is None:
            return
        for locale_string in self.asset_bundle.locales():
            locale = Locale.from_string(locale_string)
            try:
                resource = self.asset_bundle.get_main_dictionary_resource_if_available(locale)
            except OSError as e:
                logging.warning(f"Skipping bundled dictionary for {locale}: {e}")
                continue
            if resource is None:
                continue
            result = self.create_record_from_file_address(
                self.asset_bundle.load_fallback_resource(resource),
                get_main_dict_id(locale), self._resource_locale(resource.name))
            if not result.is_found:
                logging.debug(f"Ignoring bundled dictionary: {result.reason}")
                continue
            # main_en serving en_US is not listed as an en_US dictionary
            if result.record.locale != locale:
                continue
            add_or_update_record(records, result.record)

    def _resource_locale(self, resource_name: str) -> Locale:
        name = resource_name
        if self.asset_bundle.dict_suffix and name.endswith(self.asset_bundle.dict_suffix):
            name = name[:-len(self.asset_bundle.dict_suffix)]
        return Locale.from_string(name[len(MAIN_DICT_PREFIX):])

    def _scan_enabled(self, records: List[DictionaryRecord]):
        if self.enabled_locales is None:
            return
        for locale_string in self.enabled_locales():
            add_or_update_record(records, self.create_record_from_locale(Locale.from_string(locale_string)))

    def reconcile(self) -> List[DictionaryRecord]:
        """
        Current dictionaries with their file names and versions, one per locale.

        A bad file or directory is skipped; only a failure of the whole scan
        gives an empty result.

        Returns:
            Reconciled records; empty if the storage root cannot be scanned
        """
        records: List[DictionaryRecord] = []
        try:
            self._scan_cache(records)
            self._scan_unused(records)
            self._scan_assets(records)
            self._scan_enabled(records)
        except OSError as e:
            logging.error(f"Scanning dictionaries under {self.layout.storage_root} failed: {e}")
            return []

        logging.info(f"Found {len(records)} dictionaries under {self.layout.storage_root}")
        return records
