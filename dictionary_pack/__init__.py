"""
Dictionary Pack
===============

This package manages the metadata of versioned, locale-keyed dictionary files
kept on the local file system:
- Reversible escaping of word list ids into safe file names
- Cache, staging and temp directory layout
- Promotion of staged downloads into the cache
- Reconciliation of cached, leftover, bundled and enabled dictionaries into
  one highest-version-per-locale listing
- Filtering of words eligible for learning
"""

# File naming
from .name_codec import (
    replace_file_name_dangerous_characters,
    get_word_list_id_from_file_name,
    escape_file_name,
    unescape_file_name,
    get_category_from_file_name,
)
from .locale_utils import Locale, WordListId, is_main_word_list_id, get_main_dict_id

# Storage
from .directory_layout import DirectoryLayout
from .staging import StagingPromoter, parse_staging_file_name
from .container import DictionaryHeader, FileAddress, read_header, write_header, get_content_version
from .assets import AssetBundle

# Listing
from .dictionary_info import DictionaryRecord, RecordResult, RecordStatus, records_to_frame, export_listing
from .reconciler import MetadataReconciler, add_or_update_record

# Learning
from .word_filter import WordPolicy, is_acceptable

from .errors import (
    DictionaryPackError,
    MalformedEscape,
    MalformedStagingName,
    UnreadableContainer,
    UnsupportedFormat,
    IOFailure,
    DirectoryCreateFailure,
    RenameFailure,
)

__all__ = [
    'replace_file_name_dangerous_characters',
    'get_word_list_id_from_file_name',
    'escape_file_name',
    'unescape_file_name',
    'get_category_from_file_name',
    'Locale',
    'WordListId',
    'is_main_word_list_id',
    'get_main_dict_id',
    'DirectoryLayout',
    'StagingPromoter',
    'parse_staging_file_name',
    'DictionaryHeader',
    'FileAddress',
    'read_header',
    'write_header',
    'get_content_version',
    'AssetBundle',
    'DictionaryRecord',
    'RecordResult',
    'RecordStatus',
    'records_to_frame',
    'export_listing',
    'MetadataReconciler',
    'add_or_update_record',
    'WordPolicy',
    'is_acceptable',
    'DictionaryPackError',
    'MalformedEscape',
    'MalformedStagingName',
    'UnreadableContainer',
    'UnsupportedFormat',
    'IOFailure',
    'DirectoryCreateFailure',
    'RenameFailure',
]
