from pathlib import Path
from enum import Enum
from typing import Optional
import os

from dotenv import load_dotenv

# Read DICTPACK_* settings from a local .env file if there is one
load_dotenv()

# Directory configuration (relative to the storage root)
CACHE_DIR_NAME = 'dicts'
STAGING_DIR_NAME = 'staging'
TEMP_DIR_NAME = 'tmp'
LOG_DIR_NAME = 'logs'
LOG_FILE_NAME = os.getenv('DICTPACK_LOG_FILE', 'dictpack.log')
LOG_BACKUP_DAYS = 7
METADATA_DB_NAME = 'metadata.db'

DEFAULT_STORAGE_ROOT = Path.home() / '.dictpack'

# File naming configuration
# Only made of characters that pass through escaping, so it survives inside escaped names
TEMP_DICT_FILE_SUB = '___'
DICT_FILE_EXTENSION = '.dict'
ID_CATEGORY_SEPARATOR = ':'
MAIN_DICT_PREFIX = 'main_'
DEFAULT_MAIN_DICT = 'main'
# 6 digits - unicode is limited to 21 bits
MAX_HEX_DIGITS_FOR_CODEPOINT = 6

# Learning configuration
DICTIONARY_MAX_WORD_LENGTH = 48
DEFAULT_WORD_CONNECTORS = "'-"

# Container header configuration
HEADER_MAGIC_NUMBER = 0x9BC13AFE
HEADER_VERSION_ATTRIBUTE = 'version'
NOT_A_VERSION_NUMBER = -1


class WordListCategory(Enum):
    MAIN = "main"

    @classmethod
    def from_wire(cls, value: str) -> Optional['WordListCategory']:
        """Map a category string from an id to the enum, None if unknown."""
        for category in cls:
            if category.value == value:
                return category
        return None


def get_storage_root() -> Path:
    """Storage root from DICTPACK_STORAGE_ROOT, defaults to ~/.dictpack"""
    root = os.getenv('DICTPACK_STORAGE_ROOT')
    if root is None or root == '':
        return DEFAULT_STORAGE_ROOT
    return Path(root).expanduser()


def get_decoder_dict_suffix() -> str:
    """Build-specific tag appended to bundled resource names"""
    return os.getenv('DICTPACK_DICT_SUFFIX', '')


def get_asset_dir(storage_root: Path) -> Path:
    """Bundled dictionaries directory, DICTPACK_ASSET_DIR or <root>/assets"""
    asset_dir = os.getenv('DICTPACK_ASSET_DIR')
    if asset_dir:
        return Path(asset_dir).expanduser()
    return storage_root / 'assets'


def get_enabled_locales() -> list:
    """Enabled locales from the comma separated DICTPACK_ENABLED_LOCALES"""
    value = os.getenv('DICTPACK_ENABLED_LOCALES', '')
    return [item.strip() for item in value.split(',') if item.strip()]
