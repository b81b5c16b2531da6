"""
Container Header Module
=======================

Reads the version header of a binary dictionary file. The dictionary body is
never parsed here; only the header is needed to learn the content version.

Header layout (big-endian):
- 4 bytes magic number 0x9BC13AFE
- 2 bytes format version
- 2 bytes flags
- 4 bytes total header size, fixed fields included
- NUL-terminated UTF-8 key/value pairs up to the header size
"""

import logging
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from config import HEADER_MAGIC_NUMBER, HEADER_VERSION_ATTRIBUTE, NOT_A_VERSION_NUMBER
from .errors import UnsupportedFormat, IOFailure, UnreadableContainer

_FIXED_HEADER = struct.Struct('>IHHI')
MINIMUM_FORMAT_VERSION = 2
DEFAULT_FORMAT_VERSION = 202


@dataclass
class DictionaryHeader:
    format_version: int
    flags: int = 0
    attributes: Dict[str, str] = field(default_factory=dict)

    @property
    def version(self) -> int:
        """Content version from the 'version' attribute, -1 if missing or not a number."""
        value = self.attributes.get(HEADER_VERSION_ATTRIBUTE)
        try:
            version = int(value)
        except (TypeError, ValueError):
            return NOT_A_VERSION_NUMBER
        return version if version >= 0 else NOT_A_VERSION_NUMBER


@dataclass(frozen=True)
class FileAddress:
    """A dictionary stored at [offset, offset + length) inside a file."""

    path: Path
    offset: int
    length: int

    @classmethod
    def make_from_file(cls, path: Union[str, Path]) -> Optional['FileAddress']:
        path = Path(path)
        try:
            if not path.is_file():
                return None
            return cls(path, 0, path.stat().st_size)
        except OSError as e:
            logging.warning(f"Could not stat dictionary file {path}: {e}")
            return None

    def last_modified_millis(self) -> int:
        try:
            return int(self.path.stat().st_mtime * 1000)
        except OSError:
            return 0

    def delete_underlying_file(self) -> bool:
        try:
            self.path.unlink()
            return True
        except FileNotFoundError:
            return True
        except OSError as e:
            logging.warning(f"Could not delete {self.path}: {e}")
            return False


def read_header(path: Union[str, Path], offset: int = 0, length: Optional[int] = None) -> DictionaryHeader:
    """
    Read the header of the dictionary at the given offset and length of a file.

    Raises:
        UnsupportedFormat: if the bytes are not a known container header
        IOFailure: if the file cannot be read
    """
    try:
        with open(path, 'rb') as f:
            f.seek(offset)
            fixed = f.read(_FIXED_HEADER.size)
            if len(fixed) < _FIXED_HEADER.size:
                raise UnsupportedFormat(f"{path}: file too short for a header")
            magic, format_version, flags, header_size = _FIXED_HEADER.unpack(fixed)
            if magic != HEADER_MAGIC_NUMBER:
                raise UnsupportedFormat(f"{path}: bad magic number {magic:#x}")
            if format_version < MINIMUM_FORMAT_VERSION:
                raise UnsupportedFormat(f"{path}: format version {format_version} is not supported")
            if header_size < _FIXED_HEADER.size or (length is not None and header_size > length):
                raise UnsupportedFormat(f"{path}: inconsistent header size {header_size}")
            body = f.read(header_size - _FIXED_HEADER.size)
    except OSError as e:
        raise IOFailure(f"{path}: {e}") from e

    if len(body) != header_size - _FIXED_HEADER.size:
        raise UnsupportedFormat(f"{path}: truncated header")
    return DictionaryHeader(format_version, flags, _parse_attributes(body, path))


def _parse_attributes(body: bytes, path) -> Dict[str, str]:
    fields = body.split(b'\0')
    # A well formed attribute block ends with a terminator, leaving one empty trailing field
    if fields[-1] != b'' or len(fields) % 2 != 1:
        raise UnsupportedFormat(f"{path}: malformed header attributes")
    try:
        decoded = [item.decode('utf-8') for item in fields[:-1]]
    except UnicodeDecodeError as e:
        raise UnsupportedFormat(f"{path}: header attributes are not utf-8") from e
    return dict(zip(decoded[0::2], decoded[1::2]))


def build_header(attributes: Dict[str, str], format_version: int = DEFAULT_FORMAT_VERSION,
                 flags: int = 0) -> bytes:
    body = b''.join(
        key.encode('utf-8') + b'\0' + str(value).encode('utf-8') + b'\0'
        for key, value in attributes.items()
    )
    return _FIXED_HEADER.pack(HEADER_MAGIC_NUMBER, format_version, flags, _FIXED_HEADER.size + len(body)) + body


def write_header(path: Union[str, Path], attributes: Dict[str, str], body: bytes = b'',
                 format_version: int = DEFAULT_FORMAT_VERSION):
    """Write a dictionary file made of a header followed by an opaque body."""
    with open(path, 'wb') as f:
        f.write(build_header(attributes, format_version))
        f.write(body)


def get_dictionary_file_header_or_none(path: Union[str, Path], offset: int,
                                       length: int) -> Optional[DictionaryHeader]:
    try:
        return read_header(path, offset, length)
    except UnreadableContainer as e:
        logging.debug(f"Unreadable dictionary header: {e}")
        return None


def get_content_version(file_address: FileAddress) -> int:
    """Content version of the dictionary at file_address, -1 if the header is unreadable."""
    header = get_dictionary_file_header_or_none(file_address.path, file_address.offset, file_address.length)
    if header is None:
        return NOT_A_VERSION_NUMBER
    return header.version
