"""
Name Codec Module
=================

Reversible escaping between arbitrary identifier strings and names that are
safe to use as file or directory names.

ASCII letters, digits and the underscore pass through unchanged. Every other
code point, '%' included, is written as '%' followed by its code point value
in exactly six hex digits. Six digits cover the whole unicode range.
"""

from typing import Optional

from config import MAX_HEX_DIGITS_FOR_CODEPOINT, ID_CATEGORY_SEPARATOR
from .errors import MalformedEscape

_HEX_DIGITS = frozenset('0123456789abcdefABCDEF')


def is_file_name_character(code_point: int) -> bool:
    """
    Returns whether a code point may be used as-is in a file name.

    Only ascii letters, digits and underscore are accepted.
    """
    if 0x30 <= code_point <= 0x39:  # Digit
        return True
    if 0x41 <= code_point <= 0x5A:  # Uppercase
        return True
    if 0x61 <= code_point <= 0x7A:  # Lowercase
        return True
    return code_point == 0x5F  # Underscore


def replace_file_name_dangerous_characters(name: str) -> str:
    """
    Escape a string for any characters that may be suspicious in a file or directory name.

    This is close to URL-encoding, except that everything which is not
    alphanumeric or underscore gets encoded.

    Args:
        name: Any string, e.g. a word list id such as 'main:en_us'

    Returns:
        The escaped name, made only of [0-9A-Za-z_%]
    """
    parts = []
    for char in name:
        code_point = ord(char)
        if is_file_name_character(code_point):
            parts.append(char)
        else:
            parts.append(f"%{code_point:0{MAX_HEX_DIGITS_FOR_CODEPOINT}x}")
    return ''.join(parts)


def get_word_list_id_from_file_name(file_name: str) -> str:
    """
    Reverse the escaping done by replace_file_name_dangerous_characters.

    Args:
        file_name: An escaped name

    Returns:
        The original string

    Raises:
        MalformedEscape: if a '%' is not followed by six hex digits
    """
    parts = []
    i = 0
    length = len(file_name)
    while i < length:
        char = file_name[i]
        if char != '%':
            parts.append(char)
            i += 1
            continue
        digits = file_name[i + 1:i + 1 + MAX_HEX_DIGITS_FOR_CODEPOINT]
        if len(digits) != MAX_HEX_DIGITS_FOR_CODEPOINT or not all(d in _HEX_DIGITS for d in digits):
            raise MalformedEscape(file_name, i)
        try:
            parts.append(chr(int(digits, 16)))
        except ValueError:
            # Beyond 0x10FFFF
            raise MalformedEscape(file_name, i) from None
        i += 1 + MAX_HEX_DIGITS_FOR_CODEPOINT
    return ''.join(parts)


# Short names used across the package
escape_file_name = replace_file_name_dangerous_characters
unescape_file_name = get_word_list_id_from_file_name


def get_category_from_file_name(file_name: str) -> Optional[str]:
    """
    Returns the category for a given escaped file name.

    An id is supposed to be in format category:locale, so splitting it on the
    separator must yield exactly two parts.

    Returns:
        The category as a string, or None if it can't be found in the file name
    """
    try:
        word_list_id = get_word_list_id_from_file_name(file_name)
    except MalformedEscape:
        return None
    id_parts = word_list_id.split(ID_CATEGORY_SEPARATOR)
    if len(id_parts) != 2:
        return None
    return id_parts[0]
