"""
Word Filter Module
==================

Decides whether a piece of text may be learned into a user dictionary.
"""

from dataclasses import dataclass

from config import DICTIONARY_MAX_WORD_LENGTH, DEFAULT_WORD_CONNECTORS


@dataclass(frozen=True)
class WordPolicy:
    """Letters and the connector characters are word code points."""

    word_connectors: str = DEFAULT_WORD_CONNECTORS
    max_word_length: int = DICTIONARY_MAX_WORD_LENGTH

    def is_word_code_point(self, code_point: int) -> bool:
        char = chr(code_point)
        return char.isalpha() or char in self.word_connectors


DEFAULT_WORD_POLICY = WordPolicy()


def is_acceptable(text: str, policy: WordPolicy = DEFAULT_WORD_POLICY) -> bool:
    """
    Returns whether text looks valid for dictionary insertion.

    Args:
        text: Candidate word or phrase
        policy: Which code points count as part of a word

    Returns:
        False for empty or overlong text, text with non-word code points,
        or text made only of digits
    """
    if not text:
        return False
    length = len(text)
    if length > policy.max_word_length:
        return False
    digit_count = 0
    for char in text:
        if char.isdecimal():
            # Count digits: see below
            digit_count += 1
            continue
        if not policy.is_word_code_point(ord(char)):
            return False
    # Strings made only of digits could be PIN codes or credit card numbers.
    # Digits mixed with letters, like a street address or postal code, are fine.
    return digit_count < length
