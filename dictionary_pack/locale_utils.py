"""
Locale Utilities Module
=======================

Structured locales and word list ids.

A locale string looks like 'en', 'en_US', 'en-us' or 'zh_Hant_TW'. Parsing
normalizes case so that a directory named 'en_US' and an id ending in 'en_us'
describe the same locale.
"""

import re
from dataclasses import dataclass
from typing import Optional

from config import ID_CATEGORY_SEPARATOR, WordListCategory

_LOCALE_PART_SEPARATOR = re.compile(r'[_-]')


@dataclass(frozen=True)
class Locale:
    """A language[-script][-region][-variant] tag compared by full equality."""

    language: str
    script: str = ''
    region: str = ''
    variant: str = ''

    @classmethod
    def from_string(cls, locale_string: str) -> 'Locale':
        """
        Build a locale from its string form.

        Args:
            locale_string: e.g. 'en', 'en_US', 'en-us', 'zh_Hant_TW'

        Returns:
            The parsed locale, language lowercased, script titlecased and region uppercased
        """
        parts = _LOCALE_PART_SEPARATOR.split(locale_string.strip()) if locale_string else ['']
        language = parts[0].lower()
        script = ''
        region = ''
        rest = parts[1:]
        if rest and len(rest[0]) == 4 and rest[0].isalpha():
            script = rest.pop(0).title()
        if rest:
            region = rest.pop(0).upper()
        variant = '_'.join(rest)
        return cls(language, script, region, variant)

    def is_less_specific_than(self, other: 'Locale') -> bool:
        """True if other refines this locale, e.g. 'en' for 'en_US'."""
        if self == other or self.language != other.language:
            return False
        for mine, theirs in ((self.script, other.script),
                             (self.region, other.region),
                             (self.variant, other.variant)):
            if mine and mine != theirs:
                return False
        return True

    def __str__(self) -> str:
        return '_'.join(part for part in (self.language, self.script, self.region, self.variant) if part)


@dataclass(frozen=True)
class WordListId:
    """A parsed 'category:locale-key' identifier."""

    category: Optional[WordListCategory]
    raw_category: str
    locale_key: str

    @classmethod
    def parse(cls, word_list_id: str) -> Optional['WordListId']:
        """Returns None unless the id splits into exactly two parts on the separator."""
        id_parts = word_list_id.split(ID_CATEGORY_SEPARATOR)
        if len(id_parts) != 2:
            return None
        return cls(WordListCategory.from_wire(id_parts[0]), id_parts[0], id_parts[1])

    @property
    def locale(self) -> Locale:
        return Locale.from_string(self.locale_key)

    def __str__(self) -> str:
        return f"{self.raw_category}{ID_CATEGORY_SEPARATOR}{self.locale_key}"


def is_main_word_list_id(word_list_id: str) -> bool:
    parsed = WordListId.parse(word_list_id)
    return parsed is not None and parsed.category is WordListCategory.MAIN


def get_main_dict_id(locale: Locale) -> str:
    """
    Returns the id of the main word list for a locale.

    Bundled word lists can be updated like any other list, so they need an id
    too. It is the category followed by the lowercased locale.
    """
    return f"{WordListCategory.MAIN.value}{ID_CATEGORY_SEPARATOR}{str(locale).lower()}"
