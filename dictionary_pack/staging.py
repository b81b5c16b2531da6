"""
Staging Module
==============

Moves downloaded dictionaries from the staging area into their cache location.

A staging file is named escape(locale + '___' + id). The separator is made of
characters that escaping leaves alone, so it can be found again in the escaped
name and the id part is already in its escaped, cache-ready form.
"""

import logging
import os
from pathlib import Path
from typing import List, Tuple

from config import TEMP_DICT_FILE_SUB
from .directory_layout import DirectoryLayout
from .errors import MalformedEscape, MalformedStagingName, RenameFailure
from .name_codec import get_word_list_id_from_file_name


def parse_staging_file_name(file_name: str) -> Tuple[str, str]:
    """
    Split a staging file name into its locale key and escaped id.

    Returns:
        (locale key, escaped id)

    Raises:
        MalformedStagingName: missing_separator is set when the separator is absent
    """
    if TEMP_DICT_FILE_SUB not in file_name:
        raise MalformedStagingName(file_name, missing_separator=True)
    locale_and_file_id = file_name.split(TEMP_DICT_FILE_SUB)
    if len(locale_and_file_id) != 2 or not all(locale_and_file_id):
        raise MalformedStagingName(file_name)
    escaped_locale, escaped_id = locale_and_file_id
    try:
        locale_key = get_word_list_id_from_file_name(escaped_locale)
    except MalformedEscape:
        raise MalformedStagingName(file_name) from None
    return locale_key, escaped_id


class StagingPromoter:
    """
    Drains the staging area into the cache. Safe to run on every startup.
    """

    def __init__(self, layout: DirectoryLayout):
        self.layout = layout

    def promote(self, staging_file: Path) -> Path:
        """
        Move one staging file into the cache, replacing any previous file there.

        Raises:
            MalformedStagingName: if the name cannot be mapped to a cache location
            RenameFailure: if the move itself fails
        """
        locale_key, escaped_id = parse_staging_file_name(staging_file.name)
        cache_file = self.layout.cache_dir_for_locale(locale_key) / escaped_id
        try:
            os.replace(staging_file, cache_file)
        except OSError as e:
            raise RenameFailure(f"Failed to rename from {staging_file} to {cache_file}: {e}") from e
        return cache_file

    def promote_all_staged(self) -> List[Path]:
        """
        Move every staging file to its cache location.

        Files without the separator are left in place. Files that split into
        the wrong number of parts are deleted. Files that fail to move stay in
        staging for the next run.

        Returns:
            Cache paths of the promoted files
        """
        promoted = []
        for staging_file in self.layout.get_staging_file_list():
            try:
                promoted.append(self.promote(staging_file))
            except MalformedStagingName as e:
                if e.missing_separator:
                    # Should never happen; kept so a transient bug cannot lose data
                    logging.error(str(e))
                    continue
                logging.error(f"{e}. Deleting.")
                try:
                    staging_file.unlink()
                except OSError as unlink_error:
                    logging.error(f"Could not delete malformed staging file {staging_file}: {unlink_error}")
            except RenameFailure as e:
                logging.error(str(e))

        if promoted:
            logging.info(f"Moved {len(promoted)} staged dictionaries into the cache")
        return promoted
