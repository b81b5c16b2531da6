"""
Dictionary Info Module
======================

Metadata records for dictionary files and their flat row projection.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import polars as pl

from .locale_utils import Locale

LOCALE_COLUMN = 'locale'
WORDLISTID_COLUMN = 'id'
LOCAL_FILENAME_COLUMN = 'filename'
DESCRIPTION_COLUMN = 'description'
DATE_COLUMN = 'date'
FILESIZE_COLUMN = 'filesize'
VERSION_COLUMN = 'version'

ROW_SCHEMA = {
    WORDLISTID_COLUMN: pl.Utf8,
    LOCALE_COLUMN: pl.Utf8,
    DESCRIPTION_COLUMN: pl.Utf8,
    LOCAL_FILENAME_COLUMN: pl.Utf8,
    DATE_COLUMN: pl.Int64,
    FILESIZE_COLUMN: pl.Int64,
    VERSION_COLUMN: pl.Int64,
}


@dataclass(frozen=True)
class DictionaryRecord:
    """
    What is known about one dictionary: where it is, how big, how recent.

    version is -1 for a placeholder or a file whose header could not be read.
    """

    id: str
    locale: Locale
    description: str
    filename: Optional[str]
    filesize: int
    modified_time_millis: int
    version: int

    def to_row(self) -> Dict[str, Any]:
        """Flatten to the fixed columns of the metadata store."""
        return {
            WORDLISTID_COLUMN: self.id,
            LOCALE_COLUMN: str(self.locale),
            DESCRIPTION_COLUMN: self.description,
            LOCAL_FILENAME_COLUMN: self.filename if self.filename is not None else '',
            DATE_COLUMN: self.modified_time_millis // 1000,
            FILESIZE_COLUMN: self.filesize,
            VERSION_COLUMN: self.version,
        }

    def __str__(self) -> str:
        return f"DictionaryInfo : Id = '{self.id}' : Locale={self.locale} : Version={self.version}"


class RecordStatus(Enum):
    FOUND = "found"
    ABSENT = "absent"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class RecordResult:
    """Outcome of building a record for one candidate file."""

    status: RecordStatus
    record: Optional[DictionaryRecord] = None
    reason: str = ''

    @classmethod
    def found(cls, record: DictionaryRecord) -> 'RecordResult':
        return cls(RecordStatus.FOUND, record)

    @classmethod
    def absent(cls, reason: str = '') -> 'RecordResult':
        return cls(RecordStatus.ABSENT, None, reason)

    @classmethod
    def malformed(cls, reason: str = '') -> 'RecordResult':
        return cls(RecordStatus.MALFORMED, None, reason)

    @property
    def is_found(self) -> bool:
        return self.status is RecordStatus.FOUND


def records_to_frame(records: List[DictionaryRecord]) -> pl.DataFrame:
    return pl.DataFrame([record.to_row() for record in records], schema=ROW_SCHEMA)


def export_listing(records: List[DictionaryRecord], output_path: Union[str, Path]) -> Path:
    """
    Write the listing to a parquet file.

    The file is written next to its destination first and then moved into
    place, so readers never see a partial file.

    Args:
        records: Reconciled records
        output_path: Destination parquet file

    Returns:
        The destination path
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = records_to_frame(records)

    with tempfile.NamedTemporaryFile(delete=False, suffix='.parquet', dir=output_path.parent) as tmp_file:
        tmp_name = tmp_file.name
    try:
        df.write_parquet(tmp_name)
        os.replace(tmp_name, output_path)
    except Exception as e:
        if Path(tmp_name).exists():
            Path(tmp_name).unlink()
        logging.error(f"Writing dictionary listing to {output_path} failed: {e}")
        raise

    logging.info(f"Wrote {len(df)} dictionary records to {output_path}")
    return output_path
