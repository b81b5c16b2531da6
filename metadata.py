import sqlite3
import logging
from pathlib import Path
from typing import List, Dict, Any

from dictionary_pack.dictionary_info import DictionaryRecord


def init_metadata_db(db_path: Path):
    """Create the dictionary metadata table"""
    try:
        conn = sqlite3.connect(db_path)
        cursor = conn.cursor()

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS dictionaries (
                id TEXT PRIMARY KEY NOT NULL,
                locale TEXT NOT NULL,
                description TEXT,
                filename TEXT,
                date INTEGER DEFAULT 0,
                filesize INTEGER DEFAULT 0,
                version INTEGER DEFAULT -1,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        conn.commit()
        conn.close()

        logging.info(f"Metadata database ready at {db_path}")
    except Exception as e:
        logging.error(f"Initializing metadata database failed: {str(e)}")
        raise


def upsert_dictionary_rows(db_path: Path, records: List[DictionaryRecord]) -> int:
    """Write one row per record, replacing rows with the same id"""
    try:
        conn = sqlite3.connect(db_path)
        cursor = conn.cursor()

        for record in records:
            row = record.to_row()
            cursor.execute('''
                INSERT OR REPLACE INTO dictionaries
                    (id, locale, description, filename, date, filesize, version, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
            ''', (row['id'], row['locale'], row['description'], row['filename'],
                  row['date'], row['filesize'], row['version']))

        conn.commit()
        conn.close()

        logging.info(f"Stored {len(records)} dictionary rows")
        return len(records)
    except Exception as e:
        logging.error(f"Storing dictionary rows failed: {str(e)}")
        raise


def get_dictionary_rows(db_path: Path) -> List[Dict[str, Any]]:
    """All stored rows, ordered by locale"""
    try:
        conn = sqlite3.connect(db_path)
        cursor = conn.cursor()

        cursor.execute('''
            SELECT id, locale, description, filename, date, filesize, version
            FROM dictionaries
            ORDER BY locale
        ''')

        results = cursor.fetchall()
        conn.close()

        columns = ['id', 'locale', 'description', 'filename', 'date', 'filesize', 'version']
        return [dict(zip(columns, row)) for row in results]
    except Exception as e:
        logging.error(f"Reading dictionary rows failed: {str(e)}")
        return []


def delete_dictionary_row(db_path: Path, word_list_id: str):
    """Remove the row of a word list id"""
    try:
        conn = sqlite3.connect(db_path)
        cursor = conn.cursor()

        cursor.execute('DELETE FROM dictionaries WHERE id = ?', (word_list_id,))

        conn.commit()
        conn.close()

        logging.info(f"Deleted dictionary row {word_list_id}")
    except Exception as e:
        logging.error(f"Deleting dictionary row {word_list_id} failed: {str(e)}")
        raise
