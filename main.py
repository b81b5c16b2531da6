import sys
import logging
import sqlite3
from pathlib import Path
from logging.handlers import TimedRotatingFileHandler

from config import (
    LOG_DIR_NAME,
    LOG_FILE_NAME,
    LOG_BACKUP_DAYS,
    METADATA_DB_NAME,
    get_storage_root,
    get_asset_dir,
    get_decoder_dict_suffix,
    get_enabled_locales,
)
from metadata import init_metadata_db, upsert_dictionary_rows
from dictionary_pack import (
    AssetBundle,
    DirectoryLayout,
    DirectoryCreateFailure,
    MetadataReconciler,
    StagingPromoter,
    export_listing,
)

CONSOLE_HANDLER_NAME = 'dictpack-console'
FILE_HANDLER_NAME = 'dictpack-file'


def setup_logging(storage_root: Path, log_file_name: str = LOG_FILE_NAME):
    """
    Set up console and daily rotating file logging.

    Calling it again replaces the handlers it installed before instead of
    adding more. Without a writable log directory only the console is used.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.INFO)
    for handler in list(logger.handlers):
        if handler.get_name() in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_path = storage_root / LOG_DIR_NAME / log_file_name
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            log_path,
            when='midnight',
            interval=1,
            backupCount=LOG_BACKUP_DAYS
        )
    except OSError as e:
        logging.warning(f"File logging disabled, cannot write {log_path}: {e}")
        return

    file_handler.set_name(FILE_HANDLER_NAME)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info(f"Logging to {log_path}")


def initialize_system(storage_root: Path) -> DirectoryLayout:
    """
    Create the storage areas and the metadata database.

    Failures are logged and the layout is returned anyway: scans of missing
    directories come back empty.
    """
    logging.info(f"Initializing dictionary storage at {storage_root}...")

    layout = DirectoryLayout(storage_root)
    try:
        layout.ensure_directories()
        init_metadata_db(storage_root / METADATA_DB_NAME)
    except DirectoryCreateFailure as e:
        logging.error(f"Dictionary storage unavailable: {e}")
        return layout
    except sqlite3.Error:
        # Already logged by init_metadata_db
        return layout

    logging.info("Initialization complete")
    return layout


def build_reconciler(layout: DirectoryLayout) -> MetadataReconciler:
    asset_bundle = AssetBundle(get_asset_dir(layout.storage_root), dict_suffix=get_decoder_dict_suffix())
    return MetadataReconciler(layout, asset_bundle=asset_bundle, enabled_locales=get_enabled_locales)


def run_promote(layout: DirectoryLayout):
    """Move staged downloads into the cache"""
    promoted = StagingPromoter(layout).promote_all_staged()
    logging.info(f"Promotion finished, {len(promoted)} files moved")


def run_list(layout: DirectoryLayout):
    """Print the reconciled dictionary listing"""
    StagingPromoter(layout).promote_all_staged()
    for record in build_reconciler(layout).reconcile():
        print(f"{str(record.locale):<12} {record.id:<24} v{record.version:<6} {record.filesize:>10}  {record.description}")


def run_export(layout: DirectoryLayout, output_path: str):
    """Write the reconciled listing to a parquet file"""
    StagingPromoter(layout).promote_all_staged()
    records = build_reconciler(layout).reconcile()
    export_listing(records, output_path)


def run_sync(layout: DirectoryLayout):
    """Store the reconciled listing in the metadata database"""
    StagingPromoter(layout).promote_all_staged()
    records = build_reconciler(layout).reconcile()
    try:
        upsert_dictionary_rows(layout.storage_root / METADATA_DB_NAME, records)
    except sqlite3.Error:
        # Already logged by upsert_dictionary_rows
        return


def main():
    storage_root = get_storage_root()
    setup_logging(storage_root)
    layout = initialize_system(storage_root)

    if len(sys.argv) > 1:
        mode = sys.argv[1]
        if mode == 'promote':
            run_promote(layout)
        elif mode == 'list':
            run_list(layout)
        elif mode == 'export' and len(sys.argv) > 2:
            run_export(layout, sys.argv[2])
        elif mode == 'sync':
            run_sync(layout)
        else:
            print(f"Unknown mode: {mode}")
            print("Available modes: promote, list, export <path>, sync")
            print("Example: python main.py list")
            print("         python main.py export listing.parquet")
    else:
        # Default: print the listing
        run_list(layout)


if __name__ == "__main__":
    main()
