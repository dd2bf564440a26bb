"""
Backup and restore of the whole CampCheck data set as one JSON document.
"""

from .schemas import BACKUP_VERSION, BackupDocument
from .serializer import (
    IdTranslation,
    ImportSummary,
    backup_filename,
    clear_all_data,
    dump_backup,
    export_backup,
    export_backup_file,
    import_backup,
    import_backup_file,
    parse_backup,
)

__all__ = [
    "BACKUP_VERSION",
    "BackupDocument",
    "IdTranslation",
    "ImportSummary",
    "backup_filename",
    "clear_all_data",
    "dump_backup",
    "export_backup",
    "export_backup_file",
    "import_backup",
    "import_backup_file",
    "parse_backup",
]
