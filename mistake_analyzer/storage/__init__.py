# ==============================================
# TOPIC 3: STORAGE (flat text file)
# ==============================================
#
# This package keeps mistakes across restarts in a single
# pipe-delimited text file and holds the live record list.
#
# Modules:
# --------
# - flat_file.py      → Line codec + file read/write/backup
# - mistake_store.py  → In-memory record list, written through on change
#
# ==============================================

from .flat_file import FILE_HEADER, FlatFileStore, decode_line, encode_line
from .mistake_store import MistakeStore

__all__ = [
    "FILE_HEADER",
    "FlatFileStore",
    "decode_line",
    "encode_line",
    "MistakeStore",
]
