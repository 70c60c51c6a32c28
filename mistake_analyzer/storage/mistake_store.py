# ==============================================
# MistakeStore
# ==============================================
#
# PURPOSE:
#   Hold the current list of mistakes in memory and write it
#   through to the flat data file on every change.
#
# CLASS: MistakeStore
# -------------------
#   Stateful: owns the mutable record list. Not thread-safe; the
#   application is single-user, single-process.
#
#   Constructor:
#   ------------
#   - __init__(flat_file: FlatFileStore, backup_on_save: bool = False, load: bool = True)
#       Loads existing records immediately unless load=False.
#
#   Methods:
#   --------
#   - add(mistake) -> Mistake
#   - replace(mistake) -> Mistake        → swap in an edited record by id
#   - delete(mistake_id) -> Mistake | None
#   - find_by_id(mistake_id) -> Mistake | None
#   - list_all() -> list[Mistake]         → copies of every record
#   - categories() -> list[Category]      → projection for the analyzer
#   - count -> int
#   - save() -> None
#   - reload() -> None
#
# ==============================================

import copy
import logging
from typing import List, Optional

from mistake_analyzer.analysis.category import Category
from mistake_analyzer.records.mistake import Mistake
from .flat_file import FlatFileStore

logger = logging.getLogger(__name__)


class MistakeStore:
    """
    In-memory record list backed by a FlatFileStore.
    """

    def __init__(
        self,
        flat_file: FlatFileStore,
        backup_on_save: bool = False,
        load: bool = True
    ):
        """
        Initialize the store and load any saved records.

        Args:
            flat_file: Where records are persisted
            backup_on_save: Copy the previous file to "<path>.backup" before each save
            load: Read the data file now. Pass False to start empty and call reload() later.
        """
        self._flat_file = flat_file
        self._backup_on_save = backup_on_save
        self._mistakes: List[Mistake] = []
        if load:
            self.reload()

    @property
    def path(self):
        return self._flat_file.path

    @property
    def count(self) -> int:
        return len(self._mistakes)

    def reload(self) -> None:
        """Replace the in-memory list with what is on disk."""
        self._mistakes = self._flat_file.load_all()

    def save(self) -> None:
        """Write the current list to disk."""
        if self._backup_on_save and self._flat_file.exists():
            self._flat_file.create_backup()
        self._flat_file.save_all(self._mistakes)

    def add(self, mistake: Mistake) -> Mistake:
        """
        Add a new record and persist.

        Raises:
            ValueError: if a record with the same id already exists
        """
        if self.find_by_id(mistake.id) is not None:
            raise ValueError(f"Duplicate mistake id: {mistake.id}")

        self._mistakes.append(mistake)
        try:
            self.save()
        except Exception:
            self._mistakes.remove(mistake)
            raise
        return mistake

    def replace(self, mistake: Mistake) -> Mistake:
        """
        Replace the stored record that has the same id, and persist.

        Raises:
            KeyError: if no record has that id
        """
        index = self._index_of(mistake.id)
        if index is None:
            raise KeyError(mistake.id)

        previous = self._mistakes[index]
        self._mistakes[index] = mistake
        try:
            self.save()
        except Exception:
            self._mistakes[index] = previous
            raise
        return mistake

    def delete(self, mistake_id: str) -> Optional[Mistake]:
        """
        Remove a record by id and persist.

        Returns:
            The removed record, or None if the id was unknown
        """
        index = self._index_of(mistake_id)
        if index is None:
            return None

        removed = self._mistakes.pop(index)
        try:
            self.save()
        except Exception:
            self._mistakes.insert(index, removed)
            raise
        return removed

    def find_by_id(self, mistake_id: Optional[str]) -> Optional[Mistake]:
        """
        Look up a record by id.

        Returns:
            A copy of the record, or None. Edit it and pass it to replace().
        """
        index = self._index_of(mistake_id)
        if index is None:
            return None
        return copy.copy(self._mistakes[index])

    def list_all(self) -> List[Mistake]:
        """Return copies of every record. Edit one and pass it to replace()."""
        return [copy.copy(mistake) for mistake in self._mistakes]

    def categories(self) -> List[Category]:
        """Project every record onto its category."""
        return [mistake.category for mistake in self._mistakes]

    def _index_of(self, mistake_id: Optional[str]) -> Optional[int]:
        if mistake_id is None:
            return None
        for index, mistake in enumerate(self._mistakes):
            if mistake.id == mistake_id:
                return index
        return None
