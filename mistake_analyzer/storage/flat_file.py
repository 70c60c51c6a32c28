import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Union

from mistake_analyzer.analysis.category import parse_category
from mistake_analyzer.errors import FileOperation, FileOperationError
from mistake_analyzer.records.mistake import Mistake, Severity, format_date, parse_date

logger = logging.getLogger(__name__)


# ==============================================
# Line codec
# ==============================================
#
# PURPOSE:
#   One mistake ⇄ one pipe-delimited line:
#
#     id|description|CATEGORY|SEVERITY|YYYY-MM-DD|resolution
#
#   Free-text fields escape "\" as "\\" and "|" as "\|". Lines are
#   split on unescaped pipes only. A backslash before any other
#   character is kept as-is, so files written by older versions
#   (which escaped only the pipe) still load.
#
DELIMITER = "|"
ESCAPE = "\\"
FILE_HEADER = "# Mistake Pattern Analyzer Data File - DO NOT EDIT MANUALLY"
MIN_FIELDS = 5


def escape_field(text: str) -> str:
    """Escape a free-text field for storage on a single line."""
    flattened = " ".join(text.splitlines()) if text else ""
    return flattened.replace(ESCAPE, ESCAPE * 2).replace(DELIMITER, ESCAPE + DELIMITER)


def split_line(line: str) -> List[str]:
    """
    Split a stored line on unescaped delimiters and unescape each field.

    Examples:
        "a|b\\|c|d" → ["a", "b|c", "d"]
        "a||"       → ["a", "", ""]
    """
    fields: List[str] = []
    current: List[str] = []
    chars = iter(line)

    for char in chars:
        if char == ESCAPE:
            following = next(chars, None)
            if following is None:
                current.append(ESCAPE)
            elif following in (ESCAPE, DELIMITER):
                current.append(following)
            else:
                current.append(ESCAPE + following)
        elif char == DELIMITER:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

    fields.append("".join(current))
    return fields


def encode_line(mistake: Mistake) -> str:
    """Serialize a mistake to its stored line (no trailing newline)."""
    return DELIMITER.join([
        mistake.id,
        escape_field(mistake.description),
        mistake.category.name,
        mistake.severity.name,
        format_date(mistake.date),
        escape_field(mistake.resolution or ""),
    ])


def decode_line(line: str) -> Mistake:
    """
    Parse a stored line back into a Mistake.

    Raises:
        ValueError: if the line is empty, has fewer than 5 fields, or
                    holds an unknown category/severity or a bad date
    """
    if line is None or not line.strip():
        raise ValueError("Empty line cannot be parsed")

    parts = split_line(line.rstrip("\r\n"))
    if len(parts) < MIN_FIELDS:
        raise ValueError(f"Invalid data format: expected at least {MIN_FIELDS} fields, got {len(parts)}")

    try:
        severity = Severity[parts[3]]
    except KeyError:
        raise ValueError(f"Unknown severity: {parts[3]!r}") from None

    return Mistake(
        id=parts[0],
        description=parts[1],
        category=parse_category(parts[2]),
        severity=severity,
        date=parse_date(parts[4]),
        resolution=parts[5] if len(parts) > 5 else "",
    )


# ==============================================
# FlatFileStore
# ==============================================
#
# PURPOSE:
#   Persist the full list of mistakes to a single text file so
#   the record set survives restarts.
#
# FILE STRUCTURE:
# ---------------
#   mistakes_data.txt
#   ├── line 1     → FILE_HEADER (comment, ignored on load)
#   └── line 2..n  → one encoded mistake per line
#
# CLASS: FlatFileStore
# --------------------
#   Stateful: holds the path of the data file only; records are
#   never cached here.
#
#   Methods:
#   --------
#   - save_all(mistakes) -> None      → rewrite the whole file
#   - load_all(strict=False) -> list[Mistake]
#                                     → [] if the file is missing; strict
#                                       raises PARSE on a corrupted line
#   - append(mistake) -> None         → add one line (header if new)
#   - exists() -> bool
#   - create_backup() -> Path         → copy to "<path>.backup"
#   - delete() -> bool
#
#   Errors:
#   -------
#   Any OSError is re-raised as FileOperationError carrying the
#   operation (READ / WRITE / DELETE). Corrupted lines, including
#   bytes that are not UTF-8, are skipped with a warning instead of
#   failing the whole load; load_all(strict=True) raises PARSE.
#
class FlatFileStore:
    """
    Reads and writes the pipe-delimited mistakes data file.
    """

    def __init__(self, path: Union[str, Path] = "mistakes_data.txt"):
        """
        Initialize the store.

        Args:
            path: Location of the data file. Parent directories are created
                  on first write.
        """
        self.path = Path(path)

    def save_all(self, mistakes: List[Mistake]) -> None:
        """
        Rewrite the data file with the given mistakes.

        The file is written next to the target first and then moved into
        place, so a failed write never leaves a truncated data file.

        Args:
            mistakes: Every record to keep, in display order
        """
        lines = [FILE_HEADER] + [encode_line(mistake) for mistake in mistakes]
        payload = "\n".join(lines) + "\n"

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise FileOperationError(
                f"Failed to save data to file {self.path}: {exc}", FileOperation.WRITE
            ) from exc

        logger.debug("Saved %d mistakes to %s", len(mistakes), self.path)

    def load_all(self, strict: bool = False) -> List[Mistake]:
        """
        Load every mistake from the data file.

        Lines are decoded one at a time, so a line with bytes that are not
        valid UTF-8 is handled like any other corrupted line.

        Args:
            strict: Raise FileOperationError (PARSE) on the first corrupted
                    line instead of skipping it with a warning

        Returns:
            List of Mistake objects in file order.
            Empty list if the file doesn't exist.
        """
        if not self.path.exists():
            logger.debug("No data file found at %s", self.path)
            return []

        mistakes: List[Mistake] = []
        try:
            with open(self.path, "rb") as handle:
                for line_number, raw_line in enumerate(handle, start=1):
                    try:
                        line = raw_line.decode("utf-8")
                        if line.startswith("#") or not line.strip():
                            continue
                        mistakes.append(decode_line(line))
                    except ValueError as exc:
                        if strict:
                            raise FileOperationError(
                                f"Corrupted data at line {line_number} of {self.path}: {exc}",
                                FileOperation.PARSE
                            ) from exc
                        logger.warning(
                            "Skipping corrupted data at line %d of %s: %s",
                            line_number, self.path, exc
                        )
        except FileNotFoundError:
            return []
        except FileOperationError:
            raise
        except OSError as exc:
            raise FileOperationError(
                f"Failed to read data from file {self.path}: {exc}", FileOperation.READ
            ) from exc

        logger.debug("Loaded %d mistakes from %s", len(mistakes), self.path)
        return mistakes

    def append(self, mistake: Mistake) -> None:
        """
        Append a single mistake, writing the header first if the file is new.

        Args:
            mistake: Record to add
        """
        try:
            needs_header = not self.path.exists() or self.path.stat().st_size == 0
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8", newline="\n") as handle:
                if needs_header:
                    handle.write(FILE_HEADER + "\n")
                handle.write(encode_line(mistake) + "\n")
        except OSError as exc:
            raise FileOperationError(
                f"Failed to append data to file {self.path}: {exc}", FileOperation.WRITE
            ) from exc

    def exists(self) -> bool:
        """
        Check whether the data file exists.

        Returns:
            True if there is saved data, False on a fresh start
        """
        return self.path.exists()

    def create_backup(self) -> Path:
        """
        Copy the data file to "<path>.backup", replacing any older backup.

        Returns:
            Path of the backup file
        """
        backup_path = self.path.with_name(self.path.name + ".backup")
        try:
            shutil.copyfile(self.path, backup_path)
        except OSError as exc:
            raise FileOperationError(
                f"Failed to create backup: {exc}", FileOperation.WRITE
            ) from exc

        logger.info("Backed up %s to %s", self.path, backup_path)
        return backup_path

    def delete(self) -> bool:
        """
        Delete the data file (for testing or reset).

        Returns:
            True if a file was removed, False if there was none
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise FileOperationError(
                f"Failed to delete data file {self.path}: {exc}", FileOperation.DELETE
            ) from exc

        logger.info("Deleted %s", self.path)
        return True
