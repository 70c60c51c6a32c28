# ==============================================
# Tests for flat-file storage and MistakeStore
# ==============================================

import logging
from dataclasses import replace
from datetime import date

import pytest

from mistake_analyzer.analysis.category import Category
from mistake_analyzer.errors import FileOperation, FileOperationError
from mistake_analyzer.records.mistake import Severity
from mistake_analyzer.storage.flat_file import (
    FILE_HEADER,
    FlatFileStore,
    decode_line,
    encode_line,
    split_line,
)
from mistake_analyzer.storage.mistake_store import MistakeStore


class TestLineCodec:
    """Pipe-delimited line format."""

    def test_encode(self, sample_mistake):
        assert encode_line(sample_mistake) == (
            "MST-0000ABCD|Forgot to run the tests before the release|"
            "POOR_PLANNING|HIGH|2024-01-15|Run the suite in CI"
        )

    def test_pipes_and_backslashes_escaped(self, sample_mistake):
        mistake = replace(sample_mistake, description=r"a|b\c", resolution="x|y")
        line = encode_line(mistake)
        assert r"|a\|b\\c|" in line
        decoded = decode_line(line)
        assert decoded.description == r"a|b\c"
        assert decoded.resolution == "x|y"

    def test_newlines_flattened(self, sample_mistake):
        mistake = replace(sample_mistake, description="line one\nline two")
        assert "\n" not in encode_line(mistake)
        assert decode_line(encode_line(mistake)).description == "line one line two"

    def test_five_fields_means_empty_resolution(self):
        mistake = decode_line("MST-1|Started too late|PROCRASTINATION|LOW|2024-02-01")
        assert mistake.resolution == ""
        assert mistake.category == Category.PROCRASTINATION
        assert mistake.severity == Severity.LOW
        assert mistake.date == date(2024, 2, 1)

    def test_legacy_escaping(self):
        """Older files only escaped the pipe; other backslashes stay literal."""
        mistake = decode_line(r"MST-1|a \| b in C:\temp|TECHNICAL|HIGH|2024-01-15|")
        assert mistake.description == r"a | b in C:\temp"

    def test_split_line(self):
        assert split_line(r"a|b\|c|d") == ["a", "b|c", "d"]
        assert split_line("a||") == ["a", "", ""]
        assert split_line("trailing\\") == ["trailing\\"]

    @pytest.mark.parametrize("line", [
        "",
        "MST-1|only|three",
        "MST-1|desc|NOT_A_CATEGORY|HIGH|2024-01-15|",
        "MST-1|desc|TECHNICAL|EXTREME|2024-01-15|",
        "MST-1|desc|TECHNICAL|HIGH|15-01-2024|",
    ])
    def test_invalid_lines(self, line):
        with pytest.raises(ValueError):
            decode_line(line)


class TestFlatFileStore:
    """Reading and writing the data file."""

    def test_missing_file_loads_empty(self, data_file):
        store = FlatFileStore(data_file)
        assert store.exists() is False
        assert store.load_all() == []

    def test_save_and_load(self, data_file, sample_mistake):
        store = FlatFileStore(data_file)
        second = replace(sample_mistake, id="MST-0000FFFF", category=Category.TECHNICAL)
        store.save_all([sample_mistake, second])

        lines = data_file.read_text(encoding="utf-8").splitlines()
        assert lines[0] == FILE_HEADER
        assert len(lines) == 3
        assert store.load_all() == [sample_mistake, second]

    def test_save_creates_parent_dirs(self, tmp_path, sample_mistake):
        store = FlatFileStore(tmp_path / "nested" / "dir" / "data.txt")
        store.save_all([sample_mistake])
        assert store.load_all() == [sample_mistake]

    def test_save_leaves_no_temp_files(self, data_file, sample_mistake):
        FlatFileStore(data_file).save_all([sample_mistake])
        assert [p.name for p in data_file.parent.iterdir()] == [data_file.name]

    def test_skips_comments_blank_and_corrupted(self, data_file, sample_mistake, caplog):
        data_file.write_text(
            FILE_HEADER + "\n"
            + "\n"
            + "# a comment\n"
            + "garbage line\n"
            + encode_line(sample_mistake) + "\n",
            encoding="utf-8",
        )
        with caplog.at_level(logging.WARNING, logger="mistake_analyzer.storage.flat_file"):
            loaded = FlatFileStore(data_file).load_all()

        assert loaded == [sample_mistake]
        assert "line 4" in caplog.text

    def test_append_writes_header_once(self, data_file, sample_mistake):
        store = FlatFileStore(data_file)
        store.append(sample_mistake)
        store.append(replace(sample_mistake, id="MST-00000002"))

        lines = data_file.read_text(encoding="utf-8").splitlines()
        assert lines.count(FILE_HEADER) == 1
        assert len(store.load_all()) == 2

    def test_backup(self, data_file, sample_mistake):
        store = FlatFileStore(data_file)
        store.save_all([sample_mistake])
        backup = store.create_backup()
        assert backup.name == "mistakes_data.txt.backup"
        assert backup.read_text(encoding="utf-8") == data_file.read_text(encoding="utf-8")

    def test_backup_without_file_fails(self, data_file):
        with pytest.raises(FileOperationError) as exc_info:
            FlatFileStore(data_file).create_backup()
        assert exc_info.value.operation == FileOperation.WRITE

    def test_delete(self, data_file, sample_mistake):
        store = FlatFileStore(data_file)
        assert store.delete() is False
        store.save_all([sample_mistake])
        assert store.delete() is True
        assert not data_file.exists()

    def test_unreadable_path_raises_read_error(self, tmp_path):
        directory = tmp_path / "actually_a_dir"
        directory.mkdir()
        with pytest.raises(FileOperationError) as exc_info:
            FlatFileStore(directory).load_all()
        assert exc_info.value.operation == FileOperation.READ

    def test_non_utf8_line_skipped(self, data_file, sample_mistake, caplog):
        data_file.write_bytes(
            FILE_HEADER.encode("utf-8") + b"\n"
            + b"MST-1|caf\xe9 late|PROCRASTINATION|LOW|2024-01-01|\n"
            + encode_line(sample_mistake).encode("utf-8") + b"\n"
        )
        with caplog.at_level(logging.WARNING, logger="mistake_analyzer.storage.flat_file"):
            loaded = FlatFileStore(data_file).load_all()

        assert loaded == [sample_mistake]
        assert "line 2" in caplog.text

    def test_crlf_line_endings(self, data_file, sample_mistake):
        data_file.write_bytes(
            (FILE_HEADER + "\r\n" + encode_line(sample_mistake) + "\r\n").encode("utf-8")
        )
        assert FlatFileStore(data_file).load_all() == [sample_mistake]

    def test_strict_load_raises_parse_error(self, data_file, sample_mistake):
        data_file.write_bytes(
            encode_line(sample_mistake).encode("utf-8") + b"\n"
            + b"MST-1|caf\xe9 late|PROCRASTINATION|LOW|2024-01-01|\n"
        )
        with pytest.raises(FileOperationError) as exc_info:
            FlatFileStore(data_file).load_all(strict=True)
        assert exc_info.value.operation == FileOperation.PARSE
        assert "line 2" in str(exc_info.value)


class TestMistakeStore:
    """In-memory list written through to disk."""

    @pytest.fixture
    def store(self, data_file):
        return MistakeStore(FlatFileStore(data_file))

    def test_add_persists(self, store, data_file, sample_mistake):
        store.add(sample_mistake)
        assert store.count == 1
        assert MistakeStore(FlatFileStore(data_file)).list_all() == [sample_mistake]

    def test_duplicate_id_rejected(self, store, sample_mistake):
        store.add(sample_mistake)
        with pytest.raises(ValueError):
            store.add(sample_mistake)
        assert store.count == 1

    def test_find_returns_copy(self, store, sample_mistake):
        store.add(sample_mistake)
        found = store.find_by_id(sample_mistake.id)
        found.description = "changed"
        assert store.find_by_id(sample_mistake.id).description == sample_mistake.description
        assert store.find_by_id("MST-NOPE") is None
        assert store.find_by_id(None) is None

    def test_replace(self, store, sample_mistake):
        store.add(sample_mistake)
        edited = replace(sample_mistake, severity=Severity.LOW)
        store.replace(edited)
        assert store.find_by_id(sample_mistake.id).severity == Severity.LOW

    def test_replace_unknown(self, store, sample_mistake):
        with pytest.raises(KeyError):
            store.replace(sample_mistake)

    def test_delete(self, store, sample_mistake):
        store.add(sample_mistake)
        assert store.delete(sample_mistake.id) == sample_mistake
        assert store.delete(sample_mistake.id) is None
        assert store.count == 0

    def test_categories_projection(self, store, sample_mistake):
        store.add(sample_mistake)
        store.add(replace(sample_mistake, id="MST-2", category=Category.TECHNICAL))
        assert store.categories() == [Category.POOR_PLANNING, Category.TECHNICAL]

    def test_failed_save_rolls_back(self, store, sample_mistake, monkeypatch):
        def broken_save(mistakes):
            raise FileOperationError("disk full", FileOperation.WRITE)

        monkeypatch.setattr(store._flat_file, "save_all", broken_save)
        with pytest.raises(FileOperationError):
            store.add(sample_mistake)
        assert store.count == 0

    def test_backup_on_save(self, data_file, sample_mistake):
        store = MistakeStore(FlatFileStore(data_file), backup_on_save=True)
        store.add(sample_mistake)
        store.add(replace(sample_mistake, id="MST-2"))
        backup = data_file.with_name(data_file.name + ".backup")
        assert backup.exists()
        assert len(FlatFileStore(backup).load_all()) == 1

    def test_deferred_load(self, data_file, sample_mistake):
        FlatFileStore(data_file).save_all([sample_mistake])
        store = MistakeStore(FlatFileStore(data_file), load=False)
        assert store.count == 0
        store.reload()
        assert store.count == 1

    def test_list_all_returns_copies(self, store, sample_mistake):
        store.add(sample_mistake)
        listed = store.list_all()
        listed[0].description = "changed without saving"
        assert store.list_all()[0].description == sample_mistake.description
