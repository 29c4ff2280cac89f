"""Tests for output formatters and the atomic file writer."""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path

import pytest

from converter.exceptions import ExportWriteFailed
from converter.output.formatters import (
    ConsoleFormatter,
    JSONFormatter,
    format_console,
    format_json,
    save_json,
    write_text_atomic,
)
from converter.output.schema import create_planner_document


@pytest.fixture
def sample_document(sample_database):
    return create_planner_document(sample_database)


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_compact(self, sample_document):
        json_str = JSONFormatter().format(sample_document)
        assert "\n" not in json_str
        assert json.loads(json_str)["generated"] == "2025-01-06T12:30:00"

    def test_indented(self, sample_document):
        json_str = JSONFormatter(indent=4).format(sample_document)
        assert '\n    "generated"' in json_str

    def test_format_json_convenience(self, sample_document):
        assert format_json(sample_document) == JSONFormatter().format(sample_document)


class TestConsoleFormatter:
    """Tests for ConsoleFormatter."""

    def test_department_rows(self, sample_document):
        text = ConsoleFormatter().format(sample_document)
        assert "Computer Science" in text
        assert "Mathematical Sciences" in text

    def test_terms_listed(self, sample_document):
        text = format_console(sample_document)
        assert "A Term" in text
        assert "B Term" in text
        assert "D Term" in text
        assert "C Term" not in text

    def test_term_table_rows(self, sample_document):
        table = ConsoleFormatter().term_table(sample_document)
        assert table.row_count == 3


class TestWriteTextAtomic:
    """Tests for write_text_atomic."""

    def test_writes_utf8(self, tmp_path):
        target = tmp_path / "out.json"
        written = write_text_atomic(target, '{"name":"Études"}')

        assert target.read_text(encoding="utf-8") == '{"name":"Études"}'
        assert written == len('{"name":"Études"}'.encode("utf-8"))

    def test_replaces_existing_file(self, tmp_path):
        target = tmp_path / "out.json"
        target.write_text("old", encoding="utf-8")

        write_text_atomic(target, "new")
        assert target.read_text(encoding="utf-8") == "new"

    def test_no_temp_files_left(self, tmp_path):
        write_text_atomic(tmp_path / "out.json", "{}")
        assert sorted(os.listdir(tmp_path)) == ["out.json"]

    def test_missing_directory_raises(self, tmp_path):
        target = tmp_path / "missing" / "out.json"
        with pytest.raises(ExportWriteFailed) as exc_info:
            write_text_atomic(target, "{}")

        assert exc_info.value.path == target
        assert isinstance(exc_info.value.__cause__, OSError)
        assert not target.exists()

    def test_create_dirs(self, tmp_path):
        target = tmp_path / "public" / "data" / "out.json"
        write_text_atomic(target, "{}", create_dirs=True)
        assert target.read_text(encoding="utf-8") == "{}"

    def test_failed_replace_keeps_old_content(self, tmp_path, monkeypatch):
        target = tmp_path / "out.json"
        target.write_text("old", encoding="utf-8")

        def broken_replace(src, dst):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(os, "replace", broken_replace)

        with pytest.raises(ExportWriteFailed, match="No space left on device"):
            write_text_atomic(target, "new")

        assert target.read_text(encoding="utf-8") == "old"
        assert sorted(os.listdir(tmp_path)) == ["out.json"]

    def test_destination_is_directory(self, tmp_path):
        target = tmp_path / "out.json"
        target.mkdir()
        with pytest.raises(ExportWriteFailed):
            write_text_atomic(target, "{}")
        assert [p.name for p in tmp_path.iterdir()] == ["out.json"]

    def test_new_file_honours_umask(self, tmp_path):
        target = tmp_path / "out.json"
        previous = os.umask(0o022)
        try:
            write_text_atomic(target, "{}")
        finally:
            os.umask(previous)

        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    def test_keeps_existing_mode(self, tmp_path):
        target = tmp_path / "out.json"
        target.write_text("old", encoding="utf-8")
        target.chmod(0o640)

        write_text_atomic(target, "new")
        assert stat.S_IMODE(target.stat().st_mode) == 0o640


class TestSaveJson:
    """Tests for save_json."""

    def test_save_and_reload(self, sample_document, tmp_path):
        target = tmp_path / "course-data.json"
        written = save_json(sample_document, target)

        assert written == target.stat().st_size
        data = json.loads(target.read_text(encoding="utf-8"))
        assert [d["abbreviation"] for d in data["departments"]] == ["CS", "MA"]

    def test_save_indented(self, sample_document, tmp_path):
        target = tmp_path / "course-data.json"
        save_json(sample_document, target, indent=2)
        assert target.read_text(encoding="utf-8").startswith('{\n  "generated"')

    def test_missing_directory(self, sample_document, tmp_path):
        with pytest.raises(ExportWriteFailed):
            save_json(sample_document, tmp_path / "nope" / "course-data.json")
