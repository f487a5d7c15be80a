"""Tests for source sinks."""

import pytest

from qmodel.generator import DirectorySink, SinkWriteError


def describe_directory_sink():
    def maps_names_to_paths(expect, tmp_path):
        sink = DirectorySink(tmp_path)
        expect(sink.path_for("a.b.QItem")) == tmp_path / "a" / "b" / "QItem.py"

    def writes_packages(expect, tmp_path):
        DirectorySink(tmp_path).write("a.b.QItem", "x = 1\n")
        expect((tmp_path / "a" / "b" / "QItem.py").read_text()) == "x = 1\n"
        expect((tmp_path / "a" / "__init__.py").exists()) == True
        expect((tmp_path / "a" / "b" / "__init__.py").exists()) == True
        expect((tmp_path / "__init__.py").exists()) == False

    def can_skip_init_files(expect, tmp_path):
        DirectorySink(tmp_path, init_files=False).write("a.QItem", "x = 1\n")
        expect((tmp_path / "a" / "__init__.py").exists()) == False

    def replaces_existing_modules(expect, tmp_path):
        sink = DirectorySink(tmp_path)
        sink.write("a.QItem", "x = 1\n")
        sink.write("a.QItem", "x = 2\n")
        expect((tmp_path / "a" / "QItem.py").read_text()) == "x = 2\n"
        expect(list((tmp_path / "a").glob("*.tmp"))) == []

    def reports_unwritable_locations(expect, tmp_path):
        (tmp_path / "a").write_text("not a directory")
        with pytest.raises(SinkWriteError) as exc:
            DirectorySink(tmp_path).write("a.QItem", "x = 1\n")
        expect(str(exc.value)).includes("a.QItem")
