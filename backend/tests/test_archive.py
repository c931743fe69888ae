"""Tests for ZIP export and file import."""

import io
import zipfile
from unittest.mock import patch

import pytest

from aieditor import archive
from aieditor.errors import ExportError, FileImportError
from conftest import make_state


def entries(data: bytes) -> dict:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return {name: zf.read(name).decode("utf-8") for name in zf.namelist()}


class TestExport:
    def test_all_buffers(self):
        data = archive.export_zip(make_state("<p>a</p>", "p{}", "go()"))
        assert entries(data) == {"index.html": "<p>a</p>", "style.css": "p{}", "script.js": "go()"}

    def test_empty_style_omitted(self):
        data = archive.export_zip(make_state("<p>a</p>", "", "go()"))
        assert sorted(entries(data)) == ["index.html", "script.js"]

    def test_all_empty_gives_empty_archive(self):
        assert entries(archive.export_zip(make_state())) == {}

    def test_uses_display_names(self):
        state = make_state("", "", "function App() {}")
        state.js.display_name = "App.jsx"
        assert list(entries(archive.export_zip(state))) == ["App.jsx"]

    def test_unicode_content(self):
        data = archive.export_zip(make_state("<h1>مرحبا</h1>"))
        assert entries(data)["index.html"] == "<h1>مرحبا</h1>"

    def test_duplicate_names_refused(self):
        state = make_state("<p>a</p>", "b{}", "")
        state.css.display_name = "index.html"
        with pytest.raises(ExportError) as exc_info:
            archive.export_zip(state)
        assert "index.html" in exc_info.value.user_message

    def test_duplicate_name_on_empty_buffer_ignored(self):
        state = make_state("<p>a</p>", "", "")
        state.css.display_name = "index.html"
        assert list(entries(archive.export_zip(state))) == ["index.html"]

    def test_failure_raises_export_error(self):
        with patch.object(archive.zipfile.ZipFile, "writestr", side_effect=OSError("disk full")):
            with pytest.raises(ExportError) as exc_info:
                archive.export_zip(make_state("<p>a</p>"))
        assert "disk full" in exc_info.value.user_message


class TestImport:
    def test_plain_file(self):
        imported = archive.import_file("page.html", b"<p>x</p>", "html")
        assert imported.kind == "html"
        assert imported.name == "page.html"
        assert imported.content == "<p>x</p>"
        assert imported.enable_component_mode is False

    @pytest.mark.parametrize("name", ["App.jsx", "widget.TSX", "nested/dir/App.tsx"])
    def test_component_extensions_enable_mode(self, name):
        imported = archive.import_file(name, b"export default function App() {}", "js")
        assert imported.enable_component_mode is True
        assert "/" not in imported.name

    def test_missing_name_uses_default(self):
        assert archive.import_file(None, b"a{}", "css").name == "style.css"

    @pytest.mark.parametrize(
        "name, expected",
        [("../../x.css", "x.css"), ("C:\\Users\\me\\page.html", "page.html"), ("..", "style.css")],
    )
    def test_path_parts_stripped(self, name, expected):
        assert archive.import_file(name, b"a{}", "css").name == expected

    def test_bom_stripped(self):
        assert archive.import_file("a.css", "\ufeffa{}".encode("utf-8"), "css").content == "a{}"

    def test_binary_file_rejected(self):
        with pytest.raises(FileImportError):
            archive.import_file("image.png", b"\x89PNG\r\n\x1a\n\xff\xfe\xfd", "html")


class TestSessionImport:
    def test_applies_content_name_and_mode(self, session):
        revision = session.revision
        session.import_file("App.jsx", b"function App() { return null; }", "js")

        state = session.state()
        assert state.js.content == "function App() { return null; }"
        assert state.js.display_name == "App.jsx"
        assert state.component_mode is True
        assert session.revision == revision + 1
        assert session.status.status == "Uploaded App.jsx"

    def test_same_bytes_still_force_reload(self, session):
        session.import_file("index.html", b"<p>same</p>", "html")
        first = session.document()
        session.import_file("index.html", b"<p>same</p>", "html")
        second = session.document()
        assert first.html == second.html
        assert second.revision == first.revision + 1

    def test_failed_import_leaves_buffers(self, session):
        session.update_buffer("html", "<p>keep</p>")
        with pytest.raises(FileImportError):
            session.import_file("bad.html", b"\xff\xfe\xfd", "html")
        assert session.state().html.content == "<p>keep</p>"
        assert session.status.error

    def test_export_reports_status(self, session):
        session.update_buffer("html", "<p>a</p>")
        data = session.export_zip()
        assert list(entries(data)) == ["index.html"]
        assert session.status.status.startswith("Downloaded")
