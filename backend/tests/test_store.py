"""Tests for the Buffer Store and its local storage slot."""

import json

import pytest

from aieditor.db import LocalStorage
from aieditor.store import (
    DEFAULT_CSS,
    DEFAULT_HTML,
    DEFAULT_JS,
    STATE_KEY,
    THEME_KEY,
    BufferStore,
)


def saved_record(storage: LocalStorage) -> dict:
    return json.loads(storage.get(STATE_KEY))


class TestHydration:
    def test_defaults_without_saved_state(self, storage):
        state = BufferStore(storage).get()
        assert state.html.content == DEFAULT_HTML
        assert state.css.content == DEFAULT_CSS
        assert state.js.content == DEFAULT_JS
        assert state.component_mode is False
        assert [b.display_name for b in state.buffers()] == ["index.html", "style.css", "script.js"]

    def test_restores_saved_record(self, storage):
        storage.set(
            STATE_KEY,
            json.dumps({"markup": "<p>a</p>", "style": "p{}", "script": "go()", "component_mode": True}),
        )
        state = BufferStore(storage).get()
        assert state.html.content == "<p>a</p>"
        assert state.css.content == "p{}"
        assert state.js.content == "go()"
        assert state.component_mode is True

    def test_missing_fields_fall_back_per_field(self, storage):
        storage.set(STATE_KEY, json.dumps({"style": "p{}"}))
        state = BufferStore(storage).get()
        assert state.html.content == DEFAULT_HTML
        assert state.css.content == "p{}"
        assert state.js.content == DEFAULT_JS
        assert state.component_mode is False

    def test_invalid_field_types_fall_back(self, storage):
        storage.set(
            STATE_KEY,
            json.dumps({"markup": 42, "style": None, "script": "ok()", "component_mode": "yes"}),
        )
        state = BufferStore(storage).get()
        assert state.html.content == DEFAULT_HTML
        assert state.css.content == DEFAULT_CSS
        assert state.js.content == "ok()"
        assert state.component_mode is False

    def test_empty_strings_are_kept(self, storage):
        storage.set(STATE_KEY, json.dumps({"markup": "", "style": "", "script": ""}))
        state = BufferStore(storage).get()
        assert [b.content for b in state.buffers()] == ["", "", ""]

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"text"', "null"])
    def test_malformed_record_uses_defaults(self, storage, raw):
        storage.set(STATE_KEY, raw)
        state = BufferStore(storage).get()
        assert state.html.content == DEFAULT_HTML
        assert state.component_mode is False

    def test_corrupt_storage_file_is_ignored(self, storage_path):
        with open(storage_path, "w", encoding="utf-8") as f:
            f.write("garbage{")
        state = BufferStore(LocalStorage(storage_path)).get()
        assert state.html.content == DEFAULT_HTML


class TestMutations:
    def test_set_persists_whole_record(self, storage):
        store = BufferStore(storage)
        store.set("css", "a{}")
        assert saved_record(storage) == {
            "markup": DEFAULT_HTML,
            "style": "a{}",
            "script": DEFAULT_JS,
            "component_mode": False,
        }

    def test_set_all_replaces_every_buffer(self, storage):
        store = BufferStore(storage)
        store.set_all("<b>x</b>", "", "run()")
        state = store.get()
        assert [b.content for b in state.buffers()] == ["<b>x</b>", "", "run()"]
        assert saved_record(storage)["style"] == ""

    def test_set_mode_persists(self, storage):
        store = BufferStore(storage)
        store.set_mode(True)
        assert saved_record(storage)["component_mode"] is True

    def test_state_survives_restart(self, storage_path):
        store = BufferStore(LocalStorage(storage_path))
        store.set_all("<p>1</p>", "p{}", "x()")
        store.set_mode(True)

        state = BufferStore(LocalStorage(storage_path)).get()
        assert [b.content for b in state.buffers()] == ["<p>1</p>", "p{}", "x()"]
        assert state.component_mode is True

    def test_get_returns_snapshot(self, storage):
        store = BufferStore(storage)
        snapshot = store.get()
        snapshot.html.content = "changed"
        assert store.get().html.content == DEFAULT_HTML

    def test_unknown_kind_rejected(self, storage):
        with pytest.raises(KeyError):
            BufferStore(storage).set("py", "print()")

    def test_arbitrary_text_accepted(self, storage):
        store = BufferStore(storage)
        store.set("html", "<<<not markup\x00")
        assert store.get().html.content == "<<<not markup\x00"

    def test_display_names_not_persisted(self, storage):
        store = BufferStore(storage)
        store.set_name("js", "app.jsx")
        store.set("js", "x")
        assert store.get().js.display_name == "app.jsx"
        assert "app.jsx" not in storage.get(STATE_KEY)
        assert BufferStore(storage).get().js.display_name == "script.js"

    def test_clear(self, storage):
        store = BufferStore(storage)
        store.clear()
        assert [b.content for b in store.get().buffers()] == ["", "", ""]


class TestTheme:
    def test_default_dark(self, storage):
        assert BufferStore(storage).get_theme() == "dark"

    def test_invalid_stored_theme_falls_back(self, storage):
        storage.set(THEME_KEY, "purple")
        assert BufferStore(storage).get_theme() == "dark"

    def test_toggle_persists_under_own_key(self, storage):
        store = BufferStore(storage)
        assert store.toggle_theme() == "light"
        assert storage.get(THEME_KEY) == "light"
        assert store.toggle_theme() == "dark"

    def test_set_rejects_unknown(self, storage):
        with pytest.raises(ValueError):
            BufferStore(storage).set_theme("blue")


class TestLocalStorage:
    def test_in_memory_when_no_path(self):
        storage = LocalStorage()
        assert storage.set("k", "v") is True
        assert storage.get("k") == "v"

    def test_non_string_values_dropped_on_load(self, storage_path):
        with open(storage_path, "w", encoding="utf-8") as f:
            json.dump({"a": "1", "b": 2}, f)
        storage = LocalStorage(storage_path)
        assert storage.get("a") == "1"
        assert storage.get("b") is None

    def test_writes_survive_reload(self, storage_path):
        storage = LocalStorage(storage_path)
        storage.set("a", "1")
        storage.set("a", "2")
        assert LocalStorage(storage_path).get("a") == "2"

    def test_unreadable_file_starts_empty(self, storage_path):
        with open(storage_path, "w", encoding="utf-8") as f:
            f.write("{not json")
        assert LocalStorage(storage_path).get("a") is None
