"""Buffer Store: the single WorkspaceState of a session.

Hydrates once from local storage, then re-serializes the whole record on
every accepted mutation. Display names are labels only and are not part of
the persisted record.
"""

import json

from aieditor.db import LocalStorage
from aieditor.logger import get_logger
from aieditor.models import BUFFER_KINDS, WorkspaceState

logger = get_logger(__name__)

STATE_KEY = "ai-editor-v6"
THEME_KEY = "ai-editor-theme"
THEMES = ("dark", "light")
DEFAULT_THEME = "dark"

DEFAULT_HTML = (
    "<!-- Content appears here -->\n"
    '<div class="p-8 text-center">\n'
    '  <h1 class="text-4xl font-bold mb-4">Welcome to the AI editor</h1>\n'
    '  <p class="text-lg opacity-80 text-gray-400">Upload your files or describe a change to start</p>\n'
    "</div>"
)
DEFAULT_CSS = "body { background-color: #0f172a; color: white; transition: all 0.3s; }"
DEFAULT_JS = 'console.log("Editor ready!");'

# persisted record field -> workspace buffer kind
_RECORD_FIELDS = {"markup": "html", "style": "css", "script": "js"}


def default_state() -> WorkspaceState:
    state = WorkspaceState()
    state.html.content = DEFAULT_HTML
    state.css.content = DEFAULT_CSS
    state.js.content = DEFAULT_JS
    return state


class BufferStore:
    """Owns the workspace buffers and their persistence"""

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self._state = self._hydrate()

    def _hydrate(self) -> WorkspaceState:
        state = default_state()
        raw = self.storage.get(STATE_KEY)
        if raw is None:
            return state

        try:
            record = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to load saved state, using defaults: {e}")
            return state

        if not isinstance(record, dict):
            logger.error("Saved state is not an object, using defaults")
            return state

        for field, kind in _RECORD_FIELDS.items():
            value = record.get(field)
            if isinstance(value, str):
                state.buffer(kind).content = value
            elif field in record:
                logger.warning(f"Ignoring invalid saved value for '{field}'")

        mode = record.get("component_mode")
        if isinstance(mode, bool):
            state.component_mode = mode

        logger.info("Workspace hydrated from saved state")
        return state

    def _persist(self):
        record = {field: self._state.buffer(kind).content for field, kind in _RECORD_FIELDS.items()}
        record["component_mode"] = self._state.component_mode
        self.storage.set(STATE_KEY, json.dumps(record, ensure_ascii=False))

    def get(self) -> WorkspaceState:
        """Snapshot of the current workspace"""
        return self._state.model_copy(deep=True)

    def set(self, kind: str, content: str):
        if kind not in BUFFER_KINDS:
            raise KeyError(f"Unknown buffer kind: {kind}")
        self._state.buffer(kind).content = content
        self._persist()

    def set_all(self, markup: str, style: str, script: str):
        """Replace all three buffers as one mutation"""
        self._state.html.content = markup
        self._state.css.content = style
        self._state.js.content = script
        self._persist()

    def set_mode(self, enabled: bool):
        self._state.component_mode = bool(enabled)
        self._persist()

    def set_name(self, kind: str, name: str):
        if kind not in BUFFER_KINDS:
            raise KeyError(f"Unknown buffer kind: {kind}")
        self._state.buffer(kind).display_name = name

    def clear(self):
        self.set_all("", "", "")

    # --- theme preference, stored under its own key ---

    def get_theme(self) -> str:
        theme = self.storage.get(THEME_KEY)
        return theme if theme in THEMES else DEFAULT_THEME

    def set_theme(self, theme: str):
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme}")
        self.storage.set(THEME_KEY, theme)

    def toggle_theme(self) -> str:
        theme = "light" if self.get_theme() == "dark" else "dark"
        self.set_theme(theme)
        return theme
