"""Editor session: the workspace plus everything the UI binds to.

One session exists per process. The Buffer Store is the only owner of the
buffers; the session routes every UI action through it and advances the
preview revision whenever the preview must reload.
"""

from aieditor import archive
from aieditor.agent import ExplainAgent, GenerationAgent
from aieditor.composer import compose
from aieditor.db import LocalStorage
from aieditor.errors import DuplicateNameError, EditorError
from aieditor.logger import get_logger
from aieditor.models import ComposedDocument, Selection, WorkspaceState
from aieditor.selection import SelectionTracker
from aieditor.snippets import append_snippet, get_snippet
from aieditor.status import StatusBoard
from aieditor.store import BufferStore

logger = get_logger(__name__)


class EditorSession:
    def __init__(self, storage: LocalStorage, status_ttl: float | None = None):
        self.store = BufferStore(storage)
        self.selection = SelectionTracker()
        self.status = StatusBoard(ttl=status_ttl)
        self.revision = 0
        self.instruction = ""
        self.deep_reasoning = True
        self.explanation = ""
        self.explaining = False
        self.generator = GenerationAgent(self)
        self.explainer = ExplainAgent(self)

    # --- preview ---

    def state(self) -> WorkspaceState:
        return self.store.get()

    def document(self) -> ComposedDocument:
        return compose(self.store.get(), self.revision)

    def refresh(self) -> int:
        """Advance the forced-reload token"""
        self.revision += 1
        return self.revision

    # --- buffer edits ---

    def update_buffer(self, kind: str, content: str):
        self.store.set(kind, content)

    def rename_buffer(self, kind: str, name: str) -> str:
        name = archive.safe_name(name, kind)
        self._check_name_free(kind, name)
        self.store.set_name(kind, name)
        return name

    def _check_name_free(self, kind: str, name: str):
        """Display names double as archive entry names and must stay distinct"""
        for buffer in self.store.get().buffers():
            if buffer.kind != kind and buffer.display_name == name:
                raise DuplicateNameError(
                    f"{name} is already used by the {buffer.kind} buffer",
                    user_message=f"Another file is already named {name}.",
                )

    def set_component_mode(self, enabled: bool):
        self.store.set_mode(enabled)

    def clear_workspace(self):
        self.store.clear()
        self.selection.clear()
        self.status.set_status("Cleared")

    def insert_snippet(self, index: int):
        """Append a snippet to the active buffer"""
        snippet = get_snippet(index)
        kind = self.selection.active_kind
        current = self.store.get().buffer(kind).content
        self.store.set(kind, append_snippet(current, snippet))
        self.status.set_status("Added!")

    # --- selection ---

    def focus(self, kind: str):
        self.selection.focus(kind)

    def select(self, kind: str, text: str):
        content = self.store.get().buffer(kind).content
        self.selection.select(kind, text, content)

    def current_selection(self) -> Selection:
        return self.selection.current(self.store.get())

    # --- files ---

    def import_file(self, filename: str | None, data: bytes, kind: str) -> archive.ImportedFile:
        try:
            imported = archive.import_file(filename, data, kind)
            self._check_name_free(kind, imported.name)
        except EditorError as e:
            self.status.set_error(e.user_message)
            raise

        if imported.enable_component_mode:
            self.store.set_mode(True)
        self.store.set(imported.kind, imported.content)
        self.store.set_name(imported.kind, imported.name)
        self.refresh()
        self.status.set_status(f"Uploaded {imported.name}")
        logger.info(f"Imported {imported.name} into {imported.kind} buffer")
        return imported

    def export_zip(self) -> bytes:
        self.status.set_status("Downloading...", ttl=None)
        try:
            data = archive.export_zip(self.store.get())
        except EditorError as e:
            self.status.set_error(e.user_message)
            raise
        self.status.set_status("Downloaded! ✨")
        return data
