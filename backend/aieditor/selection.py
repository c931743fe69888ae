"""Tracks the highlighted text of the active buffer for code explanations"""

from aieditor.models import BUFFER_KINDS, Selection, WorkspaceState


class SelectionTracker:
    def __init__(self, active_kind: str = "html"):
        self.active_kind = active_kind
        self._selection: Selection | None = None
        # buffer content at the time of selection
        self._snapshot: str | None = None

    def focus(self, kind: str):
        """Switch the active buffer; any previous selection is dropped"""
        if kind not in BUFFER_KINDS:
            raise KeyError(f"Unknown buffer kind: {kind}")
        if kind != self.active_kind:
            self.clear()
        self.active_kind = kind

    def select(self, kind: str, text: str, content: str):
        if kind not in BUFFER_KINDS:
            raise KeyError(f"Unknown buffer kind: {kind}")
        self.active_kind = kind
        self._selection = Selection(source_kind=kind, text=text)
        self._snapshot = content

    def clear(self):
        self._selection = None
        self._snapshot = None

    def current(self, state: WorkspaceState) -> Selection:
        """The live selection, or an empty one if it went stale"""
        selection = self._selection
        if selection is None:
            return Selection(source_kind=self.active_kind, text="")
        if selection.source_kind != self.active_kind:
            return Selection(source_kind=self.active_kind, text="")
        if state.buffer(selection.source_kind).content != self._snapshot:
            return Selection(source_kind=self.active_kind, text="")
        return selection
