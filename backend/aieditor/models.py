from pydantic import BaseModel, Field
from typing import Optional, List, Literal

BufferKind = Literal["html", "css", "js"]

BUFFER_KINDS: tuple = ("html", "css", "js")

DEFAULT_NAMES = {
    "html": "index.html",
    "css": "style.css",
    "js": "script.js",
}


class Buffer(BaseModel):
    kind: BufferKind
    content: str = ""
    display_name: str


class WorkspaceState(BaseModel):
    html: Buffer = Field(
        default_factory=lambda: Buffer(kind="html", display_name=DEFAULT_NAMES["html"])
    )
    css: Buffer = Field(
        default_factory=lambda: Buffer(kind="css", display_name=DEFAULT_NAMES["css"])
    )
    js: Buffer = Field(
        default_factory=lambda: Buffer(kind="js", display_name=DEFAULT_NAMES["js"])
    )
    component_mode: bool = False

    def buffer(self, kind: str) -> Buffer:
        if kind not in BUFFER_KINDS:
            raise KeyError(f"Unknown buffer kind: {kind}")
        return getattr(self, kind)

    def buffers(self) -> List[Buffer]:
        return [self.html, self.css, self.js]


class Selection(BaseModel):
    source_kind: BufferKind = "html"
    text: str = ""


class ComposedDocument(BaseModel):
    html: str
    revision: int = 0


class GenerationRequest(BaseModel):
    instruction: str
    component_mode: bool
    buffers: WorkspaceState


class GenerationResponse(BaseModel):
    """Structured reply from the AI collaborator. All three keys are required;
    null is accepted and treated as an empty file."""

    html: Optional[str]
    css: Optional[str]
    js: Optional[str]


class Snippet(BaseModel):
    label: str
    kind: BufferKind
    content: str


# --- API payloads ---


class BufferUpdate(BaseModel):
    content: str


class NameUpdate(BaseModel):
    display_name: str


class ToggleRequest(BaseModel):
    enabled: bool


class InstructionUpdate(BaseModel):
    text: str


class GenerateRequestData(BaseModel):
    instruction: Optional[str] = None
    deep_reasoning: Optional[bool] = None


class SelectionUpdate(BaseModel):
    kind: BufferKind
    text: str


class ThemeUpdate(BaseModel):
    theme: Literal["dark", "light"]


class StatusView(BaseModel):
    status: str = ""
    error: str = ""


class WorkspaceView(BaseModel):
    workspace: WorkspaceState
    revision: int
    theme: Literal["dark", "light"]
    active_kind: BufferKind
    instruction: str
    deep_reasoning: bool
    loading: bool
    status: StatusView


class ExplanationView(BaseModel):
    explanation: str
    explaining: bool
