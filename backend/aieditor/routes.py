# --- include all imports here ---
import uuid
from fastapi import APIRouter, File, HTTPException, Request, UploadFile, WebSocket
from fastapi.responses import HTMLResponse, Response

from aieditor.archive import EXPORT_FILENAME
from aieditor.composer import PREVIEW_SANDBOX
from aieditor.errors import (
    EditorError,
    FileImportError,
    MalformedResponseError,
    TransportError,
    ValidationError,
)
from aieditor.logger import get_logger
from aieditor.models import (
    BufferKind,
    BufferUpdate,
    ExplanationView,
    GenerateRequestData,
    InstructionUpdate,
    NameUpdate,
    SelectionUpdate,
    ThemeUpdate,
    ToggleRequest,
    WorkspaceView,
)
from aieditor.session import EditorSession
from aieditor.snippets import SNIPPETS
from aieditor.websocket_manager import ws_manager

logger = get_logger(__name__)


router = APIRouter()


def get_session(request: Request) -> EditorSession:
    return request.app.state.session


def workspace_view(session: EditorSession) -> WorkspaceView:
    return WorkspaceView(
        workspace=session.state(),
        revision=session.revision,
        theme=session.store.get_theme(),
        active_kind=session.selection.active_kind,
        instruction=session.instruction,
        deep_reasoning=session.deep_reasoning,
        loading=session.generator.in_flight,
        status=session.status.view(),
    )


def http_error(error: EditorError) -> HTTPException:
    """Map an editor error to an HTTP error carrying its user message"""
    if isinstance(error, (ValidationError, FileImportError)):
        status_code = 400
    elif isinstance(error, (TransportError, MalformedResponseError)):
        status_code = 502
    else:
        # ExportError and anything unexpected
        status_code = 500
    return HTTPException(status_code=status_code, detail=error.user_message)


async def notify_preview(session: EditorSession):
    await ws_manager.broadcast({"type": "preview", "revision": session.revision})


async def notify_status(session: EditorSession):
    await ws_manager.broadcast({"type": "status", **session.status.view().model_dump()})


@router.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "AI Editor API is running"}


# --- workspace ---


@router.get("/workspace", response_model=WorkspaceView)
async def get_workspace(request: Request):
    """Current buffers, mode, theme and status"""
    return workspace_view(get_session(request))


@router.put("/workspace/buffers/{kind}", response_model=WorkspaceView)
async def update_buffer(kind: BufferKind, update: BufferUpdate, request: Request):
    session = get_session(request)
    session.update_buffer(kind, update.content)
    return workspace_view(session)


@router.put("/workspace/buffers/{kind}/name", response_model=WorkspaceView)
async def rename_buffer(kind: BufferKind, update: NameUpdate, request: Request):
    session = get_session(request)
    name = update.display_name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Display name cannot be empty")
    try:
        session.rename_buffer(kind, name)
    except EditorError as e:
        raise http_error(e)
    return workspace_view(session)


@router.put("/workspace/mode", response_model=WorkspaceView)
async def set_component_mode(toggle: ToggleRequest, request: Request):
    session = get_session(request)
    session.set_component_mode(toggle.enabled)
    return workspace_view(session)


@router.post("/workspace/clear", response_model=WorkspaceView)
async def clear_workspace(request: Request):
    session = get_session(request)
    session.clear_workspace()
    await notify_status(session)
    return workspace_view(session)


@router.post("/workspace/refresh")
async def refresh_preview(request: Request):
    """Force the preview to reload even if nothing changed"""
    session = get_session(request)
    revision = session.refresh()
    await notify_preview(session)
    return {"success": True, "revision": revision}


@router.get("/preview", response_class=HTMLResponse)
async def get_preview(request: Request):
    """Composed document for the sandboxed preview frame"""
    document = get_session(request).document()
    return HTMLResponse(
        content=document.html,
        headers={
            "Content-Security-Policy": f"sandbox {PREVIEW_SANDBOX}",
            "X-Preview-Revision": str(document.revision),
            "Cache-Control": "no-store",
        },
    )


# --- selection and explanations ---


@router.put("/workspace/focus/{kind}", response_model=WorkspaceView)
async def focus_buffer(kind: BufferKind, request: Request):
    session = get_session(request)
    session.focus(kind)
    return workspace_view(session)


@router.put("/selection")
async def update_selection(update: SelectionUpdate, request: Request):
    session = get_session(request)
    session.select(update.kind, update.text)
    return {"success": True, "selection": session.current_selection()}


@router.post("/explain", response_model=ExplanationView)
async def explain_selection(request: Request):
    """Explain the current selection"""
    session = get_session(request)
    result = await session.explainer.explain()
    if result.status == "skipped":
        raise HTTPException(status_code=400, detail="Select some code to explain first")
    return ExplanationView(explanation=session.explanation, explaining=session.explaining)


@router.get("/explanation", response_model=ExplanationView)
async def get_explanation(request: Request):
    session = get_session(request)
    return ExplanationView(explanation=session.explanation, explaining=session.explaining)


# --- generation ---


@router.put("/instruction", response_model=WorkspaceView)
async def update_instruction(update: InstructionUpdate, request: Request):
    session = get_session(request)
    session.instruction = update.text
    return workspace_view(session)


@router.put("/settings/deep-reasoning", response_model=WorkspaceView)
async def set_deep_reasoning(toggle: ToggleRequest, request: Request):
    session = get_session(request)
    session.deep_reasoning = toggle.enabled
    return workspace_view(session)


@router.post("/generate")
async def generate(data: GenerateRequestData, request: Request):
    """Rewrite all three buffers from an instruction"""
    session = get_session(request)
    try:
        result = await session.generator.generate(data.instruction, data.deep_reasoning)
    except Exception as e:
        logger.error(f"Error processing generation request: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    await notify_status(session)

    if result.status == "error":
        raise http_error(result.error)

    if result.status == "superseded":
        return {"success": False, "status": result.status, "message": result.message}

    await notify_preview(session)
    return {
        "success": True,
        "status": result.status,
        "message": result.message,
        "workspace": workspace_view(session),
    }


# --- files ---


@router.post("/workspace/import/{kind}", response_model=WorkspaceView)
async def import_file(kind: BufferKind, request: Request, file: UploadFile = File(...)):
    """Load an uploaded file into a buffer"""
    session = get_session(request)
    try:
        data = await file.read()
    except OSError as e:
        logger.error(f"Failed to read upload {file.filename}: {e}")
        session.status.set_error(FileImportError.user_message)
        raise http_error(FileImportError(str(e)))

    try:
        session.import_file(file.filename, data, kind)
    except EditorError as e:
        raise http_error(e)

    await notify_preview(session)
    return workspace_view(session)


@router.get("/workspace/export")
async def export_zip(request: Request):
    """Download the non-empty buffers as a ZIP archive"""
    session = get_session(request)
    try:
        data = session.export_zip()
    except EditorError as e:
        raise http_error(e)

    return Response(
        content=data,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


# --- snippets ---


@router.get("/snippets")
async def list_snippets():
    return [
        {"index": index, **snippet.model_dump()} for index, snippet in enumerate(SNIPPETS)
    ]


@router.post("/snippets/{index}", response_model=WorkspaceView)
async def insert_snippet(index: int, request: Request):
    """Append a snippet to the active buffer"""
    session = get_session(request)
    try:
        session.insert_snippet(index)
    except IndexError:
        raise HTTPException(status_code=404, detail="Snippet not found")
    return workspace_view(session)


# --- theme ---


@router.get("/theme")
async def get_theme(request: Request):
    return {"theme": get_session(request).store.get_theme()}


@router.put("/theme")
async def set_theme(update: ThemeUpdate, request: Request):
    session = get_session(request)
    session.store.set_theme(update.theme)
    return {"theme": session.store.get_theme()}


@router.post("/theme/toggle")
async def toggle_theme(request: Request):
    return {"theme": get_session(request).store.toggle_theme()}


# --- websocket push ---


@router.websocket("/ws")
async def editor_socket(websocket: WebSocket):
    """Pushes preview revisions and status messages to the editor UI"""
    client_id = str(uuid.uuid4())
    session: EditorSession = websocket.app.state.session
    await ws_manager.connect(client_id, websocket)
    await ws_manager.send_message(client_id, {"type": "preview", "revision": session.revision})

    # Clients only listen; incoming messages are ignored until the socket closes
    while await ws_manager.receive_message(client_id) is not None:
        pass
