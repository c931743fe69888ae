"""ZIP export of the workspace and file upload into a buffer"""

import io
import os
import zipfile
from dataclasses import dataclass

from aieditor.errors import ExportError, FileImportError
from aieditor.logger import get_logger
from aieditor.models import DEFAULT_NAMES, WorkspaceState

logger = get_logger(__name__)

EXPORT_FILENAME = "ai_optimized_web_project.zip"

# Uploads with these extensions hold component source and switch on component mode
COMPONENT_EXTENSIONS = (".jsx", ".tsx")


@dataclass
class ImportedFile:
    """A decoded upload, ready to be applied to a buffer"""

    kind: str
    name: str
    content: str
    enable_component_mode: bool = False


def safe_name(name: str | None, kind: str) -> str:
    """Final path component of a file name, or the buffer's default name"""
    base = os.path.basename((name or "").replace("\\", "/").strip())
    if base in ("", ".", ".."):
        return DEFAULT_NAMES[kind]
    return base


def export_zip(state: WorkspaceState) -> bytes:
    """Pack each non-empty buffer under its display name; empty buffers are left out"""
    buffers = [buffer for buffer in state.buffers() if buffer.content]
    names = [buffer.display_name for buffer in buffers]
    for name in names:
        if names.count(name) > 1:
            logger.error(f"Refusing to export: two buffers are named {name}")
            raise ExportError(
                f"Duplicate name: {name!r}",
                user_message=f"Export failed: more than one file is named {name}.",
            )

    archive = io.BytesIO()
    try:
        with zipfile.ZipFile(archive, "w", zipfile.ZIP_DEFLATED) as zf:
            for buffer in buffers:
                zf.writestr(buffer.display_name, buffer.content)
    except (OSError, ValueError, zipfile.LargeZipFile) as e:
        logger.error(f"Failed to build export archive: {e}", exc_info=True)
        raise ExportError(str(e), user_message=f"Export failed: {e}")

    return archive.getvalue()


def is_component_file(filename: str) -> bool:
    return filename.lower().endswith(COMPONENT_EXTENSIONS)


def import_file(filename: str | None, data: bytes, kind: str) -> ImportedFile:
    name = safe_name(filename, kind)
    try:
        content = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.error(f"Could not decode upload {name}: {e}")
        raise FileImportError(str(e), user_message=f"Could not read {name} as text.")

    return ImportedFile(
        kind=kind,
        name=name,
        content=content,
        enable_component_mode=is_component_file(name),
    )
