"""
AI Editor FastAPI application.

Entry point for the API server.
"""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from aieditor.db import LocalStorage
from aieditor.logger import get_logger
from aieditor.routes import router
from aieditor.session import EditorSession

logger = get_logger(__name__)


def create_app(storage_path: str | None = None, status_ttl: float | None = None) -> FastAPI:
    """Build the app around one editor session backed by local storage"""
    app = FastAPI(title="AI Editor API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    path = storage_path or config.STORAGE_PATH
    app.state.session = EditorSession(LocalStorage(path), status_ttl=status_ttl)
    logger.info(f"Editor session ready (storage: {path})")
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT)
