from __future__ import annotations

from fastapi import FastAPI

from attention_editor.api.errors import register_error_handlers
from attention_editor.api.routes.editor import router as editor_router
from attention_editor.api.routes.health import router as health_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Attention Editor API",
        description="Inspect folders, browse their file tree, and edit per-file attention metadata.",
        version="0.1.0",
    )
    register_error_handlers(app)

    app.include_router(health_router, include_in_schema=False)
    app.include_router(editor_router)

    return app
