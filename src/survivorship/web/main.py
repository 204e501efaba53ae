from __future__ import annotations

from fastapi import FastAPI

from survivorship.web.api.router import router as api_router


def create_app() -> FastAPI:
    app = FastAPI(title="Survivorship Sim")
    app.include_router(api_router)
    return app


app = create_app()
