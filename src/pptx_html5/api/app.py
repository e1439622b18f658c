from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import AppConfig
from ..core import ConversionService
from ..settings import resolve_config

from .routers import convert, health


def create_app(config: AppConfig | None = None) -> FastAPI:
    config = config or resolve_config()
    if not config.runtime.enable_local_api:
        raise RuntimeError("Local API is disabled. Enable it via configuration or environment.")

    app = FastAPI(title="PPTX to HTML5 Converter", version=__version__)
    app.state.config = config
    app.state.service = ConversionService(config)

    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.include_router(health.router)
    app.include_router(convert.router)
    return app


__all__ = ["create_app"]
