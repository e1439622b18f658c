from fastapi import FastAPI, HTTPException

from pptx_html5 import __version__
from pptx_html5.api import create_app

try:
    app = create_app()
except RuntimeError:
    app = FastAPI(title="PPTX to HTML5 Converter", version=__version__)

    @app.get("/")
    async def api_disabled() -> dict[str, str]:
        raise HTTPException(
            status_code=503,
            detail="Local API disabled. Enable by setting enable_local_api = true in config.toml",
        )
