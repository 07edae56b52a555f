import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from backend.routes import router
from backend import storage
from kids_english import ParseFailure

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)

PLAYER_DIR = Path(__file__).parent / "static"
DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


def create_app(data_dir: Path | None = None) -> FastAPI:
    resolved = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    storage.init_storage(resolved)

    app = FastAPI(title="Kids English Question Bank")
    app.include_router(router, prefix="/api")

    @app.exception_handler(ParseFailure)
    async def unreadable_data(request: Request, exc: ParseFailure):
        logger.error("Stored %s unreadable while handling %s: %s", exc.collection, request.url.path, exc.detail)
        return JSONResponse(
            status_code=500,
            content={"detail": f"Stored {exc.collection} could not be read", "collection": exc.collection},
        )

    if PLAYER_DIR.exists() and not os.getenv("VITE_DEV", ""):
        # Built game player: bundled assets plus index.html for every non-API path
        app.mount("/assets", StaticFiles(directory=PLAYER_DIR / "assets"), name="assets")

        @app.get("/{path:path}")
        async def player(path: str):
            return FileResponse(PLAYER_DIR / "index.html")

    return app


# Instance uvicorn serves (DATA_DIR env var, else ./data)
app = create_app()
