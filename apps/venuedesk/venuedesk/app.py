from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from starlette.staticfiles import StaticFiles

from venuedesk import queries
from venuedesk.config import Config
from venuedesk.db import Database
from venuedesk.errors import DomainError
from venuedesk.images import URL_PREFIX, ImageStore
from venuedesk.views import artists, auth, events, images, users
from venuedesk.views.common import get_runner_dep

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(level=logging.DEBUG)
        logging.getLogger("sqlstratum").setLevel(logging.DEBUG)


def _request_error_message(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        field = str(err["loc"][-1]) if err.get("loc") else ""
        messages.append(f"{field}: {err['msg']}" if field else err["msg"])
    return "; ".join(messages)


def create_app(config=Config) -> FastAPI:
    configure_logging(config.DEBUG)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.database.init_schema()
        Path(config.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
        yield

    app = FastAPI(title="VenueDesk", lifespan=lifespan)
    app.add_middleware(SessionMiddleware, secret_key=config.SECRET_KEY, same_site="lax")

    app.state.config = config
    app.state.database = Database(
        config.DB_PATH,
        max_connections=config.MAX_CONNECTIONS,
        connect_timeout=config.CONNECT_TIMEOUT,
    )
    app.state.image_store = ImageStore(config.UPLOAD_DIR)

    @app.exception_handler(DomainError)
    async def _domain_error(request: Request, exc: DomainError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": _request_error_message(exc)}, status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    @app.get("/api/health")
    def health(runner=Depends(get_runner_dep)):
        queries.ping(runner)
        return {"status": "ok"}

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(artists.router)
    app.include_router(events.router)
    app.include_router(images.router)
    app.mount(URL_PREFIX, StaticFiles(directory=config.UPLOAD_DIR, check_dir=False), name="uploads")
    return app


app = create_app()
