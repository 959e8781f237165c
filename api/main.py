import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.anthropic import AnthropicClient
from core.db import Database, redact_database_url
from core.errors import IconApiError
from core.settings import Settings, load_settings
from generation.router import router as generation_router
from icons.router import router as icons_router
from icons.snapshot import LocalSnapshot
from icons.store import IconStore

logger = logging.getLogger(__name__)

VALIDATION_MESSAGES = {"/api/icons": "Invalid icon data."}


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """
    CORS middleware whose pre-flight answers carry no body.
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        headers = {
            k: v for k, v in response.headers.items() if k.lower() not in {"content-length", "content-type"}
        }
        return Response(status_code=response.status_code, headers=headers)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


async def open_database(settings: Settings) -> Database | None:
    if not settings.database_url:
        logger.warning("icon_store_local_only reason=DATABASE_URL_not_set")
        return None

    db = Database(settings.database_url)
    try:
        await db.connect()
    except Exception:
        logger.exception("icon_store_connect_failed url=%s", redact_database_url(db.url))
        return None
    logger.info("icon_store_connected url=%s", redact_database_url(db.url))
    return db


def build_anthropic_client(settings: Settings) -> AnthropicClient:
    if not settings.anthropic_api_key:
        logger.warning("generation_disabled reason=ANTHROPIC_API_KEY_not_set")
    return AnthropicClient(
        api_key=settings.anthropic_api_key,
        base_url=settings.anthropic_base_url,
        model=settings.anthropic_model,
        version=settings.anthropic_version,
        max_tokens=settings.anthropic_max_tokens,
        timeout_s=settings.anthropic_timeout_s,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Build the store and the API client once per process.
        db = await open_database(settings)
        app.state.icon_store = IconStore(
            snapshot=LocalSnapshot(settings.icons_data_path, writable=settings.is_development),
            db=db,
        )
        app.state.anthropic_client = build_anthropic_client(settings)
        try:
            yield
        finally:
            if db is not None:
                await db.close()

    app = FastAPI(title="Glyph icon API", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        EmptyPreflightCORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(IconApiError)
    async def icon_api_error_handler(_: Request, exc: IconApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = VALIDATION_MESSAGES.get(request.url.path.rstrip("/"), "Invalid request body.")
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)

    app.include_router(icons_router, prefix="/api", tags=["icons"])
    app.include_router(generation_router, prefix="/api", tags=["generation"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "glyph icon api"}

    return app


app = create_app()
