# product_api/main.py
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import ProductStore
from .logger import get_logger
from .middleware import APIKeyMiddleware
from .routes import INVALID_JSON, router

logger = get_logger(__name__)

WELCOME = "Welcome to the Product API! Go to /api/products to see all products."
INVALID_PAYLOAD = "Invalid product payload."


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None,
               request_log: Any = None) -> FastAPI:
    """Build the app around one store.

    Requests pass the logger, then CORS, then the API-key gate, then the
    route (whose POST/PUT validator runs before the handler body).
    """
    settings = settings or get_settings()
    store = store if store is not None else ProductStore.seeded()
    request_log = request_log or logger
    if not settings.api_key:
        logger.warning("api_key_not_configured", detail="every /api request will be rejected")

    app = FastAPI(
        title="Product API (in-memory)",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.store = store

    # the last middleware added runs first
    app.add_middleware(APIKeyMiddleware, api_key=settings.api_key)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        path = request.url.path
        if request.url.query:
            path += "?" + request.url.query
        request_log.info(
            "request_received",
            method=request.method,
            path=path,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        return await call_next(request)

    # ---------------------------
    # Error responses
    # ---------------------------
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        status_code, message = exc.status_code, str(exc.detail)
        # a known path with an unsupported method is still just an unknown route
        if status_code == 405:
            status_code, message = 404, "Not Found"
        logger.warning("request_failed", method=request.method, path=request.url.path,
                       status=status_code, error=message)
        return JSONResponse(status_code=status_code, content={"error": message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        if any(err.get("type") == "json_invalid" for err in exc.errors()):
            message = INVALID_JSON
        else:
            message = INVALID_PAYLOAD
        logger.warning("request_failed", method=request.method, path=request.url.path,
                       status=400, error=message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_error", method=request.method, path=request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    # ---------------------------
    # Routes
    # ---------------------------
    @app.api_route("/", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    async def welcome():
        return WELCOME

    app.include_router(router)
    return app


app = create_app()
