# product_api/main.py
import json
import logging
from typing import Any, Optional

from fastapi import FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, settings as default_settings
from .core import validate_product
from .database import ProductStore
from .errors import ApiError, internal_error, not_found, validation_error
from .logging_config import setup_logging
from .security import check_api_key
from . import service

logger = logging.getLogger(__name__)


def _target(request: Request) -> str:
    url = request.url
    return f"{url.path}?{url.query}" if url.query else url.path


def _store(request: Request) -> ProductStore:
    return request.app.state.store


def _settings(request: Request) -> Settings:
    return request.app.state.settings


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise validation_error("Request body must be valid JSON.")


def _error_response(err: ApiError) -> JSONResponse:
    logger.error("%s: %s", err.name, err.message)
    return JSONResponse(status_code=err.status_code, content=err.to_envelope())


# ---------------------------
# Error normalization
# ---------------------------
def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return _error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # 404 (no path) and 405 (path exists, method doesn't) are both unmatched routes
        if exc.status_code in (404, 405):
            return _error_response(not_found(f"Route {request.method} {_target(request)} not found."))
        logger.warning("unexpected HTTP error %s on %s", exc.status_code, _target(request))
        return _error_response(internal_error())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, _target(request))
        return _error_response(internal_error())


# ---------------------------
# Routes
# ---------------------------
def register_routes(app: FastAPI) -> None:
    @app.api_route("/", methods=["GET", "HEAD"])
    async def root():
        return service.info_logic()

    @app.api_route("/api/products", methods=["GET", "HEAD"])
    async def list_products(request: Request, category: Optional[str] = None,
                            page: str = "1", limit: str = "10"):
        return service.list_products_logic(_store(request), category, page, limit)

    @app.api_route("/api/products/search", methods=["GET", "HEAD"])
    async def search_products(request: Request, q: Optional[str] = None):
        return service.search_products_logic(_store(request), q)

    @app.api_route("/api/products/stats", methods=["GET", "HEAD"])
    async def product_stats(request: Request):
        return service.stats_logic(_store(request))

    @app.api_route("/api/products/{product_id}", methods=["GET", "HEAD"])
    async def get_product(request: Request, product_id: str):
        return service.get_product_logic(_store(request), product_id)

    @app.post("/api/products", status_code=201)
    async def create_product(request: Request, x_api_key: Optional[str] = Header(None)):
        check_api_key(x_api_key, _settings(request).api_key)
        payload = validate_product(await _read_json(request))
        return service.create_product_logic(_store(request), payload)

    @app.put("/api/products/{product_id}")
    async def update_product(request: Request, product_id: str, x_api_key: Optional[str] = Header(None)):
        check_api_key(x_api_key, _settings(request).api_key)
        payload = validate_product(await _read_json(request))
        return service.update_product_logic(_store(request), product_id, payload)

    @app.delete("/api/products/{product_id}")
    async def delete_product(request: Request, product_id: str, x_api_key: Optional[str] = Header(None)):
        check_api_key(x_api_key, _settings(request).api_key)
        return service.delete_product_logic(_store(request), product_id)


def create_app(store: Optional[ProductStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI app around one store.

    Each call gets its own ``ProductStore`` (seeded unless one is passed
    in), so tests can build as many isolated apps as they like.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level)

    # only the routes declared below are served; no docs or schema endpoints
    app = FastAPI(title=settings.project_name, version=settings.api_version,
                  docs_url=None, redoc_url=None, openapi_url=None)
    app.state.store = store if store is not None else ProductStore.seeded()
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, _target(request))
        return await call_next(request)

    register_error_handlers(app)
    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Server is running on http://localhost:%s", default_settings.port)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
