from __future__ import annotations

import logging
import sys
import time
import traceback
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from partsearch.config import Settings, settings
from partsearch.data_providers.inventory import InventoryLoadError, load_inventory
from partsearch.routes import router
from partsearch.services.search_service import SearchParameterError, SearchService
from partsearch.store.record_store import RecordStore

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_app(store: RecordStore | None = None, config: Settings | None = None) -> FastAPI:
    """Build the API around an already loaded store.

    Without a store the inventory is loaded here, before the app exists, so a
    broken dataset stops startup with InventoryLoadError.
    """
    config = config or settings
    if store is None:
        store = RecordStore(load_inventory(config.inventory_path, timeout=config.request_timeout_seconds))
    logger.info("Search service initialized with %d items", store.count())

    app = FastAPI(
        title="Vehicle Parts Fuzzy Search API",
        description="Fuzzy search over the in-memory vehicle parts inventory.",
        version="1.0.0",
    )
    app.state.service = SearchService(store, config)
    app.state.started = time.monotonic()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origin_list,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        message = "; ".join(error["msg"] for error in exc.errors())
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": f"Invalid search parameters: {message}", "timestamp": _timestamp()},
        )

    @app.exception_handler(SearchParameterError)
    async def search_parameter_error_handler(request: Request, exc: SearchParameterError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": str(exc), "timestamp": _timestamp()},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        content = {"success": False, "message": "Internal Server Error", "timestamp": _timestamp()}
        if config.environment == "development":
            content["error"] = str(exc)
            content["stack"] = "".join(traceback.format_exception(exc))
        return JSONResponse(status_code=500, content=content)

    @app.get("/health", tags=["Health"])
    def health():
        return {
            "status": "OK",
            "timestamp": _timestamp(),
            "uptime": round(time.monotonic() - app.state.started, 3),
        }

    app.include_router(router)

    if config.enable_ui:
        import gradio as gr

        from partsearch.ui import build_demo

        app = gr.mount_gradio_app(app, build_demo(app.state.service), path="/ui")
    return app


def run() -> None:
    setup_logging(settings.debug_log)
    try:
        app = create_app()
    except InventoryLoadError as exc:
        logger.critical("Could not load inventory: %s", exc)
        raise SystemExit(1) from exc
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    run()
