"""HTTP surface over a TopicRegistry and its intern tables: health, topics, stats, publish."""

import os
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware

from internhub.config import Settings, load_settings
from internhub.errors import DispatchError
from internhub.intern_table import InternTable
from internhub.observability import get_logger
from internhub.protocol import (
    HealthResponse,
    PublishResponse,
    topics_list_response,
    stats_response,
    error_body,
    ERROR_BAD_REQUEST,
    ERROR_DISPATCH_FAILED,
    ERROR_UNAUTHORIZED,
)
from internhub.registry import TopicRegistry

logger = get_logger("internhub.server")


class XAPIKeyMiddleware(BaseHTTPMiddleware):
    """Require X-API-Key header; API_KEY (from Settings) must be set."""
    def __init__(self, app, api_key: Optional[str] = None) -> None:
        super().__init__(app)
        self._api_key = api_key

    async def dispatch(self, request: Request, call_next):
        expected = self._api_key
        if not expected:
            return JSONResponse(
                status_code=503,
                content=error_body(ERROR_UNAUTHORIZED, "X-API-Key required (API_KEY env not set)"),
            )
        key = (request.headers.get("X-API-Key") or "").strip()
        if key != expected:
            return JSONResponse(
                status_code=401,
                content=error_body(ERROR_UNAUTHORIZED, "invalid or missing X-API-Key"),
            )
        return await call_next(request)


class PublishBody(BaseModel):
    topic: str
    payload: Any = None


def create_app(
    registry: Optional[TopicRegistry] = None,
    tables: Optional[Dict[str, InternTable]] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the API around the given registry and intern tables. settings defaults to the
    current environment; a registry built here uses settings.dispatch_policy.
    """
    settings = settings if settings is not None else load_settings(dotenv=False)
    registry = registry if registry is not None else TopicRegistry(policy=settings.dispatch_policy)
    tables = dict(tables or {})

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.start_time = time.time()
        yield

    app = FastAPI(title="internhub API", lifespan=lifespan)
    app.add_middleware(XAPIKeyMiddleware, api_key=settings.api_key)
    app.state.settings = settings
    app.state.registry = registry
    app.state.tables = tables
    app.state.start_time = time.time()

    router = APIRouter(prefix="/api/v1")

    # ---- Health ----

    @router.get("/health")
    def health() -> JSONResponse:
        """GET /health → { uptime_sec, topics, subscribers, interned }."""
        body = HealthResponse(
            uptime_sec=time.time() - app.state.start_time,
            topics=registry.topic_count(),
            subscribers=registry.total_subscriber_count(),
            interned=sum(t.size() for t in tables.values()),
        ).to_dict()
        return JSONResponse(content=body, status_code=200)

    # ---- Stats ----

    @router.get("/stats")
    def stats() -> JSONResponse:
        """GET /stats → { topics: { name: { messages, subscribers } }, tables, metrics }."""
        body = stats_response(
            registry.topic_stats(),
            {name: t.size() for name, t in tables.items()},
            registry.metrics.snapshot(),
        )
        return JSONResponse(content=body, status_code=200)

    # ---- Topics ----

    @router.get("/topics")
    def list_topics() -> JSONResponse:
        """GET /topics → { topics: [ { name, subscribers } ] }."""
        return JSONResponse(content=topics_list_response(registry.list_topics()), status_code=200)

    # ---- Publish ----

    @router.post("/publish")
    def publish(body: PublishBody) -> JSONResponse:
        """POST /publish { topic, payload } → { status, topic, delivered }; unknown topics deliver to nobody."""
        name = (body.topic or "").strip()
        if not name:
            return JSONResponse(
                content=error_body(ERROR_BAD_REQUEST, "topic is required"),
                status_code=400,
            )
        try:
            delivered = registry.publish(name, body.payload)
        except DispatchError as e:
            return JSONResponse(
                content=PublishResponse(
                    status="failed",
                    topic=name,
                    error=error_body(ERROR_DISPATCH_FAILED, str(e), failures=len(e.failures)),
                ).to_dict(),
                status_code=500,
            )
        except Exception as e:
            logger.exception("publish_failed", extra={"topic": name})
            return JSONResponse(
                content=PublishResponse(
                    status="failed",
                    topic=name,
                    error=error_body(ERROR_DISPATCH_FAILED, f"handler failed: {e!s}"),
                ).to_dict(),
                status_code=500,
            )
        return JSONResponse(
            content=PublishResponse(status="published", topic=name, delivered=delivered).to_dict(),
            status_code=200,
        )

    app.include_router(router)
    return app


def main() -> None:
    """
    Serve an empty registry for introspection and publishing only: HTTP has no subscribe
    endpoint, so handlers are attached in-process by embedding create_app() with your registry.
    """
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "8000")),
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
