from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from doc_registry.api.documents import router as documents_router
from doc_registry.api.registry import router as registry_router
from doc_registry.api.secondary_documents import router as secondary_documents_router
from doc_registry.config import settings
from doc_registry.db import SessionLocal
from doc_registry.errors import register_error_handlers
from doc_registry.logging import configure_logging
from doc_registry.observability import ObservabilityMiddleware
from doc_registry.services.counter import init_counter


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = SessionLocal()
    try:
        init_counter(db)
        db.commit()
    finally:
        db.close()
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

configure_logging()
app.add_middleware(ObservabilityMiddleware)
register_error_handlers(app)


def _include_api_router(router, dependencies=None):
    app.include_router(router, dependencies=dependencies)
    app.include_router(router, prefix="/api/v1", dependencies=dependencies)


_include_api_router(documents_router)
_include_api_router(secondary_documents_router)
_include_api_router(registry_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
