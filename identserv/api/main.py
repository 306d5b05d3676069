"""FastAPI application entry point for identserv."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from identserv.api.dependencies.ident import get_ident_listener_service, is_initialized
from identserv.api.routes.health import router as health_router
from identserv.api.routes.ident import router as ident_router
from identserv.api.routes.metrics import router as metrics_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    # Release the ident port on shutdown
    if is_initialized():
        await get_ident_listener_service().shutdown()


app = FastAPI(
    title="identserv Admin API",
    description="RFC 1413 ident responder status and commands",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(ident_router)
app.include_router(metrics_router)
