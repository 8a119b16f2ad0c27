from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Mount

from tubefinder.config import get_settings
from tubefinder.exceptions import NetworkFailure, NoContentAvailable, RemoteFailure
from tubefinder.http_client import close_client
from tubefinder.logging import setup_logging
from tubefinder.mcp_server import mcp
from tubefinder.models.common import ErrorResponse
from tubefinder.routers.browse import router as browse_router
from tubefinder.routers.channels import router as channels_router
from tubefinder.routers.videos import router as videos_router


# --- Localhost-only middleware ---

class LocalhostOnlyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        client_host = request.client.host if request.client else None
        if client_host not in ("127.0.0.1", "::1", "localhost"):
            return JSONResponse(
                status_code=403,
                content={"error_code": "forbidden", "message": "Localhost access only"},
            )
        return await call_next(request)


# --- FastAPI app ---

api = FastAPI(title="Tubefinder", version="0.1.0")
api.include_router(videos_router)
api.include_router(channels_router)
api.include_router(browse_router)


@api.get("/api/status")
def api_status() -> dict:
    settings = get_settings()
    return {"gateway_url": settings.gateway_url, "default_region": settings.default_region}


# --- Exception handlers ---

@api.exception_handler(NetworkFailure)
async def network_failure_handler(request: Request, exc: NetworkFailure):
    return JSONResponse(status_code=502, content=ErrorResponse(error_code="network_error", message=str(exc)).model_dump(exclude_none=True))


@api.exception_handler(RemoteFailure)
async def remote_failure_handler(request: Request, exc: RemoteFailure):
    error = ErrorResponse(error_code="remote_error", message=str(exc), upstream_status=exc.status)
    return JSONResponse(status_code=502, content=error.model_dump(exclude_none=True))


@api.exception_handler(NoContentAvailable)
async def no_content_handler(request: Request, exc: NoContentAvailable):
    return JSONResponse(status_code=404, content=ErrorResponse(error_code="no_content", message=str(exc)).model_dump(exclude_none=True))


# --- Starlette root app ---

mcp_app = mcp.http_app(path="/", stateless_http=True)


@asynccontextmanager
async def lifespan(app):
    async with mcp_app.lifespan(app):
        yield
    await close_client()


app = Starlette(
    middleware=[Middleware(LocalhostOnlyMiddleware)],
    routes=[
        Mount("/mcp", app=mcp_app),
        Mount("/", app=api),
    ],
    lifespan=lifespan,
)


def run():
    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)
    uvicorn.run(
        "tubefinder.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    run()
