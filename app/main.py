import logging
import sys
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.endpoints import signature as signature_endpoints
from app.core.config import settings
from app.core.signatures import get_registry

# Send app logs to the terminal; uvicorn often doesn't show them otherwise
_app_log = logging.getLogger("app")
_app_log.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
if not _app_log.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    _app_log.addHandler(_handler)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
)

if settings.CORS_ORIGINS.strip():
    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(
    signature_endpoints.router,
    prefix="/api/v1/signatures",
    tags=["signatures"],
)


@app.get("/")
def root():
    return {
        "app_name": settings.APP_NAME,
        "app_version": settings.APP_VERSION,
        "debug": settings.DEBUG,
    }


@app.get("/health")
async def health():
    """Health check for load balancers and containers."""
    registry = get_registry()
    return {
        "status": "ok",
        "registered_types": len(registry.type_headers),
        "registered_headers": len(registry.header_types),
    }


def start():
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
