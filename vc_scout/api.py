"""
VC Scout Web API
FastAPI backend for company enrichment
"""

from __future__ import annotations

import os
from typing import Optional

import structlog
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .config import Settings
from .errors import ConfigurationError, EnrichmentError, InvalidRequestError
from .logging_setup import configure_logging
from .models import utc_now_iso
from .providers import EnrichmentProvider, Registry, builtin_providers, select_provider
from .service import enrich_domain

logger = structlog.get_logger(__name__)

app = FastAPI(
    title="VC Scout",
    description="Company website enrichment for deal flow",
    version=__version__,
)


class EnrichRequest(BaseModel):
    domain: Optional[str] = None
    companyId: Optional[str] = None


def get_settings() -> Settings:
    try:
        return Settings.from_env()
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def get_provider(settings: Settings = Depends(get_settings)) -> EnrichmentProvider:
    return select_provider(settings)


@app.exception_handler(EnrichmentError)
async def enrichment_error_handler(request: Request, exc: EnrichmentError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = InvalidRequestError()
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


@app.get("/api/health")
async def health():
    """Health check endpoint"""
    return {"status": "ok", "timestamp": utc_now_iso()}


@app.get("/api/providers")
async def list_providers(settings: Settings = Depends(get_settings)):
    """List enrichment providers and whether they can run"""
    registry = Registry(builtin_providers(settings))
    return {
        "active": registry.first_available().name,
        "providers": [
            {"id": name, "available": registry.get(name).is_available()}
            for name in registry.list_names()
        ],
    }


@app.post("/api/enrich")
def enrich(
    request: EnrichRequest,
    settings: Settings = Depends(get_settings),
    provider: EnrichmentProvider = Depends(get_provider),
):
    """Enrich one company domain"""
    result = enrich_domain(request.domain, settings=settings, provider=provider)
    return result.to_dict()


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    host = os.getenv("VC_SCOUT_HOST", "127.0.0.1")
    port = int(os.getenv("VC_SCOUT_PORT", "8000"))
    logger.info("api.startup", host=host, port=port, model_configured=settings.has_model_credential)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
