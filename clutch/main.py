"""Clutch - FastAPI application deciding which browser opens a URL."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import uvicorn
from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel

from clutch.config import get_settings
from clutch.loader import ConfigLoadError, load_routing_config, load_routing_config_or_default
from clutch.models.launch import LaunchOptions, SourceApp
from clutch.router import RuleEngine

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Engine for the currently loaded configuration
engine: RuleEngine | None = None


class ResolveRequest(BaseModel):
    url: str
    source: SourceApp | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    global engine

    settings = get_settings()

    # Configure logging level
    logging.getLogger().setLevel(settings.log_level.upper())

    config = load_routing_config_or_default(settings.routing_config_path, settings.default_target)
    engine = RuleEngine(config)
    logger.info(f"Loaded {len(config.rules)} rule(s) from {settings.routing_config}")

    logger.info("Clutch started")

    yield

    engine = None
    logger.info("Clutch stopped")


app = FastAPI(
    title="Clutch",
    description="Routes URLs to browsers based on the source application and domain",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/rules")
async def list_rules() -> dict[str, Any]:
    """List routing rules in evaluation order."""
    if not engine:
        return {"default_target": None, "rules": []}

    return {
        "default_target": engine.default_target,
        "rules": [
            rule.model_dump(mode="json", by_alias=True, exclude_none=True)
            for rule in engine.rules
        ],
    }


@app.post("/resolve")
async def resolve(request: ResolveRequest) -> dict[str, Any]:
    """Decide which target should open a URL."""
    if not engine:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Rule engine not initialized",
        )

    options: LaunchOptions = engine.resolve(request.url, request.source)

    caller = request.source.name if request.source else "unknown"
    logger.info(f"[{caller}] {request.url} -> {options.target}")

    return options.model_dump(by_alias=True)


@app.post("/reload")
async def reload_config() -> dict[str, Any]:
    """Reload the routing document and replace the engine."""
    global engine

    settings = get_settings()
    try:
        config = load_routing_config(settings.routing_config_path)
    except (FileNotFoundError, ConfigLoadError) as e:
        logger.error(f"Reload failed, keeping previous rules: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    engine = RuleEngine(config)
    logger.info(f"Reloaded {len(config.rules)} rule(s) from {settings.routing_config}")

    return {"status": "ok", "rules": len(config.rules)}


def run() -> None:
    """Run the application using uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "clutch.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    run()
