"""FastAPI application initialization and configuration."""
from __future__ import annotations

import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from claimtrees.config import Config
from claimtrees.core.logging_config import setup_logging, get_logger
from claimtrees.api.dependencies import initialize_services, get_config, reset_services
from claimtrees.api.routers import claims_router, evidence_router, status_router
from claimtrees.config.constants import (
    APP_VERSION,
    ENV_PORT,
    ENV_HOST,
    ERROR_INVALID_PORT,
)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Manage startup and shutdown lifecycle."""
    # --- startup ---
    config = get_config()
    setup_logging(config.logging)
    initialize_services(config)
    _logger = get_logger(__name__)
    _logger.info("claimtrees API %s ready", APP_VERSION)

    yield

    # --- shutdown ---
    reset_services()


app = FastAPI(
    title="Claimtrees API",
    description="Claims about code, backed by evidence that knows when it is stale",
    version=APP_VERSION,
    lifespan=lifespan,
)

_cors_origins = Config.load().server.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(status_router, tags=["status"])
app.include_router(claims_router)
app.include_router(evidence_router)


def main():
    """Run the server with configurable host and port."""
    import uvicorn

    prog = Path(sys.argv[0]).name
    argv = set(sys.argv[1:])
    if prog.startswith("claimtrees-server"):
        if "--version" in argv:
            print(APP_VERSION)
            return
        if "-h" in argv or "--help" in argv:
            print("Usage: claimtrees-server")
            print()
            print("Environment variables:")
            print(f"  {ENV_HOST}=<host>   (default: from config, 127.0.0.1)")
            print(f"  {ENV_PORT}=<port>   (default: from config, 8080)")
            print()
            return

    config = Config.load()
    host = config.server.host
    port = config.server.port
    if not (1 <= port <= 65535):
        print(ERROR_INVALID_PORT.format(port=port))
        return

    print(f"Starting claimtrees server at http://{host}:{port}")
    print(f"Graph snapshot: {config.paths.store_path}")
    uvicorn.run(app, host=host, port=port, log_level=config.logging.level.lower())


if __name__ == "__main__":
    main()
