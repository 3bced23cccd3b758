#!/usr/bin/env python3
"""
REST API for the referral tracker
"""
import logging
import sys

from fastapi import FastAPI
import uvicorn

from . import dependencies
from .config import Settings
from .dependencies import build_storage
from .routes.api.candidates import router as candidates_router
from .routes.api.dashboard import router as dashboard_router
from .routes.api.positions import router as positions_router
from .routes.api.referrals import router as referrals_router
from .seed import seed_storage

# Settings come from flags (parse_known_args ignores foreign ones), env and config.json
settings = Settings(sys.argv[1:])

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

# Initialize storage and the dependency injection system
storage = build_storage(settings)
dependencies.init_storage(storage)

if settings.seed_on_startup:
    seed_storage(storage)

# Initialize FastAPI
app = FastAPI(
    title="Referral Tracker API",
    description="Positions, candidates, referrals, activity feed and dashboard statistics",
    version="1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc"
)

# Include API routers
app.include_router(positions_router)
app.include_router(candidates_router)
app.include_router(referrals_router)
app.include_router(dashboard_router)


def main():
    print("=" * 60)
    print("Referral Tracker - API Server")
    print("=" * 60)
    if settings.storage_backend == "sql":
        print(f"Database: {settings.database_url}")
    else:
        print("Storage: in-memory (data is lost on exit)")
    print("=" * 60)
    print(f"\nStarting web server on http://localhost:{settings.port}")
    print(f"API Documentation: http://localhost:{settings.port}/api/docs")
    print("Press Ctrl+C to stop\n")

    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == '__main__':
    main()
