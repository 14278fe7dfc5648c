"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from plantsight.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.plantsight_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="PlantSight",
        description="Solar plant floor-plan summary engine — inferred electrical topology and quantity roll-ups",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all transform modules to trigger registration
    from plantsight.engine.pipeline import register_transforms

    register_transforms()

    from plantsight.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
