# main.py
"""
Point d'entrée de l'API TeamPulse.
Enregistre tous les modules via leurs routers.

Architecture : modules verticaux (router → service → repository)
+ engine transversal sans accès DB.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from teampulse.core.config import get_settings
from teampulse.core.logging import configure_logging

from teampulse.modules.metrics.router import router as metrics_router

VERSION = "1.0.0"

settings = get_settings()
configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=VERSION,
    docs_url="/docs" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(metrics_router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}
